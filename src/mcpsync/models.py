# Core data models for mcpsync
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class MCPServer:
    """Immutable MCP server definition.

    ABOUTME: Canonical shape shared by every client adapter
    ABOUTME: Equality covers command, args (ordered) and env only
    """
    command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    disabled: bool | None = field(default=None, compare=False)

    def copy(self) -> "MCPServer":
        """Return a copy that shares no mutable state with this one."""
        return MCPServer(
            command=self.command,
            args=list(self.args),
            env=dict(self.env),
            disabled=self.disabled,
        )


# ABOUTME: Canonical mapping of server name -> definition
Servers = dict[str, MCPServer]


@dataclass(frozen=True)
class ClientConfig:
    """Snapshot of one client's MCP config file.

    ABOUTME: servers is None when the file is missing or could not be parsed
    ABOUTME: exists=True with servers=None means "found but unreadable"
    """
    name: str
    path: Path
    servers: Servers | None = None
    exists: bool = False

    @property
    def usable(self) -> bool:
        return self.exists and self.servers is not None


@runtime_checkable
class ClientAdapter(Protocol):
    """Protocol for client-specific config adapters.

    ABOUTME: Defines interface all client adapters must implement
    ABOUTME: Uses @runtime_checkable for isinstance() support
    """

    key: str
    aliases: tuple[str, ...]
    writable: bool

    @property
    def name(self) -> str:
        """Human-readable client name."""
        ...

    @property
    def path(self) -> Path:
        """Path of the config file this adapter reads and writes."""
        ...

    def read(self) -> ClientConfig:
        """Read the client config file into a ClientConfig snapshot."""
        ...

    def serialize(self, servers: Servers, existing_content: str) -> str:
        """Render servers into the client's on-disk format.

        ABOUTME: existing_content is the current raw file text
        ABOUTME: Content unrelated to MCP servers must survive unchanged
        """
        ...
