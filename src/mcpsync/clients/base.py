# Client adapter base utilities
import json
import logging
from pathlib import Path
from typing import Any

from mcpsync.models import ClientConfig, MCPServer, Servers

logger = logging.getLogger(__name__)


def load_json_object(content: str) -> dict[str, Any]:
    """Decode JSON text that must hold an object at the top level.

    ABOUTME: Empty or whitespace-only content is treated as {}
    ABOUTME: Raises ValueError (json.JSONDecodeError included) otherwise
    """
    if not content.strip():
        return {}

    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def dump_json(data: dict[str, Any]) -> str:
    """Serialize to 2-space indented JSON with a trailing newline.

    ABOUTME: Key order is preserved so untouched settings stay where they were
    """
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def has_command(entry: Any) -> bool:
    """True when a raw server entry carries a usable command string."""
    return isinstance(entry, dict) and isinstance(entry.get("command"), str) and bool(entry["command"])


def dict_to_server(name: str, data: Any) -> MCPServer | None:
    """Convert a {command, args?, env?} dict to MCPServer.

    ABOUTME: Returns None for entries without a command (URL-based servers etc.)
    ABOUTME: Returns None and logs a warning when args/env have the wrong shape
    """
    if not has_command(data):
        logger.debug(f"Skipping server '{name}': no command")
        return None

    args = data.get("args") or []
    env = data.get("env") or {}

    if not isinstance(args, list) or not isinstance(env, dict):
        logger.warning(f"Skipping server '{name}': 'args' must be a list and 'env' an object")
        return None

    disabled = data.get("disabled")

    return MCPServer(
        command=data["command"],
        args=[str(arg) for arg in args],
        env={str(key): str(value) for key, value in env.items()},
        disabled=disabled if isinstance(disabled, bool) else None,
    )


def server_to_dict(server: MCPServer) -> dict[str, Any]:
    """Convert MCPServer to the mcpServers entry format.

    ABOUTME: Omits empty args/env for cleaner output
    """
    result: dict[str, Any] = {"command": server.command}
    if server.args:
        result["args"] = list(server.args)
    if server.env:
        result["env"] = dict(server.env)
    if server.disabled is not None:
        result["disabled"] = server.disabled
    return result


def servers_from_mapping(entries: Any) -> Servers:
    """Build the canonical mapping from a raw mcpServers object.

    Raises:
        ValueError: If entries is present but not an object
    """
    if entries is None:
        return {}
    if not isinstance(entries, dict):
        raise ValueError("'mcpServers' must be an object")

    servers: Servers = {}
    for name, data in entries.items():
        server = dict_to_server(name, data)
        if server is not None:
            servers[name] = server
    return servers


def merge_server_entries(existing: Any, servers: Servers) -> dict[str, Any]:
    """Build a new mcpServers object from the merged servers.

    ABOUTME: Existing entries that never made it into the canonical mapping
    ABOUTME: (no command, malformed args/env) are kept by name unless servers
    ABOUTME: redefines the name
    """
    result: dict[str, Any] = {}
    if isinstance(existing, dict):
        for name, entry in existing.items():
            if name not in servers and dict_to_server(name, entry) is None:
                result[name] = entry

    for name, server in servers.items():
        result[name] = server_to_dict(server)
    return result


class BaseClientAdapter:
    """Shared read logic for all client adapters.

    ABOUTME: Subclasses implement parse() and serialize()
    ABOUTME: read() never raises; failures become exists-but-unreadable
    """

    key: str = ""
    aliases: tuple[str, ...] = ()
    display_name: str = ""
    writable: bool = True

    def __init__(self, config_path: Path) -> None:
        self._config_path = config_path

    @property
    def name(self) -> str:
        """Human-readable client name."""
        return self.display_name

    @property
    def path(self) -> Path:
        return self._config_path

    def read(self) -> ClientConfig:
        """Read and parse the client config file.

        ABOUTME: Missing file -> exists=False, servers=None (not an error)
        ABOUTME: Unreadable file -> exists=True, servers=None plus a warning
        """
        path = self._config_path
        if not path.exists():
            return ClientConfig(name=self.name, path=path, servers=None, exists=False)

        try:
            content = path.read_text(encoding="utf-8")
            servers = self.parse(content)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to parse {path}: {e}")
            return ClientConfig(name=self.name, path=path, servers=None, exists=True)

        return ClientConfig(name=self.name, path=path, servers=servers, exists=True)

    def parse(self, content: str) -> Servers:
        """Extract the canonical mapping from raw file content."""
        raise NotImplementedError

    def serialize(self, servers: Servers, existing_content: str) -> str:
        raise NotImplementedError


class JsonClientAdapter(BaseClientAdapter):
    """Adapter for clients storing {"mcpServers": {...}} as plain JSON.

    ABOUTME: Write replaces the whole file with the merged mcpServers object
    """

    def __init__(
        self,
        project_root: Path,
        config_path: Path | None = None,
    ) -> None:
        super().__init__(config_path if config_path else self.default_path(project_root))

    def default_path(self, project_root: Path) -> Path:
        raise NotImplementedError

    def parse(self, content: str) -> Servers:
        data = load_json_object(content)
        return servers_from_mapping(data.get("mcpServers"))

    def serialize(self, servers: Servers, existing_content: str) -> str:
        existing = load_json_object(existing_content)
        entries = merge_server_entries(existing.get("mcpServers"), servers)
        return dump_json({"mcpServers": entries})


class UnsupportedClientAdapter(BaseClientAdapter):
    """Inert adapter for clients whose config cannot be handled safely yet.

    ABOUTME: read() always reports not-exists/no-config
    ABOUTME: Kept out of the active client registry
    """

    writable = False
    reason = ""

    def read(self) -> ClientConfig:
        return ClientConfig(name=self.name, path=self.path, servers=None, exists=False)

    def serialize(self, servers: Servers, existing_content: str) -> str:
        raise NotImplementedError(f"{self.name}: {self.reason}")
