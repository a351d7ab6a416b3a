# Merge and diff of canonical server mappings
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from mcpsync.models import ClientConfig, MCPServer, Servers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Changes:
    """Server names to add to / remove from one client.

    ABOUTME: Names only; same-named servers with different content are not reported
    """
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)


def servers_equal(a: MCPServer, b: MCPServer) -> bool:
    """Structural equality: command, args order and env content.

    ABOUTME: The disabled flag is not compared
    """
    return a.command == b.command and list(a.args) == list(b.args) and dict(a.env) == dict(b.env)


def merge_configs(clients: Iterable[ClientConfig]) -> Servers:
    """Merge servers from clients into one mapping, first occurrence wins.

    ABOUTME: Clients with servers=None are skipped
    ABOUTME: Merged entries are copies; inputs are never mutated
    ABOUTME: A differing redefinition logs a warning and is ignored

    Args:
        clients: Client snapshots in precedence order

    Returns:
        Merged name -> server mapping

    Examples:
        >>> from pathlib import Path
        >>> a = ClientConfig("A", Path("a"), {"x": MCPServer("npx", ["v1"])}, True)
        >>> b = ClientConfig("B", Path("b"), {"x": MCPServer("npx", ["v2"])}, True)
        >>> merge_configs([a, b])["x"].args
        ['v1']
    """
    merged: Servers = {}

    for client in clients:
        if client.servers is None:
            continue

        for name, server in client.servers.items():
            if name not in merged:
                merged[name] = server.copy()
                continue

            if not servers_equal(merged[name], server):
                logger.warning(
                    f'"{name}" differs between configs, keeping first occurrence'
                )

    return merged


def get_changes(client: ClientConfig, merged: Servers) -> Changes:
    """Compute which server names a client gains and loses.

    ABOUTME: added = merged - current, removed = current - merged
    ABOUTME: A client without servers is treated as empty
    """
    current = client.servers or {}

    return Changes(
        added=[name for name in merged if name not in current],
        removed=[name for name in current if name not in merged],
    )
