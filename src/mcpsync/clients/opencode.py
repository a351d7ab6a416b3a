# OpenCode client adapter
from pathlib import Path
from typing import Any

from mcpsync.clients.base import BaseClientAdapter, dump_json
from mcpsync.models import MCPServer, Servers
from mcpsync.utils.jsonc import parse_jsonc

CONFIG_PATH = Path(".opencode") / "opencode.jsonc"


def load_opencode_document(content: str) -> dict[str, Any]:
    """Parse opencode.jsonc, requiring an object with an optional mcp object."""
    if not content.strip():
        return {}

    data = parse_jsonc(content)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    if not isinstance(data.get("mcp", {}), dict):
        raise ValueError("'mcp' must be an object")
    return data


def local_entry_to_server(entry: Any) -> MCPServer | None:
    """Convert an enabled {"type": "local"} entry to MCPServer.

    ABOUTME: command[0] is the executable, the rest become args
    ABOUTME: Remote, disabled and malformed entries return None
    """
    if not isinstance(entry, dict):
        return None
    if entry.get("type") != "local" or entry.get("enabled") is False:
        return None

    command = entry.get("command")
    if not isinstance(command, list) or not command or not command[0]:
        return None

    environment = entry.get("environment")
    return MCPServer(
        command=str(command[0]),
        args=[str(arg) for arg in command[1:]],
        env=(
            {str(k): str(v) for k, v in environment.items()}
            if isinstance(environment, dict)
            else {}
        ),
    )


def server_to_local_entry(server: MCPServer) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "type": "local",
        "command": [server.command, *server.args],
    }
    if server.env:
        entry["environment"] = dict(server.env)
    return entry


class OpenCodeAdapter(BaseClientAdapter):
    """Adapter for OpenCode (.opencode/opencode.jsonc).

    ABOUTME: Servers live under "mcp" tagged local (argv + environment) or remote (url)
    ABOUTME: Only enabled local servers take part in the sync
    ABOUTME: Output is plain JSON; comments in the original are not kept
    """

    key = "opencode"
    display_name = "OpenCode"

    def __init__(self, project_root: Path, config_path: Path | None = None) -> None:
        super().__init__(config_path if config_path else project_root / CONFIG_PATH)

    def parse(self, content: str) -> Servers:
        data = load_opencode_document(content)

        servers: Servers = {}
        for name, entry in data.get("mcp", {}).items():
            server = local_entry_to_server(entry)
            if server is not None:
                servers[name] = server
        return servers

    def serialize(self, servers: Servers, existing_content: str) -> str:
        """Rewrite the mcp object with every merged server as a local entry.

        ABOUTME: Remote and disabled entries are kept verbatim by name
        ABOUTME: All other top-level keys are preserved
        """
        existing = load_opencode_document(existing_content)

        mcp: dict[str, Any] = {
            name: entry
            for name, entry in existing.get("mcp", {}).items()
            if name not in servers and local_entry_to_server(entry) is None
        }
        for name, server in servers.items():
            mcp[name] = server_to_local_entry(server)

        return dump_json({**existing, "mcp": mcp})
