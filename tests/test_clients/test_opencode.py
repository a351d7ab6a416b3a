# Tests for OpenCode client adapter
import json
from pathlib import Path

from mcpsync.clients.opencode import OpenCodeAdapter
from mcpsync.models import MCPServer

CONFIG = """{
  // OpenCode project config
  "$schema": "https://opencode.ai/config.json",
  "theme": "opencode",
  "mcp": {
    "filesystem": {
      "type": "local",
      "command": ["npx", "-y", "@modelcontextprotocol/server-filesystem"],
      "environment": {"ROOT": "/projects"},
    },
    "solo": {"type": "local", "command": ["my-server"]},
    "off": {"type": "local", "command": ["npx", "off"], "enabled": false},
    "docs": {
      "type": "remote",
      "url": "https://example.com/mcp", /* hosted */
      "headers": {"Authorization": "Bearer x"}
    }
  },
  "model": "anthropic/claude",
}
"""


def write_config(project: Path, content: str) -> Path:
    path = project / ".opencode" / "opencode.jsonc"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_opencode_adapter_properties(project: Path) -> None:
    """Test adapter name and path."""
    adapter = OpenCodeAdapter(project)

    assert adapter.name == "OpenCode"
    assert adapter.path == project / ".opencode" / "opencode.jsonc"


def test_opencode_read_local_servers_only(project: Path) -> None:
    """Test only enabled local entries are lifted."""
    write_config(project, CONFIG)

    client = OpenCodeAdapter(project).read()

    assert client.exists
    assert client.servers == {
        "filesystem": MCPServer(
            command="npx",
            args=["-y", "@modelcontextprotocol/server-filesystem"],
            env={"ROOT": "/projects"},
        ),
        "solo": MCPServer(command="my-server"),
    }


def test_opencode_read_without_mcp(project: Path) -> None:
    """Test a config without an mcp object reads as empty."""
    write_config(project, '{"theme": "opencode"}')

    assert OpenCodeAdapter(project).read().servers == {}


def test_opencode_read_invalid(project: Path) -> None:
    """Test unparseable JSONC yields exists-but-unreadable."""
    write_config(project, '{"mcp": {')

    client = OpenCodeAdapter(project).read()

    assert client.exists
    assert client.servers is None


def test_opencode_read_mcp_not_object(project: Path) -> None:
    """Test a non-object mcp value is treated as malformed."""
    write_config(project, '{"mcp": []}')

    assert OpenCodeAdapter(project).read().servers is None


def test_opencode_serialize(project: Path) -> None:
    """Test remote/disabled entries and other keys survive the rewrite."""
    servers = {
        "filesystem": MCPServer(command="npx", args=["-y", "fs"]),
        "github": MCPServer(command="npx", args=["-y", "gh"], env={"TOKEN": "x"}),
    }

    data = json.loads(OpenCodeAdapter(project).serialize(servers, CONFIG))

    assert list(data) == ["$schema", "theme", "mcp", "model"]
    assert data["$schema"] == "https://opencode.ai/config.json"
    assert data["model"] == "anthropic/claude"
    assert data["mcp"] == {
        "off": {"type": "local", "command": ["npx", "off"], "enabled": False},
        "docs": {
            "type": "remote",
            "url": "https://example.com/mcp",
            "headers": {"Authorization": "Bearer x"},
        },
        "filesystem": {"type": "local", "command": ["npx", "-y", "fs"]},
        "github": {
            "type": "local",
            "command": ["npx", "-y", "gh"],
            "environment": {"TOKEN": "x"},
        },
    }


def test_opencode_serialize_merged_name_replaces_remote(project: Path) -> None:
    """Test a merged server with a remote entry's name becomes local."""
    existing = '{"mcp": {"docs": {"type": "remote", "url": "https://x"}}}'

    data = json.loads(OpenCodeAdapter(project).serialize({"docs": MCPServer(command="npx")}, existing))

    assert data["mcp"] == {"docs": {"type": "local", "command": ["npx"]}}


def test_opencode_roundtrip(project: Path) -> None:
    """Test serialize then read gives back equal servers."""
    path = write_config(project, CONFIG)
    adapter = OpenCodeAdapter(project)
    servers = {
        "a": MCPServer(command="uvx", args=["tool", "--flag"], env={"K": "v"}),
        "b": MCPServer(command="node"),
    }

    path.write_text(adapter.serialize(servers, CONFIG), encoding="utf-8")

    assert adapter.read().servers == servers
