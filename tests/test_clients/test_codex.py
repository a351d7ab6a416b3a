# Tests for Codex client adapter
import logging
from pathlib import Path

from mcpsync.clients.codex import CodexAdapter, section_name, server_name
from mcpsync.models import MCPServer

CONFIG = """# Codex settings
model = "o3"
approval_policy = "on-request"

[mcp_servers.filesystem]
command = "npx"
args = ["-y", "@modelcontextprotocol/server-filesystem", "/projects"]

[profiles.fast]
model = "o4-mini"  # cheaper
reasoning = 3

[mcp_servers.github]
command = "npx"
args = ["-y", "@modelcontextprotocol/server-github"]
env = { "GITHUB_TOKEN" = "ghp_xxxx" }

[mcp_servers.remote]
url = "https://example.com/mcp"
"""


def write_config(project: Path, content: str) -> Path:
    path = project / ".codex" / "config.toml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_codex_adapter_properties(project: Path) -> None:
    """Test adapter name and path."""
    adapter = CodexAdapter(project)

    assert adapter.name == "Codex"
    assert adapter.path == project / ".codex" / "config.toml"


def test_codex_read_missing(project: Path) -> None:
    """Test loading when config doesn't exist."""
    client = CodexAdapter(project).read()

    assert client.exists is False
    assert client.servers is None


def test_codex_read_servers(project: Path) -> None:
    """Test loading servers from mcp_servers sections."""
    write_config(project, CONFIG)

    client = CodexAdapter(project).read()

    assert client.exists
    assert client.servers == {
        "filesystem": MCPServer(
            command="npx",
            args=["-y", "@modelcontextprotocol/server-filesystem", "/projects"],
        ),
        "github": MCPServer(
            command="npx",
            args=["-y", "@modelcontextprotocol/server-github"],
            env={"GITHUB_TOKEN": "ghp_xxxx"},
        ),
    }


def test_codex_read_env_subtable(project: Path) -> None:
    """Test [mcp_servers.<name>.env] is folded into the server env."""
    write_config(
        project,
        """[mcp_servers.github]
command = "npx"

[mcp_servers.github.env]
GITHUB_TOKEN = "ghp_xxxx"
""",
    )

    servers = CodexAdapter(project).read().servers

    assert servers == {"github": MCPServer(command="npx", env={"GITHUB_TOKEN": "ghp_xxxx"})}


def test_codex_read_invalid_toml(project: Path, caplog) -> None:
    """Test invalid TOML yields exists-but-unreadable with a warning."""
    path = write_config(project, "invalid [toml")

    with caplog.at_level(logging.WARNING, logger="mcpsync"):
        client = CodexAdapter(project).read()

    assert client.exists is True
    assert client.servers is None
    assert str(path) in caplog.text


def test_codex_serialize_replaces_mcp_sections(project: Path) -> None:
    """Test known MCP sections are rebuilt after all other content."""
    servers = {
        "filesystem": MCPServer(command="npx", args=["-y", "fs"]),
        "new": MCPServer(command="uvx", env={"KEY": "value"}),
    }

    output = CodexAdapter(project).serialize(servers, CONFIG)

    assert output == (
        "# Codex settings\n"
        'model = "o3"\n'
        'approval_policy = "on-request"\n'
        "\n"
        "[profiles.fast]\n"
        'model = "o4-mini"  # cheaper\n'
        "reasoning = 3\n"
        "\n"
        "[mcp_servers.remote]\n"
        'url = "https://example.com/mcp"\n'
        "\n"
        "[mcp_servers.filesystem]\n"
        'command = "npx"\n'
        'args = ["-y", "fs"]\n'
        "\n"
        "[mcp_servers.new]\n"
        'command = "uvx"\n'
        'env = { "KEY" = "value" }\n'
    )


def test_codex_serialize_without_existing_content(project: Path) -> None:
    """Test an empty file gets only the server sections."""
    output = CodexAdapter(project).serialize({"a": MCPServer(command="npx")}, "")

    assert output == '[mcp_servers.a]\ncommand = "npx"\n'


def test_codex_serialize_no_servers_keeps_other_content(project: Path) -> None:
    """Test removing every server leaves the rest of the file."""
    output = CodexAdapter(project).serialize({}, '[tui]\nx = "y"\n\n[mcp_servers.a]\ncommand = "npx"\n')

    assert output == '[tui]\nx = "y"\n'


def test_codex_roundtrip(project: Path) -> None:
    """Test serialize then read preserves command, args and env."""
    path = write_config(project, CONFIG)
    adapter = CodexAdapter(project)
    servers = {
        "filesystem": MCPServer(
            command="npx",
            args=["-y", "@modelcontextprotocol/server-filesystem", "/projects"],
            env={"PATH": "/usr/bin"},
        ),
        "windows": MCPServer(command="C:\\tools\\server.exe", args=['--label="a, b"']),
        "my.server": MCPServer(command="node", args=["index.js"]),
    }

    path.write_text(adapter.serialize(servers, CONFIG), encoding="utf-8")

    assert adapter.read().servers == servers


def test_section_name_quoting() -> None:
    """Test names outside bare-key characters are quoted."""
    assert section_name("github") == "mcp_servers.github"
    assert section_name("my-server_2") == "mcp_servers.my-server_2"
    assert section_name("my.server") == 'mcp_servers."my.server"'
    assert server_name('mcp_servers."my.server"') == "my.server"
    assert server_name("mcp_servers.github") == "github"


def test_codex_read_multiline_array_unreadable(project: Path, caplog) -> None:
    """Test valid TOML the subset would misread is reported as unreadable."""
    write_config(
        project,
        """[mcp_servers.fs]
command = "npx"
args = [
  "-y",
  "fs",
]
""",
    )

    with caplog.at_level(logging.WARNING, logger="mcpsync"):
        client = CodexAdapter(project).read()

    assert client.exists is True
    assert client.servers is None
    assert "mcp_servers.fs" in caplog.text


def test_codex_read_unsupported_server_key_unreadable(project: Path) -> None:
    """Test a server table with keys that cannot be rewritten is not synced."""
    write_config(
        project,
        '[mcp_servers.fs]\ncommand = "npx"\nstartup_timeout_sec = 30\n',
    )

    client = CodexAdapter(project).read()

    assert client.exists is True
    assert client.servers is None


def test_codex_read_non_string_env_unreadable(project: Path) -> None:
    """Test non-string env values mark the file unreadable."""
    write_config(project, '[mcp_servers.fs]\ncommand = "npx"\nenv = { PORT = 8080 }\n')

    assert CodexAdapter(project).read().servers is None


def test_codex_read_commandless_section_with_extra_keys(project: Path) -> None:
    """Test sections without a command are skipped whatever keys they hold."""
    write_config(
        project,
        '[mcp_servers.remote]\nurl = "https://example.com/mcp"\nstartup_timeout_sec = 30\n\n'
        '[mcp_servers.fs]\ncommand = "npx"\n',
    )

    assert CodexAdapter(project).read().servers == {"fs": MCPServer(command="npx")}


def test_codex_serialize_keeps_commandless_sections(project: Path) -> None:
    """Test URL-based sections survive a rewrite unless redefined."""
    existing = (
        '[mcp_servers.remote]\nurl = "https://example.com/mcp"\n\n'
        '[mcp_servers.shadowed]\nurl = "https://old"\n\n'
        '[mcp_servers.stale]\ncommand = "node"\n\n'
        "[mcp_servers.stale.env]\nTOKEN = \"x\"\n"
    )
    servers = {"shadowed": MCPServer(command="npx")}

    output = CodexAdapter(project).serialize(servers, existing)

    assert output == (
        '[mcp_servers.remote]\nurl = "https://example.com/mcp"\n\n'
        '[mcp_servers.shadowed]\ncommand = "npx"\n'
    )
