# Codex client adapter
import logging
import re
from collections.abc import Container
from pathlib import Path
from typing import Any

import tomli

from mcpsync.clients.base import BaseClientAdapter
from mcpsync.models import MCPServer, Servers
from mcpsync.utils.toml_subset import (
    TomlSection,
    dump_toml,
    parse_toml,
    quote_string,
    split_toml_blocks,
)

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(".codex") / "config.toml"

# ABOUTME: Codex uses snake_case mcp_servers tables, one per server
MCP_PREFIX = "mcp_servers."
ENV_SUFFIX = ".env"

# ABOUTME: Keys a server table may carry and still be rewritten without loss
SERVER_KEYS = frozenset({"command", "args", "env"})

BARE_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def section_name(server_name: str) -> str:
    """Build the [mcp_servers.<name>] header, quoting names that need it."""
    if BARE_KEY_PATTERN.match(server_name):
        return f"{MCP_PREFIX}{server_name}"
    return f"{MCP_PREFIX}{quote_string(server_name)}"


def server_name(section: str) -> str:
    """Inverse of section_name for a header that starts with MCP_PREFIX."""
    name = section[len(MCP_PREFIX):].strip()
    if len(name) >= 2 and name[0] == name[-1] and name[0] in "\"'":
        return name[1:-1]
    return name


def owner_name(section: str, sections: Container[str]) -> str:
    """Server a mcp_servers.* header belongs to; .env sub-tables map to their parent."""
    if section.endswith(ENV_SUFFIX) and section[: -len(ENV_SUFFIX)] in sections:
        section = section[: -len(ENV_SUFFIX)]
    return server_name(section)


def servers_from_document(document: dict[str, Any]) -> Servers:
    """Build servers from a tomli-decoded config.

    ABOUTME: Tables without a command are skipped, like the subset reader does
    ABOUTME: Tables with a command must hold only string command/args/env

    Raises:
        ValueError: If a server table cannot be rewritten without losing data
    """
    tables = document.get("mcp_servers", {})
    if not isinstance(tables, dict):
        raise ValueError("'mcp_servers' must be a table")

    servers: Servers = {}
    for name, table in tables.items():
        if not isinstance(table, dict):
            raise ValueError(f"[{section_name(name)}] must be a table")

        command = table.get("command")
        if command is None or command == "":
            continue

        unsupported = sorted(set(table) - SERVER_KEYS)
        if unsupported:
            raise ValueError(f"[{section_name(name)}] has unsupported key(s): {', '.join(unsupported)}")

        args = table.get("args", [])
        env = table.get("env", {})
        if (
            not isinstance(command, str)
            or not isinstance(args, list)
            or not all(isinstance(arg, str) for arg in args)
            or not isinstance(env, dict)
            or not all(isinstance(value, str) for value in env.values())
        ):
            raise ValueError(f"[{section_name(name)}] command, args and env must be strings")

        servers[name] = MCPServer(command=command, args=list(args), env=dict(env))
    return servers


class CodexAdapter(BaseClientAdapter):
    """Adapter for Codex (.codex/config.toml).

    ABOUTME: Reads [mcp_servers.<name>] sections with the TOML subset parser
    ABOUTME: tomli decodes the same file; any disagreement marks it unreadable
    ABOUTME: Write keeps all non-MCP text verbatim and re-renders MCP sections
    """

    key = "codex"
    display_name = "Codex"

    def __init__(self, project_root: Path, config_path: Path | None = None) -> None:
        super().__init__(config_path if config_path else project_root / CONFIG_PATH)

    def parse(self, content: str) -> Servers:
        """Extract servers from mcp_servers.* sections.

        ABOUTME: A [mcp_servers.<name>.env] sub-table is folded into env
        ABOUTME: Sections without a command are skipped

        Raises:
            tomli.TOMLDecodeError: If the file is not valid TOML
            ValueError: If a server uses syntax the subset would misread
        """
        expected = servers_from_document(tomli.loads(content))
        servers = self._parse_sections(content)

        for name in sorted(set(servers) | set(expected)):
            if servers.get(name) != expected.get(name):
                raise ValueError(f"[{section_name(name)}] uses TOML syntax outside the supported subset")
        return servers

    def _parse_sections(self, content: str) -> Servers:
        sections = parse_toml(content)

        found: dict[str, tuple[str, list[str], dict[str, str]]] = {}
        env_tables: dict[str, dict[str, str]] = {}

        for section, values in sections.items():
            if not section.startswith(MCP_PREFIX):
                continue

            if section.endswith(ENV_SUFFIX) and section[: -len(ENV_SUFFIX)] in sections:
                env_tables[owner_name(section, sections)] = {
                    key: value for key, value in values.items() if isinstance(value, str)
                }
                continue

            command = values.get("command")
            if not isinstance(command, str) or not command:
                logger.debug(f"Skipping section [{section}]: no command")
                continue

            args = values.get("args")
            env = values.get("env")
            found[server_name(section)] = (
                command,
                args if isinstance(args, list) else [],
                env if isinstance(env, dict) else {},
            )

        result: Servers = {}
        for name, (command, args, env) in found.items():
            result[name] = MCPServer(
                command=command,
                args=list(args),
                env={**env, **env_tables.get(name, {})},
            )
        return result

    def serialize(self, servers: Servers, existing_content: str) -> str:
        """Replace the mcp_servers.* sections of known servers with fresh ones.

        ABOUTME: Preamble, non-MCP sections and command-less server sections
        ABOUTME: are kept verbatim in original order, unless servers redefines them
        ABOUTME: One new section per merged server is appended after them

        Raises:
            ValueError: If existing_content is no longer readable
        """
        current = self.parse(existing_content)
        blocks = split_toml_blocks(existing_content)
        headers = {block.name for block in blocks if block.name is not None}

        kept: list[str] = []
        for block in blocks:
            if block.name is not None and block.name.startswith(MCP_PREFIX):
                owner = owner_name(block.name, headers)
                if owner in current or owner in servers:
                    continue
            kept.append(block.text)
        preserved = "".join(kept).rstrip()

        sections: dict[str, TomlSection] = {}
        for name, server in servers.items():
            section: TomlSection = {"command": server.command}
            if server.args:
                section["args"] = list(server.args)
            if server.env:
                section["env"] = dict(server.env)
            sections[section_name(name)] = section

        rendered = dump_toml(sections)
        if not preserved:
            return rendered
        if not rendered:
            return preserved + "\n"
        return preserved + "\n\n" + rendered
