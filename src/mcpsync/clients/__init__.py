# Client adapter registry
from pathlib import Path

from mcpsync.clients.base import BaseClientAdapter
from mcpsync.clients.claude import ClaudeCodeAdapter
from mcpsync.clients.cline import ClineAdapter
from mcpsync.clients.codex import CodexAdapter
from mcpsync.clients.cursor import CursorAdapter
from mcpsync.clients.gemini import GeminiAdapter
from mcpsync.clients.goose import GooseAdapter
from mcpsync.clients.opencode import OpenCodeAdapter
from mcpsync.clients.roo import RooCodeAdapter
from mcpsync.clients.vscode import VSCodeAdapter
from mcpsync.clients.windsurf import WindsurfAdapter

# Registry of active client adapters; order is merge precedence
ALL_CLIENTS: list[type[BaseClientAdapter]] = [
    CursorAdapter,
    ClaudeCodeAdapter,
    WindsurfAdapter,
    ClineAdapter,
    RooCodeAdapter,
    GeminiAdapter,
    CodexAdapter,
    OpenCodeAdapter,
]

# Known clients that are not synced yet
UNSUPPORTED_CLIENTS: list[type[BaseClientAdapter]] = [
    VSCodeAdapter,
    GooseAdapter,
]

# ABOUTME: --source selector -> client display name
CLIENT_ALIASES: dict[str, str] = {
    alias: client_cls.display_name
    for client_cls in ALL_CLIENTS
    for alias in (client_cls.key, *client_cls.aliases)
}

__all__ = [
    "BaseClientAdapter",
    "CursorAdapter",
    "ClaudeCodeAdapter",
    "WindsurfAdapter",
    "ClineAdapter",
    "RooCodeAdapter",
    "GeminiAdapter",
    "CodexAdapter",
    "OpenCodeAdapter",
    "VSCodeAdapter",
    "GooseAdapter",
    "ALL_CLIENTS",
    "UNSUPPORTED_CLIENTS",
    "CLIENT_ALIASES",
    "get_all_clients",
    "resolve_client_name",
]


def get_all_clients(project_root: Path) -> list[BaseClientAdapter]:
    """Instantiate every active adapter for a project directory.

    ABOUTME: Returns adapters in merge-precedence order
    """
    return [client_cls(project_root) for client_cls in ALL_CLIENTS]


def resolve_client_name(alias: str) -> str | None:
    """Map a --source value (case-insensitive) to a client display name."""
    return CLIENT_ALIASES.get(alias.strip().lower())
