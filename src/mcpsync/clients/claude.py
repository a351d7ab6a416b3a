# Claude Code client adapter
from pathlib import Path

from mcpsync.clients.base import JsonClientAdapter

CONFIG_PATH = Path(".mcp.json")


class ClaudeCodeAdapter(JsonClientAdapter):
    """Adapter for Claude Code (.mcp.json at the project root).

    ABOUTME: Project-scoped file only; ~/.claude.json is never touched
    """

    key = "claude"
    aliases = ("claude-code",)
    display_name = "Claude Code"

    def default_path(self, project_root: Path) -> Path:
        return project_root / CONFIG_PATH
