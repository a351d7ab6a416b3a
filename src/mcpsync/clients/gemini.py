# Gemini CLI client adapter
from pathlib import Path

from mcpsync.clients.base import (
    JsonClientAdapter,
    dump_json,
    load_json_object,
    merge_server_entries,
)
from mcpsync.models import Servers

CONFIG_PATH = Path(".gemini") / "settings.json"


class GeminiAdapter(JsonClientAdapter):
    """Adapter for Gemini CLI (.gemini/settings.json).

    ABOUTME: mcpServers lives alongside unrelated settings (theme, auth, ...)
    ABOUTME: Only the mcpServers key is replaced on write
    """

    key = "gemini"
    aliases = ("gemini-cli",)
    display_name = "Gemini CLI"

    def default_path(self, project_root: Path) -> Path:
        return project_root / CONFIG_PATH

    def serialize(self, servers: Servers, existing_content: str) -> str:
        """Replace mcpServers, keeping every sibling key in its original order."""
        existing = load_json_object(existing_content)
        entries = merge_server_entries(existing.get("mcpServers"), servers)
        return dump_json({**existing, "mcpServers": entries})
