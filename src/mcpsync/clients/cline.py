# Cline client adapter
from pathlib import Path

from mcpsync.clients.base import JsonClientAdapter
from mcpsync.config import get_cline_global_path, resolve_with_fallback

CONFIG_PATH = Path(".cline") / "mcp.json"


class ClineAdapter(JsonClientAdapter):
    """Adapter for Cline (.cline/mcp.json).

    ABOUTME: Falls back to cline_mcp_settings.json in VS Code globalStorage
    """

    key = "cline"
    display_name = "Cline"

    def default_path(self, project_root: Path) -> Path:
        return resolve_with_fallback(project_root / CONFIG_PATH, get_cline_global_path())
