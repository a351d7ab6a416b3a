# Windsurf client adapter
from pathlib import Path

from mcpsync.clients.base import JsonClientAdapter
from mcpsync.config import get_windsurf_global_path, resolve_with_fallback

CONFIG_PATH = Path(".windsurf") / "mcp.json"


class WindsurfAdapter(JsonClientAdapter):
    """Adapter for Windsurf (.windsurf/mcp.json).

    ABOUTME: Falls back to ~/.codeium/windsurf/mcp_config.json when the
    ABOUTME: project has no Windsurf config of its own
    """

    key = "windsurf"
    display_name = "Windsurf"

    def default_path(self, project_root: Path) -> Path:
        return resolve_with_fallback(project_root / CONFIG_PATH, get_windsurf_global_path())
