# Roo Code client adapter
from pathlib import Path

from mcpsync.clients.base import JsonClientAdapter

CONFIG_PATH = Path(".roo") / "mcp.json"


class RooCodeAdapter(JsonClientAdapter):
    """Adapter for Roo Code (.roo/mcp.json)."""

    key = "roo"
    aliases = ("roo-code",)
    display_name = "Roo Code"

    def default_path(self, project_root: Path) -> Path:
        return project_root / CONFIG_PATH
