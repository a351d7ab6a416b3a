# Cursor client adapter
from pathlib import Path

from mcpsync.clients.base import JsonClientAdapter

CONFIG_PATH = Path(".cursor") / "mcp.json"


class CursorAdapter(JsonClientAdapter):
    """Adapter for Cursor (.cursor/mcp.json)."""

    key = "cursor"
    display_name = "Cursor"

    def default_path(self, project_root: Path) -> Path:
        return project_root / CONFIG_PATH
