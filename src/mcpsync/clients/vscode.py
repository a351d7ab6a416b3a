# VS Code client adapter (read-only stub)
from pathlib import Path

from mcpsync.clients.base import UnsupportedClientAdapter
from mcpsync.config import get_vscode_settings_path


class VSCodeAdapter(UnsupportedClientAdapter):
    """Adapter stub for VS Code user settings.json."""

    key = "vscode"
    display_name = "VS Code"
    reason = "merging into settings.json without a full-fidelity editor is not supported"

    def __init__(self, project_root: Path | None = None, config_path: Path | None = None) -> None:
        super().__init__(config_path if config_path else get_vscode_settings_path())
