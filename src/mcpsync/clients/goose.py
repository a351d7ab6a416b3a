# Goose client adapter (read-only stub)
from pathlib import Path

from mcpsync.clients.base import UnsupportedClientAdapter
from mcpsync.config import get_goose_config_path


class GooseAdapter(UnsupportedClientAdapter):
    """Adapter stub for Goose (~/.config/goose/config.yaml).

    ABOUTME: Goose config is YAML, which this tool does not parse
    """

    key = "goose"
    display_name = "Goose"
    reason = "YAML configs are not supported"

    def __init__(self, project_root: Path | None = None, config_path: Path | None = None) -> None:
        super().__init__(config_path if config_path else get_goose_config_path())
