# Path conventions for mcpsync
import os
import platform
from pathlib import Path

# ABOUTME: Per-user directory for mcpsync state (backups)
APP_DIR_NAME = ".sync-project-mcps"

# ABOUTME: VS Code extension id that Cline stores its global settings under
CLINE_EXTENSION_ID = "saoudrizwan.claude-dev"


def get_app_dir() -> Path:
    """Return ~/.sync-project-mcps.

    ABOUTME: Resolved on every call so HOME overrides are honoured
    """
    return Path.home() / APP_DIR_NAME


def get_project_root(path: str | Path | None = None) -> Path:
    """Resolve the project directory to sync, defaulting to the cwd."""
    return Path(path).expanduser().resolve() if path else Path.cwd()


def get_vscode_user_dir() -> Path:
    """Return the VS Code user settings directory for this OS.

    ABOUTME: macOS: ~/Library/Application Support/Code/User
    ABOUTME: Windows: %APPDATA%/Code/User
    ABOUTME: Linux and others: ~/.config/Code/User
    """
    system = platform.system()
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Code" / "User"
    if system == "Windows":
        return Path(os.environ.get("APPDATA", "")) / "Code" / "User"
    return Path.home() / ".config" / "Code" / "User"


def get_cline_global_path() -> Path:
    return (
        get_vscode_user_dir()
        / "globalStorage"
        / CLINE_EXTENSION_ID
        / "settings"
        / "cline_mcp_settings.json"
    )


def get_windsurf_global_path() -> Path:
    return Path.home() / ".codeium" / "windsurf" / "mcp_config.json"


def get_vscode_settings_path() -> Path:
    return get_vscode_user_dir() / "settings.json"


def get_goose_config_path() -> Path:
    if platform.system() == "Windows":
        return Path(os.environ.get("USERPROFILE", "")) / ".config" / "goose" / "config.yaml"
    return Path.home() / ".config" / "goose" / "config.yaml"


def resolve_with_fallback(project_path: Path, global_path: Path | None) -> Path:
    """Prefer the project-level file, fall back to the global one.

    ABOUTME: Returns project_path when neither exists
    """
    if project_path.exists():
        return project_path
    if global_path is not None and global_path.exists():
        return global_path
    return project_path
