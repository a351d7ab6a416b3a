# ABOUTME: Backup utilities for client configuration files.
# ABOUTME: Handles timestamped backups with automatic retention cleanup (keep last 5 per client).
import logging
import re
import shutil
from datetime import datetime
from pathlib import Path

from mcpsync.config import get_app_dir

logger = logging.getLogger(__name__)

# ABOUTME: Matches {client}_{YYYYMMDD}_{HHMMSS}.{ext}
BACKUP_PATTERN = re.compile(r"^(.+?)_(\d{8}_\d{6})\.(.+)$")

MAX_BACKUPS_PER_CLIENT = 5


def create_backup(source_path: Path, backup_dir: Path, label: str | None = None) -> Path:
    """Create a timestamped backup of a client config file.

    ABOUTME: Backup format: {label}_{YYYYMMDD}_{HHMMSS}{ext}
    ABOUTME: Uses shutil.copy2() to preserve file metadata
    ABOUTME: Creates backup_dir if it doesn't exist

    Args:
        source_path: Path to file to backup
        backup_dir: Directory where backup should be created
        label: Client key used as filename prefix; defaults to the
            first dotted component of the file name

    Returns:
        Path to created backup file

    Raises:
        FileNotFoundError: If source_path doesn't exist
        OSError: If backup creation fails

    Example:
        create_backup(Path(".cursor/mcp.json"), get_backup_dir(), "cursor")
        -> ~/.sync-project-mcps/backups/cursor_20261019_143022.json
    """
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {source_path}")

    backup_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    if label is None:
        # e.g. .mcp.json -> mcp, settings.json -> settings
        label = source_path.name.lstrip(".").replace(".", "_").split("_")[0] or "config"

    backup_path = backup_dir / f"{label}_{timestamp}{source_path.suffix}"

    shutil.copy2(source_path, backup_path)
    logger.debug(f"Backed up {source_path} to {backup_path}")

    cleanup_old_backups(backup_dir)

    return backup_path


def get_backup_dir() -> Path:
    """Return ~/.sync-project-mcps/backups (not created)."""
    return get_app_dir() / "backups"


def cleanup_old_backups(
    backup_dir: Path, max_backups_per_client: int = MAX_BACKUPS_PER_CLIENT
) -> list[Path]:
    """Remove old backup files, keeping only the most recent per client.

    ABOUTME: Groups backups by label prefix (before _timestamp)
    ABOUTME: Logs warnings on errors but does not raise exceptions

    Args:
        backup_dir: Directory containing backup files
        max_backups_per_client: Maximum backups to keep per client

    Returns:
        List of paths that were deleted
    """
    deleted_files: list[Path] = []

    if not backup_dir.exists():
        return deleted_files

    backups_by_client: dict[str, list[tuple[str, Path]]] = {}

    for file_path in backup_dir.iterdir():
        if not file_path.is_file():
            continue

        match = BACKUP_PATTERN.match(file_path.name)
        if not match:
            continue

        backups_by_client.setdefault(match.group(1), []).append(
            (match.group(2), file_path)
        )

    for backups in backups_by_client.values():
        # Newest first
        backups.sort(key=lambda x: x[0], reverse=True)

        for _timestamp, file_path in backups[max_backups_per_client:]:
            try:
                file_path.unlink()
                deleted_files.append(file_path)
                logger.debug(f"Deleted old backup: {file_path}")
            except OSError as e:
                logger.warning(f"Failed to delete old backup {file_path}: {e}")

    return deleted_files
