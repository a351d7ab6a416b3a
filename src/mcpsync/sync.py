# Sync orchestration for mcpsync
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from mcpsync.clients import CLIENT_ALIASES, BaseClientAdapter, get_all_clients, resolve_client_name
from mcpsync.merge import get_changes, merge_configs
from mcpsync.models import ClientConfig, Servers
from mcpsync.utils import create_backup, get_backup_dir

logger = logging.getLogger(__name__)

SyncStatus = Literal["synced", "skipped", "dry-run", "failed"]


class SyncError(Exception):
    """Base class for conditions that stop a sync run."""


class UnknownSourceError(SyncError):
    """--source named a client that does not exist."""

    def __init__(self, source: str) -> None:
        super().__init__(f"Unknown source: {source}")
        self.source = source
        self.valid_sources = list(CLIENT_ALIASES)


class NoConfigsError(SyncError):
    """No client in the project has a readable MCP config."""

    def __init__(self, clients: list[ClientConfig]) -> None:
        super().__init__("No MCP configurations found")
        self.clients = clients


class SourceNotFoundError(SyncError):
    """The --source client has no readable config in this project."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(f'Source "{name}" not found in project')
        self.name = name
        self.available = available


@dataclass
class ClientResult:
    """Outcome of syncing one client."""
    name: str
    path: Path
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    status: SyncStatus = "skipped"
    error: str | None = None


@dataclass
class SyncReport:
    """Report from a sync run.

    ABOUTME: Tracks merged result plus per-client outcomes
    ABOUTME: Errors are non-fatal, sync continues past them
    """
    merged: Servers
    source: str | None = None
    dry_run: bool = False
    found: list[ClientConfig] = field(default_factory=list)
    unreadable: list[ClientConfig] = field(default_factory=list)
    missing: list[ClientConfig] = field(default_factory=list)
    results: list[ClientResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def add_result(self, result: ClientResult) -> None:
        self.results.append(result)

    def add_error(self, error: str) -> None:
        """Record an error that occurred during sync."""
        self.errors.append(error)

    @property
    def clients_written(self) -> int:
        return sum(1 for result in self.results if result.status == "synced")


def write_client(adapter: BaseClientAdapter, servers: Servers, backup: bool = True) -> None:
    """Serialize servers into the adapter's file, backing it up first.

    ABOUTME: Re-reads the file so serialize() sees its current content

    Raises:
        OSError: If the file cannot be read, backed up or written
        ValueError: If the existing content can no longer be parsed
        NotImplementedError: If the adapter cannot write
    """
    path = adapter.path
    existing = path.read_text(encoding="utf-8")
    output = adapter.serialize(servers, existing)

    if backup:
        create_backup(path, get_backup_dir(), adapter.key)

    path.write_text(output, encoding="utf-8")
    logger.debug(f"Wrote {len(servers)} server(s) to {path}")


def sync_project(
    project_root: Path,
    source: str | None = None,
    dry_run: bool = False,
    backup: bool = True,
    adapters: list[BaseClientAdapter] | None = None,
) -> SyncReport:
    """Merge all client configs in a project and write the result back.

    ABOUTME: Validates --source before touching the file system
    ABOUTME: Only clients whose server names differ from the merged set are written
    ABOUTME: Missing clients are never created; unreadable and read-only ones
    ABOUTME: are never written

    Args:
        project_root: Project directory holding the client configs
        source: Client alias to treat as source of truth instead of merging
        dry_run: Compute and report without writing
        backup: Back up each file before rewriting it
        adapters: Adapters to use instead of the registry

    Returns:
        SyncReport describing what was found and written

    Raises:
        UnknownSourceError: If source is not a known client alias
        NoConfigsError: If no client has a readable config
        SourceNotFoundError: If the source client has no readable config
    """
    source_name: str | None = None
    if source is not None:
        source_name = resolve_client_name(source)
        if source_name is None:
            raise UnknownSourceError(source)

    if adapters is None:
        adapters = get_all_clients(project_root)

    snapshots = [(adapter, adapter.read()) for adapter in adapters]
    usable = [(adapter, client) for adapter, client in snapshots if client.usable]

    if not usable:
        raise NoConfigsError([client for _, client in snapshots])

    found = [client for _, client in usable]

    if source_name is not None:
        source_client = next((client for client in found if client.name == source_name), None)
        if source_client is None:
            raise SourceNotFoundError(source_name, [client.name for client in found])
        merged = {name: server.copy() for name, server in (source_client.servers or {}).items()}
    else:
        merged = merge_configs(found)

    report = SyncReport(
        merged=merged,
        source=source_name,
        dry_run=dry_run,
        found=found,
        unreadable=[client for _, client in snapshots if client.exists and client.servers is None],
        missing=[client for _, client in snapshots if not client.exists],
    )

    for adapter, client in usable:
        changes = get_changes(client, merged)
        result = ClientResult(
            name=client.name,
            path=client.path,
            added=changes.added,
            removed=changes.removed,
        )

        if not changes.has_changes:
            result.status = "skipped"
        elif not adapter.writable:
            logger.debug(f"{client.name} is read-only, not writing {client.path}")
            result.status = "skipped"
        elif dry_run:
            result.status = "dry-run"
        else:
            try:
                write_client(adapter, merged, backup=backup)
                result.status = "synced"
            except (OSError, ValueError, NotImplementedError) as e:
                # Record error but continue with other clients
                logger.warning(f"Failed to write {client.path}: {e}")
                result.status = "failed"
                result.error = str(e)
                report.add_error(f"{client.name}: {e}")

        report.add_result(result)

    return report
