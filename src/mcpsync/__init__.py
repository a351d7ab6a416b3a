# mcpsync - Sync project-level MCP server configs across AI coding assistants
# ABOUTME: Version information
__version__ = "1.0.0"

# ABOUTME: Export core data models and merge engine
from mcpsync.merge import Changes, get_changes, merge_configs, servers_equal
from mcpsync.models import ClientAdapter, ClientConfig, MCPServer, Servers

# ABOUTME: Export orchestration entry points
from mcpsync.sync import (
    NoConfigsError,
    SourceNotFoundError,
    SyncError,
    SyncReport,
    UnknownSourceError,
    sync_project,
)

__all__ = [
    "__version__",
    "MCPServer",
    "Servers",
    "ClientConfig",
    "ClientAdapter",
    "Changes",
    "merge_configs",
    "get_changes",
    "servers_equal",
    "sync_project",
    "SyncReport",
    "SyncError",
    "UnknownSourceError",
    "NoConfigsError",
    "SourceNotFoundError",
]
