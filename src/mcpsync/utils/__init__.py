# ABOUTME: Utility modules for mcpsync
# ABOUTME: Exports lenient parsers and backup functions

from mcpsync.utils.backup import create_backup, get_backup_dir
from mcpsync.utils.jsonc import parse_jsonc
from mcpsync.utils.toml_subset import dump_toml, parse_toml, split_toml_blocks

__all__ = [
    "parse_jsonc",
    "parse_toml",
    "dump_toml",
    "split_toml_blocks",
    "create_backup",
    "get_backup_dir",
]
