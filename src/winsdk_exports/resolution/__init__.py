"""
Resolution package: recovers stable names for ordinal-only imports by
cross-referencing DLL export tables from several snapshots.
"""

from .facade import merge, select_snapshots
from .ordinal_index import OrdinalIndex, build_ordinal_index, export_base_name
from .resolver import OrdinalResolver
from .config import (
    DEFAULT_EXCLUDED_SYMBOLS,
    NONAME_SENTINEL,
    MergeConfig,
    get_merge_config,
    reset_merge_config,
)

__all__ = [
    "merge",
    "select_snapshots",
    "OrdinalIndex",
    "build_ordinal_index",
    "export_base_name",
    "OrdinalResolver",
    "DEFAULT_EXCLUDED_SYMBOLS",
    "NONAME_SENTINEL",
    "MergeConfig",
    "get_merge_config",
    "reset_merge_config",
]
