"""
Merge Configuration.

Symbols excluded from the merge and the export-name sentinel.
The exclusion list can be replaced through WINSDK_EXCLUDED_SYMBOLS
(comma-separated).
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple


# Import-library symbols with no usable counterpart in any export table
DEFAULT_EXCLUDED_SYMBOLS: Tuple[str, ...] = (
    "_GetScaleFactorForWindow@8",
    "_SHGetSpecialFolderPath@16",
)

# Name dumpbin prints for exports that only have an ordinal
NONAME_SENTINEL = "[NONAME]"


def _env_list(key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    """Read a comma-separated list from an environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass
class MergeConfig:
    """
    Settings for the ordinal merge.

    Environment Variables:
        WINSDK_EXCLUDED_SYMBOLS: Comma-separated raw symbol names to skip
    """

    excluded_symbols: FrozenSet[str] = field(default_factory=lambda: frozenset(
        _env_list("WINSDK_EXCLUDED_SYMBOLS", DEFAULT_EXCLUDED_SYMBOLS)
    ))
    noname_sentinel: str = NONAME_SENTINEL

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary (for JSON output)."""
        return {
            "excluded_symbols": sorted(self.excluded_symbols),
            "noname_sentinel": self.noname_sentinel,
        }


_default_config: Optional[MergeConfig] = None


def get_merge_config() -> MergeConfig:
    """Get the global merge configuration."""
    global _default_config
    if _default_config is None:
        _default_config = MergeConfig()
    return _default_config


def reset_merge_config() -> None:
    """Reset global config (useful after env var changes or for testing)."""
    global _default_config
    _default_config = None
