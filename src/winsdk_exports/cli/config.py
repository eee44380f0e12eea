"""
CLI Configuration
"""

import os
from typing import Optional


class CLIConfig:
    """Configuration for CLI commands"""

    # Machine mode: plain text / JSON, no rich formatting
    _machine_mode: Optional[bool] = None

    @classmethod
    def set_machine_mode(cls, enabled: bool) -> None:
        cls._machine_mode = enabled

    @classmethod
    def reset(cls) -> None:
        cls._machine_mode = None

    @classmethod
    def is_machine_mode(cls) -> bool:
        """
        Check if machine mode is active.

        Machine mode is the default. WINSDK_HUMAN_MODE=1 opts out, as does --human.
        """
        if cls._machine_mode is not None:
            return cls._machine_mode
        if os.getenv("WINSDK_HUMAN_MODE", "").lower() in ("1", "true", "yes"):
            return False
        return True
