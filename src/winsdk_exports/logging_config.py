"""
Logger setup for winsdk-exports.

Parsing and merging log through the shared loguru `logger`. Merge conflicts
and misses are warnings, so a long batch over many snapshots leaves a record
of every ordinal that needed a tie-break or a fallback name.

Two sinks:
- stderr, for interactive runs; dropped in machine mode so JSON output stays clean
- <workspace>/.winsdk/logs/winsdk-exports.log, opt-in, for batch runs
"""
import os
import sys

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
LOG_FILE_NAME = "winsdk-exports.log"

_logging_configured = False


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def setup_logging(level="INFO", suppress_console=None, enable_file_logging=None, force=False):
    """
    Install the console and file sinks.

    Args:
        level: Console level; the CLI passes DEBUG for --verbose
        suppress_console: Drop the stderr sink. None reads WINSDK_MACHINE_MODE.
        enable_file_logging: Add the workspace log file. None reads WINSDK_FILE_LOGGING.
        force: Replace sinks from an earlier call (the CLI callback and tests use this)
    """
    global _logging_configured

    if _logging_configured and not force:
        return
    _logging_configured = True

    logger.remove()

    if suppress_console is None:
        suppress_console = _env_flag("WINSDK_MACHINE_MODE")
    if not suppress_console:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if enable_file_logging is None:
        enable_file_logging = _env_flag("WINSDK_FILE_LOGGING")
    if enable_file_logging:
        from winsdk_exports.paths import get_paths
        logs_dir = get_paths().logs_dir
        logs_dir.mkdir(parents=True, exist_ok=True)

        # Merge diagnostics are warnings; INFO also keeps the per-report counts
        logger.add(
            logs_dir / LOG_FILE_NAME,
            level="INFO",
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            catch=True,
        )


setup_logging()
