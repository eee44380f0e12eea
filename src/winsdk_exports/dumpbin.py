"""
Runs dumpbin to produce the reports the parser reads.
"""

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from winsdk_exports.exceptions import DumpbinError
from winsdk_exports.logging_config import logger

DEFAULT_TOOLCHAIN_DIR = "C:/Program Files (x86)/Microsoft Visual Studio 14.0/VC/bin"
DEFAULT_ENCODING = "gbk"
DEFAULT_TIMEOUT = 600

LIB_ARGUMENTS = ("-ARCHIVEMEMBERS", "-LINKERMEMBER:1", "-HEADERS", "-EXPORTS")
DLL_ARGUMENTS = ("-EXPORTS",)


@dataclass
class DumpbinConfig:
    """
    Where dumpbin lives and how to read its output.

    Environment Variables:
        WINSDK_DUMPBIN: Executable name or path (default: dumpbin)
        WINSDK_TOOLCHAIN_DIR: Directory prepended to PATH (empty to disable)
        WINSDK_DUMPBIN_ENCODING: Output encoding (default: gbk)
    """

    executable: str = field(default_factory=lambda: os.getenv("WINSDK_DUMPBIN", "dumpbin"))
    toolchain_dir: str = field(default_factory=lambda: os.getenv(
        "WINSDK_TOOLCHAIN_DIR", DEFAULT_TOOLCHAIN_DIR
    ))
    encoding: str = field(default_factory=lambda: os.getenv(
        "WINSDK_DUMPBIN_ENCODING", DEFAULT_ENCODING
    ))
    timeout: int = DEFAULT_TIMEOUT

    def environment(self) -> Dict[str, str]:
        """Process environment with the toolchain directory on PATH."""
        env = dict(os.environ)
        if self.toolchain_dir:
            env["PATH"] = f"{self.toolchain_dir}{os.pathsep}{env.get('PATH', '')}"
        return env


def dumpbin_arguments(path: Path) -> List[str]:
    """Flags for a binary: import libraries get the archive views too."""
    path = Path(path)
    flags = LIB_ARGUMENTS if path.suffix.lower() == ".lib" else DLL_ARGUMENTS
    return [*flags, str(path)]


def _decode_report(data: bytes, encoding: str, path: Path) -> str:
    # Decoded by hand so the CRLF line endings survive
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        logger.warning(
            f"dumpbin output for {path} is not valid {encoding} at byte {exc.start}; "
            f"undecodable bytes replaced with U+FFFD"
        )
        return data.decode(encoding, errors="replace")


def run_dumpbin(path: Path, config: Optional[DumpbinConfig] = None) -> str:
    """
    Run dumpbin on one binary and return its report text.

    Raises:
        DumpbinError: If dumpbin cannot be started, times out or fails.
    """
    config = config or DumpbinConfig()
    cmd = [config.executable, *dumpbin_arguments(path)]
    logger.debug(f"Running {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            env=config.environment(),
            timeout=config.timeout,
        )
    except FileNotFoundError as exc:
        raise DumpbinError(str(path), f"executable '{config.executable}' not found") from exc
    except subprocess.TimeoutExpired as exc:
        raise DumpbinError(str(path), f"timed out after {config.timeout}s") from exc

    if result.returncode != 0:
        stderr = result.stderr.decode(config.encoding, errors="replace").strip()
        raise DumpbinError(str(path), stderr or f"exit code {result.returncode}", result.returncode)

    return _decode_report(result.stdout, config.encoding, path)
