"""
Workspace Path Configuration

Centralized path management for inspection reports and parsed results.
All paths are relative to the workspace root.

Directory Structure:
<root>/
├── deps/<snapshot>/<arch>/            # Input .dll/.lib files per snapshot
├── exports/<arch>/txt/<lib>--<snapshot>.txt    # Raw dumpbin reports
├── exports/<arch>/json/<lib>--<snapshot>.json  # Parsed ExportSymbolResult
├── exports/<arch>/merged/<lib>.json            # Merged name index
└── .winsdk/logs/                      # Log files (opt-in)
"""

from pathlib import Path
from typing import Optional


class WorkspacePaths:
    """
    Centralized path configuration for one workspace.

    All paths are lazily resolved relative to root.
    Default root is current working directory.
    """

    DEPS_DIR = "deps"
    EXPORTS_DIR = "exports"
    TXT_DIR = "txt"
    JSON_DIR = "json"
    MERGED_DIR = "merged"
    STATE_DIR = ".winsdk"
    LOGS_DIR = "logs"

    # Separates library name from snapshot id in per-report file names
    SNAPSHOT_SEPARATOR = "--"

    def __init__(self, root: Optional[Path] = None):
        self._root = Path(root) if root is not None else None

    @property
    def root(self) -> Path:
        """Get the workspace root directory."""
        if self._root is None:
            return Path.cwd()
        return self._root

    @property
    def logs_dir(self) -> Path:
        return self.root / self.STATE_DIR / self.LOGS_DIR

    def deps_dir(self, snapshot: str, arch: str) -> Path:
        """Directory holding the binaries of one snapshot."""
        return self.root / self.DEPS_DIR / snapshot / arch

    def exports_dir(self, arch: str) -> Path:
        return self.root / self.EXPORTS_DIR / arch

    def report_stem(self, name: str, snapshot: str) -> str:
        return f"{name}{self.SNAPSHOT_SEPARATOR}{snapshot}"

    def report_txt(self, name: str, snapshot: str, arch: str) -> Path:
        """Raw report text for one library in one snapshot."""
        return self.exports_dir(arch) / self.TXT_DIR / f"{self.report_stem(name, snapshot)}.txt"

    def report_json(self, name: str, snapshot: str, arch: str) -> Path:
        """Parsed result for one library in one snapshot."""
        return self.exports_dir(arch) / self.JSON_DIR / f"{self.report_stem(name, snapshot)}.json"

    def merged_json(self, name: str, arch: str) -> Path:
        """Merged name index for one library across snapshots."""
        return self.exports_dir(arch) / self.MERGED_DIR / f"{name}.json"

    def ensure_dirs(self, arch: str) -> None:
        """Create the output directories for an architecture."""
        for sub in (self.TXT_DIR, self.JSON_DIR, self.MERGED_DIR):
            (self.exports_dir(arch) / sub).mkdir(parents=True, exist_ok=True)


# Global instance for the current working directory
_default_paths: Optional[WorkspacePaths] = None


def get_paths(root: Optional[Path] = None) -> WorkspacePaths:
    """
    Get workspace paths.

    Args:
        root: Optional explicit workspace root. When omitted, a shared
              instance rooted at the current working directory is returned.
    """
    global _default_paths
    if root is not None:
        return WorkspacePaths(root)
    if _default_paths is None:
        _default_paths = WorkspacePaths()
    return _default_paths
