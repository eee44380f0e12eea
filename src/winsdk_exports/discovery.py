from pathlib import Path
from typing import List, Set

BINARY_SUFFIXES = (".lib", ".dll")


def iter_binaries(directory: Path) -> List[Path]:
    """Every .lib/.dll file directly inside directory, sorted by name."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(
        path for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() in BINARY_SUFFIXES
    )


def _stems(directory: Path, suffix: str) -> Set[str]:
    return {
        path.stem.lower()
        for path in Path(directory).iterdir()
        if path.suffix.lower() == suffix
    }


def get_lib_list(dll_dir: Path, lib_dir: Path, new_lib_dir: Path) -> List[str]:
    """
    Library names present in all three snapshots.

    Returns the lower-cased stems of .lib files in lib_dir that also exist as
    a .dll in dll_dir and as a .lib in new_lib_dir.
    """
    dlls = _stems(dll_dir, ".dll")
    new_libs = _stems(new_lib_dir, ".lib")
    return [
        stem for stem in sorted(_stems(lib_dir, ".lib"))
        if stem in dlls and stem in new_libs
    ]
