import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from pydantic import ValidationError

from winsdk_exports.exceptions import StoreCorruptionError
from winsdk_exports.logging_config import logger
from winsdk_exports.paths import WorkspacePaths
from winsdk_exports.schemas import ExportSymbolResult, MergeResult


class ExportStore:
    """
    JSON storage for parsed reports and merged name indexes of one architecture.
    """

    def __init__(self, root: Optional[Path] = None, arch: str = "x86"):
        self.paths = WorkspacePaths(root)
        self.arch = arch

    def ensure_dirs(self) -> None:
        self.paths.ensure_dirs(self.arch)

    def write_report_text(self, name: str, snapshot: str, text: str) -> Path:
        """Save the raw report exactly as produced (CRLF endings kept)."""
        path = self.paths.report_txt(name, snapshot, self.arch)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        return path

    def write_result(self, name: str, snapshot: str, result: ExportSymbolResult) -> Path:
        """
        Persist one parsed report as JSON.
        """
        path = self.paths.report_json(name, snapshot, self.arch)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(result.to_json_dict(), indent=2), encoding="utf-8")
        logger.info(f"Wrote {result.counts()} for {name}--{snapshot} to {path}")
        return path

    def has_result(self, name: str, snapshot: str) -> bool:
        return self.paths.report_json(name, snapshot, self.arch).is_file()

    def read_result(self, name: str, snapshot: str) -> ExportSymbolResult:
        """
        Load one parsed report and rehydrate the models.

        Raises:
            StoreCorruptionError: If the file is missing or malformed.
        """
        path = self.paths.report_json(name, snapshot, self.arch)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise StoreCorruptionError(f"Result file not found at {path}")
        except json.JSONDecodeError as exc:
            raise StoreCorruptionError(f"Result file at {path} contains invalid JSON: {exc}")

        if not isinstance(data, dict):
            raise StoreCorruptionError(f"Result file at {path} is not a JSON object")

        try:
            return ExportSymbolResult.model_validate(data)
        except ValidationError as exc:
            raise StoreCorruptionError(f"Result file at {path} has invalid structure: {exc}")

    def load_snapshots(self, name: str, deps: Sequence[str]) -> Dict[str, ExportSymbolResult]:
        """Results of every snapshot in deps that has a saved result."""
        results: Dict[str, ExportSymbolResult] = {}
        for snapshot in deps:
            if self.has_result(name, snapshot):
                results[snapshot] = self.read_result(name, snapshot)
            else:
                logger.debug(f"No saved result for {name}--{snapshot}")
        return results

    def write_merged(self, merged: MergeResult) -> Path:
        """Persist a merge as a JSON array of [name, {"libSymbols": [...]}] pairs."""
        path = self.paths.merged_json(merged.library, self.arch)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(merged.to_entries(), indent=2), encoding="utf-8")
        logger.info(f"Wrote {len(merged.symbols)} merged names for {merged.library} to {path}")
        return path

    def read_merged(self, name: str) -> List[list]:
        """
        Load merged output as written by write_merged().

        Raises:
            StoreCorruptionError: If the file is missing or not a JSON array.
        """
        path = self.paths.merged_json(name, self.arch)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise StoreCorruptionError(f"Merged file not found at {path}")
        except json.JSONDecodeError as exc:
            raise StoreCorruptionError(f"Merged file at {path} contains invalid JSON: {exc}")
        if not isinstance(data, list):
            raise StoreCorruptionError(f"Merged file at {path} is not a JSON array")
        return data
