from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from winsdk_exports.exceptions import NameTypeError


class RecordModel(BaseModel):
    """
    Base for persisted records.

    Attributes are snake_case in Python and camelCase on disk
    (e.g. time_date_stamp <-> "timeDateStamp"); both are accepted on load.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_json_dict(self) -> Dict[str, Any]:
        """Dump with on-disk keys, omitting absent optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class NameType(str, Enum):
    """How an import-library symbol name relates to the exported name."""
    UNDECORATE = "undecorate"
    ORDINAL = "ordinal"
    NAME = "name"
    NO_PREFIX = "no prefix"

    @classmethod
    def parse(cls, token: str, line: Optional[str] = None) -> "NameType":
        """
        Convert a report token to a NameType.

        Raises:
            NameTypeError: If the token is not one of the four known name types.
        """
        for member in cls:
            if member.value == token:
                return member
        raise NameTypeError(f"Invalid name type: {token!r}", line=line)


class DllExport(RecordModel):
    """
    One entry of a DLL export table.

    hint is None when the report leaves the hint column blank, rva is None
    for forwarded exports. name may be the "[NONAME]" sentinel.
    """
    name: str
    ordinal: int
    hint: Optional[int] = None
    rva: Optional[int] = None


class LibExport(RecordModel):
    """One entry of an import library's flat export list."""
    name: str
    ordinal: Optional[int] = None


class LibPublicSymbol(RecordModel):
    """One public symbol from the first linker member, keyed by member offset."""
    offset: int
    name: str


class LibSymbol(RecordModel):
    """
    One import-object record of an archive member.

    Ordinal imports carry `ordinal`; all other name types carry `hint` and `name`.
    """
    offset: int
    version: int
    machine: int
    time_date_stamp: int
    size_of_data: int
    dll_name: str
    symbol_name: str
    type: str
    name_type: NameType
    ordinal: Optional[int] = None
    hint: Optional[int] = None
    name: Optional[str] = None

    @model_validator(mode="after")
    def _check_name_type_fields(self) -> "LibSymbol":
        if self.name_type is NameType.ORDINAL:
            if self.ordinal is None or self.hint is not None or self.name is not None:
                raise ValueError("ordinal imports carry only an ordinal")
        elif self.hint is None or self.name is None or self.ordinal is not None:
            raise ValueError(f"'{self.name_type.value}' imports carry a hint and a name")
        return self


class ExportSymbolResult(RecordModel):
    """
    Everything parsed from one inspection report.

    Immutable; built through parser.accumulator.ResultAccumulator.
    """
    dll_exports: Tuple[DllExport, ...] = ()
    lib_exports: Tuple[LibExport, ...] = ()
    lib_public_symbols: Tuple[LibPublicSymbol, ...] = ()
    lib_symbols: Tuple[LibSymbol, ...] = ()

    def counts(self) -> Dict[str, int]:
        return {
            "dllExports": len(self.dll_exports),
            "libExports": len(self.lib_exports),
            "libPublicSymbols": len(self.lib_public_symbols),
            "libSymbols": len(self.lib_symbols),
        }


class DiagnosticKind(str, Enum):
    """Non-fatal findings of the merge pass."""
    CONFLICT = "conflict"  # Several export names share the ordinal
    MISS = "miss"          # No name found; fell back to the raw symbol name


class MergeDiagnostic(BaseModel):
    """A conflict or miss recorded while resolving one LibSymbol."""
    kind: DiagnosticKind
    library: str
    snapshot: str
    symbol_name: str
    ordinal: Optional[int] = None
    candidates: List[str] = Field(default_factory=list)
    resolved_name: str

    @property
    def message(self) -> str:
        where = f"{self.library}:{self.snapshot} ord:{self.ordinal} {self.symbol_name}"
        if self.kind is DiagnosticKind.CONFLICT:
            return f"Multiple names for ordinal in {where} with {self.candidates}, using '{self.resolved_name}'"
        return f"Cannot find original name in {where}, using raw symbol name"


class MergeResult(BaseModel):
    """
    Name index for one library across snapshots.

    symbols preserves the order in which names were first resolved, and each
    list preserves the order in which records were encountered.
    """
    library: str
    symbols: Dict[str, List[LibSymbol]] = Field(default_factory=dict)
    diagnostics: List[MergeDiagnostic] = Field(default_factory=list)

    @property
    def conflicts(self) -> List[MergeDiagnostic]:
        return [d for d in self.diagnostics if d.kind is DiagnosticKind.CONFLICT]

    @property
    def misses(self) -> List[MergeDiagnostic]:
        return [d for d in self.diagnostics if d.kind is DiagnosticKind.MISS]

    def to_entries(self) -> List[list]:
        """Merged output as [name, {"libSymbols": [...]}] pairs."""
        return [
            [name, {"libSymbols": [symbol.to_json_dict() for symbol in records]}]
            for name, records in self.symbols.items()
        ]
