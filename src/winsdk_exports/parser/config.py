"""
Layout of a dumpbin report.

Every field the parser reads is described here: header literals that start
a block, fixed column ranges for the two export tables, and fixed line
indices with their expected labels for import-object archive members.
"""
from typing import Dict, NamedTuple, Optional

from winsdk_exports.exceptions import ConfigError

# dumpbin writes CRLF line endings
REPORT_LINE_SEPARATOR = "\r\n"

# Scanning stops at this line
SUMMARY_MARKER = "  Summary"

# Block headers
DLL_EXPORTS_HEADER = "    ordinal hint RVA      name"
LIB_EXPORTS_HEADER = "     Exports"
ARCHIVE_MEMBER_PREFIX = "Archive member name at "

# "  <Key>      : <value>" - label occupies the first 15 characters
LABEL_WIDTH = 15


class Column(NamedTuple):
    """Half-open character range of one field; end=None runs to end of line."""
    start: int
    end: Optional[int]

    def slice(self, line: str) -> str:
        return line[self.start:self.end]


class TableLayout(NamedTuple):
    """Column layout of a table block; data runs to the second-to-last line."""
    first_data_line: int
    columns: Dict[str, Column]


#           3    0 0001DD15 AccessibleChildren
DLL_EXPORT_LAYOUT = TableLayout(
    first_data_line=2,
    columns={
        "ordinal": Column(0, 11),   # decimal
        "hint": Column(11, 16),     # hex, may be blank
        "rva": Column(16, 26),      # hex, blank for forwarders
        "name": Column(26, None),
    },
)

#                   _AccessibleChildren@20
LIB_EXPORT_LAYOUT = TableLayout(
    first_data_line=4,
    columns={
        "ordinal": Column(0, 18),   # decimal, absent for most entries
        "name": Column(18, None),
    },
)


# Archive members: line 8 identifies what the member holds
ARCHIVE_MEMBER_MIN_LINES = 9
IDENTITY_LINE = 8
PUBLIC_SYMBOLS_MARKER = "public symbols"
PUBLIC_SYMBOLS_FIRST_LINE = 10
FILE_HEADER_IDENTITY = "FILE HEADER VALUES"
IMPORT_OBJECT_IDENTITY = "  Version      :"


class FieldSpec(NamedTuple):
    """A labelled value at a fixed line; base=None keeps the value as text."""
    line: int
    label: str
    base: Optional[int] = None


IMPORT_OBJECT_FIELDS: Dict[str, FieldSpec] = {
    "version": FieldSpec(8, "Version", 10),
    "machine": FieldSpec(9, "Machine", 16),
    "time_date_stamp": FieldSpec(10, "TimeDateStamp", 16),
    "size_of_data": FieldSpec(11, "SizeOfData", 16),
    "dll_name": FieldSpec(12, "DLL name"),
    "symbol_name": FieldSpec(13, "Symbol name"),
    "type": FieldSpec(14, "Type"),
    "name_type": FieldSpec(15, "Name type"),
}

ORDINAL_IMPORT_FIELDS: Dict[str, FieldSpec] = {
    "ordinal": FieldSpec(16, "Ordinal", 10),
}

NAMED_IMPORT_FIELDS: Dict[str, FieldSpec] = {
    "hint": FieldSpec(16, "Hint", 10),
    "name": FieldSpec(17, "Name"),
}


def validate_table_layout(layout: TableLayout) -> None:
    """
    Check that a table layout's columns are contiguous and non-overlapping.

    Raises:
        ConfigError: If columns overlap, leave gaps, or do not end open.
    """
    columns = sorted(layout.columns.values(), key=lambda column: column.start)
    if not columns or columns[0].start != 0:
        raise ConfigError("Table layout must start at column 0")
    for current, following in zip(columns, columns[1:]):
        if current.end != following.start:
            raise ConfigError(
                f"Columns {current} and {following} are not contiguous"
            )
    if columns[-1].end is not None:
        raise ConfigError("Last column of a table layout must run to end of line")


def validate_field_specs(specs: Dict[str, FieldSpec]) -> None:
    """
    Check that labelled fields sit on distinct lines and fit the label width.

    Raises:
        ConfigError: If two fields share a line or a label is too long.
    """
    seen: Dict[int, str] = {}
    for field_name, spec in specs.items():
        if spec.line in seen:
            raise ConfigError(
                f"Fields '{seen[spec.line]}' and '{field_name}' both read line {spec.line}"
            )
        if len(spec.label) > LABEL_WIDTH:
            raise ConfigError(f"Label '{spec.label}' exceeds {LABEL_WIDTH} characters")
        if spec.base not in (None, 10, 16):
            raise ConfigError(f"Field '{field_name}' has unsupported base {spec.base}")
        seen[spec.line] = field_name
