"""
Block classification and the per-kind record parsers.

A block is classified from its first line, or for archive members from the
identity line at IDENTITY_LINE. Table blocks are read column by column; the
import-object branch is strict and raises on any deviation.
"""
from enum import Enum
from typing import Dict, List

from typing_extensions import assert_never

from winsdk_exports.exceptions import FormatError
from winsdk_exports.schemas import (
    DllExport,
    LibExport,
    LibPublicSymbol,
    LibSymbol,
    NameType,
)
from .accumulator import ResultAccumulator
from .config import (
    ARCHIVE_MEMBER_MIN_LINES,
    ARCHIVE_MEMBER_PREFIX,
    DLL_EXPORT_LAYOUT,
    DLL_EXPORTS_HEADER,
    FILE_HEADER_IDENTITY,
    IDENTITY_LINE,
    IMPORT_OBJECT_FIELDS,
    IMPORT_OBJECT_IDENTITY,
    LIB_EXPORT_LAYOUT,
    LIB_EXPORTS_HEADER,
    NAMED_IMPORT_FIELDS,
    ORDINAL_IMPORT_FIELDS,
    PUBLIC_SYMBOLS_FIRST_LINE,
    PUBLIC_SYMBOLS_MARKER,
    FieldSpec,
)
from .fields import parse_int, parse_optional_int, read_field, try_parse_int


class BlockKind(str, Enum):
    """What a report block encodes."""
    DLL_EXPORTS = "dll_exports"
    LIB_EXPORTS = "lib_exports"
    PUBLIC_SYMBOLS = "public_symbols"
    FILE_HEADER = "file_header"
    IMPORT_OBJECT = "import_object"
    UNKNOWN = "unknown"


def classify_block(block: List[str]) -> BlockKind:
    """Decide which record family a block holds."""
    if not block:
        return BlockKind.UNKNOWN
    header = block[0]
    if header == DLL_EXPORTS_HEADER:
        return BlockKind.DLL_EXPORTS
    if header == LIB_EXPORTS_HEADER:
        return BlockKind.LIB_EXPORTS
    if len(block) >= ARCHIVE_MEMBER_MIN_LINES:
        identity = block[IDENTITY_LINE]
        if identity.find(PUBLIC_SYMBOLS_MARKER) > 0:
            return BlockKind.PUBLIC_SYMBOLS
        if identity == FILE_HEADER_IDENTITY:
            return BlockKind.FILE_HEADER
        if identity.startswith(IMPORT_OBJECT_IDENTITY):
            return BlockKind.IMPORT_OBJECT
    return BlockKind.UNKNOWN


def _data_lines(block: List[str], first: int) -> List[str]:
    # The last line of a table block is the blank line before the next header
    return [line for line in block[first:-1] if line.strip()]


def parse_dll_exports(accumulator: ResultAccumulator, block: List[str]) -> None:
    columns = DLL_EXPORT_LAYOUT.columns
    for line in _data_lines(block, DLL_EXPORT_LAYOUT.first_data_line):
        accumulator.add_dll_export(DllExport(
            name=columns["name"].slice(line),
            ordinal=parse_int(columns["ordinal"].slice(line), 10, line),
            hint=parse_optional_int(columns["hint"].slice(line), 16, line),
            rva=parse_optional_int(columns["rva"].slice(line), 16, line),
        ))


def parse_lib_exports(accumulator: ResultAccumulator, block: List[str]) -> None:
    columns = LIB_EXPORT_LAYOUT.columns
    for line in _data_lines(block, LIB_EXPORT_LAYOUT.first_data_line):
        accumulator.add_lib_export(LibExport(
            name=columns["name"].slice(line),
            ordinal=try_parse_int(columns["ordinal"].slice(line)),
        ))


def parse_public_symbols(accumulator: ResultAccumulator, block: List[str]) -> None:
    for line in _data_lines(block, PUBLIC_SYMBOLS_FIRST_LINE):
        offset_text, _, name = line.strip().partition(" ")
        accumulator.add_lib_public_symbol(LibPublicSymbol(
            offset=parse_int(offset_text, 16, line),
            name=name.strip(),
        ))


def member_offset(header: str) -> int:
    """
    Archive offset of a member, from "Archive member name at <hex>: <name>".

    Raises:
        FormatError: If the header does not have that shape.
    """
    if not header.startswith(ARCHIVE_MEMBER_PREFIX):
        raise FormatError("Expected an archive member header", line=header)
    offset_text = header.split(":", 1)[0][len(ARCHIVE_MEMBER_PREFIX):]
    return parse_int(offset_text, 16, header)


def _read_fields(block: List[str], specs: Dict[str, FieldSpec]) -> Dict[str, object]:
    return {field_name: read_field(block, spec) for field_name, spec in specs.items()}


def parse_import_object(accumulator: ResultAccumulator, block: List[str]) -> None:
    """
    Parse one import-object archive member into a LibSymbol.

    Archive member name at 814: ACLUI.dll/
    ...
      Version      : 0
      Machine      : 14C (x86)
      TimeDateStamp: 3D507A92 Wed Aug  7 09:40:34 2002
      SizeOfData   : 00000024
      DLL name     : ACLUI.dll
      Symbol name  : _IID_ISecurityInformation
      Type         : code
      Name type    : ordinal
      Ordinal      : 16

    Non-ordinal members carry "Hint" and "Name" lines instead of "Ordinal".
    """
    values = _read_fields(block, IMPORT_OBJECT_FIELDS)
    name_type = NameType.parse(
        values.pop("name_type"), line=block[IMPORT_OBJECT_FIELDS["name_type"].line]
    )
    if name_type is NameType.ORDINAL:
        values.update(_read_fields(block, ORDINAL_IMPORT_FIELDS))
    elif (
        name_type is NameType.NAME
        or name_type is NameType.UNDECORATE
        or name_type is NameType.NO_PREFIX
    ):
        values.update(_read_fields(block, NAMED_IMPORT_FIELDS))
    else:
        assert_never(name_type)

    accumulator.add_lib_symbol(LibSymbol(
        offset=member_offset(block[0]),
        name_type=name_type,
        **values,
    ))


def parse_block(accumulator: ResultAccumulator, block: List[str]) -> BlockKind:
    """
    Parse one block into the accumulator.

    Returns:
        The kind the block was classified as.

    Raises:
        FormatError: If an import-object member or a table line is malformed.
        NameTypeError: If an import-object member has an unknown name type.
    """
    kind = classify_block(block)
    if kind is BlockKind.DLL_EXPORTS:
        parse_dll_exports(accumulator, block)
    elif kind is BlockKind.LIB_EXPORTS:
        parse_lib_exports(accumulator, block)
    elif kind is BlockKind.PUBLIC_SYMBOLS:
        parse_public_symbols(accumulator, block)
    elif kind is BlockKind.IMPORT_OBJECT:
        parse_import_object(accumulator, block)
    return kind
