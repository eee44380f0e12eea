"""
Pytest configuration for the winsdk-exports test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- The four literal import-object archive members, one per name type
- Builders for CRLF dumpbin reports with exact column layouts
- Temporary workspace fixtures
"""

import os
from typing import List, Optional

import pytest

from winsdk_exports.logging_config import setup_logging
from winsdk_exports.resolution import reset_merge_config
from winsdk_exports.cli.config import CLIConfig


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    os.environ.setdefault("WINSDK_MACHINE_MODE", "1")


@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, force=True)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Each test starts from the default merge config and output mode."""
    monkeypatch.delenv("WINSDK_EXCLUDED_SYMBOLS", raising=False)
    monkeypatch.delenv("WINSDK_HUMAN_MODE", raising=False)
    reset_merge_config()
    CLIConfig.reset()
    yield
    reset_merge_config()
    CLIConfig.reset()


# ============================================================================
# ARCHIVE MEMBER FIXTURES
# ============================================================================

ACLUI_ORDINAL_MEMBER = [
    'Archive member name at 814: ACLUI.dll/      ',
    '3D507A92 time/date Wed Aug  7 09:40:34 2002',
    '         uid',
    '         gid',
    '       0 mode',
    '      38 size',
    'correct header end',
    '',
    '  Version      : 0',
    '  Machine      : 14C (x86)',
    '  TimeDateStamp: 3D507A92 Wed Aug  7 09:40:34 2002',
    '  SizeOfData   : 00000024',
    '  DLL name     : ACLUI.dll',
    '  Symbol name  : _IID_ISecurityInformation',
    '  Type         : code',
    '  Name type    : ordinal',
    '  Ordinal      : 16',
    '',
]

STI_NAME_MEMBER = [
    'Archive member name at EA0: STI.dll/        ',
    '3D5073C7 time/date Wed Aug  7 09:11:35 2002',
    '         uid',
    '         gid',
    '       0 mode',
    '      2F size',
    'correct header end',
    '',
    '  Version      : 0',
    '  Machine      : 14C (x86)',
    '  TimeDateStamp: 3D5073C7 Wed Aug  7 09:11:35 2002',
    '  SizeOfData   : 0000001B',
    '  DLL name     : STI.dll',
    '  Symbol name  : ??0BUFFER@@QAE@I@Z (public: __thiscall BUFFER::BUFFER(unsigned int))',
    '  Type         : code',
    '  Name type    : name',
    '  Hint         : 0',
    '  Name         : ??0BUFFER@@QAE@I@Z',
    '',
]

AUTHZ_NO_PREFIX_MEMBER = [
    'Archive member name at 1372: AUTHZ.dll/      ',
    '3D506FA6 time/date Wed Aug  7 08:53:58 2002',
    '         uid',
    '         gid',
    '       0 mode',
    '      45 size',
    'correct header end',
    '',
    '  Version      : 0',
    '  Machine      : 14C (x86)',
    '  TimeDateStamp: 3D506FA6 Wed Aug  7 08:53:58 2002',
    '  SizeOfData   : 00000031',
    '  DLL name     : AUTHZ.dll',
    '  Symbol name  : _AuthzInitializeObjectAccessAuditEvent',
    '  Type         : code',
    '  Name type    : no prefix',
    '  Hint         : 11',
    '  Name         : AuthzInitializeObjectAccessAuditEvent',
    '',
]

COMCTL32_UNDECORATE_MEMBER = [
    'Archive member name at 3840: COMCTL32.dll/   ',
    '3D37BB11 time/date Fri Jul 19 15:09:05 2002',
    '         uid',
    '         gid',
    '       0 mode',
    '      3C size',
    'correct header end',
    '',
    '  Version      : 0',
    '  Machine      : 14C (x86)',
    '  TimeDateStamp: 3D37BB11 Fri Jul 19 15:09:05 2002',
    '  SizeOfData   : 00000028',
    '  DLL name     : COMCTL32.dll',
    '  Symbol name  : _CreatePropertySheetPage@4',
    '  Type         : code',
    '  Name type    : undecorate',
    '  Hint         : 3',
    '  Name         : CreatePropertySheetPage',
    '',
]


# ============================================================================
# REPORT BUILDERS
# ============================================================================

def crlf(lines: List[str]) -> str:
    """Join lines the way dumpbin writes them."""
    return "\r\n".join(lines)


def dll_export_line(ordinal: int, hint: Optional[int], rva: Optional[int], name: str) -> str:
    """
    One export table row: ordinal in [0,11), hint in [11,16), RVA in [16,26),
    name from column 26.
    """
    hint_text = f"{hint:X}" if hint is not None else ""
    rva_text = f"{rva:08X}" if rva is not None else ""
    return f"{ordinal:>11}{hint_text:>5} {rva_text:<8} {name}"


def lib_export_line(name: str, ordinal: Optional[int] = None) -> str:
    """One import-library export row: ordinal in [0,18), name from column 18."""
    ordinal_text = str(ordinal) if ordinal is not None else ""
    return f"{ordinal_text:>17} {name}"


def dll_report_lines(rows: List[str], dll: str = "COMCTL32.dll") -> List[str]:
    return [
        "Microsoft (R) COFF/PE Dumper Version 14.00.24215.1",
        "Copyright (C) Microsoft Corporation.  All rights reserved.",
        "",
        "",
        f"Dump of file {dll.lower()}",
        "",
        "File Type: DLL",
        "",
        f"  Section contains the following exports for {dll}",
        "",
        "    00000000 characteristics",
        "    3B7DFE1E time date stamp Sat Aug 18 13:33:18 2001",
        "        5.82 version",
        "           2 ordinal base",
        "",
        "    ordinal hint RVA      name",
        "",
        *rows,
        "",
        "  Summary",
        "",
        "        2000 .data",
        "        1000 .reloc",
        "",
    ]


DLL_EXPORT_ROWS = [
    dll_export_line(2, 0, 0x31BC7, "MenuHelp"),
    dll_export_line(3, 1, 0x31AC2, "ShowHideMenuCtl"),
    dll_export_line(16, None, 0x1A84D, "[NONAME]"),
    dll_export_line(4, 2, 0x2B9D3, "CreatePropertySheetPage"),
    dll_export_line(401, 3, None, "DllInstall (forwarded to SHLWAPI.DllInstall)"),
]


def linker_member_lines() -> List[str]:
    return [
        "Archive member name at 8: /               ",
        "3D37BB11 time/date Fri Jul 19 15:09:05 2002",
        "         uid",
        "         gid",
        "       0 mode",
        "     9A6 size",
        "correct header end",
        "",
        "    3 public symbols",
        "",
        "     3840 _CreatePropertySheetPage@4",
        "     3840 __imp__CreatePropertySheetPage@4",
        "     38A4 __IMPORT_DESCRIPTOR_COMCTL32",
        "",
    ]


def second_linker_member_lines() -> List[str]:
    return [
        "Archive member name at 9B6: /               ",
        "3D37BB11 time/date Fri Jul 19 15:09:05 2002",
        "         uid",
        "         gid",
        "       0 mode",
        "     A04 size",
        "correct header end",
        "",
    ]


def object_member_lines() -> List[str]:
    return [
        "Archive member name at 38A4: COMCTL32.dll/   ",
        "3D37BB11 time/date Fri Jul 19 15:09:05 2002",
        "         uid",
        "         gid",
        "       0 mode",
        "     1F3 size",
        "correct header end",
        "",
        "FILE HEADER VALUES",
        "             14C machine (x86)",
        "               3 number of sections",
        "",
    ]


def lib_report_lines() -> List[str]:
    return [
        "Microsoft (R) COFF/PE Dumper Version 14.00.24215.1",
        "Copyright (C) Microsoft Corporation.  All rights reserved.",
        "",
        "",
        "Dump of file comctl32.lib",
        "",
        "File Type: LIBRARY",
        "",
        *linker_member_lines(),
        *second_linker_member_lines(),
        *object_member_lines(),
        *COMCTL32_UNDECORATE_MEMBER,
        *ACLUI_ORDINAL_MEMBER,
        "     Exports",
        "",
        "       ordinal    name",
        "",
        lib_export_line("_CreatePropertySheetPage@4"),
        lib_export_line("_IID_ISecurityInformation", 16),
        "",
        "  Summary",
        "",
        "          C6 .debug$S",
        "",
    ]


@pytest.fixture
def dll_report() -> str:
    return crlf(dll_report_lines(DLL_EXPORT_ROWS))


@pytest.fixture
def lib_report() -> str:
    return crlf(lib_report_lines())


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================

@pytest.fixture
def workspace(tmp_path):
    """An empty workspace root with an x86 deps tree for two snapshots."""
    for snapshot in ("01-WindowsXP-RTM-DLL", "01-WindowsXP-SP1-LIB"):
        (tmp_path / "deps" / snapshot / "x86").mkdir(parents=True)
    return tmp_path
