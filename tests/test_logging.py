"""Tests for logger setup and the trace decorator."""

import pytest

pytestmark = pytest.mark.fast

from winsdk_exports.logging_config import LOG_FILE_NAME, logger, setup_logging
from winsdk_exports.resolution import merge
from winsdk_exports.schemas import ExportSymbolResult, LibSymbol, NameType
from winsdk_exports.tracing import trace


@pytest.fixture
def captured():
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level}|{message}")
    yield messages
    logger.remove(handler_id)


def test_trace_logs_entry_and_exit(captured):
    @trace
    def double(value):
        return value * 2

    assert double(21) == 42
    assert any("TRACE_ENTER: " in m and "double" in m for m in captured)
    assert any("TRACE_EXIT: " in m and "completed" in m for m in captured)


def test_trace_reraises(captured):
    @trace
    def fail():
        raise ValueError("bad input")

    with pytest.raises(ValueError, match="bad input"):
        fail()
    assert any(m.startswith("ERROR|") and "ValueError: bad input" in m for m in captured)


def test_file_logging_is_opt_in(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    setup_logging(suppress_console=True, enable_file_logging=False, force=True)
    logger.info("not written")
    assert not (tmp_path / ".winsdk").exists()

    setup_logging(suppress_console=True, enable_file_logging=True, force=True)
    logger.info("written to file")
    logger.remove()

    log_file = tmp_path / ".winsdk" / "logs" / "winsdk-exports.log"
    assert "written to file" in log_file.read_text(encoding="utf-8")


def test_setup_is_idempotent_without_force(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    setup_logging(suppress_console=True, force=True)
    setup_logging(suppress_console=True, enable_file_logging=True)
    assert not (tmp_path / ".winsdk").exists()


def test_merge_misses_reach_the_log_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    setup_logging(suppress_console=True, enable_file_logging=True, force=True)

    symbol = LibSymbol(
        offset=0x814, version=0, machine=0x14C, time_date_stamp=0, size_of_data=0x24,
        dll_name="ACLUI.dll", symbol_name="_IID_ISecurityInformation", type="code",
        name_type=NameType.ORDINAL, ordinal=16,
    )
    merge("aclui", ["A"], {"A": ExportSymbolResult(lib_symbols=(symbol,))})
    logger.remove()

    text = (tmp_path / ".winsdk" / "logs" / LOG_FILE_NAME).read_text(encoding="utf-8")
    assert "WARNING" in text
    assert "Cannot find original name in aclui:A ord:16 _IID_ISecurityInformation" in text
