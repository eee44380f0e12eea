import json

from typer.testing import CliRunner

from winsdk_exports.main import app
from winsdk_exports.parser import parse_report
from winsdk_exports.store import ExportStore

from conftest import ACLUI_ORDINAL_MEMBER, crlf, dll_export_line, dll_report_lines

runner = CliRunner()


def test_parse_json_output(tmp_path, lib_report):
    report = tmp_path / "comctl32--S1.txt"
    report.write_bytes(lib_report.encode("utf-8"))

    result = runner.invoke(app, ["parse", str(report), "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert len(payload["libSymbols"]) == 2
    assert payload["libSymbols"][1]["nameType"] == "ordinal"
    assert payload["libExports"][1] == {"name": "_IID_ISecurityInformation", "ordinal": 16}


def test_parse_counts_in_machine_mode(tmp_path, dll_report):
    report = tmp_path / "comctl32.txt"
    report.write_bytes(dll_report.encode("utf-8"))

    result = runner.invoke(app, ["parse", str(report)])

    assert result.exit_code == 0
    assert "dllExports: 5" in result.stdout
    assert "libSymbols: 0" in result.stdout


def test_parse_malformed_report(tmp_path):
    member = list(ACLUI_ORDINAL_MEMBER)
    member[15] = "  Name type    : mangled"
    report = tmp_path / "bad.txt"
    report.write_bytes(crlf(member).encode("utf-8"))

    result = runner.invoke(app, ["parse", str(report), "--json"])

    assert result.exit_code == 1
    assert "REPORT_FORMAT" in result.output


def test_parse_missing_report(tmp_path):
    result = runner.invoke(app, ["parse", str(tmp_path / "absent.txt")])
    assert result.exit_code != 0


def test_merge_json_output(tmp_path, lib_report):
    """
    merge reads saved snapshot results and writes the merged index.
    """
    store = ExportStore(tmp_path)
    dll_report = crlf(dll_report_lines([dll_export_line(16, 0, 0x1A84D, "IID_ISecurityInformation")], dll="ACLUI.dll"))
    store.write_result("aclui", "A", parse_report(dll_report))
    store.write_result("aclui", "B", parse_report(lib_report))

    result = runner.invoke(app, ["merge", str(tmp_path), "aclui", "A", "B", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["library"] == "aclui"
    assert payload["names"] == 2
    assert payload["diagnostics"] == []
    merged = json.loads((tmp_path / "exports" / "x86" / "merged" / "aclui.json").read_text(encoding="utf-8"))
    assert [name for name, _ in merged] == ["CreatePropertySheetPage", "IID_ISecurityInformation"]


def test_merge_reports_misses(tmp_path, lib_report):
    ExportStore(tmp_path).write_result("aclui", "B", parse_report(lib_report))

    result = runner.invoke(app, ["merge", str(tmp_path), "aclui", "A", "B", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [d["kind"] for d in payload["diagnostics"]] == ["miss"]
    assert payload["diagnostics"][0]["resolved_name"] == "_IID_ISecurityInformation"


def test_merge_corrupt_store(tmp_path):
    path = ExportStore(tmp_path).paths.report_json("aclui", "A", "x86")
    path.parent.mkdir(parents=True)
    path.write_text("{broken", encoding="utf-8")

    result = runner.invoke(app, ["merge", str(tmp_path), "aclui", "A"])

    assert result.exit_code == 1
    assert "STORE_CORRUPT" in result.output


def test_libs_lists_common_names(tmp_path):
    for directory, names in {
        "dll": ["aclui.dll", "user32.dll"],
        "lib": ["ACLUI.lib", "user32.lib", "shell32.lib"],
        "newlib": ["aclui.lib", "shell32.lib"],
    }.items():
        (tmp_path / directory).mkdir()
        for name in names:
            (tmp_path / directory / name).write_bytes(b"")

    result = runner.invoke(app, ["libs", str(tmp_path / "dll"), str(tmp_path / "lib"), str(tmp_path / "newlib"), "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == ["aclui"]
