from pathlib import Path

import pytest

from a1table.cli.main import main


def test_ref_encode_and_decode(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["ref", "encode", "104", "104"]) == 0
    assert "CZ104" in capsys.readouterr().out

    assert main(["ref", "decode", "AA27"]) == 0
    assert "row=27 column=27" in capsys.readouterr().out


def test_ref_decode_invalid_returns_error_code() -> None:
    assert main(["ref", "decode", "1A"]) == 1


def test_ref_check_reports_invalid_references() -> None:
    assert main(["ref", "check", "A1", "B2"]) == 0
    assert main(["ref", "check", "A1", "A0"]) == 1


def test_csv_convert_writes_output(tmp_path: Path) -> None:
    source = tmp_path / "in.csv"
    source.write_text("a,b\n,c\n", encoding="utf-8")
    target = tmp_path / "out.tsv"

    code = main(
        [
            "csv",
            "convert",
            str(source),
            str(target),
            "--output-separator",
            "\t",
            "--include-headers",
        ]
    )

    assert code == 0
    assert target.read_text(encoding="utf-8") == "A\tB\na\tb\n\tc"


def test_csv_cell_prints_typed_value(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "in.csv"
    source.write_text("x,42\n", encoding="utf-8")

    assert main(["csv", "cell", str(source), "B1"]) == 0
    assert "42 (int)" in capsys.readouterr().out


def test_csv_commands_fail_cleanly_on_missing_file(tmp_path: Path) -> None:
    assert main(["csv", "show", str(tmp_path / "missing.csv")]) == 1
    assert main(["csv", "bounds", str(tmp_path / "missing.csv")]) == 1


def test_csv_show_bounds_and_rows_succeed(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "in.csv"
    source.write_text(",,x\n,y,\n", encoding="utf-8")

    assert main(["csv", "show", str(source), "--compact"]) == 0
    assert main(["csv", "rows", str(source)]) == 0
    assert main(["csv", "bounds", str(source)]) == 0
    assert "B1:C2" in capsys.readouterr().out
