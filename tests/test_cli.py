from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from reconcodec.cli import main


def _write(tmp_path: Path, name: str, text: str) -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


@pytest.mark.parametrize(
    "text, printed",
    [
        ("12\n", "12"),
        ("-1.5e1", "-15.0"),
        ("0xff", "0x000000FF"),
    ],
)
def test_number(tmp_path: Path, capsys: pytest.CaptureFixture[str], text: str, printed: str) -> None:
    p = _write(tmp_path, "n.recon", text)
    assert main(["number", str(p)]) == 0
    assert capsys.readouterr().out == printed + "\n"


def test_number_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = _write(tmp_path, "n.recon", "0x123456789")
    assert main(["--json", "number", str(p)]) == 0
    assert json.loads(capsys.readouterr().out) == {"type": "uint64", "value": 0x123456789}


def test_integer_only(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = _write(tmp_path, "n.recon", "1.5")
    assert main(["--id", "lit", "number", "--integer-only", str(p)]) == 1
    err = capsys.readouterr().err
    assert "error: unexpected '.'" in err
    assert " --> lit:1:2" in err


def test_parse_error_is_rendered(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = _write(tmp_path, "bad.recon", "12x\n")
    assert main(["--chunk-size", "2", "number", str(p)]) == 1
    err = capsys.readouterr().err
    assert "1 | 12x" in err
    assert "  |   ^" in err


def test_data(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = _write(tmp_path, "d.recon", "%SGVsbG8=\n")
    assert main(["data", str(p)]) == 0
    assert capsys.readouterr().out == "%SGVsbG8=\n"

    assert main(["--json", "data", str(p)]) == 0
    assert json.loads(capsys.readouterr().out) == {"type": "data", "length": 5, "base64": "SGVsbG8="}


def test_data_url_unpadded(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = _write(tmp_path, "d.recon", "%-_8")
    assert main(["data", "--url-safe", "--unpadded", str(p)]) == 0
    assert capsys.readouterr().out == "%-_8\n"


def test_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("  42  \n"))
    assert main(["number"]) == 0
    assert capsys.readouterr().out == "42\n"


def test_stdin_error_names_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("%A"))
    assert main(["data", "-"]) == 1
    err = capsys.readouterr().err
    assert " --> <stdin>:1:3" in err
    assert "1 | %A" in err


def test_missing_file(tmp_path: Path) -> None:
    assert main(["number", str(tmp_path / "missing.recon")]) == 2


def test_bad_chunk_size() -> None:
    with pytest.raises(SystemExit):
        main(["--chunk-size", "0", "number"])


def test_undecodable_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = tmp_path / "bin.recon"
    p.write_bytes(b"1 \xff\xfe")
    assert main(["--chunk-size", "1", "number", str(p)]) == 1
    err = capsys.readouterr().err
    assert "error: input error:" in err
    assert "1 | 1 \ufffd\ufffd" in err
