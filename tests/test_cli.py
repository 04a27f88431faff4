"""Tests for the pastecas command-line interface."""

import hashlib
import io
import sys
import tempfile
from pathlib import Path

import pytest

from pastecas import cli
from pastecas.blobs import FileBackend

HELLO_ID = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PASTECAS_ROOT",
        "PASTECAS_SHORT_ID_POLICY",
        "PASTECAS_USE_INDEX",
        "PASTECAS_EXCLUSIVE_WRITER",
        "PASTECAS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def _seed(root: Path, records: dict[str, bytes]) -> None:
    backend = FileBackend(root)
    for key, data in records.items():
        backend.write_if_absent(key, data)


def test_put_file_prints_ids(tmp_path: Path, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
    source = tmp_path / "hello.txt"
    source.write_bytes(b"hello")

    code = cli.main(["--root", str(tmp_path / "pastes"), "put", str(source)])

    assert code == cli.EXIT_OK
    assert capsysbinary.readouterr().out.decode().split() == [HELLO_ID, "2cf24dba"]
    assert (tmp_path / "pastes" / f"{HELLO_ID}.txt").read_bytes() == b"hello"


def test_put_reads_stdin(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsysbinary: pytest.CaptureFixture[bytes],
) -> None:
    fake_stdin = io.TextIOWrapper(io.BytesIO(b"hello"))
    monkeypatch.setattr(sys, "stdin", fake_stdin)

    code = cli.main(["--root", str(tmp_path), "put"])

    assert code == cli.EXIT_OK
    assert HELLO_ID in capsysbinary.readouterr().out.decode()


def test_get_and_raw_write_exact_bytes(tmp_path: Path, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
    data = b"<p>hi</p>\r\n"
    full_id = hashlib.sha256(data).hexdigest()
    _seed(tmp_path, {full_id: data})

    assert cli.main(["--root", str(tmp_path), "get", full_id]) == cli.EXIT_OK
    assert capsysbinary.readouterr().out == data
    assert cli.main(["--root", str(tmp_path), "raw", full_id]) == cli.EXIT_OK
    assert capsysbinary.readouterr().out == data


def test_get_missing_is_not_found(tmp_path: Path, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
    assert cli.main(["--root", str(tmp_path), "get", HELLO_ID]) == cli.EXIT_NOT_FOUND
    assert b"Blob not found" in capsysbinary.readouterr().err


def test_get_malformed_id_is_invalid(tmp_path: Path, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
    assert cli.main(["--root", str(tmp_path), "get", "../etc/passwd"]) == cli.EXIT_INVALID
    assert b"Invalid full id" in capsysbinary.readouterr().err


def test_short_prints_full_id(tmp_path: Path, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
    _seed(tmp_path, {HELLO_ID: b"hello"})

    assert cli.main(["--root", str(tmp_path), "short", "2cf24dba"]) == cli.EXIT_OK
    assert capsysbinary.readouterr().out.decode().strip() == HELLO_ID

    assert cli.main(["--root", str(tmp_path), "short", "2cf24dba", "--content"]) == cli.EXIT_OK
    assert capsysbinary.readouterr().out == b"hello"


def test_short_no_match_is_not_found(tmp_path: Path) -> None:
    assert cli.main(["--root", str(tmp_path), "short", "00000000"]) == cli.EXIT_NOT_FOUND


def test_short_ambiguous_under_strict(tmp_path: Path, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
    first = "deadbeef" + "0" * 56
    second = "deadbeef" + "1" * 56
    _seed(tmp_path, {first: b"a", second: b"b"})

    assert cli.main(["--root", str(tmp_path), "short", "deadbeef"]) == cli.EXIT_OK
    assert capsysbinary.readouterr().out.decode().strip() == first

    assert cli.main(["--root", str(tmp_path), "--strict", "short", "deadbeef"]) == cli.EXIT_AMBIGUOUS
    err = capsysbinary.readouterr().err.decode()
    assert first in err
    assert second in err


def test_missing_input_file_is_invalid(tmp_path: Path) -> None:
    code = cli.main(["--root", str(tmp_path / "pastes"), "put", str(tmp_path / "missing.txt")])
    assert code == cli.EXIT_INVALID


def test_invalid_log_level_is_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--root", str(tmp_path), "--log-level", "loud", "get", HELLO_ID])
    assert exc_info.value.code == 2


def test_root_defaults_to_environment(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsysbinary: pytest.CaptureFixture[bytes],
) -> None:
    monkeypatch.setenv("PASTECAS_ROOT", str(tmp_path))
    _seed(tmp_path, {HELLO_ID: b"hello"})

    assert cli.main(["get", HELLO_ID]) == cli.EXIT_OK
    assert capsysbinary.readouterr().out == b"hello"


def test_storage_fault_exit_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = tmp_path / "hello.txt"
    source.write_bytes(b"hello")

    def failing_mkstemp(**kwargs: object) -> tuple[int, str]:
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(tempfile, "mkstemp", failing_mkstemp)
    code = cli.main(["--root", str(tmp_path / "pastes"), "put", str(source)])
    assert code == cli.EXIT_STORAGE_FAULT
