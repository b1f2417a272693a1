"""CLI tests."""

from __future__ import annotations

import base64
from contextlib import contextmanager
import io

import pytest

from otp_tui import otp_cli


def test_code_at_fixed_time(capsys: pytest.CaptureFixture[str]) -> None:
    rc = otp_cli.main(["code", "--secret", "12345678901234567890", "--time", "59"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "533482" in out


def test_code_rfc_mode(capsys: pytest.CaptureFixture[str]) -> None:
    rc = otp_cli.main(["code", "--secret", "12345678901234567890123456789012", "--time", "59", "--rfc"])
    assert rc == 0
    assert "119246" in capsys.readouterr().out


def test_secret_prints_base32(capsys: pytest.CaptureFixture[str]) -> None:
    assert otp_cli.main(["secret"]) == 0
    secret = capsys.readouterr().out.strip()
    assert len(secret) == 32
    base64.b32decode(secret)


def test_no_command_prints_hint(capsys: pytest.CaptureFixture[str]) -> None:
    assert otp_cli.main([]) == 0
    assert "-h" in capsys.readouterr().out


def test_empty_secret_rejected() -> None:
    with pytest.raises(SystemExit):
        otp_cli.main(["code", "--secret", ""])


def test_tick_ms_must_be_positive() -> None:
    with pytest.raises(SystemExit):
        otp_cli.main(["tui", "--tick-ms", "0"])


def test_tui_without_terminal_fails_cleanly(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO())
    assert otp_cli.main(["tui"]) == 1
    assert "interactive terminal" in capsys.readouterr().out


@pytest.mark.parametrize("value", ["-1", "-30", "soon"])
def test_code_rejects_bad_time(value: str) -> None:
    with pytest.raises(SystemExit) as excinfo:
        otp_cli.main(["code", "--secret", "abc", "--time", value])
    assert excinfo.value.code != 0


def test_code_at_epoch(capsys: pytest.CaptureFixture[str]) -> None:
    assert otp_cli.main(["code", "--secret", "12345678901234567890", "--time", "0"]) == 0
    assert "952123" in capsys.readouterr().out


def test_watch_prints_code_until_interrupted(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    sleeps = []

    def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)
        if len(sleeps) == 2:
            raise KeyboardInterrupt

    monkeypatch.setattr(otp_cli.time, "sleep", fake_sleep)

    assert otp_cli.main(["watch", "--secret", "12345678901234567890"]) == 0

    out = capsys.readouterr().out
    assert out.count("TOTP: ") == 1
    assert "Bye." in out


def test_tui_ctrl_c_exits_cleanly(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    @contextmanager
    def fake_raw_mode():
        yield

    def interrupted_run(self, source, console=None):
        raise KeyboardInterrupt

    monkeypatch.setattr(otp_cli, "raw_mode", fake_raw_mode)
    monkeypatch.setattr(otp_cli.App, "run", interrupted_run)

    assert otp_cli.main(["tui"]) == 0
    assert "Bye." in capsys.readouterr().out
