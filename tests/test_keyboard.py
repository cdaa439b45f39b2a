import io
import termios
import time

from blessed import Terminal
from blessed.keyboard import Keystroke

import neurolink.keyboard as keyboard_mod
from neurolink.keyboard import InputSource

from conftest import FakeTerm


def cooked_attrs():
    return [
        termios.ICRNL | termios.IXON | termios.BRKINT,
        termios.OPOST | termios.ONLCR,
        termios.CS8,
        termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG | termios.ECHOE,
        termios.B38400,
        termios.B38400,
        [b"\x00"] * 32,
    ]


def patch_termios(monkeypatch):
    calls = []
    monkeypatch.setattr(termios, "tcgetattr", lambda fd: cooked_attrs())
    monkeypatch.setattr(
        termios, "tcsetattr", lambda fd, when, attrs: calls.append((fd, when, attrs))
    )
    return calls


def test_raw_mode_flags(monkeypatch):
    calls = patch_termios(monkeypatch)
    source = InputSource(term=FakeTerm(), fd=7)
    assert source.raw_mode
    fd, when, raw = calls[0]
    assert fd == 7
    assert when == termios.TCSAFLUSH
    assert not raw[0] & (termios.ICRNL | termios.IXON)
    assert raw[0] & termios.BRKINT
    assert not raw[1] & termios.OPOST
    assert not raw[3] & (termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    assert raw[3] & termios.ECHOE
    assert raw[6][termios.VMIN] == 0
    assert raw[6][termios.VTIME] == 1


def test_close_restores_saved_settings_once(monkeypatch):
    calls = patch_termios(monkeypatch)
    with InputSource(term=FakeTerm(), fd=7) as source:
        pass
    source.close()
    assert len(calls) == 2
    assert calls[1] == (7, termios.TCSAFLUSH, cooked_attrs())
    assert not source.raw_mode


def test_termios_error_is_not_fatal(monkeypatch):
    def broken(fd):
        raise termios.error(25, "Inappropriate ioctl for device")

    monkeypatch.setattr(termios, "tcgetattr", broken)
    source = InputSource(term=FakeTerm(), fd=3)
    assert not source.raw_mode
    source.close()


def test_no_tty_skips_raw_mode(keyboard):
    assert keyboard.fd is None
    assert not keyboard.raw_mode
    keyboard.close()


def test_pushed_keys_come_back_in_order(keyboard, fake_term):
    keyboard.push_key("a")
    keyboard.push_key("b")
    assert keyboard.next_key(0.01) == "a"
    assert keyboard.next_key(0.01) == "b"
    assert keyboard.next_key(0.01) is None
    assert fake_term.timeouts == [0.01]


def test_plain_characters():
    source = InputSource(term=FakeTerm([Keystroke("x"), Keystroke(" ")]), fd=None)
    assert source.next_key(0) == "x"
    assert source.next_key(0) == " "


def test_named_keys_are_normalised():
    keys = [
        Keystroke("\x1b[A", code=259, name="KEY_UP"),
        Keystroke("\x1b[B", code=258, name="KEY_DOWN"),
        Keystroke("\x1b[D", code=260, name="KEY_LEFT"),
        Keystroke("\x1b[C", code=261, name="KEY_RIGHT"),
        Keystroke("\r", code=343, name="KEY_ENTER"),
        Keystroke("\x1b[15~", code=269, name="KEY_F5"),
    ]
    source = InputSource(term=FakeTerm(keys), fd=None)
    got = [source.next_key(0) for _ in range(6)]
    assert got == ["w", "s", "a", "d", "\r", None]


def test_timeout_returns_none_without_blocking():
    source = InputSource(term=Terminal(stream=io.StringIO()), fd=None)
    start = time.monotonic()
    assert source.next_key(0.05) is None
    assert time.monotonic() - start < 0.05 + 0.5


def test_read_line_restores_canonical_mode(monkeypatch):
    patch_termios(monkeypatch)
    source = InputSource(term=FakeTerm(), fd=7)
    seen = {}

    def fake_input(prompt):
        seen["prompt"] = prompt
        seen["raw"] = source.raw_mode
        return "operator"

    monkeypatch.setattr("builtins.input", fake_input)
    assert source.read_line("Name: ") == "operator"
    assert seen == {"prompt": "Name: ", "raw": False}
    assert source.raw_mode


def test_read_line_without_echo(monkeypatch, keyboard):
    monkeypatch.setattr(keyboard_mod.getpass, "getpass", lambda prompt: "secret")
    assert keyboard.read_line("Key: ", echo=False) == "secret"


def test_read_line_eof(monkeypatch, keyboard):
    def eof(prompt):
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)
    assert keyboard.read_line() == ""
