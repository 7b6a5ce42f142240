from io import StringIO

import pyperclip
import pytest

from btc_wallet.shared.clipboard import copy_text, copy_with_osc52, copy_with_pyperclip


@pytest.mark.unit
def test_copy_with_osc52_writes_escape_sequence(monkeypatch):
    monkeypatch.delenv("TMUX", raising=False)
    stream = StringIO()
    assert copy_with_osc52("ABC", stream=stream)

    value = stream.getvalue()
    assert value.startswith("\x1b]52;c;")
    assert value.endswith("\x07")


@pytest.mark.unit
def test_copy_with_osc52_wraps_for_tmux(monkeypatch):
    monkeypatch.setenv("TMUX", "/tmp/tmux-1000/default,1,0")
    stream = StringIO()
    assert copy_with_osc52("ABC", stream=stream)
    assert stream.getvalue().startswith("\x1bPtmux;")


@pytest.mark.unit
def test_copy_with_osc52_empty_text():
    assert copy_with_osc52("", stream=StringIO()) is False


@pytest.mark.unit
def test_copy_with_pyperclip_success(monkeypatch):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)

    assert copy_with_pyperclip("bc1q9wukxzkeegx5mjgukyl4ghvvyrz3s8rh78cze6")
    assert copied == ["bc1q9wukxzkeegx5mjgukyl4ghvvyrz3s8rh78cze6"]


@pytest.mark.unit
def test_copy_with_pyperclip_unavailable(monkeypatch):
    def fail(text):
        raise pyperclip.PyperclipException("no clipboard")

    monkeypatch.setattr(pyperclip, "copy", fail)
    assert copy_with_pyperclip("ABC") is False


@pytest.mark.unit
def test_copy_text_falls_back_to_osc52(monkeypatch):
    monkeypatch.setattr("btc_wallet.shared.clipboard.copy_with_pyperclip", lambda text: False)
    monkeypatch.setattr("btc_wallet.shared.clipboard.copy_with_osc52", lambda text: True)

    result = copy_text("ABC")

    assert result.success is True
    assert result.method == "osc52"


@pytest.mark.unit
def test_copy_text_prefers_osc52(monkeypatch):
    monkeypatch.setattr("btc_wallet.shared.clipboard.copy_with_pyperclip", lambda text: True)
    monkeypatch.setattr("btc_wallet.shared.clipboard.copy_with_osc52", lambda text: True)

    assert copy_text("ABC", prefer_osc52=True).method == "osc52"


@pytest.mark.unit
def test_copy_text_reports_failure(monkeypatch):
    monkeypatch.setattr("btc_wallet.shared.clipboard.copy_with_pyperclip", lambda text: False)
    monkeypatch.setattr("btc_wallet.shared.clipboard.copy_with_osc52", lambda text: False)

    result = copy_text("ABC")

    assert result.success is False
    assert result.method is None
