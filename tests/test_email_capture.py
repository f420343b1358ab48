from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Tuple

import pytest

from lincoln_match.email_gate import EmailGate
from lincoln_match.models import MatchedCourse
from lincoln_match.storage import InMemoryBackend, PersistenceStore
from lincoln_match.ui import email_capture

FIXED_NOW = datetime(2026, 10, 19, 9, 15, tzinfo=timezone.utc)
COURSES = [MatchedCourse(name="Law"), MatchedCourse(name="Psychology")]


class FakeStreamlit:
    """Records widget calls; the form button returns ``submit`` and the input ``typed``."""

    def __init__(self, typed: str = "", submit: bool = False) -> None:
        self.session_state: Dict[str, Any] = {}
        self.calls: List[Tuple[str, Any]] = []
        self.typed = typed
        self.submit = submit

    def markdown(self, body: str, **kwargs: Any) -> None:
        self.calls.append(("markdown", body))

    @contextmanager
    def form(self, key: str, **kwargs: Any) -> Iterator[None]:
        self.calls.append(("form", key))
        yield

    def text_input(self, label: str, **kwargs: Any) -> str:
        self.calls.append(("text_input", label))
        return self.typed

    def form_submit_button(self, label: str, **kwargs: Any) -> bool:
        self.calls.append(("form_submit_button", label))
        return self.submit

    def caption(self, body: str) -> None:
        self.calls.append(("caption", body))

    def error(self, body: str) -> None:
        self.calls.append(("error", body))

    def toast(self, body: str) -> None:
        self.calls.append(("toast", body))

    def rerun(self) -> None:
        self.calls.append(("rerun", None))

    def widgets(self) -> List[str]:
        return [name for name, _ in self.calls]


@pytest.fixture()
def gate() -> EmailGate:
    return EmailGate(PersistenceStore(InMemoryBackend()), clock=lambda: FIXED_NOW)


def _install(monkeypatch: pytest.MonkeyPatch, fake: FakeStreamlit) -> FakeStreamlit:
    monkeypatch.setattr(email_capture, "st", fake)
    return fake


def test_inline_capture_shown_before_any_email(monkeypatch: pytest.MonkeyPatch, gate: EmailGate) -> None:
    fake = _install(monkeypatch, FakeStreamlit())

    email_capture.render_inline_capture(gate, COURSES)

    assert fake.widgets() == ["markdown", "form", "text_input", "form_submit_button", "caption"]
    assert not gate.has_captured()


def test_inline_capture_hidden_after_gate_submit(monkeypatch: pytest.MonkeyPatch, gate: EmailGate) -> None:
    gate.submit("ada@example.com", COURSES)
    fake = _install(monkeypatch, FakeStreamlit())

    email_capture.render_inline_capture(gate, COURSES)

    assert fake.calls == []


def test_inline_submit_records_email_then_hides(monkeypatch: pytest.MonkeyPatch, gate: EmailGate) -> None:
    fake = _install(monkeypatch, FakeStreamlit(typed="ada@example.com", submit=True))

    email_capture.render_inline_capture(gate, COURSES)

    assert gate.has_captured()
    assert fake.session_state["email_submitted"] is True
    assert fake.widgets()[-2:] == ["toast", "rerun"]

    rerun = _install(monkeypatch, FakeStreamlit())
    email_capture.render_inline_capture(gate, COURSES)
    assert rerun.calls == []


def test_inline_submit_with_bad_email_stays_visible(monkeypatch: pytest.MonkeyPatch, gate: EmailGate) -> None:
    fake = _install(monkeypatch, FakeStreamlit(typed="not-an-email", submit=True))

    email_capture.render_inline_capture(gate, COURSES)

    assert not gate.has_captured()
    assert "email_submitted" not in fake.session_state
    assert fake.widgets()[-1] == "error"
