from __future__ import annotations

import importlib

import pytest

from lincoln_match import config


def test_share_base_falls_back_to_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHARE_PUBLIC_BASE", raising=False)
    monkeypatch.setenv("BASE_URL", "https://match.example")
    try:
        assert importlib.reload(config).SHARE_PUBLIC_BASE == "https://match.example"

        monkeypatch.setenv("SHARE_PUBLIC_BASE", "https://share.example")
        assert importlib.reload(config).SHARE_PUBLIC_BASE == "https://share.example"
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_page_icon_needs_no_shipped_asset() -> None:
    assert config.PAGE_ICON == "🎓"
    assert not hasattr(config, "LOGOMARK_PATH")
