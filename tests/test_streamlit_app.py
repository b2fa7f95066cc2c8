"""Smoke test for the streamlit front-end."""

from __future__ import annotations

from pathlib import Path

from streamlit.testing.v1 import AppTest

APP = Path(__file__).resolve().parents[1] / "streamlit_app.py"


class TestStreamlitApp:
    def test_renders_without_upload(self) -> None:
        at = AppTest.from_file(str(APP), default_timeout=30).run()
        assert not at.exception
        assert not at.error
        assert at.slider[0].value == 100
        assert at.selectbox[0].value == "nearest"
