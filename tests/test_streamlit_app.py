"""UI flow tests driven through Streamlit's AppTest harness with a mocked chat model."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from canslim_india.llm.models import LLMConfig
from canslim_india.utils.errors import GENERIC_ANALYSIS_MESSAGE, ConfigurationError

from conftest import make_message

APP_PATH = Path(__file__).resolve().parent.parent / "src" / "canslim_india" / "streamlit_app.py"


@pytest.fixture
def llm(monkeypatch):
    """Chat-model double served to the app in place of the real Gemini client."""
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    st.cache_resource.clear()
    model = MagicMock()
    with patch("canslim_india.llm.models.build_llm", return_value=model):
        yield model
    st.cache_resource.clear()


@pytest.fixture
def app(llm):
    return AppTest.from_file(str(APP_PATH), default_timeout=30).run()


def all_enabled(at):
    return all(not button.disabled for button in at.button)


# ============================================================
# Scan controls
# ============================================================

class TestScanButton:
    def test_disabled_while_input_blank(self, app):
        assert app.button(key="scan").disabled
        app.text_input(key="query").input("   ").run()
        assert app.button(key="scan").disabled

    def test_enabled_once_symbol_typed(self, app):
        app.text_input(key="query").input("tcs").run()
        assert not app.button(key="scan").disabled

    def test_discovery_buttons_enabled_on_load(self, app):
        assert not app.button(key="discover_candidates").disabled
        assert not app.button(key="discover_highs").disabled


# ============================================================
# Failure handling
# ============================================================

class TestAnalysisFailure:
    def test_controls_reenabled_and_generic_error_shown(self, app, llm):
        llm.bind_tools.return_value.invoke.side_effect = ConnectionError("connection reset")
        app.text_input(key="query").input("tcs").run()
        app.button(key="scan").click().run()

        assert app.session_state["pending"] is None
        assert all_enabled(app)
        assert [error.value for error in app.error] == [GENERIC_ANALYSIS_MESSAGE]
        assert app.session_state["analysis"] is None
        assert not app.exception

    def test_malformed_reply_names_symbol(self, app, llm):
        llm.bind_tools.return_value.invoke.return_value = make_message("Sorry, I can't help with that.")
        app.text_input(key="query").input("tcs").run()
        app.button(key="scan").click().run()

        assert app.session_state["pending"] is None
        assert all_enabled(app)
        assert "TCS" in app.error[0].value

    def test_missing_api_key_shows_error(self, monkeypatch):
        st.cache_resource.clear()
        with patch.object(LLMConfig, "from_env", side_effect=ConfigurationError("Set GOOGLE_API_KEY (or API_KEY) to use the analyzer.")):
            at = AppTest.from_file(str(APP_PATH), default_timeout=30).run()
        st.cache_resource.clear()
        assert "GOOGLE_API_KEY" in at.error[0].value
        assert len(at.button) == 0


# ============================================================
# Discovery to analysis
# ============================================================

class TestDiscoveryFlow:
    def test_candidate_click_runs_analysis(self, app, llm, reliance_payload):
        tcs_payload = dict(reliance_payload, symbol="TCS", companyName="Tata Consultancy Services Ltd")
        llm.bind_tools.return_value.invoke.side_effect = [
            make_message('{"candidates":[{"symbol":"tcs","reason":"Cup-with-handle breakout"}]}'),
            make_message(json.dumps(tcs_payload)),
        ]

        app.button(key="discover_candidates").click().run()
        assert [c.symbol for c in app.session_state["discovery"].candidates] == ["TCS"]
        assert app.session_state["discovery_label"] == "Find Candidates"
        assert all_enabled(app)

        app.button(key="candidate_0_TCS").click().run()
        assert app.session_state["query"] == "TCS"
        assert app.session_state["pending"] is None
        analysis = app.session_state["analysis"]
        assert analysis.symbol == "TCS"
        assert analysis.canslim_score == 72
        assert "Tata Consultancy Services Ltd" in [header.value for header in app.header]
        assert len(app.error) == 0
        assert all_enabled(app)

    def test_failed_discovery_shows_empty_state(self, app, llm):
        llm.bind_tools.return_value.invoke.side_effect = ConnectionError("timeout")
        app.button(key="discover_highs").click().run()

        assert app.session_state["discovery"].candidates == []
        assert app.session_state["pending"] is None
        assert any("No candidates found" in info.value for info in app.info)
        assert all_enabled(app)
