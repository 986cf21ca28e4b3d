"""Shared fixtures for the CANSLIM analyzer tests."""

import json
import os
import tempfile
from unittest.mock import MagicMock

import pytest

# Keep test runs from writing logs into the working tree
os.environ.setdefault("CANSLIM_LOG_DIR", tempfile.mkdtemp(prefix="canslim-logs-"))

from langchain_core.messages import AIMessage  # noqa: E402


def make_message(text, chunks=None):
    metadata = {}
    if chunks is not None:
        metadata["grounding_metadata"] = {"grounding_chunks": chunks}
    return AIMessage(content=text, response_metadata=metadata)


@pytest.fixture
def make_llm():
    """Build a chat-model double whose grounded invoke returns the given text."""
    def _make(text="", chunks=None, error=None):
        llm = MagicMock()
        bound = llm.bind_tools.return_value
        if error is not None:
            bound.invoke.side_effect = error
        else:
            bound.invoke.return_value = make_message(text, chunks)
        return llm
    return _make


@pytest.fixture
def reliance_payload():
    """A complete, well-formed analysis reply."""
    return {
        "symbol": "RELIANCE",
        "companyName": "Reliance Industries Ltd",
        "currentPrice": "₹2,945.30",
        "canslimScore": 72,
        "criteria": {
            "C": {"status": "PASS", "finding": "Q2 EPS up 28% YoY, accelerating from 12%."},
            "A": {"status": "NEUTRAL", "finding": "3-year EPS growth positive; ROE 9%."},
            "N": {"status": "PASS", "finding": "Breaking out of a flat base at ₹2,900 pivot."},
            "S": {"status": "FAIL", "finding": "Breakout volume only 10% above average."},
            "L": {"status": "PASS", "finding": "RS rating ~85, near 52-week high."},
            "I": {"status": "PASS", "finding": "FII holding up for three straight quarters."},
            "M": {"status": "NEUTRAL", "finding": "Nifty 50 under pressure, uptrend unconfirmed."},
        },
        "summary": "Watch: valid base, but wait for volume confirmation.",
        "epsTrend": [
            {"quarter": "Q2 24", "value": 4.1},
            {"quarter": "Q3 24", "value": 11.5},
            {"quarter": "Q4 24", "value": 12.0},
            {"quarter": "Q1 25", "value": 19.3},
            {"quarter": "Q2 25", "value": 28.0},
        ],
    }


@pytest.fixture
def reliance_text(reliance_payload):
    return json.dumps(reliance_payload)


@pytest.fixture
def grounding_chunks():
    return [
        {"web": {"uri": "https://www.nseindia.com/get-quotes/equity?symbol=RELIANCE", "title": "nseindia.com"}},
        {"web": {"title": "No link here"}},
        {"web": {"uri": "#", "title": "Placeholder"}},
        {"web": {"uri": "https://www.moneycontrol.com/reliance-results"}},
    ]
