import re

import pandas as pd
from typing import List

from canslim_india.analysts.models import AnalysisStatus, EpsPoint

# Characters st.markdown treats as syntax, including "$" for LaTeX
MARKDOWN_SPECIAL = re.compile(r"([\\`*_\[\]()#$~|<>{}])")

GREEN = "#10b981"
AMBER = "#fbbf24"
RED = "#f43f5e"

# Streamlit markdown color names for each status badge
STATUS_COLORS = {
    AnalysisStatus.PASS: "green",
    AnalysisStatus.FAIL: "red",
    AnalysisStatus.NEUTRAL: "orange",
    AnalysisStatus.UNKNOWN: "gray",
}


def score_color(score: int) -> str:
    """Color band for the overall CANSLIM score: 80+ green, 50+ amber, else red."""
    if score >= 80:
        return GREEN
    if score >= 50:
        return AMBER
    return RED


def eps_bar_color(value: float) -> str:
    """O'Neil wants 25%+ quarterly EPS growth; anything positive is amber."""
    if value >= 25:
        return GREEN
    if value > 0:
        return AMBER
    return RED


def status_badge(status: AnalysisStatus) -> str:
    color = STATUS_COLORS.get(status, "gray")
    return f":{color}[**{status.value}**]"


def eps_trend_to_df(points: List[EpsPoint]) -> pd.DataFrame:
    """EPS growth points as a DataFrame (quarter, value, color), preserving order."""
    if not points:
        return pd.DataFrame(columns=["quarter", "value", "color"])
    df = pd.DataFrame([point.model_dump() for point in points])
    df["value"] = pd.to_numeric(df["value"], errors="coerce")
    df["color"] = df["value"].apply(eps_bar_color)
    return df


def escape_markdown(text: str) -> str:
    """Backslash-escape model text so st.markdown shows it literally."""
    return MARKDOWN_SPECIAL.sub(r"\\\1", text)


def markdown_link(title: str, uri: str) -> str:
    """A Markdown link whose title and target survive brackets, parentheses and spaces."""
    target = uri.strip().replace(" ", "%20").replace("(", "%28").replace(")", "%29")
    return f"[{escape_markdown(title)}]({target})"
