import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CRITERIA_LETTERS = ("C", "A", "N", "S", "L", "I", "M")


class AnalysisStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    NEUTRAL = "NEUTRAL"
    UNKNOWN = "UNKNOWN"


def _clean_text(value: Any) -> str | None:
    """Trim strings, stringify plain numbers, and treat blanks/other types as missing."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return None


def _to_number(value: Any) -> float | None:
    """Best-effort numeric coercion for model output ("25.5", "25.5%", 25)."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


# --- Display model -------------------------------------------------------


class CanslimCriterion(BaseModel):
    letter: str
    name: str
    description: str
    status: AnalysisStatus = AnalysisStatus.UNKNOWN
    finding: str
    data_points: list[str] = Field(default_factory=list)


class EpsPoint(BaseModel):
    quarter: str
    value: float


class Source(BaseModel):
    title: str
    uri: str


class StockAnalysis(BaseModel):
    """Fully populated analysis, ready for rendering. Never has a missing criterion."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    company_name: str = Field(alias="companyName")
    current_price: str = Field(alias="currentPrice")
    canslim_score: int = Field(ge=0, le=100, alias="canslimScore")
    criteria: dict[str, CanslimCriterion]
    summary: str
    eps_trend: list[EpsPoint] = Field(default_factory=list, alias="epsTrend")
    sources: list[Source] = Field(default_factory=list)

    @model_validator(mode="after")
    def _all_criteria_present(self) -> "StockAnalysis":
        if tuple(self.criteria.keys()) != CRITERIA_LETTERS:
            raise ValueError(f"criteria must be exactly {', '.join(CRITERIA_LETTERS)} in order")
        return self


class Candidate(BaseModel):
    symbol: str
    reason: str = ""


class DiscoveryResult(BaseModel):
    candidates: list[Candidate] = Field(default_factory=list)

    @field_validator("candidates", mode="before")
    @classmethod
    def _drop_unusable_candidates(cls, value: Any) -> list[dict]:
        if not isinstance(value, list):
            return []
        candidates = []
        for entry in value:
            if isinstance(entry, Candidate):
                candidates.append(entry.model_dump())
                continue
            if not isinstance(entry, dict):
                continue
            symbol = _clean_text(entry.get("symbol"))
            if not symbol:
                continue
            candidates.append({"symbol": symbol.upper(), "reason": _clean_text(entry.get("reason")) or ""})
        return candidates


# --- Raw model reply (partial update) -----------------------------------


class CriterionUpdate(BaseModel):
    """Whatever the model said about one letter. Unusable values become None."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: AnalysisStatus | None = None
    finding: str | None = None
    data_points: list[str] | None = Field(default=None, alias="dataPoints")

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> AnalysisStatus | None:
        if isinstance(value, AnalysisStatus):
            return value
        if isinstance(value, str):
            try:
                return AnalysisStatus(value.strip().upper())
            except ValueError:
                return None
        return None

    @field_validator("finding", mode="before")
    @classmethod
    def _coerce_finding(cls, value: Any) -> str | None:
        return _clean_text(value)

    @field_validator("data_points", mode="before")
    @classmethod
    def _coerce_data_points(cls, value: Any) -> list[str] | None:
        if not isinstance(value, list):
            return None
        points = [text for text in (_clean_text(item) for item in value) if text]
        return points or None


class StockAnalysisPayload(BaseModel):
    """
    Schema for the JSON the analysis prompt asks for.

    Every field is optional and lenient: a bad value is dropped to None (or an
    empty collection) rather than failing validation, so the merge step can
    apply its defaults field by field.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    symbol: str | None = None
    company_name: str | None = Field(default=None, alias="companyName")
    current_price: str | None = Field(default=None, alias="currentPrice")
    canslim_score: int | None = Field(default=None, alias="canslimScore")
    criteria: dict[str, CriterionUpdate] = Field(default_factory=dict)
    summary: str | None = None
    eps_trend: list[EpsPoint] = Field(default_factory=list, alias="epsTrend")

    @field_validator("symbol", "company_name", "current_price", "summary", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _clean_text(value)

    @field_validator("canslim_score", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> int | None:
        number = _to_number(value)
        if number is None:
            return None
        # Half-up, so 72.5 scores 73
        return min(100, max(0, math.floor(number + 0.5)))

    @field_validator("criteria", mode="before")
    @classmethod
    def _known_letters_only(cls, value: Any) -> dict[str, Any]:
        if not isinstance(value, dict):
            return {}
        criteria = {}
        for key, update in value.items():
            letter = str(key).strip().upper()
            if letter in CRITERIA_LETTERS and isinstance(update, (dict, CriterionUpdate)):
                criteria[letter] = update
        return criteria

    @field_validator("eps_trend", mode="before")
    @classmethod
    def _usable_points_only(cls, value: Any) -> list[dict]:
        if not isinstance(value, list):
            return []
        points = []
        for entry in value:
            if not isinstance(entry, dict):
                continue
            quarter = _clean_text(entry.get("quarter"))
            number = _to_number(entry.get("value"))
            if quarter is None or number is None:
                continue
            points.append({"quarter": quarter, "value": number})
        return points
