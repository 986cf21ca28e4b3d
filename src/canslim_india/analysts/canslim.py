from typing import List

from langchain_core.language_models.chat_models import BaseChatModel

from canslim_india.analysts.criteria import PENDING_FINDING, default_criteria, default_criterion
from canslim_india.analysts.models import (
    CRITERIA_LETTERS,
    AnalysisStatus,
    CanslimCriterion,
    CriterionUpdate,
    Source,
    StockAnalysis,
    StockAnalysisPayload,
)
from canslim_india.llm.client import invoke_grounded, run_with_policy
from canslim_india.prompts.builders import build_analysis_prompt
from canslim_india.utils.errors import (
    AnalysisError,
    InvalidSymbolError,
    MalformedResponseError,
    ModelCallError,
)
from canslim_india.utils.logging_config import logger
from canslim_india.utils.parsing import parse_json_object

DEFAULT_PRICE = "N/A"
DEFAULT_SUMMARY = "Analysis complete."


def normalize_symbol(symbol: str | None) -> str:
    normalized = (symbol or "").strip().upper()
    if not normalized:
        raise InvalidSymbolError(symbol or "")
    return normalized


def merge_criterion(letter: str, update: CriterionUpdate | None) -> CanslimCriterion:
    """Static definition as base, with the model's status/finding laid over it."""
    criterion = default_criterion(letter)
    if update is None:
        return criterion
    return criterion.model_copy(update={
        "status": update.status or AnalysisStatus.UNKNOWN,
        "finding": update.finding or PENDING_FINDING,
        "data_points": update.data_points or [],
    })


def merge_analysis(symbol: str, payload: StockAnalysisPayload, sources: List[Source]) -> StockAnalysis:
    """
    Combine a validated model payload with the static defaults.

    Every letter is present in the result and every scalar has a value, so the
    UI never needs to check for missing fields.
    """
    criteria = {letter: merge_criterion(letter, payload.criteria.get(letter)) for letter in CRITERIA_LETTERS}
    missing = [letter for letter in CRITERIA_LETTERS if letter not in payload.criteria]
    if missing:
        logger.warning(f"Model omitted criteria {missing} for {symbol}; using defaults")

    return StockAnalysis(
        symbol=(payload.symbol or symbol).upper(),
        company_name=payload.company_name or symbol,
        current_price=payload.current_price or DEFAULT_PRICE,
        canslim_score=payload.canslim_score or 0,
        criteria=criteria,
        summary=payload.summary or DEFAULT_SUMMARY,
        eps_trend=payload.eps_trend,
        sources=sources,
    )


def pending_analysis(symbol: str) -> StockAnalysis:
    """The all-defaults analysis, used when a failed analysis is allowed to degrade."""
    return StockAnalysis(
        symbol=symbol,
        company_name=symbol,
        current_price=DEFAULT_PRICE,
        canslim_score=0,
        criteria=default_criteria(),
        summary="",
    )


def _run_analysis(symbol: str, llm: BaseChatModel) -> StockAnalysis:
    prompt = build_analysis_prompt(symbol)
    reply = invoke_grounded(llm, prompt)
    raw_data = parse_json_object(reply.text)
    payload = StockAnalysisPayload.model_validate(raw_data)
    analysis = merge_analysis(symbol, payload, reply.sources)
    logger.info(f"Analysis of {symbol} complete: score={analysis.canslim_score}, sources={len(analysis.sources)}")
    return analysis


def analyze_stock(symbol: str, llm: BaseChatModel, degrade_on_error: bool = False) -> StockAnalysis:
    """
    Run a full CANSLIM analysis of one Indian stock.

    By default failures are raised as AnalysisError carrying a message fit for
    display. With ``degrade_on_error`` an all-UNKNOWN analysis is returned instead.
    """
    normalized = normalize_symbol(symbol)
    logger.info(f"Analyzing {normalized}")

    try:
        return run_with_policy(
            f"Analysis of {normalized}",
            lambda: _run_analysis(normalized, llm),
            lambda: pending_analysis(normalized),
            degrade_on_error,
        )
    except MalformedResponseError as e:
        logger.error(f"Unreadable analysis reply for {normalized}: {e}")
        raise AnalysisError(
            normalized, f"The analysis for {normalized} came back in an unexpected format. Please try again."
        ) from e
    except ModelCallError as e:
        logger.error(f"Model call failed while analyzing {normalized}: {e}")
        raise AnalysisError(normalized) from e
    except Exception as e:
        logger.exception(f"Unexpected error analyzing {normalized}: {e}")
        raise AnalysisError(normalized) from e
