from typing import Callable, List, TypeVar

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.prompt_values import PromptValue
from pydantic import BaseModel

from canslim_india.analysts.models import Source
from canslim_india.utils.errors import ModelCallError
from canslim_india.utils.logging_config import logger
from canslim_india.utils.parsing import extract_sources, extract_text

# Gemini's built-in live web search tool
GOOGLE_SEARCH_TOOL = {"google_search": {}}

T = TypeVar("T")


class ModelReply(BaseModel):
    text: str
    sources: List[Source] = []


def invoke_grounded(llm: BaseChatModel, prompt: PromptValue) -> ModelReply:
    """Send one prompt with search grounding enabled. Any client-side failure becomes ModelCallError."""
    try:
        response = llm.bind_tools([GOOGLE_SEARCH_TOOL]).invoke(prompt)
    except Exception as e:
        logger.error(f"Model call failed: {e}")
        raise ModelCallError(f"Model call failed: {e}") from e

    text = extract_text(response)
    logger.debug(f"Model reply ({len(text)} chars): {text[:200]}...")
    return ModelReply(text=text, sources=extract_sources(response))


def run_with_policy(
    operation: str,
    call: Callable[[], T],
    fallback: Callable[[], T],
    degrade_on_error: bool,
) -> T:
    """
    Run ``call`` under an explicit error policy.

    With ``degrade_on_error`` the failure is logged and ``fallback()`` is
    returned; otherwise the exception propagates unchanged.
    """
    try:
        return call()
    except Exception as e:
        if not degrade_on_error:
            raise
        logger.exception(f"{operation} failed, returning fallback result: {e}")
        return fallback()
