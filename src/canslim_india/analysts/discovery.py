from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.prompt_values import PromptValue

from canslim_india.analysts.models import DiscoveryResult
from canslim_india.llm.client import invoke_grounded, run_with_policy
from canslim_india.prompts.builders import build_discovery_prompt, build_near_high_prompt
from canslim_india.utils.logging_config import logger
from canslim_india.utils.parsing import parse_json_object


def parse_discovery(text: str) -> DiscoveryResult:
    """Read a ``{"candidates": [...]}`` reply. The prompt asks for 8 but any count is accepted."""
    return DiscoveryResult.model_validate(parse_json_object(text))


def _discover(screen: str, prompt: PromptValue, llm: BaseChatModel, degrade_on_error: bool) -> DiscoveryResult:
    logger.info(f"Running discovery screen: {screen}")

    def call() -> DiscoveryResult:
        reply = invoke_grounded(llm, prompt)
        result = parse_discovery(reply.text)
        logger.info(f"{screen} returned {len(result.candidates)} candidates")
        return result

    return run_with_policy(f"{screen} discovery", call, DiscoveryResult, degrade_on_error)


def discover_stocks(llm: BaseChatModel, degrade_on_error: bool = True) -> DiscoveryResult:
    """Stocks showing strong CANSLIM characteristics right now."""
    return _discover("CANSLIM candidates", build_discovery_prompt(), llm, degrade_on_error)


def discover_near_high_stocks(llm: BaseChatModel, degrade_on_error: bool = True) -> DiscoveryResult:
    """Stocks trading within 25% of their 52-week high."""
    return _discover("Near 52-week highs", build_near_high_prompt(), llm, degrade_on_error)
