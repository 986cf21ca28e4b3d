from langchain_core.prompt_values import PromptValue
from langchain_core.prompts import ChatPromptTemplate

from canslim_india.prompts.canslim import ANALYSIS_PROMPT, DISCOVERY_PROMPT, NEAR_HIGH_PROMPT, SYSTEM_PROMPT


def _template(human_prompt: str) -> ChatPromptTemplate:
    return ChatPromptTemplate.from_messages([
        ("system", SYSTEM_PROMPT),
        ("human", human_prompt),
    ])


def build_discovery_prompt() -> PromptValue:
    return _template(DISCOVERY_PROMPT).invoke({})


def build_near_high_prompt() -> PromptValue:
    return _template(NEAR_HIGH_PROMPT).invoke({})


def build_analysis_prompt(symbol: str) -> PromptValue:
    """Deep-analysis prompt for one symbol. The symbol is upper-cased before interpolation."""
    return _template(ANALYSIS_PROMPT).invoke({"symbol": symbol.strip().upper()})
