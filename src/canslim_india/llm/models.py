import os

from dotenv import load_dotenv
from langchain.chat_models import init_chat_model
from langchain_core.language_models.chat_models import BaseChatModel
from pydantic import BaseModel, SecretStr

from canslim_india.utils.errors import ConfigurationError
from canslim_india.utils.logging_config import logger

DEFAULT_MODEL = "gemini-3-pro-preview"
DEFAULT_PROVIDER = "google_genai"


class LLMConfig(BaseModel):
    """Everything needed to talk to the model. Built once at startup and passed around."""

    api_key: SecretStr
    model: str = DEFAULT_MODEL
    model_provider: str = DEFAULT_PROVIDER
    temperature: float = 0
    json_mode: bool = True

    @classmethod
    def from_env(cls, use_dotenv: bool = True) -> "LLMConfig":
        """
        Read settings from the process environment (and a .env file, if present).

        GOOGLE_API_KEY is preferred; API_KEY is accepted as a fallback.
        """
        if use_dotenv:
            load_dotenv()

        api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY")
        if not api_key:
            logger.error("No API key found in GOOGLE_API_KEY or API_KEY")
            raise ConfigurationError("Set GOOGLE_API_KEY (or API_KEY) to use the analyzer.")

        raw_temperature = os.getenv("CANSLIM_TEMPERATURE", "0")
        try:
            temperature = float(raw_temperature)
        except ValueError as e:
            raise ConfigurationError(f"CANSLIM_TEMPERATURE must be a number, got {raw_temperature!r}") from e

        config = cls(
            api_key=SecretStr(api_key),
            model=os.getenv("CANSLIM_MODEL", DEFAULT_MODEL),
            model_provider=os.getenv("CANSLIM_MODEL_PROVIDER", DEFAULT_PROVIDER),
            temperature=temperature,
        )
        logger.info(f"Loaded LLM config: model={config.model}, provider={config.model_provider}")
        return config


def build_llm(config: LLMConfig) -> BaseChatModel:
    """Create the chat model described by ``config``."""
    kwargs = {}
    if config.json_mode and config.model_provider == DEFAULT_PROVIDER:
        kwargs["response_mime_type"] = "application/json"

    llm = init_chat_model(
        model=config.model,
        model_provider=config.model_provider,
        temperature=config.temperature,
        api_key=config.api_key.get_secret_value(),
        **kwargs,
    )
    logger.info(f"Initialized chat model {config.model}")
    return llm
