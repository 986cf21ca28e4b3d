GENERIC_ANALYSIS_MESSAGE = "Failed to analyze stock. Please try again."


class CanslimError(Exception):
    """Base class for all errors raised by the analyzer."""


class ConfigurationError(CanslimError):
    """Raised when required settings (e.g. the API key) are missing or invalid."""


class ModelCallError(CanslimError):
    """The request to the model endpoint itself failed (network, quota, auth...)."""


class MalformedResponseError(CanslimError):
    """The model replied, but the body could not be read as a JSON object."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class AnalysisError(CanslimError):
    """
    Raised by single-symbol analysis. ``user_message`` is safe to show in the UI;
    the underlying cause is chained via ``__cause__``.
    """

    def __init__(self, symbol: str, user_message: str = GENERIC_ANALYSIS_MESSAGE):
        super().__init__(f"Analysis of {symbol or '<empty>'} failed: {user_message}")
        self.symbol = symbol
        self.user_message = user_message


class InvalidSymbolError(AnalysisError):
    """Raised before any model call when the requested symbol is blank."""

    def __init__(self, symbol: str = ""):
        super().__init__(symbol, "Please enter a stock symbol.")
