"""Exception types raised by bistbot."""


class BistbotError(Exception):
    """Base class for bistbot errors."""


class ConfigError(BistbotError):
    """Startup configuration is missing or invalid."""


class QuoteError(BistbotError):
    """The quote endpoint could not be reached or returned an unusable payload."""
