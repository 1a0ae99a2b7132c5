"""Custom exceptions for the prediction bot."""


class BotError(Exception):
    """Base exception for bot errors."""
    pass


class ConfigError(BotError):
    """Configuration error."""
    pass


class ConversionError(BotError):
    """Fiat/crypto conversion is not possible (no price available)."""
    pass


class ContractUnavailableError(BotError):
    """The prediction contract could not be reached."""
    pass


class HistoryError(BotError):
    """Round history could not be read or written."""
    pass
