"""Bet and claim settlement core for prediction round bots."""

from .config import Config, load_config
from .constants import BET_DOWN, BET_UP
from .contract import PredictionContractClient
from .exceptions import (
    BotError,
    ConfigError,
    ContractUnavailableError,
    ConversionError,
    HistoryError,
)
from .history import BetRecord, JsonHistoryStore
from .receipt import ClaimOutcome, NormalizedOutcome, TransactionReceipt, normalize_receipt
from .strategies import BetStrategy, ClaimStrategy, bet_down_strategy, bet_up_strategy
from .units import FiatCryptoConverter, format_unit, parse_unit
from .wallet import NoopLedger, SimulationLedger

__all__ = [
    # Configuration
    "Config",
    "load_config",
    # Strategies
    "BetStrategy",
    "ClaimStrategy",
    "bet_down_strategy",
    "bet_up_strategy",
    "BET_DOWN",
    "BET_UP",
    # Collaborators
    "PredictionContractClient",
    "JsonHistoryStore",
    "FiatCryptoConverter",
    "SimulationLedger",
    "NoopLedger",
    "format_unit",
    "parse_unit",
    # Data classes
    "BetRecord",
    "ClaimOutcome",
    "NormalizedOutcome",
    "TransactionReceipt",
    "normalize_receipt",
    # Exceptions
    "BotError",
    "ConfigError",
    "ContractUnavailableError",
    "ConversionError",
    "HistoryError",
]
