"""Configuration management for the prediction bot."""

import os
import re
from dataclasses import dataclass, replace
from dotenv import load_dotenv

from .constants import DEFAULT_CHAIN_ID, DEFAULT_CONTRACT_ADDRESS, DEFAULT_RPC_URL
from .exceptions import ConfigError

ADDRESS_PATTERN = r"0x[a-fA-F0-9]{40}"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Config:
    """Bot configuration loaded from environment variables."""

    # Authentication
    private_key: str
    wallet_address: str

    # Betting
    bet_amount: float  # Fiat (USD) staked per round

    # Modes
    simulation_mode: bool = True  # Track a fictitious balance instead of the wallet
    simulation_balance: float = 100.0  # Starting fiat balance for simulation mode
    claim_rewards: bool = True  # Claim winnings of settled rounds automatically

    # Chain
    rpc_url: str = DEFAULT_RPC_URL
    contract_address: str = DEFAULT_CONTRACT_ADDRESS
    chain_id: int = DEFAULT_CHAIN_ID

    # Transactions
    gas_limit: int = 300000
    gas_price_multiplier: float = 1.0
    receipt_timeout: float = 60.0  # Seconds to wait for a mined receipt

    # Storage
    history_dir: str = "history"

    def __repr__(self) -> str:
        """Safe repr that masks the private key."""
        return (
            f"Config(private_key='****MASKED****', "
            f"wallet_address='{self.wallet_address}', "
            f"bet_amount={self.bet_amount}, "
            f"simulation_mode={self.simulation_mode}, "
            f"claim_rewards={self.claim_rewards}, "
            f"chain_id={self.chain_id})"
        )

    def __str__(self) -> str:
        """Safe string representation."""
        return self.__repr__()

    def with_overrides(self, **changes) -> "Config":
        """Return a copy with some settings changed (runtime toggling)."""
        return replace(self, **changes)


def load_config() -> Config:
    """Load configuration from environment variables."""
    load_dotenv()

    private_key = os.getenv("PRIVATE_KEY")
    if not private_key:
        raise ConfigError("PRIVATE_KEY environment variable is required")

    wallet_address = os.getenv("WALLET_ADDRESS")
    if not wallet_address:
        raise ConfigError("WALLET_ADDRESS environment variable is required")
    if not re.fullmatch(ADDRESS_PATTERN, wallet_address.strip()):
        raise ConfigError(
            "WALLET_ADDRESS must be a 42-char hex address like 0x... (40 hex chars)"
        )

    contract_address = os.getenv("PREDICTION_CONTRACT_ADDRESS", DEFAULT_CONTRACT_ADDRESS)
    if not re.fullmatch(ADDRESS_PATTERN, contract_address.strip()):
        raise ConfigError("PREDICTION_CONTRACT_ADDRESS must be a 42-char hex address")

    bet_amount = _env_float("BET_AMOUNT", "1.0")
    if bet_amount <= 0:
        raise ConfigError("BET_AMOUNT must be greater than zero")

    return Config(
        private_key=private_key,
        wallet_address=wallet_address.strip(),
        bet_amount=bet_amount,
        simulation_mode=_env_flag("SIMULATION_MODE", "true"),
        simulation_balance=_env_float("SIMULATION_BALANCE", "100.0"),
        claim_rewards=_env_flag("CLAIM_REWARDS", "true"),
        rpc_url=os.getenv("RPC_URL", DEFAULT_RPC_URL),
        contract_address=contract_address.strip(),
        chain_id=int(_env_float("CHAIN_ID", str(DEFAULT_CHAIN_ID))),
        gas_limit=int(_env_float("GAS_LIMIT", "300000")),
        gas_price_multiplier=_env_float("GAS_PRICE_MULTIPLIER", "1.0"),
        receipt_timeout=_env_float("RECEIPT_TIMEOUT", "60.0"),
        history_dir=os.getenv("HISTORY_DIR", "history"),
    )
