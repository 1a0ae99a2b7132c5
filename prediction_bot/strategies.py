"""
Bet and claim strategies for prediction rounds.

Each strategy submits one transaction for a round, normalizes its receipt,
applies simulation accounting when enabled, and records the bet in history.
Configuration is passed to every call so flags can change between rounds.
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from .config import Config
from .constants import BET_DOWN, BET_UP
from .exceptions import ConfigError
from .history import BetRecord, JsonHistoryStore
from .receipt import ClaimOutcome, TransactionReceipt, normalize_receipt
from .units import FiatCryptoConverter
from .wallet import NoopLedger, SimulationLedger

logger = logging.getLogger(__name__)


def format_round(epoch: int) -> str:
    """Display format of a round epoch."""
    return str(int(epoch))


class BetStrategy:
    """Places a bet in one direction and records the outcome."""

    def __init__(
        self,
        direction: str,
        client: Any,
        converter: FiatCryptoConverter,
        history: JsonHistoryStore,
        simulation_ledger: Optional[SimulationLedger] = None,
    ):
        if direction not in (BET_UP, BET_DOWN):
            raise ValueError(f"Unknown bet direction: {direction}")
        self.direction = direction
        self.client = client
        self.converter = converter
        self.history = history
        self.simulation_ledger = simulation_ledger
        self.live_ledger = NoopLedger()

    def _place_bet(self) -> Callable[[float, int], Awaitable[TransactionReceipt]]:
        return self.client.bet_bull if self.direction == BET_UP else self.client.bet_bear

    def ledger_for(self, config: Config):
        """Ledger to account against for this call."""
        if not config.simulation_mode:
            return self.live_ledger
        if self.simulation_ledger is None:
            raise ConfigError("Simulation mode is enabled but no simulation ledger was configured")
        return self.simulation_ledger

    async def execute(self, epoch: int, config: Config) -> bool:
        """
        Bet the configured amount on `epoch`.

        Returns:
            True if the bet transaction succeeded on chain.
        """
        ledger = self.ledger_for(config)
        crypto_bet_amount = self.converter.to_crypto(config.bet_amount)
        receipt = await self._place_bet()(crypto_bet_amount, epoch)
        outcome = normalize_receipt(receipt)

        # Stake and fee only; winnings are credited when the round settles
        fee_fiat = self.converter.fee_to_fiat(outcome.tx_gas_fee)
        ledger.debit(config.bet_amount + fee_fiat)

        await self.history.append([
            BetRecord(
                round=format_round(epoch),
                bet_amount=crypto_bet_amount,
                bet=self.direction,
                bet_executed=outcome.bet_executed,
                tx_gas_fee=outcome.tx_gas_fee,
            )
        ])

        status = "OK" if outcome.bet_executed else "FAIL"
        logger.info(
            f"[{status}] {self.direction} round {format_round(epoch)} | "
            f"{crypto_bet_amount} (${config.bet_amount:.2f}) | fee {outcome.tx_gas_fee}"
        )
        return outcome.bet_executed


class ClaimStrategy:
    """Claims the reward of a settled round when enabled and claimable."""

    def __init__(self, client: Any):
        self.client = client

    async def execute(self, epoch: int, config: Config) -> ClaimOutcome:
        if config.claim_rewards and await self.client.is_claimable(epoch):
            return await self.client.claim([epoch])
        logger.debug(f"No claim for round {format_round(epoch)}")
        return ClaimOutcome.skipped()


def bet_down_strategy(client, converter, history, simulation_ledger=None) -> BetStrategy:
    """Create a strategy betting on the price going down."""
    return BetStrategy(BET_DOWN, client, converter, history, simulation_ledger)


def bet_up_strategy(client, converter, history, simulation_ledger=None) -> BetStrategy:
    """Create a strategy betting on the price going up."""
    return BetStrategy(BET_UP, client, converter, history, simulation_ledger)
