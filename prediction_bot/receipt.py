"""Transaction receipt shapes and their normalization into bet outcomes."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from .units import format_unit

TX_SUCCESS = 1
TX_FAILED = 0


@dataclass(frozen=True)
class TransactionReceipt:
    """A mined (or failed-to-submit) transaction as seen by the bot."""

    status: int
    gas_used: int = 0
    effective_gas_price: int = 0
    transaction_exception: bool = False
    tx_hash: Optional[str] = None

    @classmethod
    def from_web3(cls, receipt: Mapping[str, Any]) -> "TransactionReceipt":
        """Build from a web3 receipt (AttributeDict or plain dict)."""
        tx_hash = receipt.get("transactionHash")
        if isinstance(tx_hash, (bytes, bytearray)):
            tx_hash = "0x" + bytes(tx_hash).hex()
        return cls(
            status=int(receipt.get("status", TX_FAILED)),
            gas_used=int(receipt.get("gasUsed", 0)),
            effective_gas_price=int(receipt.get("effectiveGasPrice", 0)),
            transaction_exception=False,
            tx_hash=tx_hash,
        )

    @classmethod
    def from_exception(cls) -> "TransactionReceipt":
        """Receipt for a transaction that raised before producing a final status."""
        return cls(status=TX_FAILED, transaction_exception=True)


@dataclass(frozen=True)
class NormalizedOutcome:
    """Uniform outcome of a bet transaction."""

    bet_executed: bool
    tx_gas_fee: Decimal


@dataclass(frozen=True)
class ClaimOutcome:
    """Result of a claim attempt (real or skipped)."""

    status: int
    tx_gas_fee: Decimal = Decimal(0)
    transaction_exception: bool = False

    @classmethod
    def skipped(cls) -> "ClaimOutcome":
        """Sentinel for a claim that was not attempted."""
        return cls(status=TX_FAILED, tx_gas_fee=Decimal(0))


def compute_gas_fee(receipt: TransactionReceipt) -> Decimal:
    """Gas fee in native-token units: gasUsed * effectiveGasPrice, 18-decimal precision."""
    gas_used = format_unit(receipt.gas_used, 0)
    effective_gas_price = format_unit(receipt.effective_gas_price, 0)
    return format_unit(gas_used * effective_gas_price, 18)


def normalize_receipt(receipt: TransactionReceipt) -> NormalizedOutcome:
    """
    Convert a transaction receipt into a NormalizedOutcome.

    A receipt flagged with transaction_exception never carries a fee, even if a
    status is present. A reverted transaction (status 0) still paid for its gas,
    so its fee is computed like a successful one.
    """
    bet_executed = receipt.status == TX_SUCCESS
    if receipt.transaction_exception:
        return NormalizedOutcome(bet_executed=bet_executed, tx_gas_fee=Decimal(0))
    return NormalizedOutcome(bet_executed=bet_executed, tx_gas_fee=compute_gas_fee(receipt))


def claim_outcome_from_receipt(receipt: TransactionReceipt) -> ClaimOutcome:
    """Reduce a claim transaction receipt to a ClaimOutcome."""
    outcome = normalize_receipt(receipt)
    return ClaimOutcome(
        status=receipt.status,
        tx_gas_fee=outcome.tx_gas_fee,
        transaction_exception=receipt.transaction_exception,
    )
