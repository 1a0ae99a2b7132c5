"""Unit formatting and fiat/crypto conversion helpers."""

import logging
from decimal import Decimal
from typing import Optional, Union

from .constants import NATIVE_DECIMALS
from .exceptions import ConversionError

logger = logging.getLogger(__name__)

Number = Union[int, float, str, Decimal]

# Rounding applied to crypto bet amounts before they are sent
CRYPTO_AMOUNT_PLACES = 8


def format_unit(value: Number, decimals: int = NATIVE_DECIMALS) -> Decimal:
    """
    Format a raw base-unit value into a human-scale decimal.

    format_unit(10**18) -> Decimal('1.000000000000000000')
    format_unit(21000, 0) -> Decimal('21000')
    """
    scaled = Decimal(str(value)).scaleb(-decimals)
    return scaled.quantize(Decimal(1).scaleb(-decimals))


def parse_unit(amount: Number, decimals: int = NATIVE_DECIMALS) -> int:
    """Parse a human-scale amount into its integer base-unit value."""
    return int(Decimal(str(amount)).scaleb(decimals))


class FiatCryptoConverter:
    """Converts between fiat amounts and native-token amounts at the latest price."""

    def __init__(self, price: Optional[float] = None):
        self.price: Optional[float] = None
        if price is not None:
            self.update_price(price)

    def update_price(self, price: float):
        """Set the native token price in fiat."""
        if price <= 0:
            raise ConversionError(f"Price must be positive, got {price}")
        self.price = float(price)
        logger.debug(f"Native token price updated: ${self.price:.4f}")

    def _require_price(self) -> float:
        if not self.price:
            raise ConversionError("No native token price available for conversion")
        return self.price

    def to_crypto(self, fiat_amount: float) -> float:
        """Convert a fiat amount into native-token units. Never returns zero."""
        amount = round(fiat_amount / self._require_price(), CRYPTO_AMOUNT_PLACES)
        if amount <= 0:
            raise ConversionError(
                f"${fiat_amount} converts to {amount} at price ${self.price}; refusing a zero-value bet"
            )
        return amount

    def fee_to_fiat(self, crypto_fee: Number) -> float:
        """Convert a gas fee expressed in native-token units into fiat."""
        return float(crypto_fee) * self._require_price()
