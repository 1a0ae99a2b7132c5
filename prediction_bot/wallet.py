"""Balance ledgers: a simulated fiat balance for dry runs and a no-op for live mode."""

import logging
from datetime import datetime

logger = logging.getLogger(__name__)


class NoopLedger:
    """Ledger used in live mode: the real wallet is the source of truth."""

    def debit(self, amount: float) -> None:
        pass

    def credit(self, amount: float) -> None:
        pass


class SimulationLedger:
    """Tracks a fictitious fiat balance for simulation mode."""

    def __init__(self, initial_balance: float):
        self.initial_balance = initial_balance
        self.balance = initial_balance
        self.start_time = datetime.now()

        # Statistics
        self.debits = 0
        self.credits = 0

    def get_balance(self) -> float:
        return self.balance

    def set_balance(self, balance: float):
        self.balance = balance

    def debit(self, amount: float):
        """Subtract a stake or fee. Completes without yielding, so no lock is needed."""
        self.set_balance(self.get_balance() - amount)
        self.debits += 1
        logger.debug(f"Simulation balance -${amount:.4f} -> ${self.balance:.4f}")

    def credit(self, amount: float):
        """Add a payout."""
        self.set_balance(self.get_balance() + amount)
        self.credits += 1
        logger.debug(f"Simulation balance +${amount:.4f} -> ${self.balance:.4f}")

    def get_pnl(self) -> float:
        """Get current P&L."""
        return self.balance - self.initial_balance

    def get_summary(self) -> dict:
        """Get summary statistics."""
        runtime = datetime.now() - self.start_time
        hours = runtime.total_seconds() / 3600

        return {
            "runtime_hours": round(hours, 2),
            "initial_balance": self.initial_balance,
            "current_balance": round(self.balance, 2),
            "pnl": round(self.get_pnl(), 2),
            "pnl_percent": round((self.get_pnl() / self.initial_balance) * 100, 2) if self.initial_balance > 0 else 0.0,
            "debits": self.debits,
            "credits": self.credits,
        }

    def print_status(self):
        """Print current status to logger."""
        summary = self.get_summary()
        logger.info("=" * 50)
        logger.info("SIMULATION STATUS")
        logger.info("=" * 50)
        logger.info(f"Runtime: {summary['runtime_hours']} hours")
        logger.info(f"Balance: ${summary['current_balance']:.2f}")
        logger.info(f"P&L: ${summary['pnl']:.2f} ({summary['pnl_percent']:.2f}%)")
        logger.info(f"Debits: {summary['debits']} | Credits: {summary['credits']}")
        logger.info("=" * 50)
