"""Client for the prediction smart contract (bets, claims, round data)."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests
from eth_account import Account
from web3 import Web3
from web3.exceptions import Web3Exception

from .config import Config
from .constants import PREDICTION_ABI
from .exceptions import ContractUnavailableError
from .receipt import ClaimOutcome, TransactionReceipt, claim_outcome_from_receipt
from .units import format_unit, parse_unit

logger = logging.getLogger(__name__)


class PredictionContractClient:
    """
    Sends bet/claim transactions and reads round state.

    web3 calls are blocking, so each public coroutine runs them in a worker
    thread. Errors raised by web3 while building, signing or sending a
    transaction are reported as an exception-shaped receipt; a failed RPC
    request (connection error, timeout) raises ContractUnavailableError.
    """

    def __init__(self, config: Config, w3: Optional[Web3] = None):
        self.config = config
        self.w3 = w3 or Web3(Web3.HTTPProvider(config.rpc_url))
        self.account = Account.from_key(config.private_key)
        self.wallet_address = Web3.to_checksum_address(config.wallet_address)

        self.contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(config.contract_address),
            abi=PREDICTION_ABI
        )

        logger.info(f"Prediction contract client initialized for {self.wallet_address[:10]}...")

    def _send(self, function: Any, value: int = 0) -> TransactionReceipt:
        """Build, sign and send a contract call, then wait for its receipt."""
        nonce = self.w3.eth.get_transaction_count(self.account.address, "pending")
        gas_price = self.w3.eth.gas_price

        txn = function.build_transaction({
            'from': self.account.address,
            'nonce': nonce,
            'value': value,
            'gas': self.config.gas_limit,
            'gasPrice': int(gas_price * self.config.gas_price_multiplier),
            'chainId': self.config.chain_id,
        })

        signed_txn = self.w3.eth.account.sign_transaction(txn, self.config.private_key)
        tx_hash = self.w3.eth.send_raw_transaction(signed_txn.raw_transaction)

        logger.info(f"Tx sent: 0x{bytes(tx_hash).hex()[:20]}...")

        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.config.receipt_timeout)
        return TransactionReceipt.from_web3(receipt)

    def _submit(self, label: str, function: Any, value: int = 0) -> TransactionReceipt:
        try:
            receipt = self._send(function, value)
        except requests.exceptions.RequestException as e:
            raise ContractUnavailableError(f"RPC request failed during {label}: {e}") from e
        except (Web3Exception, ValueError) as e:
            logger.error(f"[FAIL] {label} transaction raised: {e}")
            return TransactionReceipt.from_exception()

        if receipt.status == 1:
            logger.info(f"[OK] {label} mined (gas used: {receipt.gas_used})")
        else:
            logger.warning(f"[FAIL] {label} reverted (gas used: {receipt.gas_used})")
        return receipt

    def _call(self, label: str, function: Any) -> Any:
        try:
            return function.call()
        except requests.exceptions.RequestException as e:
            raise ContractUnavailableError(f"RPC request failed during {label}: {e}") from e

    async def bet_bear(self, amount: float, epoch: int) -> TransactionReceipt:
        """Bet `amount` native tokens on the price going DOWN in `epoch`."""
        logger.info(f"Placing BEAR bet: {amount} on round {epoch}")
        function = self.contract.functions.betBear(int(epoch))
        return await asyncio.to_thread(self._submit, "betBear", function, parse_unit(amount))

    async def bet_bull(self, amount: float, epoch: int) -> TransactionReceipt:
        """Bet `amount` native tokens on the price going UP in `epoch`."""
        logger.info(f"Placing BULL bet: {amount} on round {epoch}")
        function = self.contract.functions.betBull(int(epoch))
        return await asyncio.to_thread(self._submit, "betBull", function, parse_unit(amount))

    async def is_claimable(self, epoch: int) -> bool:
        """Check whether the wallet has an unclaimed reward for `epoch`."""
        function = self.contract.functions.claimable(int(epoch), self.wallet_address)
        return bool(await asyncio.to_thread(self._call, "claimable", function))

    async def claim(self, epochs: List[int]) -> ClaimOutcome:
        """Claim rewards for all given rounds in one transaction."""
        logger.info(f"Claiming rewards for rounds: {', '.join(str(e) for e in epochs)}")
        function = self.contract.functions.claim([int(e) for e in epochs])
        receipt = await asyncio.to_thread(self._submit, "claim", function)
        return claim_outcome_from_receipt(receipt)

    async def current_epoch(self) -> int:
        """Get the round currently open for bets."""
        return int(await asyncio.to_thread(self._call, "currentEpoch", self.contract.functions.currentEpoch()))

    async def get_round(self, epoch: int) -> Dict[str, Any]:
        """Get the on-chain data of a round (amounts formatted to native units)."""
        data = await asyncio.to_thread(self._call, "rounds", self.contract.functions.rounds(int(epoch)))
        return {
            "epoch": int(data[0]),
            "startTimestamp": int(data[1]),
            "lockTimestamp": int(data[2]),
            "closeTimestamp": int(data[3]),
            "lockPrice": int(data[4]),
            "closePrice": int(data[5]),
            "totalAmount": format_unit(data[8]),
            "bullAmount": format_unit(data[9]),
            "bearAmount": format_unit(data[10]),
            "rewardAmount": format_unit(data[12]),
            "oracleCalled": bool(data[13]),
        }

    async def get_balance(self) -> float:
        """Get the wallet's native token balance."""
        try:
            raw = await asyncio.to_thread(self.w3.eth.get_balance, self.wallet_address)
        except requests.exceptions.RequestException as e:
            raise ContractUnavailableError(f"RPC request failed during get_balance: {e}") from e
        return float(format_unit(raw))
