"""Unit tests for the prediction contract client (web3 mocked)."""

import asyncio
import os
import sys
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests
from eth_account import Account
from web3.exceptions import ContractLogicError

# Add project root to path so we can import the package
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from prediction_bot.config import Config
from prediction_bot.contract import PredictionContractClient
from prediction_bot.exceptions import ContractUnavailableError
from prediction_bot.receipt import ClaimOutcome

GWEI = 10**9
EPOCH = 2000


def make_config() -> Config:
    return Config(
        private_key="0x" + "11" * 32,
        wallet_address="0x" + "22" * 20,
        bet_amount=5.0,
        gas_limit=250000,
        gas_price_multiplier=1.0,
    )


def make_w3(receipt=None) -> MagicMock:
    w3 = MagicMock()
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.gas_price = 5 * GWEI
    w3.eth.send_raw_transaction.return_value = b"\x01" * 32
    w3.eth.wait_for_transaction_receipt.return_value = receipt or {
        "status": 1,
        "gasUsed": 21000,
        "effectiveGasPrice": 5 * GWEI,
        "transactionHash": b"\x01" * 32,
    }
    return w3


class TestBets:
    """Sending bet transactions."""

    def test_bet_bull_success(self):
        w3 = make_w3()
        client = PredictionContractClient(make_config(), w3=w3)

        receipt = asyncio.run(client.bet_bull(0.02, EPOCH))

        assert receipt.status == 1
        assert receipt.gas_used == 21000
        assert receipt.transaction_exception is False
        client.contract.functions.betBull.assert_called_once_with(EPOCH)

    def test_bet_value_in_wei(self):
        w3 = make_w3()
        client = PredictionContractClient(make_config(), w3=w3)

        asyncio.run(client.bet_bear(0.02, EPOCH))

        function = client.contract.functions.betBear.return_value
        txn = function.build_transaction.call_args.args[0]
        assert txn["value"] == 2 * 10**16
        assert txn["nonce"] == 7
        assert txn["gas"] == 250000
        assert txn["gasPrice"] == 5 * GWEI
        assert txn["chainId"] == 56

    def test_reverted_bet_returns_receipt(self):
        w3 = make_w3({"status": 0, "gasUsed": 30000, "effectiveGasPrice": GWEI})
        client = PredictionContractClient(make_config(), w3=w3)

        receipt = asyncio.run(client.bet_bull(0.02, EPOCH))

        assert receipt.status == 0
        assert receipt.transaction_exception is False

    def test_send_error_becomes_exception_receipt(self):
        w3 = make_w3()
        w3.eth.send_raw_transaction.side_effect = ValueError("insufficient funds for gas")
        client = PredictionContractClient(make_config(), w3=w3)

        receipt = asyncio.run(client.bet_bear(0.02, EPOCH))

        assert receipt.status == 0
        assert receipt.transaction_exception is True

    def test_contract_logic_error_becomes_exception_receipt(self):
        client = PredictionContractClient(make_config(), w3=make_w3())
        function = client.contract.functions.betBull.return_value
        function.build_transaction.side_effect = ContractLogicError("execution reverted: Round not bettable")

        receipt = asyncio.run(client.bet_bull(0.02, EPOCH))

        assert receipt.transaction_exception is True

    def test_connection_error_raises(self):
        w3 = make_w3()
        w3.eth.get_transaction_count.side_effect = requests.exceptions.ConnectionError("refused")
        client = PredictionContractClient(make_config(), w3=w3)

        with pytest.raises(ContractUnavailableError):
            asyncio.run(client.bet_bull(0.02, EPOCH))

    def test_timeout_raises(self):
        w3 = make_w3()
        w3.eth.send_raw_transaction.side_effect = requests.exceptions.Timeout("read timed out")
        client = PredictionContractClient(make_config(), w3=w3)

        with pytest.raises(ContractUnavailableError):
            asyncio.run(client.bet_bear(0.02, EPOCH))

    def test_signed_transaction_has_raw_transaction(self):
        """The installed eth-account exposes the attribute used when sending."""
        config = make_config()
        signed = Account.sign_transaction({
            "nonce": 0,
            "gasPrice": 5 * GWEI,
            "gas": 21000,
            "to": "0x" + "33" * 20,
            "value": 10**16,
            "data": b"",
            "chainId": 56,
        }, config.private_key)

        assert isinstance(signed.raw_transaction, bytes)
        assert len(signed.raw_transaction) > 0


class TestClaims:
    """Claimability checks and claim transactions."""

    def test_is_claimable(self):
        client = PredictionContractClient(make_config(), w3=make_w3())
        client.contract.functions.claimable.return_value.call.return_value = True

        assert asyncio.run(client.is_claimable(EPOCH)) is True
        client.contract.functions.claimable.assert_called_once_with(EPOCH, client.wallet_address)

    def test_is_claimable_connection_error(self):
        client = PredictionContractClient(make_config(), w3=make_w3())
        client.contract.functions.claimable.return_value.call.side_effect = (
            requests.exceptions.ConnectionError("refused")
        )

        with pytest.raises(ContractUnavailableError):
            asyncio.run(client.is_claimable(EPOCH))

    def test_is_claimable_timeout(self):
        client = PredictionContractClient(make_config(), w3=make_w3())
        client.contract.functions.claimable.return_value.call.side_effect = (
            requests.exceptions.ReadTimeout("read timed out")
        )

        with pytest.raises(ContractUnavailableError):
            asyncio.run(client.is_claimable(EPOCH))

    def test_claim_returns_outcome(self):
        client = PredictionContractClient(make_config(), w3=make_w3())

        outcome = asyncio.run(client.claim([EPOCH]))

        assert outcome == ClaimOutcome(status=1, tx_gas_fee=Decimal("0.000105"))
        client.contract.functions.claim.assert_called_once_with([EPOCH])


class TestReads:
    """Read-only contract and wallet queries."""

    def test_current_epoch(self):
        client = PredictionContractClient(make_config(), w3=make_w3())
        client.contract.functions.currentEpoch.return_value.call.return_value = 4321

        assert asyncio.run(client.current_epoch()) == 4321

    def test_get_round(self):
        client = PredictionContractClient(make_config(), w3=make_w3())
        client.contract.functions.rounds.return_value.call.return_value = (
            EPOCH, 1, 2, 3, 30000000000, 30100000000, 0, 0,
            3 * 10**18, 2 * 10**18, 10**18, 0, 0, True,
        )

        round_data = asyncio.run(client.get_round(EPOCH))

        assert round_data["epoch"] == EPOCH
        assert round_data["bullAmount"] == Decimal(2)
        assert round_data["oracleCalled"] is True

    def test_get_balance(self):
        w3 = make_w3()
        w3.eth.get_balance.return_value = 5 * 10**17
        client = PredictionContractClient(make_config(), w3=w3)

        assert asyncio.run(client.get_balance()) == 0.5

    def test_get_balance_timeout(self):
        w3 = make_w3()
        w3.eth.get_balance.side_effect = requests.exceptions.Timeout("read timed out")
        client = PredictionContractClient(make_config(), w3=w3)

        with pytest.raises(ContractUnavailableError):
            asyncio.run(client.get_balance())
