"""Shared constants for the prediction bot."""

# Bet direction tags written to history
BET_UP = "BET_UP"
BET_DOWN = "BET_DOWN"

# Native token (BNB) uses 18 decimals, like ether
NATIVE_DECIMALS = 18

# PancakeSwap Prediction V2 on BNB Smart Chain
DEFAULT_CONTRACT_ADDRESS = "0x18B2A687610328590Bc8F2e5fEdDe3b582A49cdA"
DEFAULT_RPC_URL = "https://bsc-dataseed.binance.org"
DEFAULT_CHAIN_ID = 56

# Minimal ABI for the prediction contract calls we need
PREDICTION_ABI = [
    {
        "inputs": [{"name": "epoch", "type": "uint256"}],
        "name": "betBear",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function"
    },
    {
        "inputs": [{"name": "epoch", "type": "uint256"}],
        "name": "betBull",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function"
    },
    {
        "inputs": [{"name": "epochs", "type": "uint256[]"}],
        "name": "claim",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [
            {"name": "epoch", "type": "uint256"},
            {"name": "user", "type": "address"}
        ],
        "name": "claimable",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "currentEpoch",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [{"name": "", "type": "uint256"}],
        "name": "rounds",
        "outputs": [
            {"name": "epoch", "type": "uint256"},
            {"name": "startTimestamp", "type": "uint256"},
            {"name": "lockTimestamp", "type": "uint256"},
            {"name": "closeTimestamp", "type": "uint256"},
            {"name": "lockPrice", "type": "int256"},
            {"name": "closePrice", "type": "int256"},
            {"name": "lockOracleId", "type": "uint256"},
            {"name": "closeOracleId", "type": "uint256"},
            {"name": "totalAmount", "type": "uint256"},
            {"name": "bullAmount", "type": "uint256"},
            {"name": "bearAmount", "type": "uint256"},
            {"name": "rewardBaseCalAmount", "type": "uint256"},
            {"name": "rewardAmount", "type": "uint256"},
            {"name": "oracleCalled", "type": "bool"}
        ],
        "stateMutability": "view",
        "type": "function"
    }
]
