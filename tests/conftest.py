"""Shared fixtures: well-known addresses and a throwaway signing key (never funded)."""

from unittest.mock import Mock

import pytest
from hexbytes import HexBytes
from web3 import Web3

from swap_executor.config import get_settings

# hardhat/anvil default account #0
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_SENDER = Web3.to_checksum_address("0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266")

WBNB = Web3.to_checksum_address("0xae13d989dac2f0debff460ac112a837c89baa7cd")
ROUTER = Web3.to_checksum_address("0xd99d1c33f9fc3444f8101754abc46c52416550d1")
TARGET = Web3.to_checksum_address("0x7ef95a0fee0dd31b22626fa2e10ee6a223f8a684")

RPC_URL = "http://127.0.0.1:8545"
TX_HASH = HexBytes(b"\xab" * 32)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Each test reads env from scratch."""
    for k in ("RPC_URL", "PRIVATE_KEY", "ROUTER_ADDRESS", "CHAIN_ID", "BIND_ADDR",
              "RECEIPT_TIMEOUT_SEC", "RECEIPT_POLL_SEC", "GAS_STRATEGY", "EXECUTOR_URL",
              "BUY_AMOUNT_BNB", "SLIPPAGE", "DEADLINE_SECS", "BUNDLER_CONCURRENCY"):
        monkeypatch.delenv(k, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_w3():
    """Web3 stand-in: every RPC is a Mock, nothing leaves the process."""
    w3 = Mock()
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.estimate_gas.return_value = 100_000
    w3.eth.gas_price = 5_000_000_000
    w3.eth.send_raw_transaction.return_value = TX_HASH
    return w3
