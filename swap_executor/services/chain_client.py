import logging
import threading
from typing import Any, Literal, Optional
from urllib.parse import urlparse

from eth_account import Account
from web3 import Web3
from web3.exceptions import TimeExhausted

from ..config import DEFAULT_CHAIN_ID
from .exceptions import (
    ConfigurationError,
    ConfirmationError,
    SubmissionError,
    UpstreamError,
)

GasStrategy = Literal["default", "buffered", "aggressive"]

FALLBACK_GAS_LIMIT = 300_000

# one lock per signing address: build -> sign -> broadcast must not interleave
# for the same account, otherwise two requests pick the same nonce.
_SUBMIT_LOCKS: dict[str, threading.Lock] = {}
_SUBMIT_LOCKS_GUARD = threading.Lock()


def submit_lock_for(address: str) -> threading.Lock:
    key = address.lower()
    with _SUBMIT_LOCKS_GUARD:
        lock = _SUBMIT_LOCKS.get(key)
        if lock is None:
            lock = threading.Lock()
            _SUBMIT_LOCKS[key] = lock
        return lock


class ChainClient:
    """
    Signing JSON-RPC client used by the buy pipeline.

    Responsibilities:
    - Hold the provider, the local signing account and the chain id.
    - Execute read-only contract calls, surfacing failures as UpstreamError.
    - Build, sign and broadcast raw transactions (serialized per signing key).
    - Wait for a receipt with an upper time bound.

    The private key only lives inside this instance.
    """

    def __init__(
        self,
        rpc_url: str,
        private_key: str,
        chain_id: int = DEFAULT_CHAIN_ID,
        *,
        gas_strategy: GasStrategy = "buffered",
        w3: Optional[Web3] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._logger = logger or logging.getLogger(self.__class__.__name__)

        parsed = urlparse(rpc_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"RPC endpoint is not an http(s) URL: {rpc_url!r}", setting="RPC_URL")

        if not private_key:
            raise ConfigurationError("PRIVATE_KEY not set in executor env", setting="PRIVATE_KEY")
        try:
            self.account = Account.from_key(private_key)
        except Exception as e:
            # never echo the key itself
            raise ConfigurationError(f"Invalid PRIVATE_KEY ({type(e).__name__})", setting="PRIVATE_KEY") from e

        self.chain_id = int(chain_id)
        self.gas_strategy = gas_strategy
        self.w3 = w3 or Web3(Web3.HTTPProvider(rpc_url))

    @property
    def address(self) -> str:
        return self.account.address

    def contract(self, address: str, abi: list):
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    # ---------- internal helpers ----------

    def _next_nonce(self) -> int:
        return self.w3.eth.get_transaction_count(self.account.address, "pending")

    def _estimate_with_strategy(self, tx: dict) -> int:
        """
        Calls estimateGas(tx) and applies a safety buffer depending on strategy.
        Falls back to a static 300k if node estimation fails.
        """
        try:
            base_estimate = int(self.w3.eth.estimate_gas(tx))
        except Exception as e:
            self._logger.warning("estimate_gas failed, using %s: %s", FALLBACK_GAS_LIMIT, e)
            base_estimate = FALLBACK_GAS_LIMIT

        if self.gas_strategy == "buffered":
            return int(base_estimate * 1.25) + 10_000
        if self.gas_strategy == "aggressive":
            return int(base_estimate * 1.5) + 25_000
        return base_estimate

    def _finalize_fee_fields(self, tx: dict) -> dict:
        """
        BSC prices gas the legacy way: fill gasPrice unless EIP-1559 fields were given.
        """
        if "maxFeePerGas" in tx or "maxPriorityFeePerGas" in tx:
            return tx
        if "gasPrice" not in tx:
            tx["gasPrice"] = int(self.w3.eth.gas_price)
        return tx

    def _sign_and_send(self, tx: dict) -> str:
        signed = self.account.sign_transaction(tx)
        txh = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        return Web3.to_hex(txh)

    # ---------- public API ----------

    def call_read(self, contract, method: str, *args) -> Any:
        try:
            return getattr(contract.functions, method)(*args).call()
        except Exception as e:
            raise UpstreamError(f"{method}() read failed: {e}") from e

    def send_transaction(self, to: str, data: str, value: int = 0) -> str:
        """
        Builds, signs and broadcasts one transaction. Returns the tx hash ("0x..").

        Raises:
            SubmissionError: nothing is known to be on-chain (nonce/fee lookup,
                signing or broadcast failed).
        """
        with submit_lock_for(self.account.address):
            try:
                tx = {
                    "from": self.account.address,
                    "to": Web3.to_checksum_address(to),
                    "data": data,
                    "value": int(value or 0),
                    "nonce": self._next_nonce(),
                    "chainId": self.chain_id,
                }
                tx["gas"] = self._estimate_with_strategy(tx)
                tx = self._finalize_fee_fields(tx)
                tx_hash = self._sign_and_send(tx)
            except Exception as e:
                raise SubmissionError(f"Error sending tx: {e}") from e

        self._logger.info("broadcast %s nonce=%s gas=%s value=%s", tx_hash, tx["nonce"], tx["gas"], tx["value"])
        return tx_hash

    def wait_for_receipt(self, tx_hash: str, timeout: float, poll_latency: float = 2.0) -> Optional[dict]:
        """
        Blocks up to `timeout` seconds. Returns the receipt dict, or None when
        the node has no receipt yet once the budget is spent.

        Raises:
            ConfirmationError: the wait itself failed (RPC error...).
        """
        try:
            rcpt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout, poll_latency=poll_latency)
        except TimeExhausted:
            return None
        except Exception as e:
            raise ConfirmationError(f"Error awaiting tx: {e}", tx_hash=tx_hash) from e
        return dict(rcpt)
