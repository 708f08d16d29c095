# adapters/router_v2.py
from typing import List, Optional, Sequence
from web3 import Web3

from ..domain.models import SwapPlan, SwapTransaction
from ..services.chain_client import ChainClient
from ..services.exceptions import ConfigurationError, UpstreamError

SWAP_FN = "swapExactETHForTokensSupportingFeeOnTransferTokens"

# minimal router ABI: only what the buy flow touches
ABI_ROUTER_V2 = [
    {"constant":True,"inputs":[],"name":"WETH",
     "outputs":[{"internalType":"address","name":"","type":"address"}],
     "stateMutability":"view","type":"function"},
    {"inputs":[
        {"internalType":"uint256","name":"amountIn","type":"uint256"},
        {"internalType":"address[]","name":"path","type":"address[]"}],
     "name":"getAmountsOut",
     "outputs":[{"internalType":"uint256[]","name":"amounts","type":"uint256[]"}],
     "stateMutability":"view","type":"function"},
    {"inputs":[
        {"internalType":"uint256","name":"amountOutMin","type":"uint256"},
        {"internalType":"address[]","name":"path","type":"address[]"},
        {"internalType":"address","name":"to","type":"address"},
        {"internalType":"uint256","name":"deadline","type":"uint256"}],
     "name":SWAP_FN,"outputs":[],"stateMutability":"payable","type":"function"},
]


class RouterGateway:
    """PancakeSwap v2-style router (WETH / getAmountsOut / fee-on-transfer ETH->token swap)."""

    def __init__(self, client: ChainClient, router_address: Optional[str]):
        if not router_address:
            raise ConfigurationError("ROUTER_ADDRESS not set in executor env", setting="ROUTER_ADDRESS")
        if not Web3.is_address(router_address):
            raise ConfigurationError(f"Invalid ROUTER_ADDRESS: {router_address!r}", setting="ROUTER_ADDRESS")
        self.client = client
        self.address = Web3.to_checksum_address(router_address)
        self.contract = client.contract(self.address, ABI_ROUTER_V2)

    # ---------- reads ----------
    def base_asset(self) -> str:
        """Wrapped native token (WBNB) the router routes through."""
        addr = self.client.call_read(self.contract, "WETH")
        if not Web3.is_address(addr):
            raise UpstreamError(f"router WETH() returned a non-address: {addr!r}")
        return Web3.to_checksum_address(addr)

    def quote(self, input_amount: int, path: Sequence[str]) -> List[int]:
        """amounts[0] echoes input, amounts[-1] is the expected output along path."""
        cs_path = [Web3.to_checksum_address(p) for p in path]
        amounts = self.client.call_read(self.contract, "getAmountsOut", int(input_amount), cs_path)
        return [int(a) for a in amounts]

    # ---------- write (build only) ----------
    def build_swap(self, amount_in: int, amount_out_min: int, path: Sequence[str],
                   recipient: str, deadline: int) -> SwapTransaction:
        data = self.contract.encode_abi(SWAP_FN, args=[
            int(amount_out_min),
            [Web3.to_checksum_address(p) for p in path],
            Web3.to_checksum_address(recipient),
            int(deadline),
        ])
        return SwapTransaction(to=self.address, data=data, value=int(amount_in))

    def build_swap_from_plan(self, plan: SwapPlan) -> SwapTransaction:
        return self.build_swap(plan.amount_in, plan.amount_out_min, plan.path, plan.recipient, plan.deadline)

    def submit(self, tx: SwapTransaction) -> str:
        return self.client.send_transaction(tx.to, tx.data, tx.value)
