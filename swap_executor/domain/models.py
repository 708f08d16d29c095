"""
Core value types of the buy pipeline.
All of them live for a single request only; nothing here is persisted.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..services.exceptions import ExecutorError


@dataclass(frozen=True)
class TradeRequest:
    target_token: str
    input_amount: str        # BNB, decimal text
    slippage: float          # fraction
    deadline_offset: int     # seconds


@dataclass(frozen=True)
class Quote:
    input_amount: int        # wei
    expected_output: int     # target token smallest unit

    @classmethod
    def from_amounts(cls, amounts) -> Optional["Quote"]:
        """getAmountsOut result -> Quote, or None when it can't be used."""
        if amounts is None or len(amounts) < 2:
            return None
        return cls(input_amount=int(amounts[0]), expected_output=int(amounts[1]))


@dataclass(frozen=True)
class SwapPlan:
    amount_in: int
    amount_out_min: int
    path: Tuple[str, str]    # (base_asset, target_token)
    recipient: str
    deadline: int            # unix ts


@dataclass(frozen=True)
class SwapTransaction:
    """Unsent, unsigned call to the router. Nothing happens until it is submitted."""
    to: str
    data: str
    value: int


# ---------- submission outcomes ----------

@dataclass(frozen=True)
class Confirmed:
    tx_hash: str
    status: int


@dataclass(frozen=True)
class PendingNoReceipt:
    tx_hash: str


@dataclass(frozen=True)
class Failed:
    stage: str
    error: ExecutorError

    @property
    def message(self) -> str:
        return self.error.msg


SubmissionResult = Union[Confirmed, PendingNoReceipt, Failed]
