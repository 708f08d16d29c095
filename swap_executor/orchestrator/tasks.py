from typing import Optional
from pydantic import BaseModel

from ..config import Settings

class BuyTask(BaseModel):
    """One buy the orchestrator wants the executor to perform."""
    target_token: str
    buy_amount: str          # BNB, decimal text
    slippage: float
    deadline_secs: int

    @classmethod
    def from_settings(cls, target_token: str, s: Settings,
                      buy_amount: Optional[str] = None,
                      slippage: Optional[float] = None,
                      deadline_secs: Optional[int] = None) -> "BuyTask":
        """Env defaults (BUY_AMOUNT_BNB / SLIPPAGE / DEADLINE_SECS) unless overridden."""
        return cls(
            target_token=target_token,
            buy_amount=buy_amount if buy_amount is not None else s.BUY_AMOUNT_BNB,
            slippage=slippage if slippage is not None else s.SLIPPAGE,
            deadline_secs=deadline_secs if deadline_secs is not None else s.DEADLINE_SECS,
        )

    def to_payload(self) -> dict:
        """POST /buy body."""
        return self.model_dump()
