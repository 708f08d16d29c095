from typing import Any, Optional
from pydantic import BaseModel, Field, AliasChoices, field_validator

class BuyRequest(BaseModel):
    """Body of POST /buy (BNB -> token)."""
    target_token: str                  # address
    buy_amount: str = Field(           # BNB, decimal string ex.: "0.02"
        validation_alias=AliasChoices("buy_amount", "buy_amount_bnb"),
    )
    slippage: float                    # fraction, 0.05 = 5%
    deadline_secs: int

    @field_validator("buy_amount", mode="before")
    @classmethod
    def _amount_as_text(cls, v: Any) -> Any:
        # numbers are accepted but kept as text so no float rounding sneaks in
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return repr(v)
        return v

class BuyResponse(BaseModel):
    tx_hash: str
    status: int

class ErrorDetail(BaseModel):
    error_type: str
    stage: str
    message: str
    field: Optional[str] = None     # VALIDATION
    setting: Optional[str] = None   # CONFIGURATION
    tx_hash: Optional[str] = None   # CONFIRMATION_FAILED

class ErrorResponse(BaseModel):
    detail: ErrorDetail
