"""
Pure trade planning: request + base asset + (optional) quote -> SwapPlan.

No I/O happens here. Every amount is an integer in the asset's smallest unit,
and the slippage cut is done with exact rational arithmetic, never floats.
"""

from dataclasses import replace
from decimal import Decimal, InvalidOperation, ROUND_FLOOR, localcontext
from time import time
from typing import Optional, Sequence, Union

from web3 import Web3

from ..services.exceptions import ValidationError
from .models import Quote, SwapPlan, TradeRequest

NATIVE_DECIMALS = 18
UINT256_MAX = (1 << 256) - 1
MAX_SLIPPAGE = Decimal("0.99")


def checksum_address(value: str, field: str = "target_token") -> str:
    if not isinstance(value, str) or not Web3.is_address(value.strip()):
        raise ValidationError(f"{field} is not a valid address: {value!r}", field=field)
    return Web3.to_checksum_address(value.strip())


def to_smallest_unit(amount: str, decimals: int = NATIVE_DECIMALS, field: str = "buy_amount") -> int:
    """
    "0.02" -> 20000000000000000 (for 18 decimals).
    Digits below the smallest unit are floored away.
    """
    try:
        d = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} is not a decimal number: {amount!r}", field=field)
    if not d.is_finite():
        raise ValidationError(f"{field} must be finite: {amount!r}", field=field)

    try:
        with localcontext() as ctx:
            ctx.prec = 80
            raw = int(d.scaleb(decimals).to_integral_value(rounding=ROUND_FLOOR))
    except ArithmeticError:
        # decimal.Overflow on exponents like "1e999999"
        raise ValidationError(f"{field} is out of range: {amount!r}", field=field)

    if raw <= 0:
        raise ValidationError(f"{field} must be > 0 (got {amount!r})", field=field)
    if raw > UINT256_MAX:
        raise ValidationError(f"{field} is too large: {amount!r}", field=field)
    return raw


def clamp_slippage(slippage: Union[float, str, Decimal]) -> Decimal:
    try:
        s = Decimal(str(slippage))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"slippage is not a number: {slippage!r}", field="slippage")
    if not s.is_finite():
        raise ValidationError(f"slippage must be finite: {slippage!r}", field="slippage")
    return max(Decimal(0), min(s, MAX_SLIPPAGE))


def min_amount_out(expected_output: int, slippage: Union[float, str, Decimal]) -> int:
    """floor(expected_output * (1 - slippage)), slippage clamped into [0, 0.99]."""
    num, den = clamp_slippage(slippage).as_integer_ratio()
    return int(expected_output) * (den - num) // den


def compute_deadline(offset_secs: int, now: Optional[int] = None) -> int:
    if isinstance(offset_secs, bool) or not isinstance(offset_secs, int) or offset_secs < 0:
        raise ValidationError(f"deadline_secs must be a non-negative integer (got {offset_secs!r})",
                              field="deadline_secs")
    now_ts = int(time()) if now is None else int(now)
    return min(now_ts + offset_secs, UINT256_MAX)


def ensure_distinct_assets(base_asset: str, target_token: str) -> None:
    if base_asset.lower() == target_token.lower():
        raise ValidationError("target_token equals the router base asset (same-asset swap)",
                              field="target_token")


def validate_request(req: TradeRequest) -> TradeRequest:
    """
    Static checks only (no RPC). Returns a copy with the target checksummed.
    """
    target = checksum_address(req.target_token)
    to_smallest_unit(req.input_amount)
    clamp_slippage(req.slippage)
    compute_deadline(req.deadline_offset, now=0)
    return replace(req, target_token=target)


def plan(
    req: TradeRequest,
    base_asset: str,
    quote_result: Union[Quote, Sequence[int], None],
    recipient: str,
    now: Optional[int] = None,
) -> SwapPlan:
    target = checksum_address(req.target_token)
    base = checksum_address(base_asset, field="base_asset")
    ensure_distinct_assets(base, target)

    amount_in = to_smallest_unit(req.input_amount)

    quote = quote_result if isinstance(quote_result, Quote) else Quote.from_amounts(quote_result)
    if quote is not None:
        amount_out_min = min_amount_out(quote.expected_output, req.slippage)
    else:
        # no quote: accept any output
        clamp_slippage(req.slippage)
        amount_out_min = 0

    return SwapPlan(
        amount_in=amount_in,
        amount_out_min=amount_out_min,
        path=(base, target),
        recipient=Web3.to_checksum_address(recipient),
        deadline=compute_deadline(req.deadline_offset, now=now),
    )
