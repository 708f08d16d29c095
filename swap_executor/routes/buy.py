import logging
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from ..config import get_settings
from ..domain.models import Confirmed, PendingNoReceipt, TradeRequest
from ..domain.swap import BuyRequest, BuyResponse, ErrorDetail, ErrorResponse
from ..services.exceptions import ConfigurationError, ExecutorError
from ..services.executor import ExecutionCoordinator

router = APIRouter(tags=["buy"])
logger = logging.getLogger(__name__)

def _error(stage: str, e: ExecutorError) -> HTTPException:
    detail = ErrorDetail(stage=stage, **e.to_payload())
    return HTTPException(status_code=e.http_status, detail=detail.model_dump(exclude_none=True))

def get_coordinator() -> ExecutionCoordinator:
    # built per request: a bad key/router in env fails this request only
    try:
        return ExecutionCoordinator.from_settings(get_settings())
    except ConfigurationError as e:
        logger.error("executor misconfigured: %s", e)
        raise _error("configuring", e)

@router.post(
    "/buy",
    response_model=BuyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request or executor configuration"},
        502: {"model": ErrorResponse, "description": "RPC, broadcast or receipt failure"},
    },
)
def buy(req: BuyRequest, coordinator: ExecutionCoordinator = Depends(get_coordinator)):
    """
    Buy `target_token` with `buy_amount` BNB through the router.

    200 JSON {tx_hash, status} once mined, 200 text when broadcast but not mined
    within the receipt budget, 400 on validation, 502 on RPC/broadcast/receipt errors.
    """
    result = coordinator.execute(TradeRequest(
        target_token=req.target_token,
        input_amount=req.buy_amount,
        slippage=req.slippage,
        deadline_offset=req.deadline_secs,
    ))

    if isinstance(result, Confirmed):
        return BuyResponse(tx_hash=result.tx_hash, status=result.status)
    if isinstance(result, PendingNoReceipt):
        return PlainTextResponse(f"Transaction pending (no receipt yet): {result.tx_hash}")

    raise _error(result.stage, result.error)
