import logging
from typing import List, Optional

from web3 import Web3

from ..adapters.router_v2 import RouterGateway
from ..config import Settings
from ..domain.models import (
    Confirmed,
    Failed,
    PendingNoReceipt,
    Quote,
    SubmissionResult,
    TradeRequest,
)
from ..domain.planner import ensure_distinct_assets, plan, to_smallest_unit, validate_request
from .chain_client import ChainClient
from .exceptions import (
    ConfirmationError,
    ExecutorError,
    SubmissionError,
    UpstreamError,
)

# pipeline stages, in order
VALIDATING = "validating"
QUOTING = "quoting"
PLANNING = "planning"
SUBMITTING = "submitting"
CONFIRMING = "confirming"


class ExecutionCoordinator:
    """
    Runs one BNB -> token buy end to end:
    validate -> quote -> plan -> submit -> confirm.

    Every outcome comes back as a SubmissionResult; a failing request never
    raises out of execute(). Nothing is retried: at most one broadcast per call.
    """

    def __init__(
        self,
        client: ChainClient,
        router: RouterGateway,
        *,
        receipt_timeout: float = 120.0,
        poll_latency: float = 2.0,
        logger: Optional[logging.Logger] = None,
    ):
        self._client = client
        self._router = router
        self._receipt_timeout = receipt_timeout
        self._poll_latency = poll_latency
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @classmethod
    def from_settings(cls, s: Settings) -> "ExecutionCoordinator":
        """Raises ConfigurationError for a bad key, endpoint or router address."""
        client = ChainClient(s.RPC_URL, s.PRIVATE_KEY, s.CHAIN_ID, gas_strategy=s.GAS_STRATEGY)
        router = RouterGateway(client, s.ROUTER_ADDRESS)
        return cls(client, router, receipt_timeout=s.RECEIPT_TIMEOUT_SEC, poll_latency=s.RECEIPT_POLL_SEC)

    def _try_quote(self, amount_in: int, path: List[str]) -> Optional[Quote]:
        try:
            amounts = self._router.quote(amount_in, path)
        except UpstreamError as e:
            self._logger.warning("getAmountsOut failed, buying with amountOutMin=0: %s", e)
            return None
        quote = Quote.from_amounts(amounts)
        if quote is None:
            self._logger.warning("getAmountsOut returned %s, buying with amountOutMin=0", amounts)
        return quote

    def execute(self, req: TradeRequest) -> SubmissionResult:
        stage = VALIDATING
        tx_hash = None
        try:
            req = validate_request(req)
            base = self._router.base_asset()
            ensure_distinct_assets(base, req.target_token)
            path = [base, req.target_token]

            stage = QUOTING
            quote = self._try_quote(to_smallest_unit(req.input_amount), path)

            stage = PLANNING
            swap_plan = plan(req, base, quote, recipient=self._client.address)
            self._logger.info(
                "buy %s: amount_in=%s amount_out_min=%s deadline=%s",
                req.target_token, swap_plan.amount_in, swap_plan.amount_out_min, swap_plan.deadline,
            )

            stage = SUBMITTING
            tx = self._router.build_swap_from_plan(swap_plan)
            tx_hash = self._router.submit(tx)

            stage = CONFIRMING
            rcpt = self._client.wait_for_receipt(tx_hash, self._receipt_timeout, self._poll_latency)
        except ExecutorError as e:
            self._logger.error("buy failed at %s: %s", stage, e)
            return Failed(stage, e)
        except Exception as e:
            self._logger.exception("unexpected error at %s: %s", stage, e)
            return Failed(stage, _wrap_unexpected(stage, e, tx_hash))

        if rcpt is None:
            self._logger.warning("no receipt for %s after %ss", tx_hash, self._receipt_timeout)
            return PendingNoReceipt(tx_hash)

        rcpt_hash = rcpt.get("transactionHash")
        status = int(rcpt.get("status") or 0)
        if status == 0:
            self._logger.warning("tx %s mined with status=0 (reverted)", tx_hash)
        return Confirmed(tx_hash=_hex(rcpt_hash) or tx_hash, status=status)


def _hex(v) -> Optional[str]:
    if not v:
        return None
    if isinstance(v, str):
        return v
    return Web3.to_hex(v)


def _wrap_unexpected(stage: str, e: Exception, tx_hash: Optional[str] = None) -> ExecutorError:
    if stage == SUBMITTING:
        return SubmissionError(f"Failed to construct or send swap: {e}")
    if stage == CONFIRMING:
        return ConfirmationError(f"Error awaiting tx: {e}", tx_hash=tx_hash)
    return UpstreamError(f"Unexpected error: {e}")
