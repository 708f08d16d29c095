import asyncio
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .executor_client import ExecutorHttpClient
from .tasks import BuyTask

BuyResult = Tuple[BuyTask, Optional[Dict[str, Any]]]


class BundlerBot:
    """
    Fans a batch of buys out to the executor with at most `concurrency`
    requests in flight. Results come back in task order.
    Nonce ordering for a shared key is the executor's job, not ours.
    """

    def __init__(
        self,
        client: ExecutorHttpClient,
        concurrency: int = 3,
        on_result: Optional[Callable[[BuyTask, Optional[Dict[str, Any]]], None]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self._client = client
        self.concurrency = int(concurrency)
        self._on_result = on_result
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    async def _run_one(self, sem: asyncio.Semaphore, task: BuyTask) -> BuyResult:
        async with sem:
            result = await self._client.post_buy(task)
        if result is None or not result.get("ok"):
            self._logger.warning("buy failed for %s: %s", task.target_token, result)
        else:
            self._logger.info("buy done for %s: %s", task.target_token, result)
        if self._on_result:
            self._on_result(task, result)
        return task, result

    async def run(self, tasks: Iterable[BuyTask]) -> List[BuyResult]:
        sem = asyncio.Semaphore(self.concurrency)
        return list(await asyncio.gather(*(self._run_one(sem, t) for t in tasks)))
