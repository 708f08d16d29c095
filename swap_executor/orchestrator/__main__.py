"""
Submit one or more buys to a running executor.

    python -m swap_executor.orchestrator 0xTokenA 0xTokenB --amount 0.05 --concurrency 2

Amount / slippage / deadline default to BUY_AMOUNT_BNB / SLIPPAGE / DEADLINE_SECS.
"""

import argparse
import asyncio
import json
import logging

from ..config import get_settings
from .bundler import BundlerBot
from .executor_client import ExecutorHttpClient
from .tasks import BuyTask


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="swap_executor.orchestrator", description="Send buy tasks to the executor")
    p.add_argument("tokens", nargs="+", help="target token addresses")
    p.add_argument("--amount", help="BNB per buy (decimal text)")
    p.add_argument("--slippage", type=float)
    p.add_argument("--deadline", type=int, help="deadline offset in seconds")
    p.add_argument("--concurrency", type=int)
    p.add_argument("--executor-url")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    s = get_settings()
    logging.basicConfig(level=s.LOG_LEVEL.upper(), format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    tasks = [
        BuyTask.from_settings(t, s, buy_amount=args.amount, slippage=args.slippage, deadline_secs=args.deadline)
        for t in args.tokens
    ]
    bot = BundlerBot(
        ExecutorHttpClient(args.executor_url or s.EXECUTOR_URL),
        concurrency=args.concurrency or s.BUNDLER_CONCURRENCY,
    )
    results = asyncio.run(bot.run(tasks))

    for task, result in results:
        print(json.dumps({"target_token": task.target_token, "result": result}))
    return 0 if all(r and r.get("ok") for _, r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
