import os
from dotenv import load_dotenv
from dataclasses import dataclass
from functools import lru_cache

load_dotenv()

DEFAULT_CHAIN_ID = 97  # BSC testnet

@dataclass
class Settings:
    # signing / chain
    RPC_URL: str
    PRIVATE_KEY: str      # hex 0x...
    ROUTER_ADDRESS: str   # PancakeSwap v2-style router
    CHAIN_ID: int = DEFAULT_CHAIN_ID

    # http
    BIND_ADDR: str = "127.0.0.1:8080"

    # tx lifecycle
    RECEIPT_TIMEOUT_SEC: float = 120.0
    RECEIPT_POLL_SEC: float = 2.0
    GAS_STRATEGY: str = "buffered"   # default | buffered | aggressive

    # orchestrator side (clients of /buy)
    EXECUTOR_URL: str = "http://127.0.0.1:8080"
    BUY_AMOUNT_BNB: str = "0.02"
    SLIPPAGE: float = 0.30
    DEADLINE_SECS: int = 60
    BUNDLER_CONCURRENCY: int = 3

    # generic
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    @property
    def bind_host_port(self) -> tuple[str, int]:
        host, _, port = self.BIND_ADDR.rpartition(":")
        return (host or "127.0.0.1"), int(port)


def _int_or(raw: str | None, default: int) -> int:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default


@lru_cache()
def get_settings() -> Settings:
    return Settings(
        RPC_URL=os.environ.get("RPC_URL", "https://data-seed-prebsc-1-s1.binance.org:8545"),
        PRIVATE_KEY=os.environ.get("PRIVATE_KEY", ""),  # keep empty when missing
        ROUTER_ADDRESS=os.environ.get("ROUTER_ADDRESS", ""),
        CHAIN_ID=_int_or(os.environ.get("CHAIN_ID"), DEFAULT_CHAIN_ID),
        BIND_ADDR=os.environ.get("BIND_ADDR", "127.0.0.1:8080"),
        RECEIPT_TIMEOUT_SEC=float(os.environ.get("RECEIPT_TIMEOUT_SEC", 120)),
        RECEIPT_POLL_SEC=float(os.environ.get("RECEIPT_POLL_SEC", 2.0)),
        GAS_STRATEGY=os.environ.get("GAS_STRATEGY", "buffered"),
        EXECUTOR_URL=os.environ.get("EXECUTOR_URL", "http://127.0.0.1:8080"),
        BUY_AMOUNT_BNB=os.environ.get("BUY_AMOUNT_BNB", "0.02"),
        SLIPPAGE=float(os.environ.get("SLIPPAGE", 0.30)),
        DEADLINE_SECS=_int_or(os.environ.get("DEADLINE_SECS"), 60),
        BUNDLER_CONCURRENCY=_int_or(os.environ.get("BUNDLER_CONCURRENCY"), 3),
        ENV=os.environ.get("ENV", "dev"),
        LOG_LEVEL=os.environ.get("LOG_LEVEL", "INFO"),
    )
