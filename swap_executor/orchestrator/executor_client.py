import logging
from typing import Any, Dict, Optional

import httpx

from .tasks import BuyTask


class ExecutorHttpClient:
    """
    Thin async HTTP wrapper around the executor's POST /buy.

    Returned dicts:
      {"ok": True,  "pending": False, "tx_hash": .., "status": ..}   mined
      {"ok": True,  "pending": True,  "message": ".."}               broadcast, no receipt yet
      {"ok": False, "status_code": 4xx/5xx, "detail": ..}            executor refused / failed
    None means the executor could not be reached at all.

    This client does *no* retries: one call, one buy attempt.
    """

    def __init__(self, base_url: str, timeout_sec: float = 180.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_sec
        self._transport = transport
        self._logger = logging.getLogger(self.__class__.__name__)

    async def post_buy(self, task: BuyTask) -> Optional[Dict[str, Any]]:
        url = f"{self._base_url}/buy"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.post(url, json=task.to_payload())
        except Exception as exc:
            self._logger.exception("post_buy error for %s: %s", task.target_token, exc)
            return None

        if r.status_code == 200:
            if r.headers.get("content-type", "").startswith("application/json"):
                return {"ok": True, "pending": False, **r.json()}
            return {"ok": True, "pending": True, "message": r.text}

        self._logger.warning("buy non-200 %s: %s %s", url, r.status_code, r.text)
        try:
            body = r.json()
            detail = body.get("detail", body) if isinstance(body, dict) else body
        except ValueError:
            detail = r.text
        return {"ok": False, "status_code": r.status_code, "detail": detail}
