import asyncio
import logging
import time
from typing import Any, Dict, Optional

import httpx

from .config import ClientConfig, ResolvedConfig
from .errors import Cancelled, Timeout, TransportFailure
from .models import RelayResponse, decode_response

log = logging.getLogger(__name__)

GAS_KEY_HEADER = "x-gas-key"


def _caller_cancelled() -> bool:
    """True when the running task itself is being cancelled."""
    task = asyncio.current_task()
    cancelling = getattr(task, "cancelling", None)
    # Tasks only count pending cancellations from 3.11 on; earlier, assume the caller.
    return cancelling is None or cancelling() > 0


class HttpClient:
    """One pooled relay session; every exchange goes to the resolved base URL."""

    def __init__(
        self,
        resolved: ResolvedConfig,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = resolved.base_url.rstrip("/") + "/"
        self.deadline = config.deadline
        self.session = httpx.AsyncClient(
            timeout=httpx.Timeout(config.read_timeout, connect=config.connect_timeout),
            limits=httpx.Limits(max_connections=config.max_connections),
            transport=transport,
            headers={
                "Accept": "application/json",
                "User-Agent": config.user_agent,
                GAS_KEY_HEADER: resolved.gas_key,
            },
        )

    def url_for(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    async def send(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> RelayResponse:
        url = self.url_for(path)
        started = time.monotonic()
        log.debug("%s %s", method, url)
        try:
            response = await asyncio.wait_for(
                self.session.request(method, url, json=payload),
                timeout=self.deadline,
            )
        except asyncio.CancelledError as exc:
            log.warning("%s %s cancelled", method, url)
            if _caller_cancelled():
                raise
            raise Cancelled(f"{method} {url} cancelled") from exc
        except httpx.TimeoutException as exc:
            log.warning("%s %s timed out: %s", method, url, exc.__class__.__name__)
            raise Timeout(f"{method} {url} timed out", cause=exc) from exc
        except asyncio.TimeoutError as exc:
            log.warning("%s %s exceeded %.2fs", method, url, self.deadline)
            raise Timeout(f"{method} {url} exceeded {self.deadline:.2f}s", cause=exc) from exc
        except httpx.TransportError as exc:
            log.warning("%s %s failed: %r", method, url, exc)
            raise TransportFailure("relay request failed", cause=exc) from exc

        log.debug("%s %s -> %d in %.3fs", method, url, response.status_code, time.monotonic() - started)
        return decode_response(response.status_code, response.text)

    async def aclose(self) -> None:
        await self.session.aclose()
