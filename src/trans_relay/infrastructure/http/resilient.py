# src/trans_relay/infrastructure/http/resilient.py
"""
带有界重试的 HTTP 调用包装器。

只有 HTTP 429（限流）才会重试。
其他非 2xx 状态码立即返回，网络异常立即向上抛出。
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import httpx
import structlog

from trans_relay.config import RetryPolicySettings

logger = structlog.get_logger(__name__)

RATE_LIMITED = 429

RequestFn = Callable[[], Awaitable[httpx.Response]]


class ResilientHttpClient:
    """对 429 响应执行指数退避重试，最多 `max_attempts` 次（含首次）。"""

    def __init__(
        self,
        policy: RetryPolicySettings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._max_attempts = policy.max_attempts
        self._initial_backoff = policy.initial_backoff
        self._max_backoff = policy.max_backoff
        self._sleep = sleep

    async def execute(self, request_fn: RequestFn) -> httpx.Response:
        """
        执行请求；每次尝试都会重新调用 `request_fn` 以构造全新的请求。

        重试耗尽后返回最后一次 429 响应，由调用方按失败信封处理。
        """
        attempt = 0
        while True:
            response = await request_fn()
            attempt += 1
            if response.status_code != RATE_LIMITED:
                return response
            if attempt >= self._max_attempts:
                logger.warning(
                    "限流重试次数已耗尽，返回最后一次响应。",
                    url=str(response.request.url),
                    attempts=attempt,
                )
                return response

            backoff = self._backoff_for(attempt, response)
            logger.warning(
                f"请求被限流，将在 {backoff:.2f}s 后重试。",
                url=str(response.request.url),
                attempt=attempt,
            )
            await response.aclose()
            await self._sleep(backoff)

    def _backoff_for(self, attempt: int, response: httpx.Response) -> float:
        backoff = self._initial_backoff * (2 ** (attempt - 1))
        retry_after = response.headers.get("Retry-After")
        if retry_after is not None:
            try:
                backoff = max(backoff, float(retry_after))
            except ValueError:
                pass
        return min(backoff, self._max_backoff)
