from __future__ import annotations

from types import TracebackType
from typing import Self

import httpx
from loguru import logger


class HttpSchemaRegistry:
    """
    schema registry liveness probe over plain http

    anything but a 2xx answer, including transport errors, counts as unhealthy
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8081",
        health_path: str = "/",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url
        self.health_path = health_path
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def probe_health(self) -> bool:
        try:
            response = self._client.get(self.health_path)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug("schema registry probe at {} failed: {}", self.base_url, e)
            return False

        logger.debug("schema registry at {} answered {}", self.base_url, response.status_code)
        return response.is_success

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
