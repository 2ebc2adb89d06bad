"""PDF rendering service client with exponential backoff retry logic"""

import httpx
import asyncio
from typing import Any, Dict
from cashflow_gateway.config import settings
from cashflow_gateway.domain.exceptions import RenderServiceError
from cashflow_gateway.infrastructure.observability.metrics import render_latency_histogram, render_failure_counter

PDF_OPTIONS: Dict[str, Any] = {
    "format": "A4",
    "printBackground": True,
    "margin": {"top": "24px", "bottom": "24px", "left": "16px", "right": "16px"},
}


class RendererClient:
    """Client for a headless-browser PDF service (browserless-style /pdf endpoint)"""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.renderer_api_base).rstrip("/")
        self.token = token if token is not None else settings.renderer_token
        self.timeout = settings.http_timeout_seconds
        self.max_retries = settings.render_max_retries
        self.backoff_base = settings.render_backoff_base
        self.transport = transport

    async def render_pdf(self, page_url: str) -> bytes:
        """
        Render a print page to PDF.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s (base * 2^(attempt-1))
        - Retries on 5xx errors and network failures, 4xx fails at once
        - Tracks latency histogram and failure counter

        Raises:
            RenderServiceError: When the page could not be rendered
        """
        payload = {
            "url": page_url,
            "options": PDF_OPTIONS,
            "gotoOptions": {"waitUntil": "networkidle0", "timeout": 30000},
        }
        params = {"token": self.token} if self.token else None

        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while True:
                try:
                    with render_latency_histogram.time():
                        response = await client.post(f"{self.base_url}/pdf", json=payload, params=params)
                        response.raise_for_status()
                        return response.content

                except httpx.HTTPStatusError as e:
                    render_failure_counter.inc()
                    if e.response.status_code < 500:
                        raise RenderServiceError(f"Renderer rejected request: {e.response.status_code}") from e
                    error: Exception = e

                except httpx.RequestError as e:
                    render_failure_counter.inc()
                    error = e

                attempt += 1
                if attempt >= self.max_retries:
                    raise RenderServiceError(f"Renderer failed after {attempt} attempts: {error}") from error

                backoff = self.backoff_base * (2 ** (attempt - 1))
                await asyncio.sleep(backoff)
