"""
HTTP client for the third-party AML screening provider.

POST {AML_API_URL}/checks with a bearer token. Timeouts, transport errors and
5xx responses are retried with exponential backoff; 4xx responses are not.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Sequence

import httpx

from lexintake.app.services.aml_provider import (
    AMLProviderError,
    IAMLProvider,
    ScreeningRequest,
    ScreeningResult,
    map_provider_status,
)
from lexintake.domain.entities.enums import RiskLevel

logger = logging.getLogger(__name__)

DEFAULT_BACKOFF = (1.0, 2.0, 4.0)


class HttpAMLProvider(IAMLProvider):
    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 5.0,
        backoff: Sequence[float] = DEFAULT_BACKOFF,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Args:
            base_url: Provider API root, e.g. https://aml.example.com/v1
            api_key: Bearer token
            timeout: Per-attempt timeout in seconds
            backoff: Delay before each retry; its length is the retry count
            transport: Override for tests (httpx.MockTransport)
            sleep: Override for tests
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.backoff = tuple(backoff)
        self._transport = transport
        self._sleep = sleep

    @property
    def enabled(self) -> bool:
        return True

    async def screen(self, request: ScreeningRequest) -> ScreeningResult:
        payload = request.model_dump(mode="json", exclude_none=True)
        headers = {"Authorization": f"Bearer {self.api_key}"}
        last_error: Optional[AMLProviderError] = None

        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        ) as client:
            for attempt in range(len(self.backoff) + 1):
                if attempt > 0:
                    await self._sleep(self.backoff[attempt - 1])

                try:
                    response = await client.post("/checks", json=payload, headers=headers)
                except httpx.TimeoutException as e:
                    logger.warning(f"[AML] Timeout on attempt {attempt + 1}: {e!r}")
                    last_error = AMLProviderError("AML provider timed out")
                    continue
                except httpx.RequestError as e:
                    logger.warning(f"[AML] Request error on attempt {attempt + 1}: {e!r}")
                    last_error = AMLProviderError("AML provider unreachable")
                    continue

                if response.status_code >= 500:
                    logger.warning(
                        f"[AML] Provider returned {response.status_code} on attempt {attempt + 1}"
                    )
                    last_error = AMLProviderError(
                        f"AML provider error: {response.status_code}",
                        status_code=response.status_code,
                    )
                    continue

                if response.status_code >= 400:
                    logger.error(
                        f"[AML] Provider rejected request with {response.status_code}: {response.text}"
                    )
                    raise AMLProviderError(
                        f"AML provider client error: {response.status_code}",
                        status_code=response.status_code,
                        retryable=False,
                    )

                return self._parse(response)

        logger.error(f"[AML] Giving up after {len(self.backoff) + 1} attempts: {last_error}")
        raise last_error

    @staticmethod
    def _parse(response: httpx.Response) -> ScreeningResult:
        try:
            body = response.json()
        except ValueError as e:
            raise AMLProviderError("AML provider returned invalid JSON", retryable=False) from e
        if not isinstance(body, dict):
            raise AMLProviderError("AML provider returned an unexpected body", retryable=False)

        risk_level = body.get("risk_level")
        try:
            risk = RiskLevel(risk_level) if risk_level else RiskLevel.low
        except ValueError:
            risk = RiskLevel.low

        findings = body.get("findings") or []
        if not isinstance(findings, list):
            findings = [findings]
        return ScreeningResult(
            status=map_provider_status(body.get("status")),
            risk_level=risk,
            risk_flags=[str(f) for f in findings],
            provider_reference=body.get("id"),
        )
