"""Sheet Forwarder — posts cleaned text to a spreadsheet-backed web endpoint.

Invariants:
    - Payload is {"cleaned", "original"} plus "token" only when one is set
    - Client metadata travels in the query string (?client=...), not the body
    - Success means 2xx AND a JSON body with status == "ok"
    - forward() raises SheetForwardError; forward_in_background() never raises it

Design Decisions:
    - Best-effort delivery: forward_in_background runs after the response
      (FastAPI BackgroundTasks), logs failures and reports a bool
"""

import logging

import httpx

from query_store.core.errors import SheetForwardError

logger = logging.getLogger(__name__)


class SheetForwarder:
    """Sends cleaned text to the spreadsheet web app."""

    def __init__(
        self,
        endpoint_url: str,
        default_token: str = "",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint_url = endpoint_url
        self.default_token = default_token
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def forward(
        self,
        cleaned: str,
        original: str,
        token: str | None = None,
        client: str | None = None,
    ) -> dict:
        payload: dict = {"cleaned": cleaned, "original": original}
        token = token or self.default_token
        if token:
            payload["token"] = token
        params = {"client": client} if client else None

        async with httpx.AsyncClient(
            timeout=self.timeout_seconds, transport=self._transport,
            follow_redirects=True,
        ) as http:
            try:
                response = await http.post(self.endpoint_url, json=payload, params=params)
            except httpx.HTTPError as e:
                raise SheetForwardError(f"Sheet endpoint unreachable: {e}") from e

        if not response.is_success:
            raise SheetForwardError(f"Sheet endpoint error: {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise SheetForwardError("Sheet endpoint returned invalid JSON") from e
        if not isinstance(data, dict) or data.get("status") != "ok":
            raise SheetForwardError(f"Sheet endpoint rejected payload: {data!r}")
        return data

    async def forward_in_background(
        self,
        cleaned: str,
        original: str,
        token: str | None = None,
        client: str | None = None,
    ) -> bool:
        """Forward and report success; failures are logged, never raised."""
        try:
            await self.forward(cleaned, original, token=token, client=client)
        except SheetForwardError as e:
            logger.warning(
                f"Sheet forward failed: {e.message}",
                extra={"error_code": e.code},
            )
            return False
        logger.info("Sheet forward succeeded")
        return True
