"""HTTP client for the external email-generation webhook."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from email_writer.schemas import EmailResults, GenerateEmailsRequest, WebhookEmailResults


class WebhookClientError(RuntimeError):
    """Raised when a webhook call does not produce usable results."""


class WebhookTransportError(WebhookClientError):
    """Network failure or non-success HTTP status."""


class WebhookResponseError(WebhookClientError):
    """Webhook replied, but not with the three email variants."""


class WebhookClient:
    """Posts form values to the webhook and parses the generated emails."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def generate(self, request: GenerateEmailsRequest) -> EmailResults:
        """Send one POST and return the parsed variants."""
        payload = request.model_dump(by_alias=True)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise WebhookTransportError(str(exc)) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise WebhookResponseError("Webhook response is not valid JSON.") from exc
        return self._parse_response(data)

    def _parse_response(self, payload: Any) -> EmailResults:
        """Validate the reply shape."""
        # n8n "Respond to Webhook" nodes return all items unless told otherwise.
        if isinstance(payload, list) and len(payload) == 1:
            payload = payload[0]
        if not isinstance(payload, dict):
            raise WebhookResponseError(f"Malformed webhook response: expected object, got {type(payload).__name__}.")

        try:
            parsed = WebhookEmailResults.model_validate(payload)
        except ValidationError as exc:
            invalid = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
            raise WebhookResponseError(f"Malformed webhook response: invalid fields {invalid}.") from exc
        return EmailResults(
            short=parsed.short,
            conversational=parsed.conversational,
            professional=parsed.professional,
        )
