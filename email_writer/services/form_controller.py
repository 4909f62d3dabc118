"""Form controller holding one page view's inputs, results and notices."""

from __future__ import annotations

import time
from typing import Protocol

from email_writer.clipboard import Clipboard, ClipboardError
from email_writer.logging_utils import get_logger
from email_writer.schemas import EmailResults, FormFields, GenerateEmailsRequest, Notice
from email_writer.types import FORM_FIELDS, REQUIRED_FIELDS, VARIANTS
from email_writer.webhook.client import WebhookClientError, WebhookResponseError

logger = get_logger(__name__)

VALIDATION_MESSAGE = "Please fill all required fields!"
GENERATION_FAILED_MESSAGE = "Error generating emails. Please try again."
COPIED_MESSAGE = "Copied to clipboard!"
COPY_FAILED_MESSAGE = "Could not copy to clipboard."
NOTHING_TO_COPY_MESSAGE = "No generated email to copy yet."

_ATTRIBUTE_FOR_FIELD = {"emailType": "email_type"}


class UnknownFieldError(KeyError):
    """Raised for a field or variant name the form does not have."""


class EmailGenerator(Protocol):
    """The one call the controller makes to the outside world."""

    async def generate(self, request: GenerateEmailsRequest) -> EmailResults:
        ...


class FormController:
    """Holds the form state and drives a submission through the generator."""

    def __init__(
        self,
        *,
        generator: EmailGenerator,
        clipboard: Clipboard,
        log_content: bool = False,
    ) -> None:
        self._generator = generator
        self._clipboard = clipboard
        self._log_content = log_content
        self.fields = FormFields()
        self.results = EmailResults()
        self.loading = False
        self.notice: Notice | None = None

    @property
    def has_results(self) -> bool:
        return bool(self.results.short)

    def update_fields(self, values: FormFields) -> None:
        """Replace all four inputs at once."""
        self.fields = values.model_copy()

    def update_field(self, name: str, value: str) -> None:
        """Store a single input value."""
        if name not in FORM_FIELDS:
            raise UnknownFieldError(name)
        setattr(self.fields, _ATTRIBUTE_FOR_FIELD.get(name, name), value)

    def missing_fields(self) -> list[str]:
        """Required fields that are empty once trimmed."""
        return [
            name
            for name in REQUIRED_FIELDS
            if not getattr(self.fields, _ATTRIBUTE_FOR_FIELD.get(name, name)).strip()
        ]

    async def submit(self) -> None:
        """Validate, call the generator once and store its variants.

        A call while another submission is in flight is ignored. Every
        failure ends the attempt with empty results and an error notice.
        """
        if self.loading:
            logger.debug("Submit ignored | request already in flight")
            return

        missing = self.missing_fields()
        if missing:
            self.notice = Notice(level="error", kind="validation", message=VALIDATION_MESSAGE)
            logger.info("Submit rejected | missing=%s", ",".join(missing))
            return

        self.loading = True
        self.results = EmailResults()
        self.notice = None
        request = GenerateEmailsRequest(
            email_type=self.fields.email_type,
            context=self.fields.context,
            tone=self.fields.tone,
            details=self.fields.details,
        )

        start = time.perf_counter()
        try:
            results = await self._generator.generate(request)
        except WebhookClientError as exc:
            kind = "response" if isinstance(exc, WebhookResponseError) else "transport"
            self.notice = Notice(level="error", kind=kind, message=GENERATION_FAILED_MESSAGE)
            logger.warning(
                "Email generation failed | kind=%s email_type=%s tone=%s error=%s",
                kind,
                request.email_type,
                request.tone,
                exc,
            )
            return
        finally:
            self.loading = False

        self.results = results
        latency_ms = (time.perf_counter() - start) * 1000

        context_preview = ""
        if self._log_content:
            context_preview = f" preview={request.context[:200]!r}"

        logger.info(
            "Emails generated | email_type=%s tone=%s latency_ms=%.2f context_len=%d%s",
            request.email_type,
            request.tone,
            latency_ms,
            len(request.context),
            context_preview,
        )

    def copy(self, text: str) -> None:
        """Write text to the clipboard and report the outcome."""
        try:
            self._clipboard.write_text(text)
        except ClipboardError as exc:
            self.notice = Notice(level="error", kind="copy", message=COPY_FAILED_MESSAGE)
            logger.warning("Copy failed | error=%s", exc)
            return
        self.notice = Notice(level="success", kind="copy", message=COPIED_MESSAGE)

    def copy_variant(self, variant: str) -> str:
        """Copy one of the generated variants and return its text.

        Returns an empty string, with an error notice, while a submission is
        in flight or before any results exist.
        """
        if variant not in VARIANTS:
            raise UnknownFieldError(variant)
        if self.loading or not self.has_results:
            self.notice = Notice(level="error", kind="copy", message=NOTHING_TO_COPY_MESSAGE)
            return ""
        text = getattr(self.results, variant)
        self.copy(text)
        return text
