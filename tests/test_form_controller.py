"""Tests for the form controller state transitions."""

from __future__ import annotations

import asyncio
import logging

import pytest

from email_writer.clipboard import BrowserClipboard, ClipboardError
from email_writer.schemas import EmailResults, FormFields, GenerateEmailsRequest
from email_writer.services.form_controller import FormController, UnknownFieldError
from email_writer.webhook.client import WebhookResponseError, WebhookTransportError

pytestmark = pytest.mark.asyncio

EMPTY = EmailResults()


class FakeGenerator:
    """Generator that can be held open or told to fail."""

    def __init__(self, *, error: Exception | None = None) -> None:
        self.calls: list[GenerateEmailsRequest] = []
        self.error = error
        self.release = asyncio.Event()
        self.release.set()

    async def generate(self, request: GenerateEmailsRequest) -> EmailResults:
        self.calls.append(request)
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return EmailResults(short="A", conversational="B", professional="C")


class BrokenClipboard:
    def write_text(self, text: str) -> None:
        raise ClipboardError("clipboard unavailable")


def _filled(generator: FakeGenerator, clipboard=None, *, log_content: bool = False) -> FormController:
    controller = FormController(
        generator=generator,
        clipboard=clipboard or BrowserClipboard(),
        log_content=log_content,
    )
    controller.update_field("emailType", "Resignation")
    controller.update_field("context", "Leaving after five years")
    controller.update_field("tone", "Professional")
    return controller


@pytest.mark.parametrize("blank", ["emailType", "context", "tone"])
async def test_missing_required_field_blocks_submit(blank: str) -> None:
    generator = FakeGenerator()
    controller = _filled(generator)
    controller.update_field(blank, "  ")

    await controller.submit()

    assert generator.calls == []
    assert controller.notice is not None
    assert controller.notice.kind == "validation"
    assert controller.loading is False


async def test_details_are_optional() -> None:
    generator = FakeGenerator()
    controller = _filled(generator)

    await controller.submit()

    assert len(generator.calls) == 1
    assert generator.calls[0].details == ""


async def test_submit_sends_current_values_verbatim() -> None:
    generator = FakeGenerator()
    controller = _filled(generator)
    controller.update_field("context", "  Leaving after five years \n")
    controller.update_field("details", "Last day is Friday")

    await controller.submit()

    assert generator.calls[0].model_dump(by_alias=True) == {
        "emailType": "Resignation",
        "context": "  Leaving after five years \n",
        "tone": "Professional",
        "details": "Last day is Friday",
    }
    assert controller.results == EmailResults(short="A", conversational="B", professional="C")
    assert controller.has_results is True
    assert controller.notice is None


@pytest.mark.parametrize(
    ("error", "kind"),
    [
        (WebhookTransportError("boom"), "transport"),
        (WebhookResponseError("missing short"), "response"),
    ],
)
async def test_failure_clears_results(error: Exception, kind: str) -> None:
    generator = FakeGenerator()
    controller = _filled(generator)
    await controller.submit()
    assert controller.has_results

    generator.error = error
    await controller.submit()

    assert controller.results == EMPTY
    assert controller.loading is False
    assert controller.notice is not None
    assert controller.notice.level == "error"
    assert controller.notice.kind == kind
    assert len(generator.calls) == 2


async def test_second_submit_while_loading_is_ignored() -> None:
    generator = FakeGenerator()
    generator.release.clear()
    controller = _filled(generator)

    first = asyncio.create_task(controller.submit())
    await asyncio.sleep(0)
    assert controller.loading is True
    assert controller.results == EMPTY

    await controller.submit()
    assert len(generator.calls) == 1

    generator.release.set()
    await first
    assert controller.loading is False
    assert controller.results.short == "A"
    assert len(generator.calls) == 1


async def test_unknown_field() -> None:
    controller = FormController(generator=FakeGenerator(), clipboard=BrowserClipboard())
    with pytest.raises(UnknownFieldError):
        controller.update_field("subject", "Hello")


async def test_copy_writes_exact_text() -> None:
    clipboard = BrowserClipboard()
    controller = _filled(FakeGenerator(), clipboard)
    await controller.submit()

    text = controller.copy_variant("professional")

    assert text == "C"
    assert clipboard.last_text == "C"
    assert controller.notice is not None
    assert controller.notice.message == "Copied to clipboard!"


async def test_copy_failure_reports_error() -> None:
    controller = _filled(FakeGenerator(), BrokenClipboard())

    controller.copy("Dear team,")

    assert controller.notice is not None
    assert controller.notice.level == "error"
    assert controller.notice.kind == "copy"


async def test_copy_rejected_while_submit_in_flight() -> None:
    clipboard = BrowserClipboard()
    generator = FakeGenerator()
    controller = _filled(generator, clipboard)
    await controller.submit()

    generator.release.clear()
    pending = asyncio.create_task(controller.submit())
    await asyncio.sleep(0)
    assert controller.loading is True

    text = controller.copy_variant("short")

    assert text == ""
    assert clipboard.last_text is None
    assert controller.notice is not None
    assert controller.notice.level == "error"
    assert controller.notice.kind == "copy"

    generator.release.set()
    await pending
    assert controller.copy_variant("short") == "A"
    assert clipboard.last_text == "A"


async def test_copy_rejected_before_any_results() -> None:
    clipboard = BrowserClipboard()
    controller = _filled(FakeGenerator(), clipboard)

    assert controller.copy_variant("conversational") == ""
    assert clipboard.last_text is None
    assert controller.notice is not None
    assert controller.notice.level == "error"


async def test_update_fields_replaces_all_inputs() -> None:
    generator = FakeGenerator()
    controller = _filled(generator)
    controller.update_fields(
        FormFields(email_type="Marketing", context="Spring sale", tone="Casual", details="")
    )

    await controller.submit()

    assert generator.calls[0].email_type == "Marketing"
    assert generator.calls[0].context == "Spring sale"
    assert generator.calls[0].tone == "Casual"


@pytest.mark.parametrize("log_content", [True, False])
async def test_context_preview_logged_only_when_enabled(
    log_content: bool, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="email_writer.services.form_controller")
    controller = _filled(FakeGenerator(), log_content=log_content)

    await controller.submit()

    generated = [record.getMessage() for record in caplog.records if "Emails generated" in record.getMessage()]
    assert len(generated) == 1
    assert ("preview='Leaving after five years'" in generated[0]) is log_content
