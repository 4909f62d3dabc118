"""Pydantic models for API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from email_writer.types import NoticeKind, NoticeLevel


class HealthResponse(BaseModel):
    """Response model for /health."""

    status: str
    environment: str
    version: str


class GenerateEmailsRequest(BaseModel):
    """Body POSTed to the generation webhook."""

    model_config = ConfigDict(populate_by_name=True)

    email_type: str = Field(..., alias="emailType")
    context: str
    tone: str
    details: str = ""


class EmailResults(BaseModel):
    """The three variants returned by the webhook."""

    model_config = ConfigDict(strict=True, extra="ignore")

    short: str = ""
    conversational: str = ""
    professional: str = ""


class WebhookEmailResults(EmailResults):
    """Webhook reply; every variant must be present."""

    short: str
    conversational: str
    professional: str


class FormFields(BaseModel):
    """Current values of the four form inputs."""

    model_config = ConfigDict(populate_by_name=True)

    email_type: str = Field(default="", alias="emailType")
    context: str = ""
    tone: str = ""
    details: str = ""


class Notice(BaseModel):
    """User-facing message produced by the last form action."""

    level: NoticeLevel
    kind: NoticeKind | None = None
    message: str


class FormState(BaseModel):
    """Snapshot of a form session rendered by the page."""

    session_id: str
    fields: FormFields
    results: EmailResults
    loading: bool
    has_results: bool
    notice: Notice | None = None


class FieldUpdate(BaseModel):
    """Payload for PUT /v1/form/{session_id}/fields/{name}."""

    value: str = Field(default="", description="New value for the field.")


class CopyResponse(BaseModel):
    """Text the page should place on the clipboard."""

    text: str
    notice: Notice | None = None


class OptionsResponse(BaseModel):
    """Fixed choices for the select inputs."""

    email_types: list[str]
    tones: list[str]
