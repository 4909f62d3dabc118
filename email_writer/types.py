"""Shared typing helpers."""

from typing import Literal, get_args

EmailType = Literal["Follow-up", "Inquiry", "Resignation", "Marketing"]
Tone = Literal["Friendly", "Professional", "Casual"]
FormField = Literal["emailType", "context", "tone", "details"]
Variant = Literal["short", "conversational", "professional"]
NoticeLevel = Literal["info", "success", "error"]
NoticeKind = Literal["validation", "transport", "response", "copy"]

EMAIL_TYPES: tuple[str, ...] = get_args(EmailType)
TONES: tuple[str, ...] = get_args(Tone)
FORM_FIELDS: tuple[str, ...] = get_args(FormField)
REQUIRED_FIELDS: tuple[str, ...] = ("emailType", "context", "tone")
VARIANTS: tuple[str, ...] = get_args(Variant)
