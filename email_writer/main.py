"""FastAPI entrypoint for the AI Email Writer."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Response, status
from fastapi.responses import FileResponse

from email_writer import __version__, schemas
from email_writer.clipboard import BrowserClipboard
from email_writer.config import settings
from email_writer.logging_utils import configure_logging, get_logger
from email_writer.services.form_controller import FormController, UnknownFieldError
from email_writer.session_store import FormSessionStore, SessionNotFoundError
from email_writer.types import EMAIL_TYPES, TONES
from email_writer.webhook.client import WebhookClient

configure_logging(level=settings.log_level)
logger = get_logger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(title="AI Email Writer")


@lru_cache(maxsize=1)
def get_webhook_client() -> WebhookClient:
    """Instantiate the webhook client."""
    return WebhookClient(settings.webhook_url, timeout=settings.request_timeout_seconds)


def build_controller() -> FormController:
    """Create the controller backing a single page view."""
    return FormController(
        generator=get_webhook_client(),
        clipboard=BrowserClipboard(),
        log_content=settings.log_content_enabled,
    )


@lru_cache(maxsize=1)
def get_session_store() -> FormSessionStore:
    """Instantiate the form session store."""
    return FormSessionStore(build_controller, max_sessions=settings.max_form_sessions)


def _lookup(store: FormSessionStore, session_id: str) -> FormController:
    try:
        return store.get(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown form session: {session_id}",
        ) from exc


def _state(session_id: str, controller: FormController) -> schemas.FormState:
    return schemas.FormState(
        session_id=session_id,
        fields=controller.fields.model_copy(),
        results=controller.results.model_copy(),
        loading=controller.loading,
        has_results=controller.has_results,
        notice=controller.notice,
    )


@app.get("/", include_in_schema=False)
async def index() -> FileResponse:
    """Serve the single-page form."""
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@app.get("/health", response_model=schemas.HealthResponse)
async def health() -> schemas.HealthResponse:
    """Simple health-check endpoint."""
    return schemas.HealthResponse(
        status="ok",
        environment=settings.environment,
        version=__version__,
    )


@app.get("/v1/options", response_model=schemas.OptionsResponse)
async def list_options() -> schemas.OptionsResponse:
    """Return the choices offered by the select inputs."""
    return schemas.OptionsResponse(email_types=list(EMAIL_TYPES), tones=list(TONES))


@app.post("/v1/form", response_model=schemas.FormState, status_code=status.HTTP_201_CREATED)
async def create_form(store: FormSessionStore = Depends(get_session_store)) -> schemas.FormState:
    """Start a form session for a new page view."""
    session_id, controller = store.create()
    logger.debug("Form session created | session_id=%s", session_id)
    return _state(session_id, controller)


@app.get("/v1/form/{session_id}", response_model=schemas.FormState)
async def get_form(
    session_id: str,
    store: FormSessionStore = Depends(get_session_store),
) -> schemas.FormState:
    """Return the current form state."""
    return _state(session_id, _lookup(store, session_id))


@app.put("/v1/form/{session_id}/fields/{name}", response_model=schemas.FormState)
async def update_field(
    session_id: str,
    name: str,
    payload: schemas.FieldUpdate,
    store: FormSessionStore = Depends(get_session_store),
) -> schemas.FormState:
    """Store one input value."""
    controller = _lookup(store, session_id)
    try:
        controller.update_field(name, payload.value)
    except UnknownFieldError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown form field: {name}",
        ) from exc
    return _state(session_id, controller)


@app.post("/v1/form/{session_id}/submit", response_model=schemas.FormState)
async def submit_form(
    session_id: str,
    payload: schemas.FormFields | None = None,
    store: FormSessionStore = Depends(get_session_store),
) -> schemas.FormState:
    """Generate the three email variants for the current inputs.

    The page sends all four values with the submit so the webhook sees
    exactly what is on screen, whatever order earlier field updates landed in.
    """
    controller = _lookup(store, session_id)
    if payload is not None:
        controller.update_fields(payload)
    await controller.submit()
    return _state(session_id, controller)


@app.post("/v1/form/{session_id}/copy/{variant}", response_model=schemas.CopyResponse)
async def copy_variant(
    session_id: str,
    variant: str,
    store: FormSessionStore = Depends(get_session_store),
) -> schemas.CopyResponse:
    """Copy a generated variant; the page writes the returned text to the clipboard."""
    controller = _lookup(store, session_id)
    try:
        text = controller.copy_variant(variant)
    except UnknownFieldError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown email variant: {variant}",
        ) from exc
    return schemas.CopyResponse(text=text, notice=controller.notice)


@app.delete("/v1/form/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_form(
    session_id: str,
    store: FormSessionStore = Depends(get_session_store),
) -> Response:
    """Drop a form session when its page is closed."""
    try:
        store.delete(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown form session: {session_id}",
        ) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
