"""
FastAPI integration: capture submissions, validate, re-render on errors.

Usage:
    def signup_form() -> Form:
        form = Form(name="signup", action="/signup")
        form.add_field("username", Field(label="Username", required=True))
        return form

    app = FastAPI()
    add_form_handlers(app)

    @app.get("/signup", response_class=HTMLResponse)
    async def show_signup():
        return signup_form().render()

    @app.post("/signup")
    async def handle_signup(form: Annotated[Form, Depends(HTMLForm(signup_form))]):
        # Only reached if validation succeeds
        return {"username": form.get_data()["username"]}
"""

from __future__ import annotations

import logging
from inspect import isawaitable
from typing import Any, Callable

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse

from .forms import Form

logger = logging.getLogger(__name__)


async def parse_submission(request: Request) -> dict[str, Any]:
    """
    Read a submitted HTML form into field name -> value.

    Keys posted more than once (checkbox groups, multi-selects) become
    lists of their values, in submission order.
    """
    form_data = await request.form()
    submission: dict[str, Any] = {}
    for key in form_data.keys():
        if key in submission:
            continue
        values = form_data.getlist(key)
        submission[key] = values[0] if len(values) == 1 else list(values)
    return submission


async def render_html(result: Any) -> str | None:
    """Render a str, a Renderable (sync or async __html__) or an awaitable of either."""
    if isawaitable(result):
        result = await result

    if isinstance(result, str):
        return result

    if hasattr(result, "__html__"):
        content = result.__html__()
        if isawaitable(content):
            content = await content
        return str(content)

    return None


class FormValidationError(HTTPException):
    """Raised when form validation fails - contains the rendered HTML response."""

    def __init__(self, content: str | None, status_code: int = 200, errors: dict | None = None):
        super().__init__(status_code=status_code, detail="Form validation failed")
        self.errors = errors or {}
        self.response = HTMLResponse(content=content, status_code=status_code)


async def form_validation_error_handler(request: Request, exc: FormValidationError):
    return exc.response


def add_form_handlers(app: FastAPI) -> None:
    """Register the handler that turns FormValidationError into its HTML response."""
    app.add_exception_handler(FormValidationError, form_validation_error_handler)


class HTMLForm:
    """
    Dependency that validates a submission and re-renders the form on errors.

    `factory` builds a fresh Form for every request, since a Form keeps the
    submitted values and errors on its fields. `page` wraps the validated
    form in a page; it may be sync or async and return a str or anything
    with __html__. Without it the bare form is rendered.
    """

    def __init__(
        self,
        factory: Callable[[], Form],
        page: Callable[[Form], Any] | None = None,
        status_code: int = 200,
    ):
        self.factory = factory
        self.page = page
        self.status_code = status_code

    async def __call__(self, request: Request) -> Form:
        """Validate the submission or raise FormValidationError with the rendered page."""
        form = self.factory()
        submission = await parse_submission(request)

        errors = form.validate(submission)
        if errors is None:
            return form

        logger.info(f"Form {form.config.name!r} rejected submission: {sorted(errors)}")
        result = self.page(form) if self.page is not None else form
        content = await render_html(result)
        raise FormValidationError(content, status_code=self.status_code, errors=errors)
