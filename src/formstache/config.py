"""
Pydantic configuration models for fields, fieldsets and forms.

Each model holds the defaults; every instance gets its own copy of the
default lists and dicts, so mutating one field's classes never leaks into
another field.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, field_validator

from . import templates

logger = logging.getLogger(__name__)

# (field name, submitted value, all submitted values) -> error messages
Validator = Callable[[str, Any, Mapping[str, Any]], Sequence[str]]


def copy_options(config: BaseModel) -> dict[str, Any]:
    """Deep copy a config's values into options; callables are shared, not cloned."""
    return {
        key: value if callable(value) else copy.deepcopy(value)
        for key, value in dict(config).items()
    }


class FieldConfig(BaseModel):
    """Configuration for how a field renders and validates."""

    disabled: bool = False
    readonly: bool = False
    required: bool = False
    # Empty means "use the form's required_text"
    required_text: str = ""

    value: Any = ""
    # Empty means "use the key the field is stored under in the form"
    name: str = ""
    label: str = ""
    note: str = ""
    input_type: str = "text"

    # Choices for select/radio/checkbox: {value: text}, in display order
    options: dict[Any, Any] | None = None
    empty_option_text: str = "Please select an option"

    field_template: str = templates.FIELD_TEMPLATE
    input_template: str = ""
    errors_template: str = ""

    field_attributes: dict[str, Any] = {}
    input_attributes: dict[str, Any] = {}
    label_attributes: dict[str, Any] = {}

    field_classes: list[str] = []
    input_classes: list[str] = []
    label_classes: list[str] = []
    note_classes: list[str] = []

    validate_function: Validator | None = None

    @field_validator("options", mode="before")
    @classmethod
    def _options_from_pairs(cls, value: Any) -> Any:
        """Accept [[value, text], ...] as well as a mapping."""
        if isinstance(value, (list, tuple)):
            return {choice[0]: choice[1] for choice in value}
        return value

    @field_validator("validate_function", mode="before")
    @classmethod
    def _drop_uncallable(cls, value: Any) -> Any:
        if value is not None and not callable(value):
            logger.warning(f"Ignoring validate_function that is not callable: {value!r}")
            return None
        return value


class FieldsetConfig(BaseModel):
    """Configuration for a group of fields rendered as a <fieldset>."""

    # Names only; the Field objects belong to the form
    field_names: list[str] = []
    fieldset_attributes: dict[str, Any] = {}
    fieldset_classes: list[str] = []
    fieldset_template: str = templates.FIELDSET_TEMPLATE
    legend: str = ""
    name: str = ""


class FormConfig(BaseModel):
    """Configuration for the <form> element and defaults shared by its fields."""

    action: str = ""
    attributes: dict[str, Any] = {}
    classes: list[str] = []
    errors_template: str = templates.ERRORS_TEMPLATE
    form_template: str = templates.FORM_TEMPLATE
    input_templates: dict[str, str] = dict(templates.INPUT_TEMPLATES)
    method: str = "POST"
    name: str = ""
    required_text: str = templates.DEFAULT_REQUIRED_TEXT
