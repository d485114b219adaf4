"""
A single form control: its configuration, current value and last errors.

Usage:
    from formstache import Field

    field = Field(
        name="pet",
        input_type="select",
        options={1: "cat", 2: "dog"},
        validate_function=lambda name, value, data: [] if value == "1" else ["Pick cat."],
    )
    field.validate("pet", "2", {})  # ['Pick cat.']
    field.render()
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from . import templates
from .config import FieldConfig, copy_options
from .core import attributes_to_string, join_classes, render_template

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FieldDefaults:
    """
    Fallbacks resolved by the owning form.

    Passed into Field.render() / Field.validate() so the field's own
    config is never overwritten. Anything the field sets itself wins.
    """

    name: str = ""
    input_template: str = ""
    errors_template: str = ""
    required_text: str = ""


_NO_DEFAULTS = FieldDefaults()


def _is_missing(value: Any) -> bool:
    """Required-check emptiness: only '' and None, never empty lists."""
    return value is None or (isinstance(value, str) and value == "")


def _is_falsy(value: Any) -> bool:
    """Falsy scalars; lists (even empty ones) always count as a value."""
    if value is None or value is False:
        return True
    if isinstance(value, (str, int, float)):
        return not value
    return False


def _normalize_values(value: Any) -> list[str]:
    """Flatten a field value into the string values used for selection."""
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


def _display_value(value: Any) -> Any:
    """Value as shown by scalar templates; lists join with commas."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return value


class Field:
    """One input control, rendered with Mustache templates."""

    def __init__(self, config: FieldConfig | None = None, **options: Any):
        if config is not None:
            options = {**copy_options(config), **options}
        self.config = FieldConfig(**options)
        self.value: Any = copy.deepcopy(self.config.value)
        self.errors: list[str] = []

    def __repr__(self) -> str:
        return f"Field(name={self.config.name!r}, input_type={self.config.input_type!r})"

    def __html__(self) -> str:
        return self.render()

    def reset_value(self) -> None:
        """Restore the configured default value."""
        self.value = copy.deepcopy(self.config.value)

    def choices(self) -> list[dict[str, Any]]:
        """Build the option records used by select/radio/checkbox templates."""
        selected = _normalize_values(self.value)
        return [
            {
                "option_value": str(option_value),
                "option_text": option_text,
                "option_selected": str(option_value) in selected,
            }
            for option_value, option_text in (self.config.options or {}).items()
        ]

    def render(
        self,
        variables: Mapping[str, Any] | None = None,
        defaults: FieldDefaults | None = None,
    ) -> str:
        """
        Render HTML for the field.

        `variables` adds to or overrides the variables of the outer field
        template only, not the input and errors sub-templates.
        """
        cfg = self.config
        defaults = defaults or _NO_DEFAULTS
        name = cfg.name or defaults.name

        choices = self.choices()
        selected_texts = [str(c["option_text"]) for c in choices if c["option_selected"]]

        # Boolean flags first so explicit input_attributes can override them
        input_attributes = {
            "disabled": "" if cfg.disabled else None,
            "readonly": "" if cfg.readonly else None,
            "required": "" if cfg.required else None,
            **cfg.input_attributes,
        }

        input_html = render_template(
            self._input_template(defaults),
            {
                "name": name,
                "type": cfg.input_type,
                "attributes": attributes_to_string(input_attributes),
                "classes": join_classes(cfg.input_classes),
                "empty_option_text": cfg.empty_option_text,
                "has_selected_option": bool(selected_texts),
                "options": choices,
                "selected_option_text": ", ".join(selected_texts),
                "value": _display_value(self.value),
            },
        )

        errors_html = render_template(
            cfg.errors_template or defaults.errors_template or templates.ERRORS_TEMPLATE,
            {"errors": list(self.errors)},
        )

        return render_template(
            cfg.field_template,
            {
                "name": name,
                "field_attributes": attributes_to_string(cfg.field_attributes),
                "field_classes": join_classes(cfg.field_classes),
                "label": cfg.label,
                "label_attributes": attributes_to_string(cfg.label_attributes),
                "label_classes": join_classes(cfg.label_classes),
                "note": cfg.note,
                "note_classes": join_classes(cfg.note_classes),
                "input_html": input_html,
                "errors_html": errors_html,
                **(variables or {}),
            },
        )

    def validate(
        self,
        field_name: str,
        field_value: Any,
        form_data: Mapping[str, Any] | None = None,
        defaults: FieldDefaults | None = None,
    ) -> list[str]:
        """
        Validate a submitted value.

        The errors and the value are stored on the field so the next
        render() shows them. A falsy submission keeps the previous value,
        e.g. a submit button that posts nothing keeps its caption.

        Returns an empty list when the value is valid.
        """
        cfg = self.config
        defaults = defaults or _NO_DEFAULTS
        errors: list[str] = []

        if cfg.required and not (cfg.disabled or cfg.readonly) and _is_missing(field_value):
            errors.append(
                cfg.required_text or defaults.required_text or templates.DEFAULT_REQUIRED_TEXT
            )

        # Config is mutable after construction, so check again at call time
        if callable(cfg.validate_function):
            errors.extend(cfg.validate_function(field_name, field_value, form_data or {}) or [])

        if errors:
            logger.debug(f"Field {field_name!r} failed validation: {errors}")

        self.errors = errors
        if not _is_falsy(field_value):
            self.value = field_value

        return list(errors)

    def _input_template(self, defaults: FieldDefaults) -> str:
        input_type = self.config.input_type
        return (
            self.config.input_template
            or defaults.input_template
            or templates.INPUT_TEMPLATES.get(input_type)
            or templates.INPUT_TEMPLATES["input"]
        )
