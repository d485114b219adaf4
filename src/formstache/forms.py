"""
Forms: an ordered collection of fields and fieldsets plus shared defaults.

Usage:
    from formstache import Field, Fieldset, Form

    form = Form(name="signup", action="/signup")
    form.add_field("username", Field(label="Username", required=True))
    form.add_field("submit", Field(input_type="submit", value="Sign up"))

    errors = form.validate({"username": ""})
    # {'username': ['This field is required.']}
    html = form.render()

If any fieldset is added, only the fields listed by a fieldset are
rendered. The rest still validate and still show up in get_data().
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .config import FormConfig, copy_options
from .core import attributes_to_string, join_classes, render_template
from .fields import Field, FieldDefaults
from .fieldsets import Fieldset

logger = logging.getLogger(__name__)


class Form:
    """A form that renders its fields and validates submissions."""

    def __init__(self, config: FormConfig | None = None, **options: Any):
        if config is not None:
            options = {**copy_options(config), **options}
        self.config = FormConfig(**options)
        self.fields: dict[str, Field] = {}
        self.fieldsets: dict[str, Fieldset] = {}

    def __repr__(self) -> str:
        return (
            f"Form(name={self.config.name!r}, fields={list(self.fields)}, "
            f"fieldsets={list(self.fieldsets)})"
        )

    def __html__(self) -> str:
        return self.render()

    def add_field(self, name: str, field: Field) -> Form:
        """Add (or replace) a field; insertion order is rendering order."""
        self.fields[name] = field
        return self

    def add_fieldset(self, name: str, fieldset: Fieldset) -> Form:
        """Add (or replace) a fieldset; insertion order is rendering order."""
        self.fieldsets[name] = fieldset
        return self

    def field(self, name: str) -> Field:
        """Look up a field by name."""
        try:
            return self.fields[name]
        except KeyError:
            raise ValueError(f"Unknown field: {name}") from None

    def fieldset(self, name: str) -> Fieldset:
        """Look up a fieldset by name."""
        try:
            return self.fieldsets[name]
        except KeyError:
            raise ValueError(f"Unknown fieldset: {name}") from None

    # --- Data ---

    def get_data(self) -> dict[str, Any]:
        """Current value of every field, in field order."""
        return {name: field.value for name, field in self.fields.items()}

    def set_data(self, form_data: Mapping[str, Any] | None) -> None:
        """Overwrite values of known fields; unknown keys are ignored."""
        for name, value in (form_data or {}).items():
            if name in self.fields:
                self.fields[name].value = value

    def clear_data(self) -> None:
        """Reset every field to its configured default value."""
        for field in self.fields.values():
            field.reset_value()

    # --- Rendering ---

    def defaults_for(self, name: str, field: Field) -> FieldDefaults:
        """Resolve the form-level fallbacks for one field."""
        input_templates = self.config.input_templates
        return FieldDefaults(
            name=name,
            input_template=(
                input_templates.get(field.config.input_type) or input_templates.get("input", "")
            ),
            errors_template=self.config.errors_template,
            required_text=self.config.required_text,
        )

    def render(self, variables: Mapping[str, Any] | None = None) -> str:
        """
        Render HTML for the entire form.

        `variables` adds to or overrides the variables of the outer form
        template.
        """
        html_by_field = {
            name: field.render(defaults=self.defaults_for(name, field))
            for name, field in self.fields.items()
        }

        if not self.fieldsets:
            form_html = "\n".join(html_by_field.values())
        else:
            parts = []
            for fieldset_name, fieldset in self.fieldsets.items():
                members = []
                for field_name in fieldset.field_names:
                    if field_name not in html_by_field:
                        logger.debug(
                            f"Fieldset {fieldset_name!r} lists unknown field {field_name!r}"
                        )
                    members.append(html_by_field.get(field_name, ""))
                parts.append(
                    fieldset.render({"fields_html": "\n".join(members)}, default_name=fieldset_name)
                )
            form_html = "".join(parts)

        logger.debug(
            f"Rendered form {self.config.name!r} with {len(self.fields)} fields "
            f"and {len(self.fieldsets)} fieldsets"
        )

        return render_template(
            self.config.form_template,
            {
                "name": self.config.name,
                "method": self.config.method,
                "action": self.config.action,
                "attributes": attributes_to_string(self.config.attributes),
                "classes": join_classes(self.config.classes),
                "form_html": form_html,
                **(variables or {}),
            },
        )

    # --- Validation ---

    def validate(self, form_data: Mapping[str, Any] | None = None) -> dict[str, list[str]] | None:
        """
        Validate a submission, or the current values if none is given.

        Values and errors are stored in the fields so the next render()
        shows them. Returns None when the form is valid, else a dict of
        field name -> error messages for the fields that failed.
        """
        if form_data is None:
            form_data = self.get_data()

        errors: dict[str, list[str]] = {}
        for name, field in self.fields.items():
            field_errors = field.validate(
                name, form_data.get(name), form_data, defaults=self.defaults_for(name, field)
            )
            if field_errors:
                errors[name] = field_errors

        logger.debug(f"Validated form {self.config.name!r}: {len(errors)} fields with errors")
        return errors or None
