"""
Named groups of fields, rendered as <fieldset> elements.

A fieldset only knows the names of its fields. The form owns the Field
objects, renders them and passes the markup in as `fields_html`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .config import FieldsetConfig, copy_options
from .core import attributes_to_string, join_classes, render_template


class Fieldset:
    """Grouping of field names for layout. Fieldsets do not validate."""

    def __init__(self, config: FieldsetConfig | None = None, **options: Any):
        if config is not None:
            options = {**copy_options(config), **options}
        self.config = FieldsetConfig(**options)

    def __repr__(self) -> str:
        return f"Fieldset(name={self.config.name!r}, field_names={self.config.field_names!r})"

    def __html__(self) -> str:
        return self.render()

    @property
    def field_names(self) -> list[str]:
        return self.config.field_names

    def render(self, variables: Mapping[str, Any] | None = None, default_name: str = "") -> str:
        """Render HTML for the fieldset; `variables` override the computed ones."""
        cfg = self.config
        return render_template(
            cfg.fieldset_template,
            {
                "name": cfg.name or default_name,
                "fieldset_attributes": attributes_to_string(cfg.fieldset_attributes),
                "fieldset_classes": join_classes(cfg.fieldset_classes),
                "legend": cfg.legend,
                **(variables or {}),
            },
        )
