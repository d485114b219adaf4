"""
Core rendering helpers shared by fields, fieldsets and forms.

Templates are Mustache strings rendered by chevron:

    render_template('<b>{{name}}</b>', {"name": "Bob"})  # '<b>Bob</b>'
    attributes_to_string({"a": 1, "b": "", "c": None})  # 'a="1" b'
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from html import escape as html_escape
from typing import Any, Protocol, runtime_checkable

import chevron


@runtime_checkable
class Renderable(Protocol):
    """Protocol for objects that can render themselves as HTML."""

    def __html__(self) -> str: ...


def render_template(template: str | None, variables: Mapping[str, Any] | None = None) -> str:
    """
    Render a Mustache template against a mapping of variables.

    Supports {{x}} (escaped), {{{x}}} (raw), {{#x}}...{{/x}} sections and
    {{^x}}...{{/x}} inverted sections. Missing variables render as ''.
    """
    if not template:
        return ""
    return chevron.render(template, dict(variables or {}))


def attributes_to_string(attributes: Mapping[str, Any] | None, *, escape: bool = False) -> str:
    """
    Convert key-value attributes for an HTML element to a string.

    - None or False: attribute omitted
    - '' or True: attribute name only (boolean attribute)
    - anything else: name="value"

    Values are written as-is unless `escape` is set.
    """
    parts: list[str] = []
    for key, value in (attributes or {}).items():
        if value is None or value is False:
            continue
        if value == "" or value is True:
            parts.append(key)
            continue

        value = str(value)
        if escape:
            value = html_escape(value)
        parts.append(f'{key}="{value}"')

    return " ".join(parts)


def join_classes(classes: Iterable[str] | None) -> str:
    """Join a list of CSS classes for a class attribute."""
    return " ".join(classes or [])


def strip_whitespace(html: str | None, remove_all_spaces: bool = False) -> str:
    """
    Strip unnecessary whitespace from HTML.

    `remove_all_spaces` drops every whitespace character, which is only
    useful for comparing markup in tests.
    """
    result = re.sub(r"\r\n|\r|\n", "", (html or "").strip())
    result = re.sub(r"\s{2,}", " ", result)
    if remove_all_spaces:
        return re.sub(r"\s", "", result)
    return result
