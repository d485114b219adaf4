"""
formstache - Declarative HTML forms rendered with Mustache templates.

Fields, fieldsets and forms are configured with plain keyword options,
rendered to HTML through overridable templates, and validate submitted
values with per-field rules.
"""

from .config import FieldConfig, FieldsetConfig, FormConfig, Validator
from .core import Renderable, attributes_to_string, render_template, strip_whitespace
from .fields import Field, FieldDefaults
from .fieldsets import Fieldset
from .forms import Form

__version__ = "0.1.0"
__all__ = [
    # Core
    "Renderable",
    "attributes_to_string",
    "render_template",
    "strip_whitespace",
    # Configuration
    "FieldConfig",
    "FieldsetConfig",
    "FormConfig",
    "Validator",
    # Forms
    "Field",
    "FieldDefaults",
    "Fieldset",
    "Form",
]
