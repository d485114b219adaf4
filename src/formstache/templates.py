"""
Built-in Mustache templates.

Every template can be overridden per field, per fieldset or per form.
"""

from __future__ import annotations

DEFAULT_REQUIRED_TEXT = "This field is required."

FIELD_TEMPLATE = (
    '<div {{{field_attributes}}} class="{{{field_classes}}}">'
    '<label for="{{{name}}}" {{{label_attributes}}} class="{{{label_classes}}}">'
    "{{label}}</label>"
    "{{{input_html}}}"
    '{{#note}}<div class="{{{note_classes}}}">{{{note}}}</div>{{/note}}'
    "{{{errors_html}}}"
    "</div>"
)

ERRORS_TEMPLATE = '<div class="errors">{{#errors}}<ul><li>{{.}}</li></ul>{{/errors}}</div>'

FIELDSET_TEMPLATE = (
    '<fieldset name="{{name}}" {{{fieldset_attributes}}} class="{{{fieldset_classes}}}">'
    "<legend>{{legend}}</legend>"
    "{{{fields_html}}}"
    "</fieldset>"
)

FORM_TEMPLATE = (
    '<form name="{{name}}" method="{{method}}" action="{{{action}}}" '
    '{{{attributes}}} class="{{{classes}}}">{{{form_html}}}</form>'
)

_CHOICE_INPUT = (
    "{{#options}}"
    '<input name="{{name}}" type="{{type}}" value="{{option_value}}" '
    "{{{attributes}}} {{#option_selected}}checked{{/option_selected}} "
    'class="{{{classes}}}" />{{option_text}}'
    "{{/options}}"
)

# Keyed by input type; "input" is the fallback for any type not listed.
INPUT_TEMPLATES: dict[str, str] = {
    "input": (
        '<input name="{{name}}" type="{{type}}" value="{{value}}" '
        '{{{attributes}}} class="{{{classes}}}" />'
    ),
    "checkbox": _CHOICE_INPUT,
    "html": "{{{value}}}",
    "radio": _CHOICE_INPUT,
    "select": (
        '<select name="{{name}}" {{{attributes}}} class="{{{classes}}}"> '
        '<option value="" {{^has_selected_option}}selected{{/has_selected_option}}>'
        "{{empty_option_text}}</option>"
        "{{#options}}"
        '  <option value="{{option_value}}"'
        "    {{#option_selected}}selected{{/option_selected}}>{{option_text}}</option>"
        "{{/options}}"
        "</select>"
    ),
    "textarea": (
        '<textarea name="{{name}}" {{{attributes}}} '
        'class="{{{classes}}}">{{{value}}}</textarea>'
    ),
}
