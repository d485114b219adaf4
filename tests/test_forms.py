"""
Tests for formstache forms.
"""

import pytest

from formstache import Field, Fieldset, Form, FormConfig, strip_whitespace


def plain(**options) -> Field:
    """Field rendered as [name], where name is its key in the form."""
    return Field(field_template="[{{name}}]", **options)


def body_only(**options) -> Form:
    return Form(form_template="{{{form_html}}}", **options)


class TestFormConfig:
    def test_defaults(self):
        form = Form()
        assert form.config.method == "POST"
        assert form.config.required_text == "This field is required."
        assert "select" in form.config.input_templates
        assert form.fields == {}
        assert form.fieldsets == {}

    def test_input_templates_not_shared(self):
        Form().config.input_templates["custom"] = "<custom>"
        assert "custom" not in Form().config.input_templates

    def test_from_config(self):
        form = Form(FormConfig(name="a", action="/a"), action="/b")
        assert form.config.name == "a"
        assert form.config.action == "/b"

    def test_field_lookup(self):
        form = Form().add_field("username", Field())
        assert form.field("username") is form.fields["username"]
        with pytest.raises(ValueError, match="Unknown field: nope"):
            form.field("nope")
        with pytest.raises(ValueError, match="Unknown fieldset: nope"):
            form.fieldset("nope")


class TestFormData:
    @pytest.fixture
    def form(self):
        form = Form()
        form.add_field("username", Field(value="bob"))
        form.add_field("hobbies", Field(input_type="checkbox", value=["1"]))
        form.add_field("submit", Field(input_type="submit", value="Submit Form"))
        return form

    def test_get_data(self, form):
        assert form.get_data() == {"username": "bob", "hobbies": ["1"], "submit": "Submit Form"}
        assert list(form.get_data()) == ["username", "hobbies", "submit"]

    def test_set_data_ignores_unknown(self, form):
        form.set_data({"username": "alice", "unknown": "x"})
        assert form.get_data()["username"] == "alice"
        assert "unknown" not in form.get_data()

    def test_round_trip(self, form):
        before = form.get_data()
        form.set_data(form.get_data())
        assert form.get_data() == before

    def test_clear_data_restores_defaults(self, form):
        form.set_data({"username": "alice", "hobbies": ["1", "2"], "submit": "Go"})
        form.clear_data()
        assert form.get_data() == {"username": "bob", "hobbies": ["1"], "submit": "Submit Form"}


class TestFormRendering:
    def test_render_empty_form(self):
        form = Form(
            name="myform",
            action="https://example.com",
            attributes={"enctype": "multipart/form-data", "novalidate": "", "required": None},
        )
        expected = (
            '<form name="myform" method="POST" action="https://example.com" '
            'enctype="multipart/form-data" novalidate class=""></form>'
        )
        assert strip_whitespace(form.render()) == expected

    def test_fields_in_insertion_order(self):
        form = body_only()
        form.add_field("b", plain()).add_field("a", plain()).add_field("c", plain())
        assert form.render() == "[b]\n[a]\n[c]"

    def test_fieldsets_restrict_and_reorder(self):
        form = body_only()
        for name in ("a", "b", "c"):
            form.add_field(name, plain())
        form.add_fieldset(
            "group",
            Fieldset(field_names=["c", "a"], fieldset_template="<{{name}}>{{{fields_html}}}</{{name}}>"),
        )
        assert form.render() == "<group>[c]\n[a]</group>"

    def test_fieldsets_in_insertion_order(self):
        form = body_only()
        form.add_field("a", plain()).add_field("b", plain())
        template = "({{{fields_html}}})"
        form.add_fieldset("second", Fieldset(field_names=["b"], fieldset_template=template))
        form.add_fieldset("first", Fieldset(field_names=["a"], fieldset_template=template))
        assert form.render() == "([b])([a])"

    def test_fieldset_missing_member_renders_empty(self):
        form = body_only()
        form.add_field("a", plain())
        form.add_fieldset(
            "group", Fieldset(field_names=["a", "ghost"], fieldset_template="{{{fields_html}}}")
        )
        assert form.render() == "[a]\n"

    def test_unlisted_field_is_omitted_but_keeps_data(self):
        form = Form()
        form.add_field("shown", Field(label="Shown"))
        form.add_field("hidden_one", Field(label="NotShown", value="kept"))
        form.add_fieldset("group", Fieldset(field_names=["shown"]))

        html = form.render()
        assert "Shown" in html
        assert "NotShown" not in html
        assert form.get_data()["hidden_one"] == "kept"

    def test_fieldset_name_defaults_to_key(self):
        form = Form()
        form.add_field("a", Field())
        form.add_fieldset("personal", Fieldset(field_names=["a"]))
        assert '<fieldset name="personal"' in form.render()
        assert form.fieldsets["personal"].config.name == ""

    def test_field_name_defaults_to_key(self):
        form = Form()
        form.add_field("username", Field(label="Username"))
        html = form.render()
        assert '<label for="username"' in html
        assert '<input name="username" type="text"' in html
        assert form.fields["username"].config.name == ""

    def test_form_input_templates_by_type(self):
        form = body_only()
        form.config.input_templates["color"] = '<input type="color" name="{{name}}">'
        form.add_field("shade", Field(input_type="color", field_template="{{{input_html}}}"))
        assert form.render() == '<input type="color" name="shade">'

    def test_field_input_template_wins(self):
        form = body_only()
        form.add_field("x", Field(input_template="<own>", field_template="{{{input_html}}}"))
        assert form.render() == "<own>"

    def test_form_errors_template(self):
        form = body_only(errors_template="{{#errors}}!{{.}}{{/errors}}")
        form.add_field("x", Field(required=True, field_template="{{{errors_html}}}"))
        form.validate({"x": ""})
        assert form.render() == "!This field is required."

    def test_variables_override(self):
        form = Form(name="original", form_template="{{name}}:{{extra}}")
        assert form.render({"name": "new", "extra": "yes"}) == "new:yes"

    def test_classes(self):
        form = Form(classes=["a", "b"])
        assert 'class="a b"' in form.render()

    def test_render_is_idempotent(self):
        form = Form(name="f")
        form.add_field("pet", Field(input_type="select", options={1: "cat"}, required=True))
        form.add_field("note", Field(input_type="textarea"))
        form.validate({"pet": ""})
        assert form.render() == form.render()

    def test_html_protocol(self):
        form = Form(name="f")
        assert form.__html__() == form.render()


class TestFormValidation:
    def test_valid_returns_none(self):
        form = Form()
        form.add_field("username", Field(required=True))
        assert form.validate({"username": "bob"}) is None

    def test_errors_only_for_failing_fields(self):
        form = Form()
        form.add_field("username", Field(required=True, required_text="Required."))
        form.add_field("nickname", Field())
        assert form.validate({"username": ""}) == {"username": ["Required."]}

    def test_form_required_text_fallback(self):
        form = Form(required_text="Needed!")
        form.add_field("a", Field(required=True))
        form.add_field("b", Field(required=True, required_text="Own text"))
        assert form.validate({}) == {"a": ["Needed!"], "b": ["Own text"]}

    def test_validates_current_values_when_no_data(self):
        form = Form()
        form.add_field("username", Field(required=True))
        assert form.validate() == {"username": ["This field is required."]}
        form.set_data({"username": "bob"})
        assert form.validate() is None

    def test_empty_mapping_is_not_current_values(self):
        form = Form()
        form.add_field("username", Field(required=True, value="bob"))
        assert form.validate({}) == {"username": ["This field is required."]}

    def test_validator_sees_form_data(self):
        def must_match(field_name, field_value, form_data):
            return [] if field_value == form_data.get("password") else ["Passwords differ."]

        form = Form()
        form.add_field("password", Field())
        form.add_field("confirm", Field(validate_function=must_match))
        assert form.validate({"password": "a", "confirm": "b"}) == {"confirm": ["Passwords differ."]}
        assert form.validate({"password": "a", "confirm": "a"}) is None

    def test_unlisted_fields_still_validate(self):
        form = Form()
        form.add_field("shown", Field())
        form.add_field("unlisted", Field(required=True))
        form.add_fieldset("group", Fieldset(field_names=["shown"]))
        assert form.validate({"shown": "x"}) == {"unlisted": ["This field is required."]}

    def test_values_and_errors_stored(self):
        form = Form()
        form.add_field(
            "pet",
            Field(
                input_type="select",
                options={1: "cat", 2: "dog"},
                validate_function=lambda name, value, data: ["Pick cat."] if value != "1" else [],
            ),
        )
        form.validate({"pet": "2"})
        assert form.get_data() == {"pet": "2"}
        html = strip_whitespace(form.render())
        assert '<option value="2" selected>dog</option>' in html
        assert "<li>Pick cat.</li>" in html

    def test_none_iff_all_fields_pass(self):
        form = Form()
        form.add_field("a", Field(validate_function=lambda n, v, d: []))
        form.add_field("b", Field(validate_function=lambda n, v, d: ["bad"] if v == "x" else []))
        assert form.validate({"a": "1", "b": "y"}) is None
        assert form.validate({"a": "1", "b": "x"}) == {"b": ["bad"]}


class TestFullForm:
    """A form using most features together, rendered after a submission."""

    @pytest.fixture
    def form(self):
        form = Form(
            name="myform",
            action="https://example.com",
            attributes={"enctype": "multipart/form-data", "novalidate": "", "required": None},
        )
        form.add_field(
            "username",
            Field(label="Username", note="This field is readonly.", note_classes=["note"],
                  required=True, field_classes=["field"]),
        )
        form.add_field(
            "gender",
            Field(input_type="radio", label="Gender", options={123: "Female", 456: "Male"},
                  field_classes=["field"], required=True),
        )
        form.add_field(
            "pet",
            Field(input_type="select", label="Pets",
                  empty_option_text="--- Please choose a pet ---",
                  options={123: "cat", 456: "dog"}, field_classes=["field"],
                  validate_function=lambda n, v, d: ["You must choose a cat."] if v != "123" else []),
        )
        form.add_field(
            "hobbies",
            Field(input_type="checkbox", label="Hobbies", options={123: "Cycling", 456: "Running"}),
        )
        form.add_field("csrf_token", Field(input_type="hidden", value="abcd1234"))
        form.add_field("submit", Field(input_type="submit", value="Submit Form"))
        form.add_field(
            "comments", Field(input_type="html", field_template="{{{input_html}}}", value="<p>Hi</p>")
        )
        form.add_fieldset(
            "personal", Fieldset(field_names=["username", "gender"], legend="Personal Info")
        )
        form.add_fieldset(
            "rest",
            Fieldset(field_names=["comments", "pet", "hobbies", "csrf_token", "submit"],
                     fieldset_classes=["noborder"]),
        )
        form.fields["username"].config.readonly = True
        return form

    def test_submission_round_trip(self, form):
        errors = form.validate({"gender": "456", "pet": "456", "hobbies": ["123", "456"]})
        assert errors == {"pet": ["You must choose a cat."]}

        html = strip_whitespace(form.render())
        assert html.startswith(
            '<form name="myform" method="POST" action="https://example.com" '
            'enctype="multipart/form-data" novalidate class="">'
            '<fieldset name="personal" class=""><legend>Personal Info</legend>'
        )
        assert '<input name="username" type="text" value="" readonly required class="" />' in html
        assert '<div class="note">This field is readonly.</div>' in html
        assert 'value="456" required checked class="" />Male' in html
        assert '<fieldset name="rest" class="noborder"><legend></legend><p>Hi</p>' in html
        assert '<option value="456" selected>dog</option>' in html
        assert "<li>You must choose a cat.</li>" in html
        assert 'value="123" checked class="" />Cycling' in html
        assert '<input name="csrf_token" type="hidden" value="abcd1234" class="" />' in html
        assert '<input name="submit" type="submit" value="Submit Form" class="" />' in html
        assert html.endswith("</fieldset></form>")
