"""
Example signup page with formstache + FastAPI.

Run with:
    uvicorn examples.signup:app --reload
"""

from __future__ import annotations

from html import escape
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.responses import HTMLResponse

from formstache import Field, Fieldset, Form
from formstache.fastapi import HTMLForm, add_form_handlers

app = FastAPI()
add_form_handlers(app)


def must_be_cat(field_name, field_value, form_data):
    return [] if field_value == "123" else ["You must choose a cat."]


def signup_form() -> Form:
    form = Form(name="signup", action="/signup", attributes={"novalidate": ""})
    form.add_field("username", Field(label="Username", required=True, field_classes=["field"]))
    form.add_field(
        "pet",
        Field(
            input_type="select",
            label="Pets",
            empty_option_text="--- Please choose a pet ---",
            options={123: "cat", 456: "dog"},
            field_classes=["field"],
            validate_function=must_be_cat,
        ),
    )
    form.add_field(
        "hobbies",
        Field(input_type="checkbox", label="Hobbies", options={123: "Cycling", 456: "Running"}),
    )
    form.add_field("submit", Field(input_type="submit", value="Sign up", field_template="{{{input_html}}}"))

    form.add_fieldset("about", Fieldset(field_names=["username", "pet", "hobbies"], legend="About you"))
    form.add_fieldset("actions", Fieldset(field_names=["submit"], fieldset_classes=["noborder"]))
    return form


def page(form: Form) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <title>Signup</title>
    <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/@picocss/pico@2/css/pico.min.css">
    <style>.errors {{ color: var(--pico-del-color); }}</style>
</head>
<body><main class="container">{form.render()}</main></body>
</html>"""


@app.get("/signup", response_class=HTMLResponse)
async def show_signup():
    return page(signup_form())


@app.post("/signup", response_class=HTMLResponse)
async def handle_signup(form: Annotated[Form, Depends(HTMLForm(signup_form, page))]):
    username = escape(str(form.get_data()["username"]))
    return f"<h1>Welcome, {username}!</h1>"
