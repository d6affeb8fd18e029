#!/usr/bin/env python
from sqlalchemy import select
from formdesk.app.schemas.form import FormIn
from formdesk.app.services.forms import create_form, get_form
from formdesk.db import Base
from formdesk.db.models import Form
from formdesk.db.session import LocalSession, engine

CONTACT_FORM = {
    "title": "Contact us",
    "description": "Sample form with one field of every type",
    "fields": [
        {"name": "name", "type": "text", "label": "Your name", "required": True},
        {"name": "email", "type": "email", "label": "E-mail", "required": True},
        {"name": "age", "type": "number", "label": "Age"},
        {"name": "topic", "type": "select", "label": "Topic", "validation": {"options": ["sales", "support"]}},
        {"name": "subscribe", "type": "checkbox", "label": "Subscribe to news"},
    ],
}


def get_or_create(db, title, **kwargs):
    form_id = db.scalars(select(Form.form_id).where(Form.title == title)).first()
    if form_id:
        return get_form(db, form_id)
    return create_form(db, FormIn(title=title, **kwargs))


def main():
    Base.metadata.create_all(bind=engine)
    db = LocalSession()
    try:
        data = dict(CONTACT_FORM)
        form = get_or_create(db, data.pop("title"), **data)

        print("Seeded forms:")
        print(f"{form.title}: {form.form_id} ({len(form.fields)} fields)")
    finally:
        db.close()


if __name__ == "__main__":
    main()
