import pytest

from seed_forms import CONTACT_FORM, get_or_create
from formdesk.app.services.validation import FieldTypeError, validate_submission


def seed(db):
    data = dict(CONTACT_FORM)
    return get_or_create(db, data.pop("title"), **data)


def test_seed_is_idempotent(db):
    first = seed(db)
    second = seed(db)

    assert first.form_id == second.form_id
    assert [f.type for f in second.fields] == ["text", "email", "number", "select", "checkbox"]


def test_seeded_form_validates_answers(db):
    form = seed(db)
    answers = {"name": "Ann", "email": "ann@mail.org", "topic": "support", "subscribe": True}

    assert validate_submission(form.fields, answers) == answers
    with pytest.raises(FieldTypeError):
        validate_submission(form.fields, {**answers, "age": None})
