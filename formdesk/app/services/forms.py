"""Form and submission persistence.

Forms are stored with their fields, submissions with one row per answered
field. Every write runs in a single transaction and is rolled back on error.
"""
# app/services/forms.py
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from formdesk.app.schemas.form import FieldIn, FormIn, FormUpdate
from formdesk.db.models import Form, FormField, FormSubmission, FieldAnswer

logger = logging.getLogger(__name__)


def _field_values(field: FieldIn, position: int) -> dict:
    return {
        "name": field.name,
        "type": field.type.value,
        "label": field.label,
        "required": field.required,
        "validation": field.validation,
        "position": position,
    }


def list_forms(session: Session) -> list[Form]:
    return list(session.scalars(select(Form).order_by(Form.created_at, Form.form_id)))


def get_form(session: Session, form_id: str) -> Form | None:
    """Load a form with its fields (ordered by position), or None."""
    return session.scalars(
        select(Form).options(selectinload(Form.fields)).where(Form.form_id == form_id)
    ).one_or_none()


def create_form(session: Session, data: FormIn) -> Form:
    form = Form(title=data.title, description=data.description)
    form.fields = [FormField(**_field_values(f, idx)) for idx, f in enumerate(data.fields)]
    try:
        session.add(form)
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info("Created form %s with %d fields", form.form_id, len(data.fields))
    return get_form(session, form.form_id)


def update_form(session: Session, form_id: str, data: FormUpdate) -> Form | None:
    """Replace title/description and reconcile fields.

    Incoming fields whose `field_id` matches an existing field update it,
    the rest are inserted; existing fields missing from the payload are deleted.
    `fields=None` leaves the fields untouched.

    Returns:
        Form | None: The updated form, or None if it does not exist.
    """
    form = get_form(session, form_id)
    if not form:
        return None

    try:
        form.title = data.title
        form.description = data.description

        if data.fields is not None:
            existing = {f.field_id: f for f in form.fields}
            keep_ids = {f.field_id for f in data.fields if f.field_id in existing}

            for field_id, field in existing.items():
                if field_id not in keep_ids:
                    form.fields.remove(field)
            # park renamed fields on unique placeholders so swaps don't collide
            for incoming in data.fields:
                field = existing.get(incoming.field_id)
                if field is not None and field.name != incoming.name:
                    field.name = f"__renaming__{field.field_id}"
            # free names of removed and renamed fields before reusing them
            session.flush()

            fields = []
            for idx, incoming in enumerate(data.fields):
                values = _field_values(incoming, idx)
                if incoming.field_id in keep_ids:
                    field = existing[incoming.field_id]
                    for key, value in values.items():
                        setattr(field, key, value)
                else:
                    field = FormField(**values)
                fields.append(field)
            form.fields = fields

        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info("Updated form %s", form_id)
    return get_form(session, form_id)


def delete_form(session: Session, form_id: str) -> bool:
    form = session.get(Form, form_id)
    if not form:
        return False
    try:
        session.delete(form)
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info("Deleted form %s", form_id)
    return True


def add_submission(session: Session, form: Form, answers: dict[str, Any]) -> FormSubmission:
    """Store already validated answers as one submission.

    Args:
        session: The database session.
        form: The form the answers belong to.
        answers: Field name to value, as returned by `validate_submission`.

    Returns:
        FormSubmission: The persisted submission with its answers.
    """
    submission = FormSubmission(form_id=form.form_id)
    submission.answers = [FieldAnswer(field_name=name, value=value) for name, value in answers.items()]
    try:
        session.add(submission)
        session.commit()
    except Exception:
        session.rollback()
        raise
    session.refresh(submission)
    return submission


def list_submissions(session: Session, form_id: str) -> list[FormSubmission]:
    return list(session.scalars(
        select(FormSubmission)
        .options(selectinload(FormSubmission.answers))
        .where(FormSubmission.form_id == form_id)
        .order_by(FormSubmission.submitted_at, FormSubmission.submission_id)
    ))


def submission_answers(submission: FormSubmission) -> dict[str, Any]:
    return {a.field_name: a.value for a in submission.answers}
