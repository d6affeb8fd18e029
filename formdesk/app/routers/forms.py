"""REST API for forms and their responses.

- forms (list, read, create, update, delete);
- responses (submit validated answers, list stored answers).
"""
# app/routers/forms.py
from typing import Any, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from formdesk.app.core.logging import get_logs_writer_logger
from formdesk.app.schemas.form import FormIn, FormOut, FormSummaryOut, FormUpdate
from formdesk.app.schemas.response import ResponseOut
from formdesk.app.services import forms as forms_service
from formdesk.app.services.validation import (
    EmptySubmissionError,
    SubmissionValidationError,
    validate_submission,
)
from formdesk.db.session import get_db

logger = get_logs_writer_logger()

router = APIRouter()


def _form_or_404(db: Session, form_id: str):
    form = forms_service.get_form(db, form_id)
    if not form:
        raise HTTPException(status_code=404, detail="Form not found")
    return form


def _response_out(submission) -> ResponseOut:
    return ResponseOut(
        response_id=submission.submission_id,
        form_id=submission.form_id,
        answers=forms_service.submission_answers(submission),
        submitted_at=submission.submitted_at,
    )


@router.get("/forms", response_model=List[FormSummaryOut])
async def list_forms(db: Session = Depends(get_db)):
    return forms_service.list_forms(db)


@router.get("/forms/{form_id}", response_model=FormOut)
async def get_form(form_id: str, db: Session = Depends(get_db)):
    """Get a form with its fields.

    Errors:
        404: The form was not found.
    """
    return _form_or_404(db, form_id)


@router.post("/forms", response_model=FormOut, status_code=status.HTTP_201_CREATED)
async def create_form(payload: FormIn, db: Session = Depends(get_db)):
    return forms_service.create_form(db, payload)


@router.put("/forms/{form_id}", response_model=FormOut)
async def update_form(form_id: str, payload: FormUpdate, db: Session = Depends(get_db)):
    """Update a form; fields carrying a known `field_id` are edited in place.

    Errors:
        404: The form was not found.
    """
    form = forms_service.update_form(db, form_id, payload)
    if not form:
        raise HTTPException(status_code=404, detail="Form not found")
    return form


@router.delete("/forms/{form_id}")
async def delete_form(form_id: str, db: Session = Depends(get_db)):
    if not forms_service.delete_form(db, form_id):
        raise HTTPException(status_code=404, detail="Form not found")
    return {"success": True}


@router.post("/forms/{form_id}/responses", response_model=ResponseOut, status_code=status.HTTP_201_CREATED)
async def submit_response(form_id: str, payload: Any = Body(...), db: Session = Depends(get_db)):
    """Validate answers against the form's fields and store them.

    Args:
        form_id: The form's ID.
        payload: Field name to answer.
        db: The DB session.

    Returns:
        ResponseOut: The stored response with empty answers removed.

    Errors:
        404: The form was not found.
        400: The answers do not match the form or are all empty.
    """
    form = _form_or_404(db, form_id)

    try:
        answers = validate_submission(form.fields, payload)
    except SubmissionValidationError as exc:
        logger.info(f"rejected form={form_id} code={exc.code} field={exc.field}")
        detail = {"error": exc.message, "code": exc.code, "issues": exc.issues}
        if isinstance(exc, EmptySubmissionError):
            detail["answers"] = {}
        raise HTTPException(status_code=400, detail=detail)

    submission = forms_service.add_submission(db, form, answers)
    logger.info(f"saved form={form_id} submission={submission.submission_id}")
    return _response_out(submission)


@router.get("/forms/{form_id}/responses", response_model=List[ResponseOut])
async def list_responses(form_id: str, db: Session = Depends(get_db)):
    _form_or_404(db, form_id)
    return [_response_out(s) for s in forms_service.list_submissions(db, form_id)]
