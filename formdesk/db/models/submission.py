# db/models/submission.py
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, JSON, DateTime, ForeignKey
from formdesk.db import Base
from formdesk.db.models.form import utcnow
from datetime import datetime
from typing import Any
import uuid


class FormSubmission(Base):
    __tablename__ = "form_submissions"

    submission_id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    form_id: Mapped[str] = mapped_column(String, ForeignKey("forms.form_id", ondelete="CASCADE"), nullable=False, index=True)
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    form = relationship("Form", back_populates="submissions")
    answers = relationship("FieldAnswer", back_populates="submission", cascade="all, delete-orphan", passive_deletes=True)


class FieldAnswer(Base):
    __tablename__ = "field_answers"

    answer_id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    submission_id: Mapped[str] = mapped_column(
        String, ForeignKey("form_submissions.submission_id", ondelete="CASCADE"), nullable=False, index=True
    )
    # answers are keyed by name so they survive field edits on the form
    field_name: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)

    submission = relationship("FormSubmission", back_populates="answers")
