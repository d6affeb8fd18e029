# db/models/form.py
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, Integer, Boolean, JSON, DateTime, ForeignKey, UniqueConstraint
from formdesk.db import Base
import enum
from datetime import datetime, timezone
import uuid


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FieldType(str, enum.Enum):
    text = "text"
    email = "email"
    number = "number"
    checkbox = "checkbox"
    select = "select"


class FormField(Base):
    __tablename__ = "form_fields"

    field_id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    form_id: Mapped[str] = mapped_column(String, ForeignKey("forms.form_id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # kept as plain string: the column outlives the set of known types
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    label: Mapped[str | None] = mapped_column(String(255), nullable=True)
    required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    validation: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    form = relationship("Form", back_populates="fields")

    __table_args__ = (
        UniqueConstraint("form_id", "name", name="uq_form_field_name"),
    )


class Form(Base):
    __tablename__ = "forms"

    form_id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    fields = relationship(
        "FormField",
        back_populates="form",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="FormField.position",
    )
    submissions = relationship("FormSubmission", back_populates="form", cascade="all, delete-orphan", passive_deletes=True)
