"""Pydantic schemas for forms and their fields."""
# app/schemas/form.py
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, Dict, List, Optional
from datetime import datetime
from formdesk.db.models.form import FieldType


class FieldIn(BaseModel):
    field_id: Optional[str] = None  # set to update an existing field on PUT
    name: str = Field(min_length=1)
    type: FieldType
    label: Optional[str] = None
    required: bool = False
    validation: Optional[Dict[str, Any]] = None


class FormIn(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    fields: List[FieldIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def unique_field_names(self):
        names = [f.name for f in self.fields or []]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate field names: {', '.join(duplicates)}")
        return self


class FormUpdate(FormIn):
    fields: Optional[List[FieldIn]] = None


class FieldOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    field_id: str
    name: str
    type: str
    label: str | None = None
    required: bool
    validation: Dict[str, Any] | None = None


class FormOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    form_id: str
    title: str
    description: str | None = None
    created_at: datetime | None = None
    fields: List[FieldOut] = Field(default_factory=list)


class FormSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    form_id: str
    title: str
    description: str | None = None
    created_at: datetime | None = None
