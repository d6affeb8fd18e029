# app/schemas/response.py
from pydantic import BaseModel
from typing import Any, Dict
from datetime import datetime


class ResponseOut(BaseModel):
    response_id: str
    form_id: str
    answers: Dict[str, Any]
    submitted_at: datetime
