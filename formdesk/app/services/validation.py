"""Validation of submitted answers against a form's field definitions.

`field_rule` maps one field to a pydantic field definition, `build_response_model`
composes those into a closed model keyed by field name, and `validate_submission`
applies it to one answer set, drops empty answers and rejects empty submissions.

The model is rebuilt on every call and never cached.
"""
# app/services/validation.py
from collections.abc import Mapping
from typing import Annotated, Any, Iterable, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator,
    AllowInfNan,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    Strict,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
    create_model,
)
from pydantic_core import PydanticCustomError

ROOT_FIELD = "__root__"


class SubmissionValidationError(Exception):
    """Base class for rejected submissions.

    `issues` holds one `{"field", "code", "message"}` dict per offending field.
    """
    code = "invalid_submission"

    def __init__(self, message: str, issues: list[dict] | None = None):
        super().__init__(message)
        self.message = message
        self.issues = issues or []

    @property
    def field(self) -> str | None:
        for issue in self.issues:
            if issue["code"] == self.code:
                return issue["field"]
        return None


class UnknownFieldError(SubmissionValidationError):
    code = "unknown_field"


class RequiredFieldError(SubmissionValidationError):
    code = "required"


class FieldTypeError(SubmissionValidationError):
    code = "invalid_type"


class EmptySubmissionError(SubmissionValidationError):
    code = "empty_submission"


# most severe first
_ERROR_PRIORITY = (UnknownFieldError, RequiredFieldError, FieldTypeError)

_EXPECTED = {
    "email": "a valid email address",
    "number": "a number",
    "checkbox": "a boolean",
}


def _attr(field: Any, key: str, default: Any = None) -> Any:
    # fields come either as ORM/pydantic objects or as plain dicts
    if isinstance(field, Mapping):
        return field.get(key, default)
    return getattr(field, key, default)


def _type_name(field: Any) -> str:
    value = _attr(field, "type")
    return getattr(value, "value", value) or ""


def field_label(field: Any) -> str:
    return _attr(field, "label") or _attr(field, "name")


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _check_email(value: str) -> str:
    # display-name forms like "Bob <bob@mail.org>" are not addresses
    if "<" in value or ">" in value:
        raise ValueError("value is not a valid email address")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(str(exc)) from exc
    # stored as submitted, not normalized
    return value


EmailAnswer = Annotated[StrictStr, AfterValidator(_check_email)]
NumberAnswer = Union[StrictInt, Annotated[float, Strict(), AllowInfNan(False)]]


def _base_type(field_type: str) -> Any:
    if field_type == "email":
        return EmailAnswer
    elif field_type == "number":
        return NumberAnswer
    elif field_type == "checkbox":
        return StrictBool
    # text, select and anything unknown; select options are not checked
    return StrictStr


def _required_check(message: str):
    def check(value: Any) -> Any:
        if is_empty(value):
            raise PydanticCustomError("required", "{message}", {"message": message})
        return value
    return check


def field_rule(field: Any) -> tuple[Any, Any]:
    """Build the `(annotation, FieldInfo)` pair validating a single answer.

    Required fields reject a missing key, `None` and `""` before the type
    check runs. Optional fields accept a missing key; a present value must
    still match the type.
    """
    name = _attr(field, "name")
    base = _base_type(_type_name(field))

    if _attr(field, "required", False):
        message = f"{field_label(field)} is required"
        return Annotated[base, BeforeValidator(_required_check(message))], Field(..., alias=name)

    return base, Field(default=None, alias=name)


def build_response_model(fields: Iterable[Any]) -> type[BaseModel]:
    """Compose the closed model for a whole form; unknown keys are rejected."""
    definitions = {}
    for position, field in enumerate(fields):
        # attribute names are synthetic, answers are matched by alias only
        definitions[f"field_{position}"] = field_rule(field)

    return create_model(
        "FormResponse",
        __config__=ConfigDict(extra="forbid", populate_by_name=False),
        **definitions,
    )


def _translate(exc: ValidationError, fields: list) -> SubmissionValidationError:
    by_name = {_attr(f, "name"): f for f in fields}
    issues: list[dict] = []
    seen: set[tuple[str, str]] = set()
    kinds: set[type] = set()

    for err in exc.errors():
        name = str(err["loc"][0]) if err["loc"] else ROOT_FIELD
        field = by_name.get(name)

        if err["type"] == "extra_forbidden" or field is None:
            kind = UnknownFieldError
            message = f"Unknown field: {name}"
        elif err["type"] in ("missing", "required"):
            kind = RequiredFieldError
            message = f"{field_label(field)} is required"
        else:
            kind = FieldTypeError
            expected = _EXPECTED.get(_type_name(field), "a string")
            message = f"{field_label(field)} must be {expected}"

        # union members report one error each
        if (name, kind.code) in seen:
            continue
        seen.add((name, kind.code))
        kinds.add(kind)
        issues.append({"field": name, "code": kind.code, "message": message})

    kind = next(k for k in _ERROR_PRIORITY if k in kinds)
    if kind is UnknownFieldError:
        unknown = ", ".join(i["field"] for i in issues if i["code"] == kind.code)
        summary = f"The input contains keys not defined in the schema: {unknown}"
    else:
        summary = "; ".join(i["message"] for i in issues if i["code"] == kind.code)
    return kind(summary, issues)


def validate_submission(fields: Iterable[Any], raw_answers: Any) -> dict[str, Any]:
    """Validate one answer set against a form's fields.

    Args:
        fields: The form's fields in declared order.
        raw_answers: The submitted mapping of field name to value.

    Returns:
        dict: The answers with empty values removed, in field order.

    Raises:
        UnknownFieldError: A key is not a field of the form.
        RequiredFieldError: A required field is missing or empty.
        FieldTypeError: A value does not match its field type.
        EmptySubmissionError: No non-empty answer is left.
    """
    fields = list(fields)
    if not isinstance(raw_answers, Mapping):
        raise FieldTypeError(
            "Answers must be an object",
            [{"field": ROOT_FIELD, "code": FieldTypeError.code, "message": "Answers must be an object"}],
        )

    model = build_response_model(fields)
    try:
        parsed = model.model_validate(dict(raw_answers))
    except ValidationError as exc:
        raise _translate(exc, fields) from exc

    answers = parsed.model_dump(by_alias=True, exclude_unset=True)
    cleaned = {name: value for name, value in answers.items() if not is_empty(value)}
    if not cleaned:
        raise EmptySubmissionError("Answers cannot be empty")
    return cleaned
