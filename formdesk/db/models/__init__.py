from .form import Form, FormField, FieldType
from .submission import FormSubmission, FieldAnswer
