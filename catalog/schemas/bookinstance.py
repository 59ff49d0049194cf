from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError
from datetime import date
from typing import Optional
from catalog.models import BookInstanceStatus, DEFAULT_STATUS
from catalog.utils import sanitize_text, parse_iso8601_date

class BookInstanceFormData(BaseModel):
    """
    Form fields as posted, trimmed and escaped. Never fails validation so the
    values can always be rendered back into the form.
    """
    book: str = ''
    imprint: str = ''
    status: str = ''
    due_back: str = ''

    model_config = ConfigDict(extra='ignore')

    @field_validator('book', 'imprint', 'status', mode='before')
    @classmethod
    def sanitize(cls, value):
        return sanitize_text(value)

    @field_validator('due_back', mode='before')
    @classmethod
    def strip_date(cls, value):
        return str(value).strip() if value else ''

    @property
    def due_back_yyyy_mm_dd(self):
        return self.due_back

class BookInstanceCreate(BaseModel):
    book: int
    imprint: str
    status: BookInstanceStatus = DEFAULT_STATUS
    due_back: Optional[date] = None

    @field_validator('book', mode='before')
    @classmethod
    def book_required(cls, value):
        value = str(value or '').strip()
        if not value:
            raise PydanticCustomError('book_missing', 'Book must be specified')
        if not (value.isascii() and value.isdigit()) or len(value) > 18:
            raise PydanticCustomError('book_invalid', 'Invalid book selection')
        return int(value)

    @field_validator('imprint', mode='before')
    @classmethod
    def imprint_required(cls, value):
        value = str(value or '').strip()
        if not value:
            raise PydanticCustomError('imprint_missing', 'Imprint must be specified')
        return value

    @field_validator('status', mode='before')
    @classmethod
    def status_or_default(cls, value):
        if not value:
            return DEFAULT_STATUS
        try:
            return BookInstanceStatus(value)
        except ValueError:
            raise PydanticCustomError('status_invalid', 'Invalid status')

    @field_validator('due_back', mode='before')
    @classmethod
    def due_back_iso8601(cls, value):
        if not value:
            return None
        if isinstance(value, date):
            return value
        try:
            return parse_iso8601_date(str(value))
        except ValueError:
            raise PydanticCustomError('date_invalid', 'Invalid date')
