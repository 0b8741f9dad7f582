"""WTForms form classes."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import Field, Form, SelectField, StringField, SubmitField
from wtforms.validators import AnyOf, Length, Optional, StopValidation, ValidationError
from wtforms.widgets import DateTimeLocalInput

from shiftboard.models import ShiftStatus
from shiftboard.timestamps import parse_timestamp


SHIFT_FIELDS = ("employee_name", "position", "start_time", "end_time", "status", "notes")
TOO_LONG = "is too long (maximum is %(max)d characters)"
STATUS_CHOICES = [
    (ShiftStatus.SCHEDULED.value, "Scheduled"),
    (ShiftStatus.COMPLETED.value, "Completed"),
    (ShiftStatus.CANCELLED.value, "Cancelled"),
]


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class Present:
    """Fails on missing, null or whitespace-only input."""

    def __init__(self, message: str = "can't be blank") -> None:
        self.message = message

    def __call__(self, form: Form, field: Field) -> None:
        raw_value = field.raw_data[0] if field.raw_data else None
        if raw_value is None or (isinstance(raw_value, str) and not raw_value.strip()):
            field.errors[:] = []
            raise StopValidation(self.message)


class IsoDateTimeField(Field):
    """ISO-8601 timestamp, normalized to UTC."""

    def process_formdata(self, valuelist: list[Any]) -> None:
        self.data = None
        if not valuelist or valuelist[0] is None:
            return
        raw_value = str(valuelist[0])
        if not raw_value.strip():
            return
        try:
            self.data = parse_timestamp(raw_value)
        except (ValueError, OverflowError) as exc:
            raise ValueError("is not a valid timestamp") from exc


class ShiftPayloadForm(Form):
    """Schema for shift payloads crossing the API boundary."""

    employee_name = StringField("Employee name", validators=[Present(), Length(max=255, message=TOO_LONG)], filters=[_strip])
    position = StringField("Position", validators=[Present(), Length(max=255, message=TOO_LONG)], filters=[_strip])
    start_time = IsoDateTimeField("Start time", validators=[Present()])
    end_time = IsoDateTimeField("End time", validators=[Present()])
    status = StringField(
        "Status",
        validators=[
            Present(),
            AnyOf([status.value for status in ShiftStatus], message="is not included in the list"),
        ],
        filters=[_strip],
    )
    notes = StringField("Notes", validators=[Optional()])

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ShiftPayloadForm":
        return cls(formdata=payload_to_formdata(payload))

    def validate_end_time(self, field: IsoDateTimeField) -> None:
        start: datetime | None = self.start_time.data
        if start is not None and field.data is not None and field.data <= start:
            raise ValidationError("must be after start time")

    def full_messages(self) -> list[str]:
        messages: list[str] = []
        for field in self:
            for message in field.errors:
                messages.append(f"{field.label.text} {message}")
        return messages

    def cleaned_data(self) -> dict[str, Any]:
        return {
            "employee_name": self.employee_name.data,
            "position": self.position.data,
            "start_time": self.start_time.data,
            "end_time": self.end_time.data,
            "status": ShiftStatus(self.status.data),
            "notes": self.notes.data or "",
        }


def payload_to_formdata(payload: Mapping[str, Any]) -> MultiDict:
    """Whitelist shift keys and flatten JSON scalars into form data.

    Nulls and structured values (lists, objects) are dropped so they read as
    missing input.
    """
    formdata = MultiDict()
    for name in SHIFT_FIELDS:
        value = payload.get(name)
        if value is None or isinstance(value, (list, dict)):
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        formdata.add(name, value if isinstance(value, str) else str(value))
    return formdata


class ShiftForm(FlaskForm):
    """Create/edit form shown by the UI.

    Fields carry no validators: the required-field pre-check belongs to the
    client and every other rule is enforced by the API.
    """

    employee_name = StringField("Employee Name *")
    position = StringField("Position *")
    start_time = StringField("Start Time *", widget=DateTimeLocalInput())
    end_time = StringField("End Time *", widget=DateTimeLocalInput())
    status = SelectField("Status *", choices=STATUS_CHOICES, default=ShiftStatus.SCHEDULED.value, validate_choice=False)
    notes = StringField("Notes")
    submit = SubmitField("Create Shift")


class DeleteShiftForm(FlaskForm):
    submit = SubmitField("Delete")
