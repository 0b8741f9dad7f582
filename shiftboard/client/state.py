"""Client-side shift cache and form state.

Every transition is a pure function ``(state, ...) -> ClientState``; nothing
here performs I/O. ``shiftboard.client.controller`` sequences transitions
around API calls.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from typing import Any, Iterable, Mapping

from shiftboard.timestamps import parse_timestamp


LOAD_ERROR = "Unable to load shifts. Make sure the API is running."
REQUIRED_FIELDS_ERROR = "Please fill in all required fields"
SAVE_ERROR = "Failed to save shift"
DELETE_ERROR = "Failed to delete shift"
DELETE_PROMPT = "Are you sure you want to delete this shift?"

REQUIRED_FORM_FIELDS = ("employee_name", "position", "start_time", "end_time")

STATUS_BADGES = {
    "scheduled": "badge badge-scheduled",
    "completed": "badge badge-completed",
    "cancelled": "badge badge-cancelled",
}
DEFAULT_STATUS_BADGE = "badge badge-neutral"


@dataclass(frozen=True)
class FormState:
    employee_name: str = ""
    position: str = ""
    start_time: str = ""
    end_time: str = ""
    status: str = "scheduled"
    notes: str = ""


@dataclass(frozen=True)
class ClientState:
    shifts: tuple[dict[str, Any], ...] = ()
    loading: bool = False
    error: str = ""
    form: FormState = field(default_factory=FormState)
    show_form: bool = False
    editing_id: int | None = None


def load_started(state: ClientState) -> ClientState:
    return replace(state, loading=True)


def load_succeeded(state: ClientState, shifts: Iterable[Mapping[str, Any]]) -> ClientState:
    return replace(state, shifts=tuple(dict(shift) for shift in shifts), error="", loading=False)


def load_failed(state: ClientState) -> ClientState:
    return replace(state, shifts=(), error=LOAD_ERROR, loading=False)


def form_toggled(state: ClientState) -> ClientState:
    if state.show_form:
        return form_reset(state)
    return replace(state, show_form=True)


def form_changed(state: ClientState, **fields: str) -> ClientState:
    return replace(state, form=replace(state.form, **fields))


def form_reset(state: ClientState) -> ClientState:
    return replace(state, form=FormState(), editing_id=None, show_form=False)


def required_fields_missing(state: ClientState) -> ClientState:
    return replace(state, error=REQUIRED_FIELDS_ERROR)


def submit_started(state: ClientState) -> ClientState:
    return replace(state, loading=True)


def submit_succeeded(state: ClientState, shifts: Iterable[Mapping[str, Any]]) -> ClientState:
    return form_reset(load_succeeded(state, shifts))


def submit_failed(state: ClientState) -> ClientState:
    return replace(state, error=SAVE_ERROR, loading=False, show_form=True)


def edit_started(state: ClientState, shift: Mapping[str, Any]) -> ClientState:
    form = FormState(
        employee_name=shift.get("employee_name") or "",
        position=shift.get("position") or "",
        start_time=to_form_timestamp(shift.get("start_time")),
        end_time=to_form_timestamp(shift.get("end_time")),
        status=shift.get("status") or "scheduled",
        notes=shift.get("notes") or "",
    )
    return replace(state, form=form, editing_id=shift.get("id"), show_form=True)


def delete_succeeded(state: ClientState, shift_id: int) -> ClientState:
    remaining = tuple(shift for shift in state.shifts if shift.get("id") != shift_id)
    return replace(state, shifts=remaining, error="")


def delete_failed(state: ClientState) -> ClientState:
    return replace(state, error=DELETE_ERROR)


def find_shift(state: ClientState, shift_id: int) -> dict[str, Any] | None:
    return next((shift for shift in state.shifts if shift.get("id") == shift_id), None)


def missing_required_fields(form: FormState) -> list[str]:
    # end_time > start_time is left to the API.
    return [name for name in REQUIRED_FORM_FIELDS if not getattr(form, name)]


def form_payload(form: FormState) -> dict[str, str]:
    return asdict(form)


def to_form_timestamp(value: str | None) -> str:
    """Minute precision, as accepted by a ``datetime-local`` input."""
    return value[:16] if value else ""


def status_badge(status: str | None) -> str:
    return STATUS_BADGES.get(status or "", DEFAULT_STATUS_BADGE)


def format_datetime(value: str | None) -> str:
    if not value:
        return ""
    try:
        parsed: datetime = parse_timestamp(value)
    except ValueError:
        return value
    hour = parsed.hour % 12 or 12
    meridiem = "AM" if parsed.hour < 12 else "PM"
    return f"{parsed:%b} {parsed.day}, {hour}:{parsed:%M} {meridiem}"
