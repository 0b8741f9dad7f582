"""Shift persistence with validation on every write."""

from __future__ import annotations

from typing import Any, Mapping

from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from shiftboard.errors import NotFound, ValidationFailed
from shiftboard.extensions import db
from shiftboard.forms import SHIFT_FIELDS, ShiftPayloadForm
from shiftboard.models import Shift
from shiftboard.timestamps import isoformat_utc


def shift_to_dict(shift: Shift) -> dict[str, Any]:
    return {
        "id": shift.id,
        "employee_name": shift.employee_name,
        "position": shift.position,
        "start_time": isoformat_utc(shift.start_time),
        "end_time": isoformat_utc(shift.end_time),
        "status": getattr(shift.status, "value", shift.status),
        "notes": shift.notes or "",
        "created_at": isoformat_utc(shift.created_at),
        "updated_at": isoformat_utc(shift.updated_at),
    }


def _validated(payload: Mapping[str, Any]) -> dict[str, Any]:
    form = ShiftPayloadForm.from_payload(payload)
    if not form.validate():
        raise ValidationFailed(form.full_messages())
    return form.cleaned_data()


class ShiftStore:
    """Create, read, update and delete shifts.

    Writes validate the complete candidate record before touching the
    session, so a rejected payload never leaves a partial row behind.
    """

    def __init__(self, session=None) -> None:
        self.session = session if session is not None else db.session

    def list(self) -> list[Shift]:
        return list(self.session.execute(select(Shift).order_by(Shift.id.asc())).scalars().all())

    def get(self, shift_id: int) -> Shift:
        shift = self.session.get(Shift, shift_id)
        if shift is None:
            raise NotFound(shift_id)
        return shift

    def create(self, fields: Mapping[str, Any]) -> Shift:
        values = _validated(fields)
        shift = Shift(**values)
        try:
            self.session.add(shift)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        current_app.logger.info("Shift %s created for %s.", shift.id, shift.employee_name)
        return shift

    def update(self, shift_id: int, fields: Mapping[str, Any]) -> Shift:
        shift = self.get(shift_id)
        candidate = {name: value for name, value in shift_to_dict(shift).items() if name in SHIFT_FIELDS}
        candidate.update({name: fields[name] for name in SHIFT_FIELDS if name in fields})
        values = _validated(candidate)

        try:
            for name, value in values.items():
                setattr(shift, name, value)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        current_app.logger.info("Shift %s updated.", shift.id)
        return shift

    def delete(self, shift_id: int) -> None:
        shift = self.get(shift_id)
        try:
            self.session.delete(shift)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        current_app.logger.info("Shift %s deleted.", shift_id)
