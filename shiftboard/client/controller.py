"""Drives the shift client state through the API transport."""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from shiftboard.client import state as transitions
from shiftboard.client.state import ClientState
from shiftboard.errors import TransportFailure


logger = logging.getLogger(__name__)


class ShiftTransport(Protocol):
    def list_shifts(self) -> list[dict[str, Any]]: ...

    def create_shift(self, payload: dict[str, Any]) -> dict[str, Any]: ...

    def update_shift(self, shift_id: int, payload: dict[str, Any]) -> dict[str, Any]: ...

    def delete_shift(self, shift_id: int) -> None: ...


def _decline(_prompt: str) -> bool:
    return False


class ShiftClient:
    """Keeps a local mirror of the shift list in step with the server.

    Mutations are never applied optimistically: create and update re-fetch the
    full list once the server accepts them, delete drops the row locally only
    after the server confirms. If that re-fetch fails the form still closes
    and the load error is shown. ``confirm`` is asked before every delete and
    defaults to declining.
    """

    def __init__(
        self,
        transport: ShiftTransport,
        confirm: Callable[[str], bool] = _decline,
        state: ClientState | None = None,
    ) -> None:
        self.transport = transport
        self.confirm = confirm
        self.state = state or ClientState()

    def load(self) -> ClientState:
        self.state = transitions.load_started(self.state)
        try:
            shifts = self.transport.list_shifts()
        except TransportFailure:
            logger.warning("Loading shifts failed.", exc_info=True)
            self.state = transitions.load_failed(self.state)
        else:
            self.state = transitions.load_succeeded(self.state, shifts)
        return self.state

    def open_form(self) -> ClientState:
        if not self.state.show_form:
            self.state = transitions.form_toggled(self.state)
        return self.state

    def change(self, **fields: str) -> ClientState:
        self.state = transitions.form_changed(self.state, **fields)
        return self.state

    def edit(self, shift_id: int) -> ClientState:
        shift = transitions.find_shift(self.state, shift_id)
        if shift is not None:
            self.state = transitions.edit_started(self.state, shift)
        return self.state

    def cancel(self) -> ClientState:
        self.state = transitions.form_reset(self.state)
        return self.state

    def submit(self) -> ClientState:
        if transitions.missing_required_fields(self.state.form):
            self.state = transitions.required_fields_missing(self.state)
            return self.state

        payload = transitions.form_payload(self.state.form)
        self.state = transitions.submit_started(self.state)
        try:
            if self.state.editing_id is not None:
                self.transport.update_shift(self.state.editing_id, payload)
            else:
                self.transport.create_shift(payload)
        except TransportFailure:
            logger.warning("Saving shift failed.", exc_info=True)
            self.state = transitions.submit_failed(self.state)
            return self.state

        # The write went through; a failed reload must not reopen the form.
        try:
            shifts = self.transport.list_shifts()
        except TransportFailure:
            logger.warning("Reloading shifts after save failed.", exc_info=True)
            self.state = transitions.load_failed(transitions.form_reset(self.state))
        else:
            self.state = transitions.submit_succeeded(self.state, shifts)
        return self.state

    def delete(self, shift_id: int) -> ClientState:
        if not self.confirm(transitions.DELETE_PROMPT):
            return self.state
        try:
            self.transport.delete_shift(shift_id)
        except TransportFailure:
            logger.warning("Deleting shift %s failed.", shift_id, exc_info=True)
            self.state = transitions.delete_failed(self.state)
        else:
            self.state = transitions.delete_succeeded(self.state, shift_id)
        return self.state
