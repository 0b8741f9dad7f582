"""Shift client: cache, transitions and API transport."""

from shiftboard.client.controller import ShiftClient
from shiftboard.client.state import ClientState, FormState
from shiftboard.client.transport import ShiftApiTransport

__all__ = ["ClientState", "FormState", "ShiftApiTransport", "ShiftClient"]
