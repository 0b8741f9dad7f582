"""Manager-facing shift pages backed by the REST API."""

from __future__ import annotations

from typing import Callable

from flask import Blueprint, abort, current_app, flash, redirect, render_template, request, url_for

from shiftboard.client.controller import ShiftClient, ShiftTransport
from shiftboard.client.state import ClientState, edit_started, find_shift, form_payload
from shiftboard.client.transport import ShiftApiTransport
from shiftboard.forms import SHIFT_FIELDS, DeleteShiftForm, ShiftForm


bp = Blueprint("ui", __name__)


def shift_api_transport() -> ShiftTransport:
    transport = current_app.extensions.get("shift_api_transport")
    if transport is not None:
        return transport
    return ShiftApiTransport(
        current_app.config["SHIFT_API_URL"],
        timeout=current_app.config.get("SHIFT_API_TIMEOUT"),
    )


def _client(confirm: Callable[[str], bool] = lambda _prompt: False) -> ShiftClient:
    return ShiftClient(shift_api_transport(), confirm=confirm)


def _render_board(state: ClientState, form: ShiftForm | None = None):
    if form is None:
        form = ShiftForm(formdata=None, data=form_payload(state.form))
    form.submit.label.text = "Update Shift" if state.editing_id is not None else "Create Shift"
    return render_template("shifts/index.html", state=state, form=form)


@bp.get("/")
def index():
    client = _client()
    client.load()

    edit_id = request.args.get("edit", type=int)
    if edit_id is not None:
        if find_shift(client.state, edit_id) is None:
            flash("Shift not found.", "warning")
        else:
            client.edit(edit_id)
    elif request.args.get("new"):
        client.open_form()

    return _render_board(client.state)


def _submit(shift_id: int | None = None):
    form = ShiftForm()
    if not form.validate_on_submit():
        abort(400, description="Invalid form submission.")

    client = _client()
    client.load()
    if shift_id is not None:
        client.edit(shift_id)
        if client.state.editing_id != shift_id:
            if not client.state.error:
                abort(404)
            # List unavailable: submit anyway so the failure surfaces as a save error.
            client.state = edit_started(client.state, {"id": shift_id})
    else:
        client.open_form()

    client.change(**{name: (form[name].data or "") for name in SHIFT_FIELDS})
    state = client.submit()
    if state.error and state.show_form:
        return _render_board(state, form)

    flash("Shift updated." if shift_id is not None else "Shift created.", "success")
    return redirect(url_for("ui.index"))


@bp.post("/shifts")
def shifts_create():
    return _submit()


@bp.post("/shifts/<int:shift_id>")
def shifts_update(shift_id: int):
    return _submit(shift_id)


@bp.get("/shifts/<int:shift_id>/delete")
def shifts_delete_confirm(shift_id: int):
    client = _client()
    client.load()
    shift = find_shift(client.state, shift_id)
    if shift is None:
        if client.state.error:
            return _render_board(client.state)
        abort(404)
    return render_template("shifts/confirm_delete.html", shift=shift, form=DeleteShiftForm())


@bp.post("/shifts/<int:shift_id>/delete")
def shifts_delete(shift_id: int):
    form = DeleteShiftForm()
    if not form.validate_on_submit():
        abort(400, description="Invalid form submission.")

    confirmed = request.form.get("confirm") == "y"
    client = _client(confirm=lambda _prompt: confirmed)
    client.load()
    state = client.delete(shift_id)
    if not confirmed:
        return redirect(url_for("ui.index"))
    if state.error:
        return _render_board(state)

    flash("Shift deleted.", "success")
    return redirect(url_for("ui.index"))
