from __future__ import annotations

from sqlalchemy import select

from shiftboard.client.state import LOAD_ERROR, REQUIRED_FIELDS_ERROR, SAVE_ERROR
from shiftboard.extensions import db
from shiftboard.models import Shift, ShiftStatus


FORM_DATA = {
    "employee_name": "John Doe",
    "position": "Developer",
    "start_time": "2025-11-08T09:00",
    "end_time": "2025-11-08T17:00",
    "status": "scheduled",
    "notes": "Morning shift",
}


def _shifts(client) -> list[Shift]:
    with client.application.app_context():
        rows = list(db.session.execute(select(Shift).order_by(Shift.id.asc())).scalars().all())
        db.session.expunge_all()
        return rows


def test_board_lists_shifts_with_status_badge(client, api_transport, store, shift_payload):
    store.create({**shift_payload, "status": "completed"})

    page = client.get("/")
    body = page.get_data(as_text=True)

    assert page.status_code == 200
    assert "John Doe" in body
    assert "badge badge-completed" in body
    assert "Nov 8, 9:00 AM" in body
    assert "Morning shift" in body


def test_board_shows_empty_state(client, api_transport):
    body = client.get("/").get_data(as_text=True)

    assert "No shifts scheduled yet." in body
    assert 'data-cy="employee-name"' not in body


def test_board_shows_load_error_when_api_is_down(client, unreachable_transport):
    page = client.get("/")
    body = page.get_data(as_text=True)

    assert page.status_code == 200
    assert LOAD_ERROR in body
    assert "No shifts scheduled yet." in body


def test_new_form_defaults_status_to_scheduled(client, api_transport):
    body = client.get("/?new=1").get_data(as_text=True)

    assert "Create New Shift" in body
    assert 'data-cy="employee-name"' in body
    assert 'selected value="scheduled"' in body


def test_create_shift_from_form(client, api_transport):
    response = client.post("/shifts", data=FORM_DATA, follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/")

    rows = _shifts(client)
    assert len(rows) == 1
    assert rows[0].employee_name == "John Doe"
    assert rows[0].status == ShiftStatus.SCHEDULED

    body = client.get("/").get_data(as_text=True)
    assert "Shift created." in body
    assert 'data-cy="shift-item"' in body


def test_create_with_empty_name_shows_inline_error_without_request(client, api_transport, api_session):
    response = client.post("/shifts", data={**FORM_DATA, "employee_name": ""})
    body = response.get_data(as_text=True)

    assert response.status_code == 200
    assert REQUIRED_FIELDS_ERROR in body
    assert 'value="Developer"' in body
    assert api_session.calls == [("GET", "/api/shifts")]
    assert _shifts(client) == []


def test_create_rejected_by_api_keeps_form_data(client, api_transport):
    response = client.post("/shifts", data={**FORM_DATA, "end_time": FORM_DATA["start_time"]})
    body = response.get_data(as_text=True)

    assert response.status_code == 200
    assert SAVE_ERROR in body
    assert 'value="John Doe"' in body
    assert 'value="2025-11-08T09:00"' in body
    assert _shifts(client) == []


def test_edit_form_is_prefilled_and_updates(client, api_transport, store, shift_payload):
    shift_id = store.create(shift_payload).id

    edit_page = client.get(f"/?edit={shift_id}").get_data(as_text=True)
    assert "Edit Shift" in edit_page
    assert "Update Shift" in edit_page
    assert 'value="2025-11-08T17:00"' in edit_page
    assert f'action="/shifts/{shift_id}"' in edit_page

    response = client.post(f"/shifts/{shift_id}", data={**FORM_DATA, "status": "completed"}, follow_redirects=False)
    assert response.status_code == 302

    rows = _shifts(client)
    assert rows[0].status == ShiftStatus.COMPLETED


def test_edit_unknown_shift_shows_warning(client, api_transport):
    body = client.get("/?edit=404").get_data(as_text=True)

    assert "Shift not found." in body
    assert "Edit Shift" not in body


def test_update_unknown_shift_returns_404(client, api_transport):
    response = client.post("/shifts/404", data=FORM_DATA)

    assert response.status_code == 404


def test_delete_requires_confirmation(client, api_transport, store, shift_payload):
    shift_id = store.create(shift_payload).id

    confirm_page = client.get(f"/shifts/{shift_id}/delete")
    assert confirm_page.status_code == 200
    assert "Are you sure you want to delete this shift?" in confirm_page.get_data(as_text=True)

    declined = client.post(f"/shifts/{shift_id}/delete", data={}, follow_redirects=False)
    assert declined.status_code == 302
    assert len(_shifts(client)) == 1

    confirmed = client.post(f"/shifts/{shift_id}/delete", data={"confirm": "y"}, follow_redirects=True)
    assert confirmed.status_code == 200
    assert "Shift deleted." in confirmed.get_data(as_text=True)
    assert _shifts(client) == []


def test_delete_of_missing_shift_shows_error(client, api_transport):
    response = client.post("/shifts/404/delete", data={"confirm": "y"})

    assert response.status_code == 200
    assert "Failed to delete shift" in response.get_data(as_text=True)


def test_delete_confirmation_for_unknown_shift_is_404(client, api_transport):
    assert client.get("/shifts/404/delete").status_code == 404


def test_update_while_api_is_down_keeps_entered_data(client, unreachable_transport):
    response = client.post("/shifts/1", data={**FORM_DATA, "status": "completed"})
    body = response.get_data(as_text=True)

    assert response.status_code == 200
    assert SAVE_ERROR in body
    assert 'value="John Doe"' in body
    assert 'action="/shifts/1"' in body
    assert "Update Shift" in body
