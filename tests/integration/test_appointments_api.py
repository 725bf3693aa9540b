"""Tests for the appointment endpoints."""
from datetime import date, timedelta


def _book(client, headers, service_id, day, time="10:00"):
    return client.post(
        "/appointments",
        headers=headers,
        json={"serviceId": service_id, "date": day, "time": time},
    )


class TestSlots:
    def test_public_slots_for_a_free_day(self, client, future_day):
        day = future_day()
        response = client.get("/appointments/slots", params={"date": day})

        assert response.status_code == 200
        body = response.json()
        assert body["date"] == day
        assert len(body["slots"]) == 17

    def test_booked_slot_disappears(self, client, user_headers, haircut, future_day):
        day = future_day()
        _book(client, user_headers, haircut.id, day, "13:00")

        slots = client.get("/appointments/slots", params={"date": day}).json()["slots"]
        assert "13:00" not in slots
        assert len(slots) == 16

    def test_past_day_has_no_slots(self, client):
        yesterday = (date.today() - timedelta(days=1)).isoformat()

        assert client.get("/appointments/slots", params={"date": yesterday}).json()["slots"] == []

    def test_bad_date(self, client):
        assert client.get("/appointments/slots", params={"date": "soon"}).status_code == 400

    def test_date_is_required(self, client):
        assert client.get("/appointments/slots").status_code == 422


class TestBookingApi:
    def test_end_to_end_two_clients_one_slot(
        self, client, user_headers, other_headers, haircut, shave, future_day
    ):
        day = future_day()

        first = _book(client, user_headers, haircut.id, day)
        assert first.status_code == 201
        appointment = first.json()["appointment"]
        assert appointment["status"] == "scheduled"
        assert appointment["serviceName"] == "Haircut"
        assert appointment["endTime"] == "10:30"

        taken = _book(client, other_headers, shave.id, day)
        assert taken.status_code == 409
        assert taken.json()["detail"] == "Slot already taken"

        canceled = client.post(f"/appointments/{appointment['id']}/cancel", headers=user_headers)
        assert canceled.status_code == 200
        assert canceled.json()["appointment"]["status"] == "canceled"

        second = _book(client, other_headers, shave.id, day)
        assert second.status_code == 201
        assert second.json()["appointment"]["serviceName"] == "Shave"

    def test_booking_requires_login(self, client, haircut, future_day):
        assert _book(client, {}, haircut.id, future_day()).status_code == 401

    def test_incomplete_input(self, client, user_headers):
        response = client.post("/appointments", headers=user_headers, json={"date": "2030-01-01"})

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Incomplete input")

    def test_past_slot(self, client, user_headers, haircut):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        response = _book(client, user_headers, haircut.id, yesterday)

        assert response.status_code == 400
        assert response.json()["detail"] == "Past-slot booking rejected"

    def test_beyond_horizon(self, client, user_headers, haircut, future_day):
        assert _book(client, user_headers, haircut.id, future_day(400)).status_code == 400

    def test_list_my_appointments(self, client, user_headers, other_headers, haircut, future_day):
        _book(client, user_headers, haircut.id, future_day(10), "09:00")
        _book(client, user_headers, haircut.id, future_day(20), "09:00")
        _book(client, other_headers, haircut.id, future_day(15), "09:00")

        listed = client.get("/appointments", headers=user_headers).json()

        assert [a["date"] for a in listed] == [future_day(20), future_day(10)]


class TestManageApi:
    def test_reschedule(self, client, user_headers, haircut, future_day):
        appointment_id = _book(client, user_headers, haircut.id, future_day()).json()["appointment"]["id"]

        response = client.patch(
            f"/appointments/{appointment_id}",
            headers=user_headers,
            json={"date": future_day(31), "time": "15:30"},
        )

        assert response.status_code == 200
        moved = response.json()["appointment"]
        assert moved["date"] == future_day(31)
        assert moved["time"] == "15:30"
        assert moved["status"] == "scheduled"

    def test_reschedule_to_past_keeps_the_slot(self, client, user_headers, haircut, future_day):
        appointment_id = _book(client, user_headers, haircut.id, future_day()).json()["appointment"]["id"]
        yesterday = (date.today() - timedelta(days=1)).isoformat()

        response = client.patch(
            f"/appointments/{appointment_id}",
            headers=user_headers,
            json={"date": yesterday, "time": "10:00"},
        )

        assert response.status_code == 400
        listed = client.get("/appointments", headers=user_headers).json()
        assert listed[0]["date"] == future_day()
        assert listed[0]["time"] == "10:00"

    def test_cannot_touch_someone_elses_appointment(
        self, client, user_headers, other_headers, haircut, future_day
    ):
        appointment_id = _book(client, user_headers, haircut.id, future_day()).json()["appointment"]["id"]

        assert client.post(f"/appointments/{appointment_id}/cancel", headers=other_headers).status_code == 404
        assert (
            client.patch(
                f"/appointments/{appointment_id}",
                headers=other_headers,
                json={"date": future_day(), "time": "11:00"},
            ).status_code
            == 404
        )

    def test_cancel_twice_succeeds(self, client, user_headers, haircut, future_day):
        appointment_id = _book(client, user_headers, haircut.id, future_day()).json()["appointment"]["id"]

        client.post(f"/appointments/{appointment_id}/cancel", headers=user_headers)
        again = client.post(f"/appointments/{appointment_id}/cancel", headers=user_headers)

        assert again.status_code == 200
        assert again.json()["appointment"]["status"] == "canceled"
