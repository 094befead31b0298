from tests.conftest import ORGANIZER, _register_and_login

OTHER_ORGANIZER = {"email": "oscar@example.com", "password": "oscar-pass", "full_name": "Oscar Organizer", "role": "organizer"}


def _toggle(client, headers, event, submission, **extra):
    return client.post(
        "/api/v1/checkins/toggle",
        json={"event_id": event["id"], "form_submission_id": submission["id"], **extra},
        headers=headers,
    )


def test_toggle_collective_checkin(client, organizer_headers, event_and_form, submit):
    event, _ = event_and_form
    submission = submit()

    resp = _toggle(client, organizer_headers, event, submission)
    assert resp.status_code == 200, resp.text
    checkin = resp.json()
    assert checkin["checkin_status"] == "done"
    assert checkin["checked_in_by"] == ORGANIZER["email"]
    assert checkin["checked_in_at"] is not None
    assert checkin["event_day_id"] is None
    assert checkin["event_day_label"] == "All Days"

    resp = _toggle(client, organizer_headers, event, submission)
    assert resp.json()["id"] == checkin["id"]
    assert resp.json()["checkin_status"] == "undone"
    assert resp.json()["checked_in_by"] is None
    assert resp.json()["checked_in_at"] is None


def test_day_checkins_are_tracked_separately(client, organizer_headers, event_and_form, submit):
    event, _ = event_and_form
    submission = submit()

    _toggle(client, organizer_headers, event, submission)
    day = _toggle(client, organizer_headers, event, submission, event_day_id="day-1").json()
    assert day["event_day_label"] == "day-1"
    labelled = _toggle(client, organizer_headers, event, submission,
                       event_day_id="day-2", event_day_label="Day 2").json()
    assert labelled["event_day_label"] == "Day 2"

    checkins = client.get(f"/api/v1/checkins/submission/{submission['id']}", headers=organizer_headers).json()
    assert len(checkins) == 3
    assert all(c["checkin_status"] == "done" for c in checkins)


def test_bulk_toggle_reports_failures(client, organizer_headers, event_and_form, submit):
    event, _ = event_and_form
    first, second = submit(), submit(name="Bob", email="bob@example.com")

    resp = client.post(
        "/api/v1/checkins/bulk-toggle",
        json={"event_id": event["id"], "form_submission_ids": [first["id"], 4242, second["id"]]},
        headers=organizer_headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert [c["form_submission_id"] for c in body["checkins"]] == [first["id"], second["id"]]
    assert body["failed"] == [4242]


def test_set_status_and_status_map(client, organizer_headers, event_and_form, submit):
    event, _ = event_and_form
    first, second = submit(), submit(name="Bob", email="bob@example.com")

    resp = client.put(
        "/api/v1/checkins/status",
        json={"event_id": event["id"], "form_submission_id": first["id"], "checkin_status": "done",
              "notes": "Late arrival", "event_day_id": "day-1"},
        headers=organizer_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["notes"] == "Late arrival"
    _toggle(client, organizer_headers, event, second)

    status_map = client.get(f"/api/v1/checkins/event/{event['id']}/status-map", headers=organizer_headers).json()
    assert set(status_map) == {str(first["id"]), str(second["id"])}

    day_map = client.get(
        f"/api/v1/checkins/event/{event['id']}/status-map",
        params={"event_day_id": "day-1"},
        headers=organizer_headers,
    ).json()
    assert list(day_map) == [str(first["id"])]

    listed = client.get(f"/api/v1/checkins/event/{event['id']}", headers=organizer_headers).json()
    assert len(listed) == 2


def test_checkin_requires_event_owner_and_matching_event(client, organizer_headers, event_and_form, submit):
    event, _ = event_and_form
    submission = submit()
    other_headers = _register_and_login(client, OTHER_ORGANIZER)

    assert _toggle(client, other_headers, event, submission).status_code == 403

    resp = client.post("/api/v1/events/", json={"name": "Another Event"}, headers=organizer_headers)
    assert _toggle(client, organizer_headers, resp.json(), submission).status_code == 400


def test_deleting_submission_removes_checkins(client, organizer_headers, event_and_form, submit):
    event, _ = event_and_form
    submission = submit()
    _toggle(client, organizer_headers, event, submission)
    assert client.delete(f"/api/v1/submissions/{submission['id']}", headers=organizer_headers).status_code == 200
    assert client.get(f"/api/v1/checkins/event/{event['id']}", headers=organizer_headers).json() == []
