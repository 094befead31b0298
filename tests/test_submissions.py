import csv
import io


def test_submit_returns_display_status_and_answer_rows(client, organizer_headers, submit):
    submission = submit(years=5)
    assert submission["display_status"] == {"label": "Under Review", "tone": "neutral"}
    assert submission["participant_user_id"] is None

    resp = client.get(f"/api/v1/submissions/{submission['id']}/answers/values", headers=organizer_headers)
    assert resp.status_code == 200
    assert resp.json() == {"abstract": "A long enough abstract", "track": "AI", "years": 5}


def test_invalid_submission_lists_every_error(client, event_and_form):
    event, form = event_and_form
    resp = client.post("/api/v1/submissions/", json={
        "form_id": form["id"],
        "event_id": event["id"],
        "general_info": {"name": "Ada"},
        "answers": {"abstract": "short", "track": "Biology", "years": 99},
    })
    assert resp.status_code == 422
    assert [error["field_id"] for error in resp.json()["detail"]] == [
        "general_email", "years", "track", "abstract",
    ]


def test_submit_to_unknown_form(client, event_and_form):
    event, _ = event_and_form
    resp = client.post("/api/v1/submissions/", json={"form_id": 999, "event_id": event["id"]})
    assert resp.status_code == 404


def test_validate_endpoint(client, organizer_headers, event_and_form):
    _, form = event_and_form
    resp = client.post(
        f"/api/v1/registration-forms/{form['id']}/validate",
        json={"general_info": {"name": "Ada", "email": "ada@example.com"},
              "answers": {"abstract": "A long enough abstract", "track": "AI"}},
        headers=organizer_headers,
    )
    assert resp.status_code == 200
    assert resp.json() == []


def test_decision_sets_accepted_event(client, organizer_headers, event_and_form, submit):
    event, _ = event_and_form
    submission = submit()
    url = f"/api/v1/submissions/{submission['id']}/decision"

    resp = client.put(url, json={"decision_status": "accepted", "accepted_event_id": event["id"]},
                      headers=organizer_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["accepted_event_id"] == event["id"]
    assert body["decision_date"] is not None
    assert body["display_status"] == {"label": "Accepted", "tone": "success"}

    resp = client.put(url, json={"decision_status": "rejected", "accepted_event_id": event["id"]},
                      headers=organizer_headers)
    assert resp.json()["accepted_event_id"] is None
    assert resp.json()["display_status"]["label"] == "Not Accepted"


def test_approval_without_badge(client, organizer_headers, submit):
    submission = submit()
    resp = client.put(
        f"/api/v1/submissions/{submission['id']}/approval",
        json={"approval_status": "reserved"},
        headers=organizer_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["badge_generated"] is False
    assert body["submission"]["display_status"] == {"label": "Approved with Reserve", "tone": "warning"}


def test_only_owner_can_read_event_submissions(client, organizer_headers, reviewer_headers, event_and_form, submit):
    event, _ = event_and_form
    submit()
    assert client.get(f"/api/v1/submissions/event/{event['id']}", headers=reviewer_headers).status_code == 403
    resp = client.get(f"/api/v1/submissions/event/{event['id']}", headers=organizer_headers)
    assert len(resp.json()) == 1


def test_signed_in_participant_sees_own_submissions(client, reviewer_headers, event_and_form):
    event, form = event_and_form
    resp = client.post(
        "/api/v1/submissions/",
        json={
            "form_id": form["id"],
            "event_id": event["id"],
            "general_info": {"name": "Rene", "email": "reviewer@example.com"},
            "answers": {"abstract": "A long enough abstract", "track": "Systems"},
        },
        headers=reviewer_headers,
    )
    assert resp.status_code == 201
    assert resp.json()["participant_user_id"] is not None

    mine = client.get("/api/v1/submissions/me", headers=reviewer_headers).json()
    assert [s["id"] for s in mine] == [resp.json()["id"]]


def test_csv_export(client, organizer_headers, event_and_form, submit):
    _, form = event_and_form
    submit(name="Ada", email="ada@example.com", years=3)
    resp = client.get(f"/api/v1/submissions/form/{form['id']}/export", headers=organizer_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "attachment" in resp.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0] == ["Submitted At", "Name", "Email", "Years of experience", "Track", "Abstract"]
    assert rows[1][1:] == ["Ada", "ada@example.com", "3", "AI", "A long enough abstract"]


def test_bulk_delete(client, organizer_headers, event_and_form, submit):
    event, _ = event_and_form
    first, second = submit(), submit(name="Bob", email="bob@example.com")
    resp = client.post(
        "/api/v1/submissions/bulk-delete",
        json={"submission_ids": [first["id"], second["id"]]},
        headers=organizer_headers,
    )
    assert resp.json() == {"deleted": 2}
    assert client.get(f"/api/v1/submissions/event/{event['id']}", headers=organizer_headers).json() == []
