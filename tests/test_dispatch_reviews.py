import pytest

from tests.conftest import REVIEWER, _register_and_login

OTHER_ORGANIZER = {"email": "oscar@example.com", "password": "oscar-pass", "full_name": "Oscar Organizer", "role": "organizer"}


@pytest.fixture
def member(client, organizer_headers):
    resp = client.post(
        "/api/v1/committees/members/",
        json={"first_name": "Rene", "last_name": "Reviewer", "email": REVIEWER["email"].upper()},
        headers=organizer_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def _status(client, headers, submission_id):
    return client.get(f"/api/v1/submissions/{submission_id}", headers=headers).json()["dispatching_status"]


def _dispatch(client, headers, event, form, mapping):
    return client.put(
        "/api/v1/dispatch/",
        json={"event_id": event["id"], "form_id": form["id"], "dispatching": mapping},
        headers=headers,
    )


def test_dispatch_round_trip_and_status_sync(client, organizer_headers, event_and_form, submit, member):
    event, form = event_and_form
    first, second = submit(), submit(name="Bob", email="bob@example.com")

    resp = _dispatch(client, organizer_headers, event, form,
                     {str(first["id"]): [member["id"]], str(second["id"]): [member["id"]]})
    assert resp.status_code == 200, resp.text
    assert resp.json()["dispatching"] == {str(first["id"]): [member["id"]], str(second["id"]): [member["id"]]}
    assert _status(client, organizer_headers, first["id"]) == "dispatched"

    resp = _dispatch(client, organizer_headers, event, form, {str(first["id"]): [member["id"]]})
    assert resp.status_code == 200
    assert _status(client, organizer_headers, second["id"]) == "pending"

    resp = client.get(
        "/api/v1/dispatch/", params={"event_id": event["id"], "form_id": form["id"]}, headers=organizer_headers
    )
    assert resp.json()["dispatching"] == {str(first["id"]): [member["id"]]}
    assert len(client.get("/api/v1/dispatch/mine", headers=organizer_headers).json()) == 1


def test_dispatch_for_foreign_event_is_forbidden(client, reviewer_headers, event_and_form):
    event, form = event_and_form
    resp = _dispatch(client, reviewer_headers, event, form, {})
    assert resp.status_code == 403


def test_reviewer_sees_dispatched_items(client, organizer_headers, reviewer_headers, event_and_form, submit, member):
    event, form = event_and_form
    submission = submit()
    _dispatch(client, organizer_headers, event, form, {str(submission["id"]): [member["id"]]})

    items = client.get("/api/v1/dispatch/me/items", headers=reviewer_headers).json()
    assert len(items) == 1
    item = items[0]
    assert item["submission_id"] == submission["id"]
    assert item["submission_type"] == "submission"
    assert item["event_name"] == event["name"]
    assert item["form_title"] == form["title"]
    assert item["submission"]["general_info"]["email"] == "ada@example.com"

    grouped = client.get("/api/v1/dispatch/me/items/by-event", headers=reviewer_headers).json()
    assert list(grouped) == [str(event["id"])]

    assert client.get("/api/v1/dispatch/me/items", headers=organizer_headers).json() == []


def test_dispatched_items_skip_missing_submissions(client, organizer_headers, reviewer_headers, event_and_form, submit,
                                                   member):
    event, form = event_and_form
    submission = submit()
    _dispatch(client, organizer_headers, event, form, {str(submission["id"]): [member["id"]]})
    assert client.delete(f"/api/v1/submissions/{submission['id']}", headers=organizer_headers).status_code == 200
    assert client.get("/api/v1/dispatch/me/items", headers=reviewer_headers).json() == []


def test_review_lifecycle(client, organizer_headers, reviewer_headers, event_and_form, submit, member):
    event, form = event_and_form
    submission = submit()
    dispatch = _dispatch(client, organizer_headers, event, form, {str(submission["id"]): [member["id"]]}).json()

    review = {
        "participant_id": member["id"],
        "event_id": event["id"],
        "form_id": form["id"],
        "submission_id": submission["id"],
        "answers": {"score": 3},
    }
    resp = client.post("/api/v1/reviews/", json=review, headers=reviewer_headers)
    assert resp.status_code == 200, resp.text
    review_id = resp.json()["id"]
    assert resp.json()["status"] == "draft"
    assert _status(client, organizer_headers, submission["id"]) == "in_review"

    resp = client.post("/api/v1/reviews/", json={**review, "status": "completed", "answers": {"score": 5}},
                       headers=reviewer_headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == review_id
    assert resp.json()["answers"] == {"score": 5}
    assert _status(client, organizer_headers, submission["id"]) == "completed"

    resp = client.post("/api/v1/reviews/", json=review, headers=reviewer_headers)
    assert resp.status_code == 409

    progress = client.get(f"/api/v1/dispatch/{dispatch['id']}/progress", headers=organizer_headers).json()
    assert progress == [{
        "submission_id": submission["id"], "assigned": 1, "drafts": 0, "completed": 1,
        "dispatching_status": "completed",
    }]

    mine = client.get("/api/v1/reviews/me", headers=reviewer_headers).json()
    assert [r["id"] for r in mine] == [review_id]
    by_submission = client.get(f"/api/v1/reviews/submission/{submission['id']}", headers=organizer_headers).json()
    assert [r["id"] for r in by_submission] == [review_id]


def test_only_the_member_can_review(client, organizer_headers, event_and_form, submit, member):
    event, form = event_and_form
    submission = submit()
    resp = client.post(
        "/api/v1/reviews/",
        json={
            "participant_id": member["id"],
            "event_id": event["id"],
            "form_id": form["id"],
            "submission_id": submission["id"],
        },
        headers=organizer_headers,
    )
    assert resp.status_code == 403


def test_jury_profile_upsert(client, reviewer_headers):
    assert client.get("/api/v1/committees/jury/me", headers=reviewer_headers).status_code == 404
    resp = client.put(
        "/api/v1/committees/jury/me",
        json={"first_name": "Rene", "last_name": "Reviewer", "research_domains": ["NLP"]},
        headers=reviewer_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["email"] == REVIEWER["email"]
    assert resp.json()["profile_completed"] is True


@pytest.fixture
def other_headers(client):
    return _register_and_login(client, OTHER_ORGANIZER)


@pytest.fixture
def other_member(client, other_headers):
    resp = client.post(
        "/api/v1/committees/members/",
        json={"first_name": "Rene", "last_name": "Reviewer", "email": REVIEWER["email"]},
        headers=other_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def other_event(client, other_headers):
    resp = client.post("/api/v1/events/", json={"name": "Workshop 2026"}, headers=other_headers)
    assert resp.status_code in (200, 201), resp.text
    return resp.json()


def test_dispatch_rejects_submissions_of_another_organizer(
    client, organizer_headers, other_headers, event_and_form, submit, other_member, other_event
):
    event, form = event_and_form
    submission = submit()

    resp = _dispatch(client, other_headers, other_event, {"id": 999}, {str(submission["id"]): [other_member["id"]]})
    assert resp.status_code == 400

    resp = _dispatch(client, other_headers, other_event, form, {str(submission["id"]): [other_member["id"]]})
    assert resp.status_code == 400
    assert _status(client, organizer_headers, submission["id"]) is None


def test_dispatch_rejects_foreign_members_and_wrong_event(
    client, organizer_headers, event_and_form, submit, member, other_member
):
    event, form = event_and_form
    submission = submit()

    resp = _dispatch(client, organizer_headers, event, form, {str(submission["id"]): [other_member["id"]]})
    assert resp.status_code == 400

    resp = client.post("/api/v1/events/", json={"name": "Second Symposium"}, headers=organizer_headers)
    second_event = resp.json()
    resp = _dispatch(client, organizer_headers, second_event, form, {str(submission["id"]): [member["id"]]})
    assert resp.status_code == 400

    resp = _dispatch(client, organizer_headers, event, form, {"4242": [member["id"]]})
    assert resp.status_code == 400
    assert _status(client, organizer_headers, submission["id"]) is None


def test_undispatched_review_is_forbidden_and_keeps_decision(
    client, organizer_headers, reviewer_headers, event_and_form, submit, other_member, other_event
):
    event, form = event_and_form
    submission = submit()
    resp = client.put(
        f"/api/v1/submissions/{submission['id']}/decision",
        json={"decision_status": "accepted"},
        headers=organizer_headers,
    )
    assert resp.status_code == 200, resp.text

    review = {
        "participant_id": other_member["id"],
        "event_id": event["id"],
        "form_id": form["id"],
        "submission_id": submission["id"],
    }
    assert client.post("/api/v1/reviews/", json=review, headers=reviewer_headers).status_code == 403
    review["event_id"] = other_event["id"]
    assert client.post("/api/v1/reviews/", json=review, headers=reviewer_headers).status_code == 403

    current = client.get(f"/api/v1/submissions/{submission['id']}", headers=organizer_headers).json()
    assert current["dispatching_status"] is None
    assert current["display_status"] == {"label": "Accepted", "tone": "success"}


def test_review_by_unassigned_member_of_same_organizer_is_forbidden(
    client, organizer_headers, reviewer_headers, event_and_form, submit, member
):
    event, form = event_and_form
    first, second = submit(), submit(name="Bob", email="bob@example.com")
    _dispatch(client, organizer_headers, event, form, {str(first["id"]): [member["id"]]})

    resp = client.post(
        "/api/v1/reviews/",
        json={
            "participant_id": member["id"],
            "event_id": event["id"],
            "form_id": form["id"],
            "submission_id": second["id"],
        },
        headers=reviewer_headers,
    )
    assert resp.status_code == 403
    assert _status(client, organizer_headers, second["id"]) is None


def test_progress_counts_each_member_once(client, organizer_headers, reviewer_headers, event_and_form, submit, member):
    event, form = event_and_form
    submission = submit()
    dispatch = _dispatch(client, organizer_headers, event, form, {str(submission["id"]): [member["id"]]}).json()

    base = {"participant_id": member["id"], "event_id": event["id"], "submission_id": submission["id"]}
    client.post("/api/v1/reviews/", json={**base, "form_id": 501, "status": "completed"}, headers=reviewer_headers)
    client.post("/api/v1/reviews/", json={**base, "form_id": 502}, headers=reviewer_headers)

    progress = client.get(f"/api/v1/dispatch/{dispatch['id']}/progress", headers=organizer_headers).json()
    assert progress[0]["assigned"] == 1
    assert progress[0]["drafts"] == 0
    assert progress[0]["completed"] == 1
    assert progress[0]["dispatching_status"] == "completed"


EVALUATION_FORM = {
    "title": "Session feedback",
    "general_info": {"collect_name": False, "collect_email": False},
    "fields": [
        {"id": "rating", "type": "number", "label": "Rating", "required": True, "validation": {"min": 1, "max": 5}},
    ],
}


@pytest.fixture
def evaluation_setup(client, organizer_headers):
    resp = client.post("/api/v1/events/", json={"name": "Feedback Day"}, headers=organizer_headers)
    assert resp.status_code in (200, 201), resp.text
    event = resp.json()
    resp = client.post("/api/v1/evaluation-forms/", json=EVALUATION_FORM, headers=organizer_headers)
    assert resp.status_code == 201, resp.text
    return event, resp.json()


def test_evaluation_answers_save_list_and_delete(client, organizer_headers, reviewer_headers, evaluation_setup):
    _, form = evaluation_setup

    resp = client.post(
        "/api/v1/evaluation-answers/",
        json={"evaluation_form_id": form["id"], "answers": {"rating": 9}},
        headers=reviewer_headers,
    )
    assert resp.status_code == 422

    resp = client.post(
        "/api/v1/evaluation-answers/",
        json={"evaluation_form_id": form["id"], "submitted_by": REVIEWER["email"], "answers": {"rating": 4}},
        headers=reviewer_headers,
    )
    assert resp.status_code == 201, resp.text
    answer = resp.json()
    assert answer["user_id"] is not None

    anonymous = client.post(
        "/api/v1/evaluation-answers/", json={"evaluation_form_id": form["id"], "answers": {"rating": 2}}
    ).json()
    assert anonymous["user_id"] is None

    assert client.post(
        "/api/v1/evaluation-answers/", json={"evaluation_form_id": 999, "answers": {}}
    ).status_code == 404

    listed = client.get(f"/api/v1/evaluation-answers/form/{form['id']}", headers=organizer_headers).json()
    assert {a["id"] for a in listed} == {answer["id"], anonymous["id"]}
    assert client.get(f"/api/v1/evaluation-answers/form/{form['id']}", headers=reviewer_headers).status_code == 403

    mine = client.get("/api/v1/evaluation-answers/me", headers=reviewer_headers).json()
    assert [a["id"] for a in mine] == [answer["id"]]
    mine = client.get("/api/v1/evaluation-answers/me", params={"form_id": 999}, headers=reviewer_headers).json()
    assert mine == []

    assert client.delete(f"/api/v1/evaluation-answers/{anonymous['id']}", headers=reviewer_headers).status_code == 403
    assert client.delete(f"/api/v1/evaluation-answers/{answer['id']}", headers=reviewer_headers).status_code == 200
    assert client.delete(f"/api/v1/evaluation-answers/{anonymous['id']}", headers=organizer_headers).status_code == 200
    assert client.get(f"/api/v1/evaluation-answers/form/{form['id']}", headers=organizer_headers).json() == []


def test_reviewer_sees_dispatched_evaluation_answers(
    client, organizer_headers, reviewer_headers, evaluation_setup, member
):
    event, form = evaluation_setup
    answer = client.post(
        "/api/v1/evaluation-answers/",
        json={"evaluation_form_id": form["id"], "submitted_by": "ada@example.com", "answers": {"rating": 5}},
    ).json()

    resp = _dispatch(client, organizer_headers, event, form, {str(answer["id"]): [member["id"]]})
    assert resp.status_code == 200, resp.text

    items = client.get("/api/v1/dispatch/me/items", headers=reviewer_headers).json()
    assert len(items) == 1
    item = items[0]
    assert item["submission_type"] == "evaluation"
    assert item["form_title"] == EVALUATION_FORM["title"]
    assert item["submission"]["evaluation_form_id"] == form["id"]
    assert item["submission"]["submitted_by"] == "ada@example.com"
    assert item["submission"]["answers"] == {"rating": 5}

    resp = client.post(
        "/api/v1/reviews/",
        json={
            "participant_id": member["id"],
            "event_id": event["id"],
            "form_id": form["id"],
            "submission_id": answer["id"],
            "submission_type": "evaluation",
            "status": "completed",
        },
        headers=reviewer_headers,
    )
    assert resp.status_code == 200, resp.text
