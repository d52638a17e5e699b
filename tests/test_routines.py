import pytest
from sqlalchemy.exc import OperationalError

from gymcloud.errors import RoutinePublishError, ValidationError
from gymcloud.extensions import db
from gymcloud.models import AuditLog, IndependentRoutine, MonthlyRoutine
from gymcloud.services.routines import independent_publisher, publish_routine, routine_publisher

WEEKS = [{
    "week_number": 1,
    "days": [{"day_name": "Monday", "exercises": [{"name": "Squat", "series": 4, "reps": "8"}]}],
}]


def draft(user_id, month=1, year=2025, **extra):
    return dict(user_id=user_id, month=month, year=year, weeks=WEEKS, **extra)


def statuses(model, user_id):
    return sorted(r.status for r in model.query.filter_by(user_id=user_id).all())


def test_publish_archives_previous_routine(coach, member):
    first = publish_routine(coach.id, draft(member.id, month=1))
    second = publish_routine(coach.id, draft(member.id, month=2))

    assert first.status == "ARCHIVED"
    assert second.status == "ACTIVE"
    assert MonthlyRoutine.query.filter_by(user_id=member.id).count() == 2
    assert [r.id for r in routine_publisher.active_for(member.id)] == [second.id]


def test_publish_does_not_touch_other_members(coach, make_user):
    alice = make_user()
    bob = make_user()
    bobs = publish_routine(coach.id, draft(bob.id))

    publish_routine(coach.id, draft(alice.id))

    assert db.session.get(MonthlyRoutine, bobs.id).status == "ACTIVE"


def test_namespaces_are_independent(coach, member):
    assigned = publish_routine(coach.id, draft(member.id))

    own = independent_publisher.publish(member.id, draft(member.id, title="Home workout"))

    assert own.status == "ACTIVE"
    assert own.title == "Home workout"
    assert db.session.get(MonthlyRoutine, assigned.id).status == "ACTIVE"
    assert statuses(IndependentRoutine, member.id) == ["ACTIVE"]


def test_failed_insert_leaves_member_without_active_routine(coach, member, monkeypatch):
    publish_routine(coach.id, draft(member.id, month=1))

    def failing_insert(coach_id, routine_draft):
        raise OperationalError("INSERT INTO routines", {}, Exception("disk full"))

    monkeypatch.setattr(routine_publisher, "_insert", failing_insert)

    with pytest.raises(RoutinePublishError) as excinfo:
        publish_routine(coach.id, draft(member.id, month=2))

    assert excinfo.value.code == "ROUTINE_PUBLISH_FAILED"
    assert excinfo.value.status_code == 500
    assert routine_publisher.active_for(member.id) == []
    assert statuses(MonthlyRoutine, member.id) == ["ARCHIVED"]


def test_missing_user_id_is_rejected_before_writing(coach, member):
    existing = publish_routine(coach.id, draft(member.id))

    with pytest.raises(ValidationError) as excinfo:
        publish_routine(coach.id, {"month": 2, "year": 2025})

    assert excinfo.value.code == "MISSING_FIELDS"
    assert db.session.get(MonthlyRoutine, existing.id).status == "ACTIVE"


def test_unknown_user_is_rejected(coach):
    with pytest.raises(ValidationError) as excinfo:
        publish_routine(coach.id, draft(9999))

    assert excinfo.value.code == "INVALID_USER"
    assert MonthlyRoutine.query.count() == 0


def test_publish_is_audited(coach, member):
    routine = publish_routine(coach.id, draft(member.id))

    entry = AuditLog.query.filter_by(action="CREATE_ROUTINE").one()
    assert entry.user_id == coach.id
    assert str(routine.id) in entry.details


def test_update_keeps_status(coach, member):
    first = publish_routine(coach.id, draft(member.id, month=1))
    publish_routine(coach.id, draft(member.id, month=2))

    updated = routine_publisher.update(coach.id, first.id, {"month": 3, "status": "ACTIVE"})

    assert updated.month == 3
    assert updated.status == "ARCHIVED"


def test_delete_only_removes_that_routine(coach, member):
    first = publish_routine(coach.id, draft(member.id, month=1))
    second = publish_routine(coach.id, draft(member.id, month=2))

    routine_publisher.delete(coach.id, second.id)

    # no promotion of the archived one
    assert db.session.get(MonthlyRoutine, first.id).status == "ARCHIVED"
    assert routine_publisher.active_for(member.id) == []


# =========================================================
# HTTP
# =========================================================

def test_coach_publishes_over_http(client, coach, member, auth_headers):
    resp = client.post(
        "/api/routines",
        json={"routine": draft(member.id)},
        headers=auth_headers(coach),
    )

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["status"] == "ACTIVE"
    assert body["coach_id"] == coach.id
    assert body["weeks"][0]["days"][0]["exercises"][0]["name"] == "Squat"


def test_member_cannot_publish(client, member, auth_headers):
    resp = client.post("/api/routines", json=draft(member.id), headers=auth_headers(member))

    assert resp.status_code == 403


def test_member_only_sees_active_routine(client, coach, member, auth_headers):
    publish_routine(coach.id, draft(member.id, month=1))
    latest = publish_routine(coach.id, draft(member.id, month=2))

    resp = client.get("/api/routines", headers=auth_headers(member))

    assert resp.status_code == 200
    assert [r["id"] for r in resp.get_json()] == [latest.id]


def test_staff_sees_history(client, coach, member, auth_headers):
    publish_routine(coach.id, draft(member.id, month=1))
    publish_routine(coach.id, draft(member.id, month=2))

    resp = client.get(f"/api/routines?user_id={member.id}", headers=auth_headers(coach))

    assert len(resp.get_json()) == 2


def test_member_cannot_read_someone_elses_routine(client, coach, make_user, auth_headers):
    owner = make_user()
    other = make_user()
    routine = publish_routine(coach.id, draft(owner.id))

    resp = client.get(f"/api/routines/{routine.id}", headers=auth_headers(other))

    assert resp.status_code == 403


def test_last_publish_wins_between_coaches(client, make_user, member, auth_headers):
    coach_a = make_user(role="COACH")
    coach_b = make_user(role="COACH")

    client.post("/api/routines", json=draft(member.id, month=1), headers=auth_headers(coach_a))
    resp = client.post("/api/routines", json=draft(member.id, month=2), headers=auth_headers(coach_b))

    active = routine_publisher.active_for(member.id)
    assert len(active) == 1
    assert active[0].id == resp.get_json()["id"]
    assert active[0].coach_id == coach_b.id


def test_invalid_draft_is_rejected(client, coach, member, auth_headers):
    resp = client.post(
        "/api/routines",
        json={"user_id": member.id, "month": 13, "year": 2025},
        headers=auth_headers(coach),
    )

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "VALIDATION_ERROR"
    assert "month" in resp.get_json()["details"]


def test_member_manages_own_independent_routines(client, make_user, auth_headers):
    owner = make_user()
    other = make_user()
    headers = auth_headers(owner)

    first = client.post("/api/independent-routines", json={"month": 1, "year": 2025}, headers=headers)
    second = client.post(
        "/api/independent-routines",
        json={"month": 2, "year": 2025, "title": "Summer", "user_id": other.id},
        headers=headers,
    )

    assert second.status_code == 201
    assert second.get_json()["user_id"] == owner.id
    listed = client.get("/api/independent-routines", headers=headers).get_json()
    assert {r["id"]: r["status"] for r in listed} == {
        first.get_json()["id"]: "ARCHIVED",
        second.get_json()["id"]: "ACTIVE",
    }

    resp = client.delete(
        f"/api/independent-routines/{second.get_json()['id']}",
        headers=auth_headers(other),
    )
    assert resp.status_code == 403


@pytest.mark.parametrize("role, expected", [("ADMIN", 200), ("COACH", 200), ("USER", 403)])
def test_only_staff_edit_assigned_routines(client, coach, member, make_user, auth_headers, role, expected):
    routine = publish_routine(coach.id, draft(member.id))
    editor = member if role == "USER" else make_user(role=role)

    resp = client.patch(f"/api/routines/{routine.id}", json={"month": 6}, headers=auth_headers(editor))

    assert resp.status_code == expected
