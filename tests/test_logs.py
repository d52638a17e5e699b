from datetime import datetime, timedelta

import pytest

from gymcloud.errors import AuthorizationError
from gymcloud.extensions import db
from gymcloud.models import WorkoutLog
from gymcloud.services import workout_logs
from gymcloud.services.routines import publish_routine

WEEKS = [{
    "week_number": 1,
    "days": [{
        "day_name": "Monday",
        "exercises": [{"id": "squat", "name": "Squat"}, {"name": "Bench Press"}],
    }],
}]


@pytest.fixture
def routine(coach, member):
    return publish_routine(coach.id, {"user_id": member.id, "month": 1, "year": 2025, "weeks": WEEKS})


def test_log_assigned_exercise_computes_total(member, routine):
    log = workout_logs.add_log({
        "user_id": member.id,
        "exercise_id": "squat",
        "weight_used": 100.0,
        "reps_done": 5,
    })

    assert log.total == 500.0
    assert log.routine_id == routine.id
    assert log.weight_unit == "lb"


def test_exercise_name_counts_as_identifier(member, routine):
    log = workout_logs.add_log({"user_id": member.id, "exercise_id": "Bench Press"})

    assert log.id is not None


def test_unassigned_exercise_is_refused(member, routine):
    with pytest.raises(AuthorizationError) as excinfo:
        workout_logs.add_log({"user_id": member.id, "exercise_id": "deadlift"})

    assert excinfo.value.code == "EXERCISE_NOT_ASSIGNED"


def test_member_without_routine_cannot_log(member):
    with pytest.raises(AuthorizationError):
        workout_logs.add_log({"user_id": member.id, "exercise_id": "squat"})


def test_completed_this_week(member, routine):
    now = datetime(2025, 1, 8, 18, 0)  # Wednesday
    for exercise_id, when in [
        ("squat", datetime(2025, 1, 6, 9, 0)),
        ("squat", datetime(2025, 1, 7, 9, 0)),
        ("Bench Press", datetime(2025, 1, 5, 9, 0)),  # previous Sunday
    ]:
        db.session.add(WorkoutLog(user_id=member.id, exercise_id=exercise_id, routine_id=routine.id, date=when))
    db.session.commit()

    assert workout_logs.completed_this_week(member.id, now=now) == ["squat"]
    assert workout_logs.completed_this_week(member.id, routine_id=routine.id + 1, now=now) == []


def test_week_starts_on_monday():
    assert workout_logs.week_start(datetime(2025, 1, 12, 23, 0)) == datetime(2025, 1, 6)


def test_correction_recomputes_total(coach, member, routine):
    log = workout_logs.add_log({"user_id": member.id, "exercise_id": "squat", "weight_used": 50.0, "reps_done": 10})

    updated = workout_logs.update_log(coach.id, log.id, {"reps_done": 8})

    assert updated.total == 400.0


# =========================================================
# HTTP
# =========================================================

def test_member_logs_and_reads_own_history(client, member, routine, auth_headers):
    headers = auth_headers(member)
    created = client.post(
        "/api/logs",
        json={"user_id": member.id, "exercise_id": "squat", "weight_used": 60, "reps_done": 3},
        headers=headers,
    )

    resp = client.get(f"/api/logs?user_id={member.id}&include_total=true", headers=headers)

    assert created.status_code == 201
    assert resp.get_json()["total"] == 1
    assert resp.get_json()["items"][0]["total"] == 180.0


def test_logs_require_user_id(client, member, auth_headers):
    resp = client.get("/api/logs", headers=auth_headers(member))

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "MISSING_USERID"


def test_member_cannot_read_other_logs(client, member, make_user, auth_headers):
    other = make_user()

    resp = client.get(f"/api/logs?user_id={other.id}", headers=auth_headers(member))

    assert resp.status_code == 403


def test_unassigned_exercise_over_http(client, member, routine, auth_headers):
    resp = client.post(
        "/api/logs",
        json={"user_id": member.id, "exercise_id": "deadlift"},
        headers=auth_headers(member),
    )

    assert resp.status_code == 403
    assert resp.get_json()["code"] == "EXERCISE_NOT_ASSIGNED"


def test_only_staff_delete_logs(client, coach, member, routine, auth_headers):
    log = workout_logs.add_log({"user_id": member.id, "exercise_id": "squat"})

    denied = client.delete(f"/api/logs/{log.id}", headers=auth_headers(member))
    allowed = client.delete(f"/api/logs/{log.id}", headers=auth_headers(coach))

    assert denied.status_code == 403
    assert allowed.status_code == 200
    assert WorkoutLog.query.filter_by(id=log.id).count() == 0
