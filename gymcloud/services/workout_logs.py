from datetime import datetime, timedelta

from gymcloud.errors import AuthorizationError, NotFoundError, ValidationError
from gymcloud.extensions import db
from gymcloud.models import MonthlyRoutine, RoutineStatus, WorkoutLog
from gymcloud.services.audit import record_audit
from gymcloud.utils.clock import utcnow

NO_ROUTINE = "none"


def _routine_for_log(user_id, routine_id):
    """The routine a log is checked against: the given one, else any non-archived."""
    if routine_id not in (None, "", NO_ROUTINE):
        try:
            routine_id = int(routine_id)
        except (TypeError, ValueError):
            raise ValidationError("routine_id must be an integer", code="INVALID_ROUTINE") from None
        return MonthlyRoutine.query.filter_by(id=routine_id, user_id=user_id).first()
    return (
        MonthlyRoutine.query
        .filter(MonthlyRoutine.user_id == user_id, MonthlyRoutine.status != RoutineStatus.ARCHIVED.value)
        .order_by(MonthlyRoutine.created_at.desc())
        .first()
    )


def add_log(data):
    """Record one completed exercise. The exercise must be assigned in the user's routine."""
    user_id = data.get("user_id")
    exercise_id = data.get("exercise_id")
    if not user_id or not exercise_id:
        raise ValidationError("user_id and exercise_id are required", code="MISSING_FIELDS")

    routine = _routine_for_log(user_id, data.get("routine_id"))
    if routine is None or str(exercise_id) not in routine.exercise_ids():
        raise AuthorizationError(
            "The exercise is not assigned in the user's routine",
            code="EXERCISE_NOT_ASSIGNED",
        )

    weight_used = data.get("weight_used")
    reps_done = data.get("reps_done")
    total = data.get("total")
    if total is None and weight_used is not None and reps_done is not None:
        total = weight_used * reps_done

    log = WorkoutLog(
        user_id=user_id,
        exercise_id=str(exercise_id),
        routine_id=routine.id,
        weight_used=weight_used or 0,
        weight_unit=data.get("weight_unit") or "lb",
        reps_done=reps_done or 0,
        total=total,
        rpe=data.get("rpe"),
        notes=data.get("notes"),
        type=data.get("type") or "routine",
        date=utcnow(),
    )
    db.session.add(log)
    db.session.commit()
    return log


def list_logs(user_id, exercise_id=None, limit=None, skip=0):
    """Logs for a user, newest first. Returns ``(items, total)``."""
    query = WorkoutLog.query.filter_by(user_id=user_id)
    if exercise_id:
        query = query.filter_by(exercise_id=str(exercise_id))
    total = query.count()
    query = query.order_by(WorkoutLog.date.desc(), WorkoutLog.id.desc())
    if skip:
        query = query.offset(skip)
    if limit:
        query = query.limit(limit)
    return query.all(), total


def get_log(log_id):
    log = db.session.get(WorkoutLog, log_id)
    if log is None:
        raise NotFoundError("Log not found")
    return log


def update_log(actor_id, log_id, changes):
    """Administrative correction of a log entry."""
    log = get_log(log_id)
    for field, value in changes.items():
        setattr(log, field, value)
    if "total" not in changes and ("weight_used" in changes or "reps_done" in changes):
        log.total = (log.weight_used or 0) * (log.reps_done or 0)
    db.session.commit()

    record_audit(actor_id, "UPDATE_LOG", f"Corrected log {log.id} of user ID: {log.user_id}")
    return log


def delete_log(actor_id, log_id):
    log = get_log(log_id)
    user_id = log.user_id
    db.session.delete(log)
    db.session.commit()

    record_audit(actor_id, "DELETE_LOG", f"Deleted log {log_id} of user ID: {user_id}")


def week_start(now):
    """Monday 00:00 of the week containing ``now``."""
    monday = now - timedelta(days=now.weekday())
    return datetime(monday.year, monday.month, monday.day)


def completed_this_week(user_id, routine_id=None, now=None):
    """Exercise ids the user has already logged since Monday."""
    now = now or utcnow()
    query = WorkoutLog.query.filter(
        WorkoutLog.user_id == user_id,
        WorkoutLog.date >= week_start(now),
        WorkoutLog.date <= now,
    )
    if routine_id is not None:
        query = query.filter(WorkoutLog.routine_id == routine_id)
    return sorted({log.exercise_id for log in query.all()})
