from flask import Blueprint, jsonify, request

from gymcloud.errors import ValidationError
from gymcloud.models import STAFF_ROLES
from gymcloud.schemas.workout_log import WorkoutLogCreateSchema, WorkoutLogUpdateSchema
from gymcloud.services import workout_logs
from gymcloud.utils.decorators import login_required, roles_required

logs_bp = Blueprint("logs", __name__)


def _target_user_id():
    user_id = request.args.get("user_id", type=int)
    if user_id is None:
        raise ValidationError("user_id is required", code="MISSING_USERID")
    return user_id


def _can_access(current_user, user_id):
    return current_user.is_staff or current_user.id == user_id


@logs_bp.route("", methods=["GET"])
@login_required
def get_logs(current_user):
    user_id = _target_user_id()
    if not _can_access(current_user, user_id):
        return jsonify({"msg": "Unauthorized", "code": "FORBIDDEN"}), 403

    items, total = workout_logs.list_logs(
        user_id,
        exercise_id=request.args.get("exercise_id"),
        limit=request.args.get("limit", type=int),
        skip=request.args.get("skip", 0, type=int),
    )
    data = [log.to_dict() for log in items]
    if request.args.get("include_total", "").lower() in ("1", "true", "yes"):
        return jsonify({"items": data, "total": total}), 200
    return jsonify(data), 200


@logs_bp.route("", methods=["POST"])
@login_required
def create_log(current_user):
    data = WorkoutLogCreateSchema().load(request.get_json(silent=True) or {})
    if not _can_access(current_user, data["user_id"]):
        return jsonify({"msg": "Unauthorized", "code": "FORBIDDEN"}), 403
    log = workout_logs.add_log(data)
    return jsonify(log.to_dict()), 201


@logs_bp.route("/completed-this-week", methods=["GET"])
@login_required
def completed_this_week(current_user):
    user_id = _target_user_id()
    if not _can_access(current_user, user_id):
        return jsonify({"msg": "Unauthorized", "code": "FORBIDDEN"}), 403

    exercise_ids = workout_logs.completed_this_week(
        user_id, routine_id=request.args.get("routine_id", type=int)
    )
    return jsonify({"user_id": user_id, "exercise_ids": exercise_ids}), 200


@logs_bp.route("/<int:log_id>", methods=["PATCH"])
@roles_required(*STAFF_ROLES)
def update_log(log_id, current_user):
    changes = WorkoutLogUpdateSchema().load(request.get_json(silent=True) or {})
    log = workout_logs.update_log(current_user.id, log_id, changes)
    return jsonify(log.to_dict()), 200


@logs_bp.route("/<int:log_id>", methods=["DELETE"])
@roles_required(*STAFF_ROLES)
def delete_log(log_id, current_user):
    workout_logs.delete_log(current_user.id, log_id)
    return jsonify({"msg": "Log deleted successfully"}), 200
