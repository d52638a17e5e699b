from flask import Blueprint, jsonify, request

from gymcloud.models import STAFF_ROLES
from gymcloud.schemas.routine import (
    IndependentRoutineDraftSchema,
    RoutineDraftSchema,
    RoutineUpdateSchema,
    routine_schema,
    routines_schema,
)
from gymcloud.services.routines import independent_publisher, routine_publisher
from gymcloud.utils.decorators import login_required, roles_required

routines_bp = Blueprint("routines", __name__)
independent_bp = Blueprint("independent_routines", __name__)


# =========================================================
# Coach-assigned routines
# =========================================================

@routines_bp.route("", methods=["GET"])
@login_required
def get_routines(current_user):
    """Members get their ACTIVE routine; staff get everything, optionally per user"""
    if not current_user.is_staff:
        routines = routine_publisher.find(user_id=current_user.id, active_only=True)
    else:
        user_id = request.args.get("user_id", type=int)
        status = request.args.get("status")
        routines = routine_publisher.find(user_id=user_id, active_only=(status == "ACTIVE"))
    return jsonify(routines_schema.dump(routines)), 200


@routines_bp.route("", methods=["POST"])
@roles_required(*STAFF_ROLES)
def create_routine(current_user):
    """Publish a routine for a member, archiving their previous ones"""
    payload = request.get_json(silent=True) or {}
    draft = RoutineDraftSchema().load(payload.get("routine", payload))
    routine = routine_publisher.publish(current_user.id, draft)
    return jsonify(routine_schema.dump(routine)), 201


@routines_bp.route("/<int:routine_id>", methods=["GET"])
@login_required
def get_routine(routine_id, current_user):
    routine = routine_publisher.get(routine_id)
    if not current_user.is_staff and routine.user_id != current_user.id:
        return jsonify({"msg": "Unauthorized", "code": "FORBIDDEN"}), 403
    return jsonify(routine_schema.dump(routine)), 200


@routines_bp.route("/<int:routine_id>", methods=["PATCH"])
@roles_required(*STAFF_ROLES)
def update_routine(routine_id, current_user):
    changes = RoutineUpdateSchema().load(request.get_json(silent=True) or {})
    routine = routine_publisher.update(current_user.id, routine_id, changes)
    return jsonify(routine_schema.dump(routine)), 200


@routines_bp.route("/<int:routine_id>", methods=["DELETE"])
@roles_required(*STAFF_ROLES)
def delete_routine(routine_id, current_user):
    routine_publisher.delete(current_user.id, routine_id)
    return jsonify({"msg": "Routine deleted successfully"}), 200


# =========================================================
# Self-managed routines
# =========================================================

def _owned_independent(routine_id, user):
    routine = independent_publisher.get(routine_id)
    if routine.user_id != user.id and not user.is_admin:
        return None
    return routine


@independent_bp.route("", methods=["GET"])
@login_required
def get_independent_routines(current_user):
    routines = independent_publisher.find(user_id=current_user.id)
    return jsonify(routines_schema.dump(routines)), 200


@independent_bp.route("", methods=["POST"])
@login_required
def create_independent_routine(current_user):
    payload = request.get_json(silent=True) or {}
    draft = IndependentRoutineDraftSchema().load(payload.get("routine", payload))
    draft["user_id"] = current_user.id
    routine = independent_publisher.publish(current_user.id, draft)
    return jsonify(routine_schema.dump(routine)), 201


@independent_bp.route("/<int:routine_id>", methods=["PATCH"])
@login_required
def update_independent_routine(routine_id, current_user):
    if _owned_independent(routine_id, current_user) is None:
        return jsonify({"msg": "Unauthorized", "code": "FORBIDDEN"}), 403
    changes = RoutineUpdateSchema().load(request.get_json(silent=True) or {})
    routine = independent_publisher.update(current_user.id, routine_id, changes)
    return jsonify(routine_schema.dump(routine)), 200


@independent_bp.route("/<int:routine_id>", methods=["DELETE"])
@login_required
def delete_independent_routine(routine_id, current_user):
    if _owned_independent(routine_id, current_user) is None:
        return jsonify({"msg": "Unauthorized", "code": "FORBIDDEN"}), 403
    independent_publisher.delete(current_user.id, routine_id)
    return jsonify({"msg": "Routine deleted successfully"}), 200
