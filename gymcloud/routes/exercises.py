from flask import Blueprint, jsonify, request

from gymcloud.models import UserRole
from gymcloud.schemas.exercises import (
    BankUpdateSchema,
    CategorySchema,
    ExerciseRenameSchema,
    MediaUpdateSchema,
    RenameSchema,
)
from gymcloud.services import exercises
from gymcloud.utils.decorators import login_required, roles_required

exercises_bp = Blueprint("exercises", __name__)

ADMIN = UserRole.ADMIN.value


# =========================================================
# Exercise bank
# =========================================================

@exercises_bp.route("/bank", methods=["GET"])
@login_required
def get_bank(current_user):
    return jsonify(exercises.get_bank()), 200


@exercises_bp.route("/bank", methods=["PUT"])
@roles_required(ADMIN)
def update_bank(current_user):
    data = BankUpdateSchema().load(request.get_json(silent=True) or {})
    category = exercises.set_category_exercises(current_user.id, data["category"], data["exercises"])
    return jsonify({"msg": "Exercise bank updated", "category": category.name, "exercises": category.exercises}), 200


@exercises_bp.route("/categories", methods=["GET"])
@login_required
def get_categories(current_user):
    return jsonify(exercises.list_categories()), 200


@exercises_bp.route("/categories", methods=["POST"])
@roles_required(ADMIN)
def add_category(current_user):
    data = CategorySchema().load(request.get_json(silent=True) or {})
    name = exercises.add_category(current_user.id, data["category_name"])
    return jsonify({"msg": "Category saved", "category": name}), 201


@exercises_bp.route("/categories/rename", methods=["POST"])
@roles_required(ADMIN)
def rename_category(current_user):
    data = RenameSchema().load(request.get_json(silent=True) or {})
    name = exercises.rename_category(current_user.id, data["old_name"], data["new_name"])
    return jsonify({"msg": "Category renamed", "category": name}), 200


@exercises_bp.route("/categories/<path:name>", methods=["DELETE"])
@roles_required(ADMIN)
def delete_category(name, current_user):
    exercises.delete_category(current_user.id, name)
    return jsonify({"msg": "Category deleted"}), 200


@exercises_bp.route("/rename", methods=["POST"])
@roles_required(ADMIN)
def rename_exercise(current_user):
    data = ExerciseRenameSchema().load(request.get_json(silent=True) or {})
    exercises.rename_exercise(current_user.id, data["category"], data["old_name"], data["new_name"])
    return jsonify({"msg": "Exercise renamed"}), 200


# =========================================================
# Exercise media
# =========================================================

@exercises_bp.route("/media", methods=["GET"])
@login_required
def get_all_media(current_user):
    return jsonify(exercises.get_all_media()), 200


@exercises_bp.route("/media/<path:exercise_name>", methods=["GET"])
@login_required
def get_media(exercise_name, current_user):
    return jsonify({"url": exercises.get_media(exercise_name)}), 200


@exercises_bp.route("/media", methods=["PUT"])
@roles_required(ADMIN)
def update_media(current_user):
    data = MediaUpdateSchema().load(request.get_json(silent=True) or {})
    exercises.set_media(current_user.id, data["exercise_name"], data["url"])
    return jsonify({"msg": "Media updated"}), 200
