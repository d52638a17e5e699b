from gymcloud.errors import ConflictError, NotFoundError
from gymcloud.extensions import db
from gymcloud.models import ExerciseCategory, ExerciseMedia
from gymcloud.services.audit import record_audit


def normalize_category(name):
    return " ".join(name.split()).upper()


def _categories():
    return ExerciseCategory.query.order_by(ExerciseCategory.id).all()


def _get_category(name):
    category = ExerciseCategory.query.filter_by(name=name).first()
    if category is None:
        raise NotFoundError(f"Category '{name}' not found")
    return category


# =========================================================
# Bank
# =========================================================

def get_bank():
    return {category.name: list(category.exercises or []) for category in _categories()}


def list_categories():
    return [category.name for category in _categories()]


def set_category_exercises(actor_id, category_name, exercises):
    """Replace the exercise list of a category, creating it when missing."""
    category = ExerciseCategory.query.filter_by(name=category_name).first()
    if category is None:
        category = ExerciseCategory(name=category_name)
        db.session.add(category)
    # keep order, drop duplicates
    category.exercises = list(dict.fromkeys(name.strip() for name in exercises if name.strip()))
    db.session.commit()

    record_audit(actor_id, "UPDATE_EXERCISE_BANK", f"{category.name}: {len(category.exercises)} exercises")
    return category


def add_category(actor_id, name):
    formatted = normalize_category(name)
    if ExerciseCategory.query.filter_by(name=formatted).first() is None:
        db.session.add(ExerciseCategory(name=formatted, exercises=[]))
        db.session.commit()
        record_audit(actor_id, "CREATE_CATEGORY", f"Category {formatted} created")
    return formatted


def rename_category(actor_id, old_name, new_name):
    category = _get_category(old_name)
    formatted = normalize_category(new_name)
    if formatted != category.name and ExerciseCategory.query.filter_by(name=formatted).first():
        raise ConflictError(f"Category '{formatted}' already exists", code="CATEGORY_EXISTS")
    category.name = formatted
    db.session.commit()

    record_audit(actor_id, "RENAME_CATEGORY", f"{old_name} -> {formatted}")
    return formatted


def delete_category(actor_id, name):
    category = _get_category(name)
    db.session.delete(category)
    db.session.commit()

    record_audit(actor_id, "DELETE_CATEGORY", f"Category {name} deleted")


def rename_exercise(actor_id, category_name, old_name, new_name):
    """Rename an exercise inside a category; its media entry follows the new name."""
    category = _get_category(category_name)
    exercises = list(category.exercises or [])
    if old_name not in exercises:
        raise NotFoundError(f"Exercise '{old_name}' not found in {category_name}")
    if new_name == old_name:
        return
    category.exercises = [new_name if name == old_name else name for name in exercises]

    media = ExerciseMedia.query.filter_by(exercise_name=old_name).first()
    if media is not None:
        ExerciseMedia.query.filter_by(exercise_name=new_name).delete()
        media.exercise_name = new_name
    db.session.commit()

    record_audit(actor_id, "RENAME_EXERCISE", f"{category_name}: {old_name} -> {new_name}")


# =========================================================
# Media
# =========================================================

def get_all_media():
    return {media.exercise_name: media.url for media in ExerciseMedia.query.all()}


def get_media(exercise_name):
    media = ExerciseMedia.query.filter_by(exercise_name=exercise_name).first()
    return media.url if media else ""


def set_media(actor_id, exercise_name, url):
    media = ExerciseMedia.query.filter_by(exercise_name=exercise_name).first()
    if media is None:
        media = ExerciseMedia(exercise_name=exercise_name)
        db.session.add(media)
    media.url = url
    media.updated_by = actor_id
    db.session.commit()

    record_audit(actor_id, "UPDATE_EXERCISE_MEDIA", f"Media set for {exercise_name}")
    return media
