import pytest

from gymcloud.errors import ConflictError, NotFoundError
from gymcloud.services import exercises


def test_category_names_are_normalized(admin):
    name = exercises.add_category(admin.id, "  upper   body ")

    assert name == "UPPER BODY"
    assert exercises.list_categories() == ["UPPER BODY"]


def test_adding_an_existing_category_is_a_no_op(admin):
    exercises.set_category_exercises(admin.id, "LEGS", ["Squat"])

    exercises.add_category(admin.id, "legs")

    assert exercises.get_bank() == {"LEGS": ["Squat"]}


def test_bank_update_drops_duplicates_and_blanks(admin):
    category = exercises.set_category_exercises(admin.id, "LEGS", ["Squat", " ", "Lunge", "Squat"])

    assert category.exercises == ["Squat", "Lunge"]


def test_rename_category_conflict(admin):
    exercises.add_category(admin.id, "legs")
    exercises.add_category(admin.id, "back")

    with pytest.raises(ConflictError):
        exercises.rename_category(admin.id, "LEGS", "back")


def test_delete_missing_category(admin):
    with pytest.raises(NotFoundError):
        exercises.delete_category(admin.id, "NOPE")


def test_renaming_an_exercise_moves_its_media(admin):
    exercises.set_category_exercises(admin.id, "LEGS", ["Squat", "Lunge"])
    exercises.set_media(admin.id, "Squat", "https://video.test/squat.mp4")

    exercises.rename_exercise(admin.id, "LEGS", "Squat", "Back Squat")

    assert exercises.get_bank()["LEGS"] == ["Back Squat", "Lunge"]
    assert exercises.get_media("Squat") == ""
    assert exercises.get_media("Back Squat") == "https://video.test/squat.mp4"


def test_renaming_unknown_exercise(admin):
    exercises.set_category_exercises(admin.id, "LEGS", ["Squat"])

    with pytest.raises(NotFoundError):
        exercises.rename_exercise(admin.id, "LEGS", "Deadlift", "Romanian Deadlift")


def test_members_read_but_cannot_edit_bank(client, admin, member, auth_headers):
    exercises.set_category_exercises(admin.id, "LEGS", ["Squat"])

    read = client.get("/api/exercises/bank", headers=auth_headers(member))
    write = client.put(
        "/api/exercises/bank",
        json={"category": "LEGS", "exercises": []},
        headers=auth_headers(member),
    )

    assert read.get_json() == {"LEGS": ["Squat"]}
    assert write.status_code == 403


def test_admin_sets_media_over_http(client, admin, member, auth_headers):
    client.put(
        "/api/exercises/media",
        json={"exercise_name": "Squat", "url": "https://video.test/a.mp4"},
        headers=auth_headers(admin),
    )

    resp = client.get("/api/exercises/media/Squat", headers=auth_headers(member))

    assert resp.get_json() == {"url": "https://video.test/a.mp4"}
