"""Routine versioning.

Each routine table is a namespace in which a member has at most one ACTIVE
routine. Publishing archives whatever the member had, then stores the new
routine as ACTIVE. The two steps are separate commits: if the insert fails
after the archive went through, the member is left with no ACTIVE routine
and the caller gets a ``RoutinePublishError``. Nothing is retried.

Two publishes for the same member are not serialized; the later one archives
the earlier one's routine (last publish wins).
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from gymcloud.errors import NotFoundError, RoutinePublishError, ValidationError
from gymcloud.extensions import db
from gymcloud.models import IndependentRoutine, MonthlyRoutine, RoutineStatus, User
from gymcloud.services.audit import record_audit
from gymcloud.utils.clock import utcnow

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("user_id", "month", "year")


class RoutinePublisher:
    """Archive-then-insert publishing over one routine model."""

    def __init__(self, model, label="routine", extra_fields=()):
        self.model = model
        self.label = label
        self.extra_fields = tuple(extra_fields)
        self.updatable_fields = ("month", "year", "weeks") + self.extra_fields

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find(self, user_id=None, active_only=False):
        query = self.model.query
        if user_id is not None:
            query = query.filter_by(user_id=user_id)
        if active_only:
            query = query.filter_by(status=RoutineStatus.ACTIVE.value)
        return query.order_by(self.model.created_at.desc(), self.model.id.desc()).all()

    def get(self, routine_id):
        routine = db.session.get(self.model, routine_id)
        if routine is None:
            raise NotFoundError(f"{self.label.capitalize()} not found")
        return routine

    def active_for(self, user_id):
        return self.model.query.filter_by(
            user_id=user_id, status=RoutineStatus.ACTIVE.value
        ).all()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def publish(self, coach_id, draft):
        """Make ``draft`` the member's only ACTIVE routine and return it."""
        missing = [field for field in REQUIRED_FIELDS if draft.get(field) is None]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}",
                code="MISSING_FIELDS",
                details={"fields": missing},
            )

        user_id = draft["user_id"]
        if db.session.get(User, user_id) is None:
            raise ValidationError("user_id does not match any user", code="INVALID_USER")

        archived = self._archive_previous(user_id)
        logger.debug("Archived %s previous %s(s) for user %s", archived, self.label, user_id)

        try:
            routine = self._insert(coach_id, draft)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.error(
                "Publishing %s for user %s failed after archiving %s routine(s)",
                self.label, user_id, archived, exc_info=True,
            )
            raise RoutinePublishError(
                "Previous routines were archived but the new routine could not be saved",
                details={"user_id": user_id, "archived": archived},
            ) from exc

        record_audit(
            coach_id,
            "CREATE_ROUTINE",
            f"{self.label.capitalize()} {routine.id} published for user ID: {user_id}",
        )
        return routine

    def _archive_previous(self, user_id):
        count = self.model.query.filter_by(user_id=user_id).update(
            {"status": RoutineStatus.ARCHIVED.value}, synchronize_session="fetch"
        )
        db.session.commit()
        return count

    def _insert(self, coach_id, draft):
        routine = self.model(
            user_id=draft["user_id"],
            coach_id=coach_id,
            month=draft["month"],
            year=draft["year"],
            weeks=draft.get("weeks") or [],
            status=RoutineStatus.ACTIVE.value,
            created_at=utcnow(),
        )
        for field in self.extra_fields:
            setattr(routine, field, draft.get(field))
        db.session.add(routine)
        db.session.commit()
        return routine

    def update(self, actor_id, routine_id, changes):
        """Patch one routine in place. Status is never touched here."""
        routine = self.get(routine_id)
        for field in self.updatable_fields:
            if field in changes:
                setattr(routine, field, changes[field])
        db.session.commit()

        record_audit(actor_id, "UPDATE_ROUTINE", f"{self.label.capitalize()} {routine.id} updated")
        return routine

    def delete(self, actor_id, routine_id):
        routine = self.get(routine_id)
        user_id = routine.user_id
        db.session.delete(routine)
        db.session.commit()

        record_audit(
            actor_id,
            "DELETE_ROUTINE",
            f"{self.label.capitalize()} {routine_id} of user ID: {user_id} deleted",
        )


routine_publisher = RoutinePublisher(MonthlyRoutine)
independent_publisher = RoutinePublisher(
    IndependentRoutine, label="independent routine", extra_fields=("title",)
)


def publish_routine(coach_id, draft):
    return routine_publisher.publish(coach_id, draft)
