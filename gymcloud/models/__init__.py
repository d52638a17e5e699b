from .user import User, UserRole, UserStatus, STAFF_ROLES
from .routine import MonthlyRoutine, IndependentRoutine, RoutineStatus
from .workout_log import WorkoutLog
from .audit_log import AuditLog
from .exercises import ExerciseCategory, ExerciseMedia
from .settings import BrandingSettings

__all__ = [
    "User", "UserRole", "UserStatus", "STAFF_ROLES",
    "MonthlyRoutine", "IndependentRoutine", "RoutineStatus",
    "WorkoutLog", "AuditLog",
    "ExerciseCategory", "ExerciseMedia", "BrandingSettings",
]
