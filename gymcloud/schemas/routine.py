from marshmallow import fields, validate

from gymcloud.schemas.user import BaseSchema


class ExerciseAssignmentSchema(BaseSchema):
    id = fields.Str()
    name = fields.Str(required=True)
    series = fields.Int(allow_none=True)
    reps = fields.Str(allow_none=True)
    target_weight = fields.Float(allow_none=True)
    rpe = fields.Float(allow_none=True)
    rest = fields.Str(allow_none=True)
    notes = fields.Str(allow_none=True)
    media_url = fields.Str(allow_none=True)


class DaySchema(BaseSchema):
    day_name = fields.Str(required=True)
    exercises = fields.List(fields.Nested(ExerciseAssignmentSchema), load_default=list)


class WeekSchema(BaseSchema):
    week_number = fields.Int(required=True, validate=validate.Range(min=1))
    days = fields.List(fields.Nested(DaySchema), load_default=list)


class RoutineDraftSchema(BaseSchema):
    user_id = fields.Int(required=True)
    month = fields.Int(required=True, validate=validate.Range(min=1, max=12))
    year = fields.Int(required=True, validate=validate.Range(min=2000, max=2100))
    weeks = fields.List(fields.Nested(WeekSchema), load_default=list)


class IndependentRoutineDraftSchema(BaseSchema):
    month = fields.Int(required=True, validate=validate.Range(min=1, max=12))
    year = fields.Int(required=True, validate=validate.Range(min=2000, max=2100))
    title = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=150))
    weeks = fields.List(fields.Nested(WeekSchema), load_default=list)


class RoutineUpdateSchema(BaseSchema):
    # no status here: only publishing moves routines between states
    month = fields.Int(validate=validate.Range(min=1, max=12))
    year = fields.Int(validate=validate.Range(min=2000, max=2100))
    title = fields.Str(allow_none=True, validate=validate.Length(max=150))
    weeks = fields.List(fields.Nested(WeekSchema))


class RoutineSchema(BaseSchema):
    id = fields.Int()
    user_id = fields.Int()
    coach_id = fields.Int(allow_none=True)
    month = fields.Int()
    year = fields.Int()
    status = fields.Str()
    title = fields.Str(allow_none=True)
    weeks = fields.Raw()
    created_at = fields.DateTime()


routine_schema = RoutineSchema()
routines_schema = RoutineSchema(many=True)
