from marshmallow import fields, validate

from gymcloud.schemas.user import BaseSchema


class WorkoutLogCreateSchema(BaseSchema):
    user_id = fields.Int(required=True)
    exercise_id = fields.Str(required=True, validate=validate.Length(min=1))
    routine_id = fields.Raw(load_default=None, allow_none=True)
    weight_used = fields.Float(load_default=None, allow_none=True)
    weight_unit = fields.Str(load_default="lb", validate=validate.OneOf(["lb", "kg"]))
    reps_done = fields.Int(load_default=None, allow_none=True)
    total = fields.Float(load_default=None, allow_none=True)
    rpe = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0, max=10))
    notes = fields.Str(load_default=None, allow_none=True)
    type = fields.Str(load_default="routine")


class WorkoutLogUpdateSchema(BaseSchema):
    weight_used = fields.Float()
    weight_unit = fields.Str(validate=validate.OneOf(["lb", "kg"]))
    reps_done = fields.Int()
    total = fields.Float(allow_none=True)
    rpe = fields.Float(allow_none=True, validate=validate.Range(min=0, max=10))
    notes = fields.Str(allow_none=True)
