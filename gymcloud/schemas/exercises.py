from marshmallow import fields, validate

from gymcloud.schemas.user import BaseSchema

name_field = validate.Length(min=1, max=150)


class BankUpdateSchema(BaseSchema):
    category = fields.Str(required=True, validate=name_field)
    exercises = fields.List(fields.Str(validate=name_field), required=True)


class CategorySchema(BaseSchema):
    category_name = fields.Str(required=True, validate=name_field)


class RenameSchema(BaseSchema):
    old_name = fields.Str(required=True, validate=name_field)
    new_name = fields.Str(required=True, validate=name_field)


class ExerciseRenameSchema(RenameSchema):
    category = fields.Str(required=True, validate=name_field)


class MediaUpdateSchema(BaseSchema):
    exercise_name = fields.Str(required=True, validate=name_field)
    url = fields.Str(required=True)
