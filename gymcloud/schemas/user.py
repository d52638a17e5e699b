from marshmallow import EXCLUDE, fields, validate, validates_schema, ValidationError

from gymcloud.extensions import ma
from gymcloud.models.user import UserRole

ROLES = [role.value for role in UserRole]
ORIGINS = ["manual", "google", "microsoft"]


class BaseSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE


class UserSchema(BaseSchema):
    id = fields.Int(dump_only=True)
    email = fields.Email()
    name = fields.Str()
    role = fields.Str()
    status = fields.Str()
    subscription_end_date = fields.DateTime()
    is_first_login = fields.Bool()
    profile_picture = fields.Str(allow_none=True)
    origin = fields.Str(allow_none=True)
    provider = fields.Str(allow_none=True)
    created_at = fields.DateTime(dump_only=True)


class UserCreateSchema(BaseSchema):
    email = fields.Email(required=True)
    name = fields.Str(required=True, validate=validate.Length(min=2, max=150))
    role = fields.Str(load_default=UserRole.USER.value, validate=validate.OneOf(ROLES))
    password = fields.Str(load_default=None, validate=validate.Length(min=8))
    subscription_end_date = fields.DateTime(load_default=None, allow_none=True)
    profile_picture = fields.Str(load_default=None, allow_none=True)
    origin = fields.Str(load_default="manual", validate=validate.OneOf(ORIGINS))
    provider = fields.Str(load_default=None, allow_none=True)
    provider_id = fields.Str(load_default=None, allow_none=True)


class UserUpdateSchema(BaseSchema):
    email = fields.Email()
    name = fields.Str(validate=validate.Length(min=2, max=150))
    role = fields.Str(validate=validate.OneOf(ROLES))
    password = fields.Str(validate=validate.Length(min=8))
    subscription_end_date = fields.DateTime(allow_none=True)
    is_first_login = fields.Bool()
    profile_picture = fields.Str(allow_none=True)


class UserSelfUpdateSchema(BaseSchema):
    """Fields a member may change on their own account."""

    name = fields.Str(validate=validate.Length(min=2, max=150))
    profile_picture = fields.Str(allow_none=True)


class LoginSchema(BaseSchema):
    email = fields.Str(required=True, validate=validate.Length(min=1))
    password = fields.Str(required=True, validate=validate.Length(min=1))


class ForgotPasswordSchema(BaseSchema):
    email = fields.Str(required=True, validate=validate.Length(min=1))


class ResetPasswordSchema(BaseSchema):
    token = fields.Str(required=True, validate=validate.Length(min=1))
    new_password = fields.Str(required=True)
    confirm_password = fields.Str(required=True)

    @validates_schema
    def passwords_match(self, data, **kwargs):
        if data.get("new_password") != data.get("confirm_password"):
            raise ValidationError("Passwords do not match", "confirm_password")


class ChangePasswordSchema(BaseSchema):
    new_password = fields.Str(required=True)
    confirm_password = fields.Str(required=True)

    @validates_schema
    def passwords_match(self, data, **kwargs):
        if data.get("new_password") != data.get("confirm_password"):
            raise ValidationError("Passwords do not match", "confirm_password")


user_schema = UserSchema()
