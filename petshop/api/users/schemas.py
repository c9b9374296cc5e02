# petshop/api/users/schemas.py
from marshmallow import EXCLUDE, Schema, fields, validate

from petshop.utils.fields import ObjectIdField


class UserResponseSchema(Schema):
    """
    사용자 조회 응답 스키마. password 필드는 어떤 경우에도 내보내지 않습니다.
    """
    id = ObjectIdField(attribute='_id', dump_only=True)
    name = fields.Str()
    email = fields.Email()
    role = fields.Str()
    is_active = fields.Bool(data_key='isActive')
    avatar_url = fields.Str(data_key='avatarUrl', allow_none=True)
    last_login = fields.DateTime(data_key='lastLogin', allow_none=True)
    created_at = fields.DateTime(data_key='createdAt')
    updated_at = fields.DateTime(data_key='updatedAt')


class ProfileUpdateSchema(Schema):
    """PATCH /api/users/me"""
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(validate=validate.Length(min=1, max=50))
    email = fields.Email(validate=validate.Length(max=50), error_messages={"invalid": "Invalid email format"})


class PasswordChangeSchema(Schema):
    """PATCH /api/users/me/password"""
    current_password = fields.Str(data_key='currentPassword', required=True, validate=validate.Length(min=1))
    new_password = fields.Str(
        data_key='newPassword',
        required=True,
        validate=validate.Length(min=4, error="Password must be at least 4 characters")
    )


class UserStatusSchema(Schema):
    """PATCH /api/users/<id>/status"""
    is_active = fields.Bool(data_key='isActive', required=True)
    reason = fields.Str(allow_none=True, validate=validate.Length(max=500))
