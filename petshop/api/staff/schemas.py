# petshop/api/staff/schemas.py
from marshmallow import EXCLUDE, Schema, fields, validate


class StaffCreateSchema(Schema):
    """
    POST /api/staff/ 요청 본문 스키마.
    PATCH 에서는 partial=True 로 같은 스키마를 사용합니다.
    """
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    email = fields.Email(
        required=True,
        validate=validate.Length(max=50),
        error_messages={"invalid": "Invalid email format"}
    )
    password = fields.Str(
        required=True,
        load_only=True,
        validate=validate.Length(min=4, error="Password must be at least 4 characters")
    )
    avatar_url = fields.URL(data_key='avatarUrl', allow_none=True)
