# petshop/api/colors/schemas.py
from marshmallow import EXCLUDE, Schema, fields, validate

from petshop.utils.fields import ObjectIdField

HEX_CODE_PATTERN = r'^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$'


class ColorCreateSchema(Schema):
    """
    색상 등록/수정 요청 본문 스키마
    """
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    hex_code = fields.Str(
        data_key='hexCode',
        required=True,
        validate=validate.Regexp(HEX_CODE_PATTERN, error="Invalid hex color code")
    )
    description = fields.Str(allow_none=True, validate=validate.Length(max=200))
    is_active = fields.Bool(data_key='isActive', load_default=True)


class ColorBulkDeleteSchema(Schema):
    """POST /api/colors/bulk-delete"""
    ids = fields.List(
        ObjectIdField(error_messages={"invalid": "Invalid color ID format"}),
        required=True,
        validate=validate.Length(min=1)
    )


class ColorSummarySchema(Schema):
    """반려동물 응답 안에 채워 넣는 색상 요약 정보"""
    id = ObjectIdField(attribute='_id', dump_only=True)
    name = fields.Str()
    hex_code = fields.Str(data_key='hexCode')
    description = fields.Str(allow_none=True)


class ColorResponseSchema(ColorSummarySchema):
    is_active = fields.Bool(data_key='isActive')
    created_at = fields.DateTime(data_key='createdAt')
    updated_at = fields.DateTime(data_key='updatedAt')


class ColorUsageStatsSchema(Schema):
    color = fields.Nested(ColorSummarySchema)
    total_pets = fields.Int(data_key='totalPets')
    available_pets = fields.Int(data_key='availablePets')
