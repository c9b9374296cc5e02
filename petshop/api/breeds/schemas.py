# petshop/api/breeds/schemas.py
from marshmallow import EXCLUDE, Schema, fields, validate

from petshop.utils.fields import ObjectIdField


class BreedCreateSchema(Schema):
    """
    품종 등록/수정 요청 본문 스키마
    """
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    description = fields.Str(allow_none=True, validate=validate.Length(max=500))
    is_active = fields.Bool(data_key='isActive', load_default=True)


class BreedSummarySchema(Schema):
    """반려동물 응답 안에 채워 넣는 품종 요약 정보"""
    id = ObjectIdField(attribute='_id', dump_only=True)
    name = fields.Str()
    description = fields.Str(allow_none=True)


class BreedResponseSchema(BreedSummarySchema):
    """
    품종 조회 응답 스키마
    """
    is_active = fields.Bool(data_key='isActive')
    created_by = ObjectIdField(data_key='createdBy')
    created_at = fields.DateTime(data_key='createdAt')
    updated_at = fields.DateTime(data_key='updatedAt')
