# petshop/api/categories/schemas.py
from marshmallow import EXCLUDE, Schema, fields, validate

from petshop.utils.fields import ObjectIdField


class CategoryCreateSchema(Schema):
    """
    POST /api/categories/ 요청 본문 스키마.
    PATCH 에서는 partial=True 로 같은 스키마를 사용합니다.
    """
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    description = fields.Str(allow_none=True, validate=validate.Length(max=500))
    is_active = fields.Bool(data_key='isActive', load_default=True)


class CategorySummarySchema(Schema):
    """상품 응답 안에 채워 넣는 카테고리 요약 정보"""
    id = ObjectIdField(attribute='_id', dump_only=True)
    name = fields.Str()
    description = fields.Str(allow_none=True)


class CategoryResponseSchema(CategorySummarySchema):
    is_active = fields.Bool(data_key='isActive')
    created_at = fields.DateTime(data_key='createdAt')
    updated_at = fields.DateTime(data_key='updatedAt')
