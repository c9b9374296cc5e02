# petshop/api/products/schemas.py
from bson import ObjectId
from marshmallow import EXCLUDE, INCLUDE, Schema, fields, validate

from petshop.api.categories.schemas import CategorySummarySchema
from petshop.utils.fields import ObjectIdField


class ProductSpecificationsSchema(Schema):
    """
    상품 사양. 아래 키 외의 값도 자유 형식으로 그대로 보관합니다.
    """
    class Meta:
        unknown = INCLUDE

    weight = fields.Str()
    size = fields.Str()
    material = fields.Str()
    color = fields.Str()
    ingredients = fields.List(fields.Str(), load_default=list)
    petType = fields.Raw()


class ProductCreateSchema(Schema):
    """
    POST /api/products/ 요청 본문 스키마.
    PUT 에서는 partial=True 로 같은 스키마를 사용합니다.
    """
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    category = ObjectIdField(required=True, error_messages={"invalid": "Invalid category ID format"})
    brand = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    price = fields.Float(required=True, validate=validate.Range(min=0, error="Price must be greater than or equal to 0"))
    original_price = fields.Float(
        data_key='originalPrice',
        allow_none=True,
        validate=validate.Range(min=0, error="Original price must be greater than or equal to 0")
    )
    description = fields.Str(required=True, validate=validate.Length(min=1, max=2000))
    images = fields.List(
        fields.URL(error_messages={"invalid": "Invalid image URL"}),
        required=True,
        validate=validate.Length(min=1, error="At least one image is required")
    )
    specifications = fields.Nested(ProductSpecificationsSchema, load_default=dict)
    stock = fields.Int(required=True, strict=True, validate=validate.Range(min=0, error="Stock cannot be negative"))
    is_in_stock = fields.Bool(data_key='isInStock')
    tags = fields.List(fields.Str(), load_default=list)
    gifts = fields.List(fields.Str(), load_default=list)
    is_active = fields.Bool(data_key='isActive', load_default=True)


class StockUpdateSchema(Schema):
    """PATCH /api/products/<id>/stock"""
    quantity = fields.Int(
        required=True,
        strict=True,
        validate=validate.Range(min=1, error="Quantity must be a positive integer")
    )
    operation = fields.Str(
        required=True,
        validate=validate.OneOf(['add', 'subtract'], error="Operation must be 'add' or 'subtract'")
    )


class ProductResponseSchema(Schema):
    """
    상품 조회 응답 스키마. category는 카테고리 문서로 채워져 있으면 요약 정보를,
    아니면 ObjectId 문자열을 돌려줍니다.
    """
    id = ObjectIdField(attribute='_id', dump_only=True)
    name = fields.Str()
    category = fields.Method('dump_category')
    brand = fields.Str()
    price = fields.Float()
    original_price = fields.Float(data_key='originalPrice', allow_none=True)
    description = fields.Str()
    images = fields.List(fields.Str())
    specifications = fields.Dict()
    stock = fields.Int()
    is_in_stock = fields.Bool(data_key='isInStock')
    tags = fields.List(fields.Str())
    gifts = fields.List(fields.Str())
    rating = fields.Float()
    review_count = fields.Int(data_key='reviewCount')
    is_active = fields.Bool(data_key='isActive')
    created_by = ObjectIdField(data_key='createdBy', allow_none=True)
    created_at = fields.DateTime(data_key='createdAt')
    updated_at = fields.DateTime(data_key='updatedAt')

    def dump_category(self, product):
        category = product.get('category')
        if isinstance(category, dict):
            return CategorySummarySchema().dump(category)
        if isinstance(category, ObjectId):
            return str(category)
        return category


class PriceRangeSchema(Schema):
    min = fields.Float()
    max = fields.Float()


class ProductFilterOptionsSchema(Schema):
    """GET /api/products/options/filters 응답 스키마"""
    categories = fields.List(fields.Nested(CategorySummarySchema))
    brands = fields.List(fields.Str())
    pet_types = fields.List(fields.Raw(), data_key='petTypes')
    price_range = fields.Nested(PriceRangeSchema, data_key='priceRange')
