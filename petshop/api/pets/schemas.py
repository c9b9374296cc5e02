# petshop/api/pets/schemas.py
from bson import ObjectId
from marshmallow import EXCLUDE, Schema, fields, validate

from petshop.api.breeds.schemas import BreedSummarySchema
from petshop.api.colors.schemas import ColorSummarySchema
from petshop.models.pet import PetGender, PetSize
from petshop.utils.fields import ObjectIdField

GENDER_VALUES = [g.value for g in PetGender]
SIZE_VALUES = [s.value for s in PetSize]


class PetCreateSchema(Schema):
    """
    POST /api/pets/ 요청 본문 스키마.
    PATCH 에서는 partial=True 로 같은 스키마를 사용합니다.
    """
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    breed = ObjectIdField(required=True, error_messages={"invalid": "Invalid breed ID format"})
    gender = fields.Str(required=True, validate=validate.OneOf(GENDER_VALUES))
    age = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    size = fields.Str(required=True, validate=validate.OneOf(SIZE_VALUES))
    color = ObjectIdField(required=True, error_messages={"invalid": "Invalid color ID format"})
    price = fields.Float(required=True, validate=validate.Range(min=0, error="Price must be greater than or equal to 0"))
    images = fields.List(
        fields.URL(error_messages={"invalid": "Invalid image URL"}),
        required=True,
        validate=validate.Length(min=1, error="At least one image is required")
    )
    location = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    description = fields.Str(allow_none=True, validate=validate.Length(max=2000))
    is_vaccinated = fields.Bool(data_key='isVaccinated', load_default=False)
    is_dewormed = fields.Bool(data_key='isDewormed', load_default=False)
    has_cert = fields.Bool(data_key='hasCert', load_default=False)
    has_microchip = fields.Bool(data_key='hasMicrochip', load_default=False)
    additional_info = fields.Str(data_key='additionalInfo', allow_none=True, validate=validate.Length(max=1000))
    is_available = fields.Bool(data_key='isAvailable', load_default=True)
    published_date = fields.DateTime(data_key='publishedDate')


class PetAvailabilitySchema(Schema):
    """PATCH /api/pets/<id>/availability"""
    is_available = fields.Bool(data_key='isAvailable', required=True)


def _dump_reference(value, summary_schema):
    if isinstance(value, dict):
        return summary_schema().dump(value)
    if isinstance(value, ObjectId):
        return str(value)
    return value


class PetResponseSchema(Schema):
    """
    반려동물 조회 응답 스키마.
    breed, color 는 참조 문서로 채워져 있으면 요약 정보를, 아니면 ObjectId 문자열을 돌려줍니다.
    """
    id = ObjectIdField(attribute='_id', dump_only=True)
    name = fields.Str()
    breed = fields.Method('dump_breed')
    gender = fields.Str()
    age = fields.Str()
    size = fields.Str()
    color = fields.Method('dump_color')
    price = fields.Float()
    images = fields.List(fields.Str())
    location = fields.Str()
    description = fields.Str(allow_none=True)
    is_vaccinated = fields.Bool(data_key='isVaccinated')
    is_dewormed = fields.Bool(data_key='isDewormed')
    has_cert = fields.Bool(data_key='hasCert')
    has_microchip = fields.Bool(data_key='hasMicrochip')
    additional_info = fields.Str(data_key='additionalInfo', allow_none=True)
    is_available = fields.Bool(data_key='isAvailable')
    published_date = fields.DateTime(data_key='publishedDate')
    created_at = fields.DateTime(data_key='createdAt')
    updated_at = fields.DateTime(data_key='updatedAt')

    def dump_breed(self, pet):
        return _dump_reference(pet.get('breed'), BreedSummarySchema)

    def dump_color(self, pet):
        return _dump_reference(pet.get('color'), ColorSummarySchema)


class PetPriceRangeSchema(Schema):
    min = fields.Float()
    max = fields.Float()


class PetFilterOptionsSchema(Schema):
    """GET /api/pets/filter-options 응답 스키마"""
    breeds = fields.List(fields.Nested(BreedSummarySchema))
    colors = fields.List(fields.Nested(ColorSummarySchema))
    genders = fields.List(fields.Str())
    sizes = fields.List(fields.Str())
    price_range = fields.Nested(PetPriceRangeSchema, data_key='priceRange')
