# petshop/listing/criteria.py
"""
목록 API의 원시 쿼리 파라미터(문자열)를 타입이 정해진 필터 조건으로 변환합니다.

    - minPrice/maxPrice/page/limit 는 숫자로 변환하고, 변환할 수 없으면 400
    - isActive/inStock/isAvailable 은 'true'/'false' 만 bool로 인정하고 그 외 값은 무시
    - page 기본값 1, limit 기본값은 도메인별 설정값(상품 15, 반려동물 10)
    - 정렬 필드는 도메인별 허용 목록 중 하나, 정렬 방향은 asc/desc (기본 desc)
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from bson import ObjectId
from marshmallow import (
    EXCLUDE, Schema, ValidationError, fields, post_load, pre_load, validate, validates, validates_schema
)

from petshop.listing.category import CategoryRef, parse_category_token
from petshop.listing.paginator import SortSpec
from petshop.models.pet import PetGender, PetSize
from petshop.utils.fields import ObjectIdField

SORT_ORDERS = ('asc', 'desc')
# 저장소가 받을 수 있는 skip 최대값 (8바이트 정수)
MAX_SKIP = 2 ** 63 - 1


@dataclass
class ProductFilterCriteria:
    category: Optional[CategoryRef] = None
    brand: Optional[str] = None
    search: Optional[str] = None
    pet_type: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    in_stock: Optional[bool] = None
    is_active: Optional[bool] = None
    page: int = 1
    limit: int = 15
    sort: SortSpec = SortSpec('created_at')


@dataclass
class PetFilterCriteria:
    breed: Optional[ObjectId] = None
    color: Optional[ObjectId] = None
    gender: Optional[str] = None
    size: Optional[str] = None
    location: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    is_available: Optional[bool] = None
    page: int = 1
    limit: int = 10
    sort: SortSpec = SortSpec('published_date')


@dataclass
class StaffFilterCriteria:
    search: Optional[str] = None
    is_active: Optional[bool] = None
    page: int = 1
    limit: int = 10
    sort: SortSpec = SortSpec('created_at')


class ListingQuerySchema(Schema):
    """
    목록 API 공통 쿼리 스키마.
    하위 클래스는 BOOLEAN_PARAMS, SORT_FIELDS(API 이름 -> 문서 필드), DEFAULT_SORT 와
    sort_by 필드를 정의합니다.
    """
    BOOLEAN_PARAMS = ()
    SORT_FIELDS: Dict[str, str] = {}
    DEFAULT_SORT = 'createdAt'

    class Meta:
        unknown = EXCLUDE

    page = fields.Int(
        load_default=1,
        validate=validate.Range(min=1, error="Page must be a valid positive number"),
        error_messages={"invalid": "Page must be a valid positive number"}
    )
    limit = fields.Int(
        validate=validate.Range(min=1, error="Limit must be a valid positive number"),
        error_messages={"invalid": "Limit must be a valid positive number"}
    )
    sort_order = fields.Str(
        data_key='sortOrder',
        load_default='desc',
        validate=validate.OneOf(SORT_ORDERS, error="sortOrder must be one of: asc, desc")
    )

    def __init__(self, *args, default_limit: int = 15, max_limit: int = 100, **kwargs):
        super().__init__(*args, **kwargs)
        self.default_limit = default_limit
        self.max_limit = max_limit

    @pre_load
    def drop_unspecified(self, data, **kwargs):
        """빈 값과 'true'/'false' 가 아닌 불리언 파라미터는 '지정하지 않음'으로 취급합니다."""
        cleaned = {}
        for key, value in data.items():
            if isinstance(value, str):
                value = value.strip()
            if value is None or value == '':
                continue
            if key in self.BOOLEAN_PARAMS and not isinstance(value, bool):
                if value not in ('true', 'false'):
                    continue
            cleaned[key] = value
        return cleaned

    @validates('limit')
    def validate_limit(self, value, **kwargs):
        if value > self.max_limit:
            raise ValidationError(f"Limit must not exceed {self.max_limit}")

    @validates_schema
    def validate_offset(self, data, **kwargs):
        page = data.get('page', 1)
        limit = data.get('limit', self.default_limit)
        if (page - 1) * limit > MAX_SKIP:
            raise ValidationError("Page is out of range", field_name='page')

    def _common(self, data: Dict[str, Any]) -> Dict[str, Any]:
        sort_by = data.pop('sort_by', None) or self.DEFAULT_SORT
        sort_order = data.pop('sort_order')
        data['sort'] = SortSpec(self.SORT_FIELDS[sort_by], descending=(sort_order == 'desc'))
        data.setdefault('limit', self.default_limit)
        return data


def _price_field(data_key: str, label: str) -> fields.Float:
    return fields.Float(
        data_key=data_key,
        allow_nan=False,
        error_messages={"invalid": f"{label} must be a valid number", "special": f"{label} must be a valid number"}
    )


class ProductFilterQuerySchema(ListingQuerySchema):
    """GET /api/products/ 쿼리 스키마"""
    BOOLEAN_PARAMS = ('inStock', 'isActive')
    SORT_FIELDS = {'name': 'name', 'price': 'price', 'rating': 'rating', 'createdAt': 'created_at'}
    DEFAULT_SORT = 'createdAt'

    category = fields.Str()
    brand = fields.Str()
    search = fields.Str(validate=validate.Length(max=200))
    pet_type = fields.Str(data_key='petType')
    min_price = _price_field('minPrice', 'Min price')
    max_price = _price_field('maxPrice', 'Max price')
    in_stock = fields.Bool(data_key='inStock')
    is_active = fields.Bool(data_key='isActive')
    sort_by = fields.Str(data_key='sortBy', validate=validate.OneOf(list(SORT_FIELDS)))

    @post_load
    def make_criteria(self, data, **kwargs) -> ProductFilterCriteria:
        data = self._common(data)
        data['category'] = parse_category_token(data.get('category'))
        return ProductFilterCriteria(**data)


class PetFilterQuerySchema(ListingQuerySchema):
    """GET /api/pets/ 쿼리 스키마"""
    BOOLEAN_PARAMS = ('isAvailable',)
    SORT_FIELDS = {
        'publishedDate': 'published_date',
        'price': 'price',
        'name': 'name',
        'createdAt': 'created_at'
    }
    DEFAULT_SORT = 'publishedDate'

    breed = ObjectIdField(error_messages={"invalid": "Invalid breed ID format"})
    color = ObjectIdField(error_messages={"invalid": "Invalid color ID format"})
    gender = fields.Str(validate=validate.OneOf([g.value for g in PetGender]))
    size = fields.Str(validate=validate.OneOf([s.value for s in PetSize]))
    location = fields.Str()
    min_price = _price_field('minPrice', 'Min price')
    max_price = _price_field('maxPrice', 'Max price')
    is_available = fields.Bool(data_key='isAvailable')
    sort_by = fields.Str(data_key='sortBy', validate=validate.OneOf(list(SORT_FIELDS)))

    @post_load
    def make_criteria(self, data, **kwargs) -> PetFilterCriteria:
        return PetFilterCriteria(**self._common(data))


class StaffFilterQuerySchema(ListingQuerySchema):
    """GET /api/staff/ 쿼리 스키마. 최신 등록순 고정 정렬입니다."""
    BOOLEAN_PARAMS = ('isActive',)
    SORT_FIELDS = {'createdAt': 'created_at'}

    search = fields.Str(validate=validate.Length(max=100))
    is_active = fields.Bool(data_key='isActive')

    @post_load
    def make_criteria(self, data, **kwargs) -> StaffFilterCriteria:
        return StaffFilterCriteria(**self._common(data))


def normalize_product_filters(raw: Mapping[str, Any], default_limit: int = 15, max_limit: int = 100) -> ProductFilterCriteria:
    return ProductFilterQuerySchema(default_limit=default_limit, max_limit=max_limit).load(dict(raw))


def normalize_pet_filters(raw: Mapping[str, Any], default_limit: int = 10, max_limit: int = 100) -> PetFilterCriteria:
    return PetFilterQuerySchema(default_limit=default_limit, max_limit=max_limit).load(dict(raw))


def normalize_staff_filters(raw: Mapping[str, Any], default_limit: int = 10, max_limit: int = 100) -> StaffFilterCriteria:
    return StaffFilterQuerySchema(default_limit=default_limit, max_limit=max_limit).load(dict(raw))
