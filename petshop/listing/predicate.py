# petshop/listing/predicate.py
"""
정규화된 필터 조건을 MongoDB 조회 조건(predicate)으로 조립합니다.

지원하는 절(clause)은 세 종류뿐입니다.
    - ExactMatch: 필드 값이 정확히 일치
    - Range: 하한/상한 중 주어진 쪽만 적용하는 범위 조건
    - TextSearch: 하나 이상의 필드에 대한 대소문자 무시 부분 문자열 검색
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from bson import ObjectId

from petshop.utils.mongo_utils import is_object_id, to_public


@dataclass(frozen=True)
class ExactMatch:
    field: str
    value: Any

    def to_predicate(self) -> Dict[str, Any]:
        return {self.field: self.value}


@dataclass(frozen=True)
class Range:
    field: str
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    def to_predicate(self) -> Dict[str, Any]:
        bounds = {}
        if self.minimum is not None:
            bounds['$gte'] = self.minimum
        if self.maximum is not None:
            bounds['$lte'] = self.maximum
        return {self.field: bounds}


@dataclass(frozen=True)
class TextSearch:
    fields: Tuple[str, ...]
    text: str

    @property
    def pattern(self) -> str:
        # 사용자 입력은 항상 리터럴로 취급합니다.
        return re.escape(self.text)

    def to_predicate(self) -> Dict[str, Any]:
        if len(self.fields) == 1:
            return {self.fields[0]: {'$regex': self.pattern, '$options': 'i'}}
        return {'$or': [{name: {'$regex': self.pattern, '$options': 'i'}} for name in self.fields]}


Clause = Union[ExactMatch, Range, TextSearch]


@dataclass
class BuiltQuery:
    """조립된 조회 조건과, 어떤 절이 포함되었는지에 대한 정보"""
    predicate: Dict[str, Any]
    clauses: List[Clause] = field(default_factory=list)
    # 카테고리 이름이 해석되지 않는 등 결과가 비어 있을 수밖에 없는 경우
    unsatisfiable: bool = False

    @property
    def applied(self) -> bool:
        return bool(self.clauses) or self.unsatisfiable

    def applied_filters(self) -> Dict[str, Any]:
        return {'applied': self.applied, 'criteria': to_public(self.predicate)}


class QueryBuilder:
    """
    절을 하나씩 추가한 뒤 build()로 하나의 predicate를 만듭니다.
    값이 None이거나 빈 문자열인 조건은 추가하지 않습니다.
    """

    def __init__(self):
        self._clauses: List[Clause] = []

    def exact(self, field_name: str, value: Any) -> "QueryBuilder":
        if value is not None and value != '':
            self._clauses.append(ExactMatch(field_name, value))
        return self

    def range(self, field_name: str, minimum: Optional[float] = None, maximum: Optional[float] = None) -> "QueryBuilder":
        if minimum is not None or maximum is not None:
            self._clauses.append(Range(field_name, minimum, maximum))
        return self

    def text(self, field_names: Sequence[str], text: Optional[str]) -> "QueryBuilder":
        if text:
            self._clauses.append(TextSearch(tuple(field_names), text))
        return self

    def build(self, unsatisfiable: bool = False) -> BuiltQuery:
        predicate: Dict[str, Any] = {}
        for clause in self._clauses:
            for key, value in clause.to_predicate().items():
                if key in predicate:
                    raise ValueError(f"Duplicate predicate key: {key}")
                predicate[key] = value
        return BuiltQuery(predicate=predicate, clauses=list(self._clauses), unsatisfiable=unsatisfiable)


# 상품 검색어가 매칭되는 텍스트 필드. tags는 검색어가 ObjectId 형태가 아닐 때만 포함합니다.
PRODUCT_SEARCH_FIELDS = ('name', 'description', 'brand')


def product_search_fields(search: str) -> Tuple[str, ...]:
    if is_object_id(search):
        return PRODUCT_SEARCH_FIELDS
    return PRODUCT_SEARCH_FIELDS + ('tags',)


def build_product_query(criteria, category_id: Optional[ObjectId] = None, unsatisfiable: bool = False) -> BuiltQuery:
    """
    Args:
        criteria: ProductFilterCriteria
        category_id: CategoryResolver가 확정한 카테고리 ObjectId
        unsatisfiable: 카테고리 이름이 해석되지 않은 경우 True
    """
    builder = QueryBuilder()
    if criteria.search:
        builder.text(product_search_fields(criteria.search), criteria.search)
    builder.text(('brand',), criteria.brand)
    builder.exact('category', category_id)
    builder.exact('specifications.petType', criteria.pet_type)
    builder.range('price', criteria.min_price, criteria.max_price)
    builder.exact('is_in_stock', criteria.in_stock)
    builder.exact('is_active', criteria.is_active)
    return builder.build(unsatisfiable=unsatisfiable)


def build_pet_query(criteria) -> BuiltQuery:
    """criteria: PetFilterCriteria"""
    return (
        QueryBuilder()
        .exact('breed', criteria.breed)
        .exact('gender', criteria.gender)
        .exact('size', criteria.size)
        .exact('color', criteria.color)
        .exact('location', criteria.location)
        .exact('is_available', criteria.is_available)
        .range('price', criteria.min_price, criteria.max_price)
        .build()
    )


def build_staff_query(criteria) -> BuiltQuery:
    """criteria: StaffFilterCriteria. 역할 조건은 항상 포함됩니다."""
    return (
        QueryBuilder()
        .exact('role', 'staff')
        .text(('name', 'email'), criteria.search)
        .exact('is_active', criteria.is_active)
        .build()
    )
