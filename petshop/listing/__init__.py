"""
목록 조회 파이프라인

    쿼리 파라미터 -> criteria (정규화) -> category (상품만, 카테고리 해석)
    -> predicate (조회 조건 조립) -> paginator (조회 + 개수) -> envelope (응답 포맷)
"""

from .category import CategoryById, CategoryByName, CategoryResolver, parse_category_token
from .criteria import (
    PetFilterCriteria, ProductFilterCriteria, StaffFilterCriteria,
    normalize_pet_filters, normalize_product_filters, normalize_staff_filters
)
from .envelope import assemble
from .paginator import Page, Pagination, SortSpec, paginate
from .predicate import BuiltQuery, QueryBuilder, build_pet_query, build_product_query, build_staff_query

__all__ = [
    'CategoryById', 'CategoryByName', 'CategoryResolver', 'parse_category_token',
    'PetFilterCriteria', 'ProductFilterCriteria', 'StaffFilterCriteria',
    'normalize_pet_filters', 'normalize_product_filters', 'normalize_staff_filters',
    'assemble',
    'Page', 'Pagination', 'SortSpec', 'paginate',
    'BuiltQuery', 'QueryBuilder', 'build_pet_query', 'build_product_query', 'build_staff_query'
]
