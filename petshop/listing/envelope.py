# petshop/listing/envelope.py
from typing import Any, Dict, Optional

from marshmallow import Schema, fields

from petshop.listing.paginator import Page
from petshop.listing.predicate import BuiltQuery


class PaginationSchema(Schema):
    """목록 응답의 pagination 객체"""
    current_page = fields.Int(data_key='currentPage')
    total_pages = fields.Int(data_key='totalPages')
    total_items = fields.Int(data_key='totalItems')
    has_next_page = fields.Bool(data_key='hasNextPage')
    has_prev_page = fields.Bool(data_key='hasPrevPage')


def assemble(message: str, page: Page, record_schema: Schema,
             built_query: Optional[BuiltQuery] = None) -> Dict[str, Any]:
    """
    목록 응답 공통 포맷:
        { message, data, pagination, appliedFilters? }
    appliedFilters에는 실제로 저장소에 전달된 조회 조건을 그대로 담습니다.
    """
    body = {
        'message': message,
        'data': record_schema.dump(page.records, many=True),
        'pagination': PaginationSchema().dump(page.pagination)
    }
    if built_query is not None:
        body['appliedFilters'] = built_query.applied_filters()
    return body
