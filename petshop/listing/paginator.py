# petshop/listing/paginator.py
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SortSpec:
    """단일 필드 정렬. 같은 값끼리는 _id 순서로 고정해 페이지 간 중복/누락을 막습니다."""
    field: str
    descending: bool = True

    def to_mongo(self) -> List[tuple]:
        direction = DESCENDING if self.descending else ASCENDING
        return [(self.field, direction), ('_id', direction)]


@dataclass(frozen=True)
class Pagination:
    current_page: int
    total_pages: int
    total_items: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def compute(cls, page: int, limit: int, total_items: int) -> "Pagination":
        total_pages = math.ceil(total_items / limit)
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_items=total_items,
            has_next_page=page < total_pages,
            has_prev_page=page > 1
        )


@dataclass
class Page:
    records: List[Dict[str, Any]] = field(default_factory=list)
    pagination: Optional[Pagination] = None

    @classmethod
    def empty(cls, page: int, limit: int) -> "Page":
        return cls(records=[], pagination=Pagination.compute(page, limit, 0))


def skip_for(page: int, limit: int) -> int:
    return (page - 1) * limit


def paginate(collection, predicate: Dict[str, Any], sort: SortSpec, page: int, limit: int,
             projection: Optional[Dict[str, Any]] = None) -> Page:
    """
    predicate로 한 페이지를 조회하고 전체 개수로 페이지 정보를 계산합니다.

    조회와 개수 세기는 서로 독립된 두 번의 읽기입니다. 그 사이에 다른 요청이
    문서를 추가/삭제하면 total_items와 실제 페이지 내용이 어긋날 수 있으며,
    목록 화면에서는 이를 허용합니다.

    Args:
        page, limit: 1 이상의 정수 (상위 단계에서 검증됨)
    """
    cursor = (
        collection.find(predicate, projection)
        .sort(sort.to_mongo())
        .skip(skip_for(page, limit))
        .limit(limit)
    )
    records = list(cursor)
    total_items = collection.count_documents(predicate)

    logger.info(f"목록 조회 완료 ({collection.name}): {len(records)}개 반환 (전체 {total_items}개, page={page}, limit={limit})")
    return Page(records=records, pagination=Pagination.compute(page, limit, total_items))
