# petshop/listing/category.py
"""
상품 목록의 category 파라미터 해석.

프론트엔드는 호출 위치에 따라 카테고리 ObjectId를 보내기도 하고 카테고리 이름을
보내기도 합니다. 이 값은 경계에서 한 번만 CategoryById / CategoryByName 으로 구분되고,
저장소로 가는 조회 조건에는 항상 ObjectId만 들어갑니다.
"""
import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from bson import ObjectId

from petshop.utils.mongo_utils import is_object_id

logger = logging.getLogger(__name__)

# 카테고리 필터를 적용하지 않는다는 의미의 예약어
ALL_CATEGORIES = 'all'


@dataclass(frozen=True)
class CategoryById:
    category_id: ObjectId


@dataclass(frozen=True)
class CategoryByName:
    name: str


CategoryRef = Union[CategoryById, CategoryByName]


def parse_category_token(token: Optional[str]) -> Optional[CategoryRef]:
    """
    쿼리 파라미터 문자열을 CategoryRef로 변환합니다.

    Returns:
        None: 값이 없거나 'all' 인 경우 (필터 미적용)
        CategoryById: 24자리 16진수 문자열인 경우
        CategoryByName: 그 외 모든 문자열
    """
    if token is None:
        return None
    token = token.strip()
    if not token or token == ALL_CATEGORIES:
        return None
    if is_object_id(token):
        return CategoryById(ObjectId(token))
    return CategoryByName(token)


class CategoryResolver:
    """CategoryRef를 실제 카테고리 ObjectId로 확정합니다."""

    def __init__(self, categories_collection):
        self.categories = categories_collection

    def resolve(self, ref: CategoryRef) -> Optional[ObjectId]:
        """
        Returns:
            카테고리 ObjectId. 이름에 해당하는 활성 카테고리가 없으면 None
            (호출 측은 빈 결과 페이지를 돌려줘야 합니다)
        """
        if isinstance(ref, CategoryById):
            return ref.category_id

        # 1차: 대소문자 구분 정확히 일치
        doc = self.categories.find_one({'name': ref.name, 'is_active': True}, {'_id': 1})
        if doc:
            return doc['_id']

        # 2차: 대소문자 무시 정확히 일치
        pattern = f"^{re.escape(ref.name)}$"
        doc = self.categories.find_one(
            {'name': {'$regex': pattern, '$options': 'i'}, 'is_active': True},
            {'_id': 1}
        )
        if doc:
            return doc['_id']

        logger.warning(f"카테고리 이름을 찾을 수 없음: '{ref.name}'")
        return None
