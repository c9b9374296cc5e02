# petshop/utils/mongo_utils.py
import re
from datetime import datetime
from typing import Any

from bson import ObjectId

from petshop.core.errors import BadRequestError

# 저장소의 고유 식별자는 24자리 16진수 문자열 형태입니다.
OBJECT_ID_PATTERN = re.compile(r'^[0-9a-fA-F]{24}$')


def is_object_id(value: Any) -> bool:
    """ObjectId 인스턴스이거나 24자리 16진수 문자열이면 True"""
    if isinstance(value, ObjectId):
        return True
    return isinstance(value, str) and bool(OBJECT_ID_PATTERN.match(value))


def parse_object_id(value: str, label: str = 'ID') -> ObjectId:
    """경로/본문으로 들어온 식별자를 ObjectId로 변환합니다. 형식이 틀리면 400."""
    if not is_object_id(value):
        raise BadRequestError(f"Invalid {label} format", 'INVALID_ID')
    return ObjectId(value)


def to_public(value: Any) -> Any:
    """
    문서나 조회 조건을 JSON으로 내보낼 수 있는 형태로 변환합니다.
    ObjectId는 문자열로, datetime은 ISO 문자열로, '_id' 키는 'id'로 바꿉니다.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {('id' if k == '_id' else k): to_public(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_public(v) for v in value]
    return value
