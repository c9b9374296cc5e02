"""
유틸리티 모듈 패키지

이 패키지는 프로젝트 전체에서 공통으로 사용되는 유틸리티 함수들을 포함합니다.
"""

from .datetime_utils import DateTimeUtils, now, ensure_utc
from .mongo_utils import is_object_id, parse_object_id, to_public

__all__ = [
    'DateTimeUtils', 'now', 'ensure_utc',
    'is_object_id', 'parse_object_id', 'to_public'
]
