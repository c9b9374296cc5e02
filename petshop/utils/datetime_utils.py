# petshop/utils/datetime_utils.py
"""
프로젝트 전체에서 일관된 시간 처리를 위한 유틸리티 모듈

모든 타임스탬프(created_at, updated_at, published_date, last_login)는
UTC timezone-aware datetime으로 저장합니다.
"""

from datetime import datetime, timezone


class DateTimeUtils:
    """시간 처리를 위한 중앙화된 유틸리티 클래스"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def ensure_utc(dt: datetime) -> datetime:
        """naive datetime은 UTC로 간주하고, aware datetime은 UTC로 변환합니다."""
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)


def now() -> datetime:
    return DateTimeUtils.now()


def ensure_utc(dt: datetime) -> datetime:
    return DateTimeUtils.ensure_utc(dt)
