# petshop/utils/test_datetime_utils.py
"""
통합 시간 관리 유틸리티 기능 테스트 스크립트

사용법: python -m pytest petshop/utils/test_datetime_utils.py -v
"""

from datetime import datetime, timedelta, timezone

from petshop.utils.datetime_utils import DateTimeUtils, ensure_utc, now


def test_now_is_utc_aware():
    """현재 시간은 항상 UTC timezone-aware 여야 함"""
    current = DateTimeUtils.now()
    assert current.tzinfo is not None
    assert current.utcoffset() == timedelta(0)
    assert now().tzinfo == timezone.utc


def test_ensure_utc_naive_is_treated_as_utc():
    naive = datetime(2024, 1, 15, 10, 30)
    result = ensure_utc(naive)
    assert result.tzinfo == timezone.utc
    assert (result.hour, result.minute) == (10, 30)


def test_ensure_utc_converts_aware_datetime():
    """KST(+09:00) 시간은 UTC로 변환되어야 함"""
    kst = timezone(timedelta(hours=9))
    result = DateTimeUtils.ensure_utc(datetime(2024, 1, 15, 10, 30, tzinfo=kst))
    assert result.tzinfo == timezone.utc
    assert result.hour == 1
