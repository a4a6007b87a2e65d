# app/utils/test_datetime_utils.py
"""
시간 유틸리티 기능 테스트

사용법: python -m pytest app/utils/test_datetime_utils.py -v
"""

import pytest
from datetime import datetime, date, timezone
from app.utils.datetime_utils import DateTimeUtils, ms_to_iso

def test_now_is_utc_aware():
    dt = DateTimeUtils.now()
    assert dt.tzinfo == timezone.utc

def test_now_ms_is_int_milliseconds():
    before = int(datetime.now(timezone.utc).timestamp() * 1000)
    value = DateTimeUtils.now_ms()
    after = int(datetime.now(timezone.utc).timestamp() * 1000)
    assert isinstance(value, int)
    assert before <= value <= after

def test_timestamp_ms_conversion():
    """밀리초 <-> datetime 변환 테스트"""
    dt = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    ms = DateTimeUtils.to_timestamp_ms(dt)
    assert ms == 1705314600000
    assert DateTimeUtils.from_timestamp_ms(ms) == dt

def test_naive_datetime_is_treated_as_utc():
    naive = datetime(2024, 1, 15, 10, 30)
    assert DateTimeUtils.to_timestamp_ms(naive) == 1705314600000

def test_from_timestamp_ms_rejects_non_numbers():
    with pytest.raises(ValueError):
        DateTimeUtils.from_timestamp_ms("1705314600000")
    with pytest.raises(ValueError):
        DateTimeUtils.from_timestamp_ms(True)

def test_iso_string_uses_z_suffix():
    assert ms_to_iso(1705314600000) == "2024-01-15T10:30:00Z"

def test_for_firestore():
    """Firestore 변환 테스트"""
    test_data = {
        'join_date': date(2020, 1, 15),
        'nested': {'revoked_at': datetime(2024, 1, 15, 10, 30)},
        'list_data': [{'expires_at': datetime(2024, 1, 1)}],
        'count': 3,
    }

    converted = DateTimeUtils.for_firestore(test_data)

    assert converted['join_date'] == datetime(2020, 1, 15, tzinfo=timezone.utc)
    assert converted['nested']['revoked_at'].tzinfo == timezone.utc
    assert converted['list_data'][0]['expires_at'].tzinfo == timezone.utc
    assert converted['count'] == 3

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
