# app/utils/datetime_utils.py
"""
프로젝트 전체에서 일관된 시간 처리를 위한 유틸리티 모듈

- 스토리/에피소드/댓글 문서의 created_at 은 epoch 밀리초(int)로 저장합니다.
- 사용자/토큰 문서의 시각은 UTC timezone-aware datetime 으로 저장합니다.
- API 응답에는 ISO 포맷(Z 접미사) 문자열을 사용합니다.
"""

import logging
from datetime import datetime, date, timezone, time
from typing import Union, Any

logger = logging.getLogger(__name__)

class DateTimeUtils:
    """시간/날짜 처리를 위한 중앙화된 유틸리티 클래스"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def now_ms() -> int:
        """현재 시간을 Unix timestamp (밀리초)로 반환"""
        return DateTimeUtils.to_timestamp_ms(DateTimeUtils.now())

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """datetime 객체를 ISO 포맷 문자열로 변환"""
        try:
            if dt.tzinfo is None:
                # timezone-naive인 경우 UTC로 가정
                dt = dt.replace(tzinfo=timezone.utc)
            else:
                dt = dt.astimezone(timezone.utc)

            return dt.isoformat().replace('+00:00', 'Z')

        except Exception as e:
            logger.error(f"ISO 문자열 변환 실패: {dt} - {e}")
            raise ValueError(f"datetime 객체를 ISO 문자열로 변환할 수 없습니다: {dt}")

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Firestore 저장을 위해 객체의 날짜/시간 필드를 변환

        변환 규칙:
        - date -> datetime (00:00:00 UTC)
        - timezone-naive datetime -> timezone-aware datetime (UTC)
        - dict/list 내부 재귀적 변환
        """
        if isinstance(obj, date) and not isinstance(obj, datetime):
            return datetime.combine(obj, time.min).replace(tzinfo=timezone.utc)
        elif isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)
        elif isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        return obj

    @staticmethod
    def from_timestamp_ms(timestamp_ms: int) -> datetime:
        """
        Unix timestamp (밀리초)를 UTC datetime 객체로 변환

        Args:
            timestamp_ms: Unix timestamp in milliseconds

        Returns:
            UTC timezone-aware datetime 객체
        """
        if isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, (int, float)):
            logger.error(f"timestamp_ms 변환 실패: {timestamp_ms}")
            raise ValueError(f"잘못된 timestamp 형식입니다: {timestamp_ms}")

        return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=timezone.utc)

    @staticmethod
    def to_timestamp_ms(dt: Union[datetime, Any]) -> int:
        """
        datetime 객체를 Unix timestamp (밀리초)로 변환

        Args:
            dt: datetime 객체 또는 Firestore timestamp

        Returns:
            Unix timestamp in milliseconds
        """
        if isinstance(dt, datetime):
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return int(dt.timestamp() * 1000)

        # Firestore timestamp 객체 처리
        if hasattr(dt, 'timestamp'):
            return int(dt.timestamp() * 1000)

        logger.error(f"timestamp_ms 변환 실패: {dt}")
        raise ValueError(f"datetime 객체 또는 Firestore timestamp여야 합니다: {type(dt)}")


# 편의를 위한 글로벌 함수들
def now_ms() -> int:
    """현재 시각 (epoch 밀리초)"""
    return DateTimeUtils.now_ms()

def ms_to_iso(timestamp_ms: int) -> str:
    """epoch 밀리초를 ISO 문자열로 변환"""
    return DateTimeUtils.to_iso_string(DateTimeUtils.from_timestamp_ms(timestamp_ms))
