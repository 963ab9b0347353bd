"""
알림 매니저 모듈

알림 등록(입력 검증) 및 트리거 조건 판정 로직을 제공합니다.
"""

from __future__ import annotations

import math
from typing import Any

from config.settings import settings
from src.exceptions import ValidationError
from src.notification.alert_store import Alert, AlertStore
from src.utils.logger import get_logger

logger = get_logger(__name__)


def parse_symbol(symbol: Any) -> str:
    """종목 코드 검증 및 대문자 정규화"""
    if not isinstance(symbol, str) or not symbol.strip():
        raise ValidationError(
            "종목 코드와 목표가는 필수입니다.",
            detail={"field": "stockSymbol"},
        )
    return symbol.strip().upper()


def parse_target(target: Any) -> float:
    """목표가를 양의 유한 실수로 변환"""
    if target is None or isinstance(target, bool) or target == "":
        raise ValidationError(
            "종목 코드와 목표가는 필수입니다.",
            detail={"field": "targetPrice"},
        )
    try:
        value = float(target)
    except (TypeError, ValueError, OverflowError):
        # 아주 큰 정수는 repr 자체가 실패할 수 있어 값은 싣지 않음
        raise ValidationError(
            "목표가를 숫자로 해석할 수 없습니다.",
            detail={"field": "targetPrice", "type": type(target).__name__},
        ) from None

    if not math.isfinite(value) or value <= 0:
        raise ValidationError(
            "목표가는 0보다 큰 숫자여야 합니다.",
            detail={"field": "targetPrice", "value": str(target)},
        )
    return value


def format_price(value: float) -> str:
    """통화 기호를 붙인 가격 문자열

    소수점 이하 6자리까지 표시하고 뒤쪽 0은 지웁니다 (150.0 -> 150, 0.001 -> 0.001).
    """
    text = f"{value:,.6f}".rstrip("0").rstrip(".")
    if text in ("0", "-0"):
        text = f"{value:g}"
    return f"{settings.currency_symbol}{text}"


def is_triggered(alert: Alert, current_price: float) -> bool:
    """현재가가 목표가 이상이면 트리거"""
    return current_price >= alert.target


class AlertManager:
    """알림 매니저 — 알림 등록 및 조회"""

    def __init__(self, store: AlertStore) -> None:
        self._store = store

    def register(self, symbol: Any, target: Any) -> Alert:
        """
        새 목표가 알림을 등록합니다.

        Args:
            symbol: 종목 코드 (대소문자 무관)
            target: 목표가 (숫자 또는 숫자 문자열)

        Returns:
            저장된 알림

        Raises:
            ValidationError: 종목 코드/목표가가 없거나 잘못된 경우
        """
        # 둘 다 검증한 뒤에만 저장소를 변경
        normalized_symbol = parse_symbol(symbol)
        target_price = parse_target(target)

        alert = self._store.append(normalized_symbol, target_price)
        logger.info(
            "알림 등록: ID=%s, 종목=%s, 목표가=%s",
            alert.id,
            alert.symbol,
            alert.target,
        )
        return alert

    def get_alerts(self) -> list[Alert]:
        """활성 알림 목록 (최신 등록순)"""
        return self._store.snapshot()

    @staticmethod
    def format_confirmation(alert: Alert) -> str:
        """등록 완료 안내 메시지"""
        return (
            f"{alert.symbol} 알림이 설정되었습니다. "
            f"목표가: {format_price(alert.target)}"
        )
