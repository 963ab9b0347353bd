"""
FastAPI 의존성 주입

알림 저장소, AlertManager, PriceChecker 싱글턴을 API 핸들러에 주입합니다.
테스트에서는 app.dependency_overrides 로 교체합니다.
"""

from __future__ import annotations

from config.settings import settings
from src.data.quote_provider import get_quote_provider
from src.notification.alert_manager import AlertManager
from src.notification.alert_store import AlertStore
from src.notification.price_checker import PriceChecker
from src.notification.telegram_notifier import TelegramNotifier

# 프로세스 전역 알림 저장소
_store = AlertStore()
_alert_manager = AlertManager(_store)
_price_checker: PriceChecker | None = None


def get_alert_store() -> AlertStore:
    """알림 저장소 의존성"""
    return _store


def get_alert_manager() -> AlertManager:
    """AlertManager 의존성"""
    return _alert_manager


def get_price_checker() -> PriceChecker:
    """
    PriceChecker 의존성.

    처음 호출될 때 settings 에 맞는 시세 제공자/Telegram 알림기로 생성합니다.
    """
    global _price_checker
    if _price_checker is None:
        _price_checker = PriceChecker(
            _store,
            get_quote_provider(settings),
            TelegramNotifier(),
            keep_on_notify_failure=settings.keep_alert_on_notify_failure,
        )
    return _price_checker
