"""
알림 시스템 패키지

목표가 알림 등록, 가격 체크 사이클, Telegram 알림 전송 기능을 제공합니다.
"""

from __future__ import annotations

__all__ = [
    "Alert",
    "AlertManager",
    "AlertStore",
    "CycleSummary",
    "PriceChecker",
    "PriceCheckScheduler",
    "TelegramNotifier",
]

from src.notification.alert_manager import AlertManager
from src.notification.alert_store import Alert, AlertStore
from src.notification.check_scheduler import PriceCheckScheduler
from src.notification.price_checker import CycleSummary, PriceChecker
from src.notification.telegram_notifier import TelegramNotifier
