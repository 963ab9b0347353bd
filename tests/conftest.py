"""
테스트 공통 Fixture 정의

pytest conftest.py - 모든 테스트에서 공유하는 fixture들을 정의합니다.
외부 시세 API / Telegram 호출은 가짜 구현으로 대체합니다.
"""

from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_alert_manager, get_alert_store, get_price_checker
from src.data.quote_provider import QuoteProvider
from src.exceptions import QuoteUnavailableError
from src.main import app
from src.notification.alert_manager import AlertManager
from src.notification.alert_store import AlertStore
from src.notification.price_checker import PriceChecker


class FakeQuoteProvider(QuoteProvider):
    """종목별 가격을 dict로 돌려주는 시세 제공자"""

    name = "fake"

    def __init__(self, prices: dict[str, float] | None = None, delay: float = 0.0) -> None:
        self.prices = dict(prices or {})
        self.delay = delay
        self.errors: dict[str, Exception] = {}
        self.calls: list[str] = []

    async def _fetch(self, symbol: str) -> float:
        self.calls.append(symbol)
        if self.delay:
            await asyncio.sleep(self.delay)
        if symbol in self.errors:
            raise self.errors[symbol]
        if symbol not in self.prices:
            raise QuoteUnavailableError(detail={"symbol": symbol})
        return self.prices[symbol]


class FakeNotifier:
    """전송된 메시지를 기록하는 알림기"""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.messages: list[str] = []

    async def send_message(self, text: str) -> bool:
        self.messages.append(text)
        return self.succeed


@pytest.fixture
def store() -> AlertStore:
    """빈 알림 저장소"""
    return AlertStore()


@pytest.fixture
def manager(store: AlertStore) -> AlertManager:
    """AlertManager 인스턴스"""
    return AlertManager(store)


@pytest.fixture
def quotes() -> FakeQuoteProvider:
    return FakeQuoteProvider()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def checker(
    store: AlertStore, quotes: FakeQuoteProvider, notifier: FakeNotifier
) -> PriceChecker:
    """가짜 시세/알림기를 쓰는 PriceChecker"""
    return PriceChecker(store, quotes, notifier)


@pytest.fixture
def client(manager: AlertManager, store: AlertStore, checker: PriceChecker):
    """의존성을 테스트용 인스턴스로 교체한 FastAPI 테스트 클라이언트"""
    app.dependency_overrides[get_alert_manager] = lambda: manager
    app.dependency_overrides[get_alert_store] = lambda: store
    app.dependency_overrides[get_price_checker] = lambda: checker
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
