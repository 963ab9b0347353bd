"""
시세 제공자

종목별 현재가를 외부 시세 API에서 조회합니다.
제공자 구현은 교체 가능하며, 가격 체크 로직은 ``fetch_price`` 만 사용합니다.

조회 실패(네트워크 오류, 비정상 응답, 데이터 없음)는 예외가 아니라
``None`` 으로 반환됩니다.

References:
    - Yahoo Finance: https://query1.finance.yahoo.com/v7/finance/quote
    - Alpha Vantage: https://www.alphavantage.co/documentation/#latestprice
"""

from __future__ import annotations

import asyncio
import math
from abc import ABC, abstractmethod
from typing import Any

import httpx
import yfinance as yf

from config.settings import Settings, settings
from src.exceptions import QuoteUnavailableError
from src.utils.logger import get_logger

logger = get_logger(__name__)

# ───────────────────── Constants ─────────────────────

YAHOO_QUOTE_URL = "https://query1.finance.yahoo.com/v7/finance/quote"
ALPHA_VANTAGE_URL = "https://www.alphavantage.co/query"

# Yahoo는 기본 User-Agent 요청을 차단함
BROWSER_HEADERS = {"User-Agent": "Mozilla/5.0"}


def _to_price(value: Any) -> float:
    """응답 값을 양의 유한 실수로 변환"""
    if value is None or isinstance(value, bool):
        raise QuoteUnavailableError(detail={"value": repr(value)})
    try:
        price = float(value)
    except (TypeError, ValueError, OverflowError):
        raise QuoteUnavailableError(detail={"type": type(value).__name__}) from None
    if not math.isfinite(price) or price <= 0:
        raise QuoteUnavailableError(detail={"value": repr(value)})
    return price


class QuoteProvider(ABC):
    """시세 제공자 기본 클래스"""

    name: str = "base"

    async def fetch_price(self, symbol: str) -> float | None:
        """
        현재가 조회

        Args:
            symbol: 종목 코드 (예: "AAPL", "RELIANCE.NS")

        Returns:
            현재가. 조회할 수 없으면 None
        """
        try:
            price = await self._fetch(symbol)
        except QuoteUnavailableError as e:
            logger.warning(
                "[%s] %s 시세 데이터 없음: %s", self.name, symbol, e.detail or e.message
            )
            return None
        except TimeoutError:
            logger.warning("[%s] %s 시세 조회 시간 초과", self.name, symbol)
            return None
        except httpx.HTTPError as e:
            logger.warning("[%s] %s 시세 조회 실패: %s", self.name, symbol, e)
            return None
        except ValueError as e:
            # JSON 디코딩 실패
            logger.warning("[%s] %s 시세 응답 파싱 실패: %s", self.name, symbol, e)
            return None

        logger.debug("[%s] %s 현재가: %s", self.name, symbol, price)
        return price

    @abstractmethod
    async def _fetch(self, symbol: str) -> float:
        """현재가 조회. 실패 시 QuoteUnavailableError 또는 httpx.HTTPError"""


class YahooQuoteProvider(QuoteProvider):
    """Yahoo Finance quote API (키 불필요)"""

    name = "yahoo"

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout

    async def _fetch(self, symbol: str) -> float:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                YAHOO_QUOTE_URL,
                params={"symbols": symbol},
                headers=BROWSER_HEADERS,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

        try:
            quote = data["quoteResponse"]["result"][0]
            return _to_price(quote["regularMarketPrice"])
        except (KeyError, IndexError, TypeError):
            raise QuoteUnavailableError(detail={"symbol": symbol}) from None


class AlphaVantageQuoteProvider(QuoteProvider):
    """Alpha Vantage GLOBAL_QUOTE API (API 키 필요)"""

    name = "alphavantage"

    def __init__(self, api_key: str, timeout: float = 10.0) -> None:
        self.api_key = api_key
        self.timeout = timeout

    async def _fetch(self, symbol: str) -> float:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                ALPHA_VANTAGE_URL,
                params={
                    "function": "GLOBAL_QUOTE",
                    "symbol": symbol,
                    "apikey": self.api_key,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

        # 한도 초과 시 "Note"/"Information" 만 내려오고 "Global Quote" 는 비어 있음
        try:
            return _to_price(data["Global Quote"]["05. price"])
        except (KeyError, TypeError):
            raise QuoteUnavailableError(detail={"symbol": symbol}) from None


class YFinanceQuoteProvider(QuoteProvider):
    """yfinance 라이브러리 기반 조회 (동기 호출을 스레드에서 실행)"""

    name = "yfinance"

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout

    async def _fetch(self, symbol: str) -> float:
        # 시간 초과 시 작업 스레드는 버려지고 사이클은 다음 알림으로 진행
        return await asyncio.wait_for(
            asyncio.to_thread(self._load_price, symbol), self.timeout
        )

    @staticmethod
    def _load_price(symbol: str) -> float:
        try:
            last_price = yf.Ticker(symbol).fast_info.last_price
        except Exception:
            logger.warning("yfinance 정보 조회 실패: %s", symbol)
            raise QuoteUnavailableError(detail={"symbol": symbol}) from None
        return _to_price(last_price)


def get_quote_provider(config: Settings | None = None) -> QuoteProvider:
    """설정에 맞는 시세 제공자 생성"""
    config = config or settings
    if config.quote_provider == "alphavantage":
        return AlphaVantageQuoteProvider(
            api_key=config.alpha_vantage_key,
            timeout=config.http_timeout_seconds,
        )
    if config.quote_provider == "yfinance":
        return YFinanceQuoteProvider(timeout=config.http_timeout_seconds)
    return YahooQuoteProvider(timeout=config.http_timeout_seconds)
