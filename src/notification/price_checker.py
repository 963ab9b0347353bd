"""
가격 체크 사이클

저장소의 모든 활성 알림에 대해 현재가를 조회하고,
목표가에 도달한 알림은 Telegram으로 알린 뒤 삭제합니다.

사이클은 한 번에 하나만 실행됩니다. 실행 중에 들어온 요청은 거부됩니다.
"""

from __future__ import annotations

import asyncio
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol

from src.data.quote_provider import QuoteProvider
from src.notification.alert_manager import is_triggered
from src.notification.alert_store import Alert, AlertStore
from src.notification.telegram_notifier import format_trigger_message
from src.utils.logger import get_logger

logger = get_logger(__name__)


class Notifier(Protocol):
    async def send_message(self, text: str) -> bool: ...


@dataclass
class CycleSummary:
    """한 번의 가격 체크 결과 요약"""

    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None
    checked: int = 0
    triggered: int = 0
    skipped: int = 0
    notify_failed: int = 0
    errors: int = 0
    triggered_ids: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["started_at"] = self.started_at.isoformat()
        data["finished_at"] = self.finished_at.isoformat() if self.finished_at else None
        return data


class PriceChecker:
    """가격 체크 사이클 실행기

    Args:
        store: 알림 저장소
        quote_provider: 현재가 조회기
        notifier: 메시지 전송기
        keep_on_notify_failure: True면 알림 전송 실패 시 알림을 유지
    """

    def __init__(
        self,
        store: AlertStore,
        quote_provider: QuoteProvider,
        notifier: Notifier,
        *,
        keep_on_notify_failure: bool = False,
    ) -> None:
        self._store = store
        self._quote_provider = quote_provider
        self._notifier = notifier
        self._keep_on_notify_failure = keep_on_notify_failure
        self._lock = asyncio.Lock()
        self._last_summary: CycleSummary | None = None

    @property
    def last_summary(self) -> CycleSummary | None:
        return self._last_summary

    async def run_cycle(self) -> CycleSummary | None:
        """
        가격 체크 사이클 1회 실행

        개별 알림 처리 중 발생한 오류는 로그만 남기고 다음 알림으로 넘어갑니다.

        Returns:
            사이클 요약. 다른 사이클이 실행 중이어서 건너뛴 경우 None
        """
        if self._lock.locked():
            logger.warning("이전 가격 체크가 아직 실행 중입니다, 이번 요청은 건너뜁니다.")
            return None

        async with self._lock:
            summary = CycleSummary()
            alerts = self._store.snapshot()

            if not alerts:
                logger.info("가격 체크: 활성 알림이 없습니다.")
            else:
                logger.info("가격 체크 시작: 활성 알림 %d개", len(alerts))

            for alert in alerts:
                try:
                    await self._check_alert(alert, summary)
                except Exception:
                    summary.errors += 1
                    logger.exception(
                        "알림 처리 중 오류: ID=%s, 종목=%s", alert.id, alert.symbol
                    )

            summary.finished_at = datetime.now(UTC)
            self._last_summary = summary
            if alerts:
                logger.info(
                    "가격 체크 완료: 체크 %d, 트리거 %d, 스킵 %d, 전송실패 %d, 오류 %d",
                    summary.checked,
                    summary.triggered,
                    summary.skipped,
                    summary.notify_failed,
                    summary.errors,
                )
            return summary

    async def _check_alert(self, alert: Alert, summary: CycleSummary) -> None:
        current_price = await self._quote_provider.fetch_price(alert.symbol)
        if current_price is None:
            summary.skipped += 1
            logger.warning("%s 시세 없음, 이번 사이클은 건너뜁니다.", alert.symbol)
            return

        summary.checked += 1
        logger.info(
            "%s 체크: 현재가=%s, 목표가=%s", alert.symbol, current_price, alert.target
        )

        if not is_triggered(alert, current_price):
            return

        logger.info("알림 트리거: ID=%s, 종목=%s", alert.id, alert.symbol)
        message = format_trigger_message(alert, current_price)
        sent = await self._notifier.send_message(message)

        if not sent:
            summary.notify_failed += 1
            if self._keep_on_notify_failure:
                logger.warning(
                    "알림 전송 실패, 알림 유지: ID=%s, 종목=%s", alert.id, alert.symbol
                )
                return
            logger.warning(
                "알림 전송 실패, 알림은 삭제됩니다: ID=%s, 종목=%s",
                alert.id,
                alert.symbol,
            )

        if self._store.remove(alert.id):
            summary.triggered += 1
            summary.triggered_ids.append(alert.id)
