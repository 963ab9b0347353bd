"""
가격 체크 스케줄러 — 고정 간격으로 PriceChecker.run_cycle() 자동 실행

외부 호출(/trigger-check) 대신 내부 타이머로 가격 체크를 돌릴 때 사용합니다.
두 방식을 동시에 켜지 않도록 settings.trigger_mode 로 하나만 선택합니다.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from src.notification.price_checker import PriceChecker
from src.utils.logger import get_logger

logger = get_logger(__name__)

JOB_ID = "price_check_cycle"


class PriceCheckScheduler:
    """가격 체크 스케줄러"""

    MAX_HISTORY = 100

    def __init__(self, checker: PriceChecker, event_loop: Any | None = None) -> None:
        """스케줄러 초기화

        Parameters
        ----------
        checker:
            가격 체크 실행기
        event_loop:
            APScheduler가 붙을 asyncio 이벤트 루프. FastAPI lifespan 에서
            애플리케이션 메인 이벤트 루프를 주입하는 용도로 사용합니다.
        """
        self._checker = checker
        self._event_loop = event_loop
        self._scheduler = self._create_scheduler()
        self._is_running = False
        self._interval_seconds: int = 60
        self._cycle_history: list[dict[str, Any]] = []

    def _create_scheduler(self) -> AsyncIOScheduler:
        kwargs: dict[str, Any] = {"timezone": UTC}
        if self._event_loop is not None:
            kwargs["event_loop"] = self._event_loop
        return AsyncIOScheduler(**kwargs)

    @property
    def is_running(self) -> bool:
        return self._is_running

    # ───────────────── 시작 / 중지 ─────────────────

    def start(self, interval_seconds: int = 60) -> None:
        """스케줄러 시작"""
        if self._is_running:
            logger.warning("스케줄러가 이미 실행 중입니다")
            return

        self._interval_seconds = interval_seconds
        # max_instances=1: 이전 사이클이 끝나기 전에 다음 사이클이 겹치지 않음
        self._scheduler.add_job(
            self.run_scheduled_cycle,
            trigger=IntervalTrigger(seconds=interval_seconds, timezone=UTC),
            id=JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        self._is_running = True
        logger.info("가격 체크 스케줄러 시작: %d초 간격", interval_seconds)

    def stop(self) -> None:
        """스케줄러 중지"""
        if not self._is_running:
            logger.warning("스케줄러가 실행 중이 아닙니다")
            return

        self._scheduler.shutdown(wait=False)
        # 재시작 가능하도록 새 인스턴스 준비
        self._scheduler = self._create_scheduler()
        self._is_running = False
        logger.info("가격 체크 스케줄러 중지")

    # ───────────────── 사이클 실행 ─────────────────

    async def run_scheduled_cycle(self) -> dict[str, Any]:
        """스케줄된 사이클 실행"""
        now = datetime.now(UTC)
        try:
            summary = await self._checker.run_cycle()
        except Exception:
            logger.exception("가격 체크 사이클 실행 실패")
            result: dict[str, Any] = {
                "timestamp": now.isoformat(),
                "status": "error",
                "error": "사이클 실행 중 오류 발생",
            }
        else:
            if summary is None:
                result = {
                    "timestamp": now.isoformat(),
                    "status": "skipped",
                    "reason": "이전 사이클 실행 중",
                }
            else:
                result = {
                    "timestamp": now.isoformat(),
                    "status": "completed",
                    "cycle_result": summary.to_dict(),
                }

        self._append_history(result)
        return result

    # ───────────────── 상태 조회 ─────────────────

    def get_status(self) -> dict[str, Any]:
        """스케줄러 상태 조회"""
        next_run_time = None
        if self._is_running:
            job = self._scheduler.get_job(JOB_ID)
            if job and job.next_run_time:
                next_run_time = job.next_run_time.isoformat()

        return {
            "is_running": self._is_running,
            "interval_seconds": self._interval_seconds,
            "next_run_time": next_run_time,
            "total_cycles": len(self._cycle_history),
            "last_cycle_result": self._cycle_history[-1] if self._cycle_history else None,
        }

    def get_cycle_history(self, limit: int = 10) -> list[dict[str, Any]]:
        """최근 사이클 히스토리 (최신순)"""
        return list(reversed(self._cycle_history[-limit:]))

    def _append_history(self, result: dict[str, Any]) -> None:
        self._cycle_history.append(result)
        if len(self._cycle_history) > self.MAX_HISTORY:
            self._cycle_history = self._cycle_history[-self.MAX_HISTORY:]
