"""
시스템 라우터

헬스 체크 엔드포인트를 제공합니다.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from config.settings import settings
from src.api.dependencies import get_alert_store, get_price_checker
from src.api.schemas import HealthResponse
from src.notification.alert_store import AlertStore
from src.notification.price_checker import PriceChecker

router = APIRouter()

RECENT_CYCLE_LIMIT = 5


@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="헬스 체크",
    description="서비스 동작 여부, 실행 환경, 활성 알림 수와 최근 가격 체크 결과를 반환합니다.",
)
async def health_check(
    request: Request,
    store: AlertStore = Depends(get_alert_store),
    checker: PriceChecker = Depends(get_price_checker),
) -> HealthResponse:
    """헬스 체크 엔드포인트"""
    scheduler = getattr(request.app.state, "check_scheduler", None)
    last_summary = checker.last_summary
    return HealthResponse(
        status="ok",
        env=settings.app_env,
        trigger_mode=settings.trigger_mode,
        active_alerts=len(store),
        last_cycle=last_summary.to_dict() if last_summary is not None else None,
        scheduler=scheduler.get_status() if scheduler is not None else None,
        recent_cycles=(
            scheduler.get_cycle_history(limit=RECENT_CYCLE_LIMIT)
            if scheduler is not None
            else None
        ),
    )
