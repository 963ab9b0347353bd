"""
FastAPI 애플리케이션 엔트리포인트
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config.settings import settings
from src.api.alerts import router as alerts_router
from src.api.dependencies import get_price_checker
from src.api.routes import router as base_router
from src.api.trigger import router as trigger_router
from src.exceptions import ConfigurationError, register_exception_handlers
from src.notification.check_scheduler import PriceCheckScheduler
from src.utils.logger import get_logger

logger = get_logger(__name__)


OPENAPI_TAGS = [
    {
        "name": "System",
        "description": "시스템 상태 확인",
    },
    {
        "name": "Alerts",
        "description": "목표가 알림 등록 및 조회",
    },
    {
        "name": "Trigger",
        "description": "외부 크론 작업용 가격 체크 트리거",
    },
]


def _check_required_secrets() -> None:
    """필수 비밀값이 없으면 기동을 중단합니다."""
    missing = settings.missing_secrets()
    if not missing:
        return
    if settings.require_secrets:
        raise ConfigurationError(
            f"필수 환경변수가 설정되지 않았습니다: {', '.join(missing)}",
            detail={"missing": missing},
        )
    logger.warning("필수 환경변수 누락 (REQUIRE_SECRETS=false): %s", ", ".join(missing))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """애플리케이션 시작/종료 시 실행되는 로직"""
    # Startup
    _check_required_secrets()
    logger.info(
        "🚀 Stock Price Alert 시작 (환경: %s, 시세: %s, 실행 방식: %s)",
        settings.app_env,
        settings.quote_provider,
        settings.trigger_mode,
    )

    scheduler: PriceCheckScheduler | None = None
    if settings.trigger_mode == "scheduler":
        # APScheduler가 FastAPI 메인 이벤트 루프에 붙도록 루프 객체를 주입
        loop = asyncio.get_running_loop()
        scheduler = PriceCheckScheduler(get_price_checker(), event_loop=loop)
        scheduler.start(interval_seconds=settings.check_interval_seconds)
        app.state.check_scheduler = scheduler

    yield

    # Shutdown
    if scheduler is not None:
        scheduler.stop()
        app.state.check_scheduler = None
    logger.info("👋 Stock Price Alert 종료")


def create_app() -> FastAPI:
    """FastAPI 앱 생성"""
    application = FastAPI(
        title="Stock Price Alert",
        description=(
            "주가 목표가 알림 서비스 📈\n\n"
            "등록한 종목의 현재가가 목표가 이상이 되면 "
            "Telegram으로 알림을 보내고 알림을 삭제합니다."
        ),
        version="1.0.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    # 예외 핸들러 등록
    register_exception_handlers(application)

    # 라우터 등록
    application.include_router(base_router)
    application.include_router(alerts_router)
    # 외부 트리거와 내부 타이머는 동시에 켜지 않음
    if settings.trigger_mode == "endpoint":
        application.include_router(trigger_router)

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
    )
