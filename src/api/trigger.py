"""
가격 체크 트리거 API

외부 크론 작업이 호출하는 엔드포인트입니다.
체크는 백그라운드로 실행되고 응답은 즉시 반환됩니다.
trigger_mode 가 "endpoint" 일 때만 등록됩니다.
"""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends

from src.api.dependencies import get_price_checker
from src.api.schemas import MessageResponse
from src.notification.price_checker import PriceChecker
from src.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Trigger"])


@router.get(
    "/trigger-check",
    response_model=MessageResponse,
    summary="가격 체크 실행",
    description="가격 체크 사이클을 백그라운드로 시작하고 즉시 응답합니다.",
)
async def trigger_check(
    background_tasks: BackgroundTasks,
    checker: PriceChecker = Depends(get_price_checker),
) -> MessageResponse:
    """가격 체크 트리거"""
    logger.info("외부 크론 작업으로부터 가격 체크 요청 수신")
    background_tasks.add_task(checker.run_cycle)
    return MessageResponse(message="가격 체크가 시작되었습니다.")
