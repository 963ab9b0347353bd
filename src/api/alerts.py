"""
알림 API 라우터

목표가 알림 등록 및 활성 알림 조회 기능을 제공합니다.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_alert_manager
from src.api.schemas import AlertResponse, MessageResponse, SetAlertRequest
from src.notification.alert_manager import AlertManager

router = APIRouter(tags=["Alerts"])


@router.post(
    "/set-alert",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="목표가 알림 등록",
    description="종목 코드와 목표가로 새 알림을 등록합니다. 현재가가 목표가 이상이 되면 Telegram으로 알립니다.",
    responses={400: {"model": MessageResponse, "description": "입력값 누락 또는 형식 오류"}},
)
async def set_alert(
    req: SetAlertRequest,
    manager: AlertManager = Depends(get_alert_manager),
) -> MessageResponse:
    """목표가 알림 등록"""
    alert = manager.register(req.stock_symbol, req.target_price)
    return MessageResponse(message=manager.format_confirmation(alert))


@router.get(
    "/alerts",
    response_model=list[AlertResponse],
    summary="활성 알림 목록 조회",
    description="아직 트리거되지 않은 알림을 최신 등록순으로 조회합니다.",
)
async def list_alerts(
    manager: AlertManager = Depends(get_alert_manager),
) -> list[AlertResponse]:
    """활성 알림 목록 조회"""
    return [
        AlertResponse(
            id=alert.id,
            symbol=alert.symbol,
            target=alert.target,
            status=alert.status,
            created_at=alert.created_at,
        )
        for alert in manager.get_alerts()
    ]
