"""
API 요청/응답 스키마

요청 본문의 필드 이름은 프런트엔드와 맞추기 위해 camelCase 를 사용합니다.
값 검증은 AlertManager 에서 수행하므로 요청 스키마는 느슨하게 받습니다.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SetAlertRequest(BaseModel):
    """알림 등록 요청"""

    stock_symbol: Any = Field(
        default=None,
        alias="stockSymbol",
        description="종목 코드",
        examples=["AAPL"],
    )
    target_price: Any = Field(
        default=None,
        alias="targetPrice",
        description="목표가 (숫자 또는 숫자 문자열)",
        examples=["150"],
    )

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    """단순 메시지 응답"""

    message: str = Field(..., description="안내 메시지")


class AlertResponse(BaseModel):
    """활성 알림"""

    id: int
    symbol: str
    target: float
    status: str
    created_at: datetime


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(..., description="서비스 상태", examples=["ok"])
    env: str = Field(..., description="실행 환경", examples=["development"])
    trigger_mode: str = Field(..., description="가격 체크 실행 방식", examples=["endpoint"])
    active_alerts: int = Field(..., description="활성 알림 수")
    scheduler: dict[str, Any] | None = Field(
        default=None, description="스케줄러 상태 (scheduler 모드)"
    )
    last_cycle: dict[str, Any] | None = Field(
        default=None, description="마지막으로 끝난 가격 체크 요약"
    )
    recent_cycles: list[dict[str, Any]] | None = Field(
        default=None, description="최근 스케줄 실행 결과 (최신순, scheduler 모드)"
    )
