"""
알림 저장소 모듈

활성 알림을 메모리에 보관합니다. 재시작 시 모든 알림이 사라집니다.
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Alert(BaseModel):
    """목표가 알림 Pydantic 모델

    저장소에 있는 동안에는 항상 active 상태이며,
    트리거된 알림은 상태를 바꾸지 않고 삭제합니다.
    """

    id: int
    symbol: str = Field(..., min_length=1)
    target: float = Field(..., gt=0, allow_inf_nan=False)
    status: Literal["active"] = "active"
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = ConfigDict(frozen=True)


class AlertStore:
    """등록 순서를 유지하는 알림 저장소

    모든 변경은 내부 락으로 보호됩니다.
    """

    def __init__(self) -> None:
        self._alerts: list[Alert] = []
        self._next_id: int = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._alerts)

    def append(self, symbol: str, target: float) -> Alert:
        """새 ID를 발급하여 알림을 추가합니다."""
        with self._lock:
            alert = Alert(id=self._next_id, symbol=symbol, target=target)
            self._next_id += 1
            self._alerts.append(alert)
            return alert

    def snapshot(self) -> list[Alert]:
        """순회용 사본 (최신 등록순)"""
        with self._lock:
            return list(reversed(self._alerts))

    def remove(self, alert_id: int) -> bool:
        """ID로 알림 삭제. 이미 없으면 False"""
        with self._lock:
            for idx, alert in enumerate(self._alerts):
                if alert.id == alert_id:
                    del self._alerts[idx]
                    return True
            return False
