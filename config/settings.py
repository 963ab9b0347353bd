"""
애플리케이션 설정 관리

pydantic-settings를 사용하여 환경변수 기반 설정을 관리합니다.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 서버 설정
    host: str = "0.0.0.0"
    port: int = 3000

    # Telegram 알림 설정
    bot_token: str = ""
    chat_id: str = ""

    # 시세 조회 설정
    quote_provider: Literal["yahoo", "alphavantage", "yfinance"] = "yahoo"
    alpha_vantage_key: str = ""
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    # 가격 체크 실행 방식
    trigger_mode: Literal["endpoint", "scheduler"] = "endpoint"
    check_interval_seconds: int = Field(default=60, ge=1)

    # 알림 전송 실패 시 알림을 유지할지 여부 (기본: 실패해도 삭제)
    keep_alert_on_notify_failure: bool = False

    # 메시지에 표시할 통화 기호
    currency_symbol: str = "₹"

    # 필수 비밀값이 없으면 기동 실패
    require_secrets: bool = True

    # 앱 설정
    app_env: str = "development"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    def missing_secrets(self) -> list[str]:
        """설정되지 않은 필수 비밀값의 환경변수 이름 목록"""
        missing: list[str] = []
        if not self.bot_token:
            missing.append("BOT_TOKEN")
        if not self.chat_id:
            missing.append("CHAT_ID")
        if self.quote_provider == "alphavantage" and not self.alpha_vantage_key:
            missing.append("ALPHA_VANTAGE_KEY")
        return missing


# 전역 설정 인스턴스
settings = Settings()
