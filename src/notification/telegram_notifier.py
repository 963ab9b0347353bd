"""
Telegram 알림 모듈

Telegram Bot API(sendMessage)를 통해 알림 메시지를 전송합니다.
"""

from __future__ import annotations

from typing import Any

import httpx

from config.settings import settings
from src.exceptions import NotificationError
from src.notification.alert_manager import format_price
from src.notification.alert_store import Alert
from src.utils.logger import get_logger

logger = get_logger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org"


def format_trigger_message(alert: Alert, current_price: float) -> str:
    """목표가 도달 메시지 (Telegram Markdown)"""
    return (
        "📈 *주가 알림* 📈\n\n"
        f"*{alert.symbol}* 종목이 목표가에 도달했습니다!\n\n"
        f"목표가: {format_price(alert.target)}\n"
        f"현재가: {format_price(current_price)}"
    )


class TelegramNotifier:
    """Telegram Bot 알림기"""

    def __init__(
        self,
        bot_token: str | None = None,
        chat_id: str | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        """
        Args:
            bot_token: Telegram Bot 토큰 (None이면 settings에서 가져옴)
            chat_id: 수신 채팅 ID (None이면 settings에서 가져옴)
            timeout: 요청 타임아웃 (초)
        """
        self.bot_token = bot_token or settings.bot_token
        self.chat_id = chat_id or settings.chat_id
        self.timeout = timeout or settings.http_timeout_seconds

    @property
    def endpoint(self) -> str:
        return f"{TELEGRAM_API_BASE}/bot{self.bot_token}/sendMessage"

    async def send_message(self, text: str) -> bool:
        """
        메시지를 Telegram으로 전송합니다.

        실패는 로그로만 남기며 예외를 전파하지 않습니다.

        Args:
            text: Markdown 형식 메시지

        Returns:
            전송 성공 여부
        """
        if not self.bot_token or not self.chat_id:
            logger.warning("Telegram BOT_TOKEN 또는 CHAT_ID가 설정되지 않았습니다.")
            return False

        payload = {
            "chat_id": self.chat_id,
            "text": text,
            "parse_mode": "Markdown",
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.endpoint,
                    json=payload,
                    timeout=self.timeout,
                )
                response.raise_for_status()
                self._check_result(response.json())
        except httpx.HTTPError as e:
            logger.error("Telegram 메시지 전송 실패: %s", e)
            return False
        except ValueError as e:
            logger.error("Telegram 응답 파싱 실패: %s", e)
            return False
        except NotificationError as e:
            logger.error("Telegram 메시지 전송 거부: %s (%s)", e.message, e.detail)
            return False

        logger.info("Telegram 메시지 전송 완료")
        return True

    @staticmethod
    def _check_result(result: Any) -> None:
        """Bot API 응답의 ok 필드 확인"""
        if not isinstance(result, dict) or result.get("ok") is not True:
            detail = result if isinstance(result, dict) else {"body": repr(result)}
            raise NotificationError(
                "Telegram API가 메시지 전송을 거부했습니다.",
                detail=detail,
            )
