"""
애플리케이션 기동/종료(lifespan) 테스트

필수 비밀값 검사와 실행 방식(endpoint / scheduler) 선택을 검증합니다.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from config.settings import settings
from src.exceptions import ConfigurationError
from src.main import create_app


@pytest.fixture
def configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "bot_token", "123:abc")
    monkeypatch.setattr(settings, "chat_id", "42")
    monkeypatch.setattr(settings, "quote_provider", "yahoo")
    monkeypatch.setattr(settings, "require_secrets", True)


def test_startup_fails_without_secrets(monkeypatch: pytest.MonkeyPatch) -> None:
    """BOT_TOKEN/CHAT_ID 없으면 기동 실패"""
    monkeypatch.setattr(settings, "bot_token", "")
    monkeypatch.setattr(settings, "chat_id", "")
    monkeypatch.setattr(settings, "require_secrets", True)

    with pytest.raises(ConfigurationError):
        with TestClient(create_app()):
            pass


def test_startup_allowed_when_secrets_not_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "bot_token", "")
    monkeypatch.setattr(settings, "chat_id", "")
    monkeypatch.setattr(settings, "require_secrets", False)
    monkeypatch.setattr(settings, "trigger_mode", "endpoint")

    with TestClient(create_app()) as client:
        assert client.get("/health").status_code == 200


@pytest.mark.usefixtures("configured")
def test_endpoint_mode_mounts_trigger(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "trigger_mode", "endpoint")

    with patch("src.main.PriceCheckScheduler") as mock_scheduler_class:
        with TestClient(create_app()) as client:
            paths = {route.path for route in client.app.routes}
            assert "/trigger-check" in paths

        mock_scheduler_class.assert_not_called()


@pytest.mark.usefixtures("configured")
def test_scheduler_mode_starts_timer(monkeypatch: pytest.MonkeyPatch) -> None:
    """scheduler 모드: 내부 타이머 시작, /trigger-check 미등록"""
    monkeypatch.setattr(settings, "trigger_mode", "scheduler")
    monkeypatch.setattr(settings, "check_interval_seconds", 15)

    mock_scheduler = MagicMock()
    mock_scheduler.get_status.return_value = {"is_running": True, "interval_seconds": 15}
    mock_scheduler.get_cycle_history.return_value = [{"status": "completed"}]

    with patch("src.main.PriceCheckScheduler", return_value=mock_scheduler):
        with TestClient(create_app()) as client:
            mock_scheduler.start.assert_called_once_with(interval_seconds=15)

            assert client.get("/trigger-check").status_code == 404
            health = client.get("/health").json()
            assert health["trigger_mode"] == "scheduler"
            assert health["scheduler"]["interval_seconds"] == 15
            assert health["recent_cycles"] == [{"status": "completed"}]
            mock_scheduler.get_cycle_history.assert_called_with(limit=5)

        mock_scheduler.stop.assert_called_once()
