"""
Settings (애플리케이션 설정) 테스트

환경변수 기반 설정의 기본값과 커스텀 값 적용을 검증합니다.
"""

import pytest
from pydantic import ValidationError

from config.settings import Settings


class TestSettingsDefaults:
    """Settings 기본값 테스트"""

    def test_default_port(self, monkeypatch):
        """PORT 미설정 시 3000"""
        monkeypatch.delenv("PORT", raising=False)
        s = Settings(_env_file=None)
        assert s.port == 3000

    def test_default_quote_provider(self):
        s = Settings(_env_file=None, quote_provider="yahoo")
        assert s.quote_provider == "yahoo"

    def test_default_policy_consumes_alert_on_failure(self):
        """기본 정책: 전송 실패해도 알림 삭제"""
        s = Settings(_env_file=None, keep_alert_on_notify_failure=False)
        assert s.keep_alert_on_notify_failure is False

    def test_default_timeout_is_bounded(self):
        s = Settings(_env_file=None)
        assert 0 < s.http_timeout_seconds


class TestSettingsEnv:
    """환경변수 이름 매핑 테스트"""

    def test_reads_env_names(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("BOT_TOKEN", "123:abc")
        monkeypatch.setenv("CHAT_ID", "-100200")
        monkeypatch.setenv("ALPHA_VANTAGE_KEY", "demo")

        s = Settings(_env_file=None)

        assert s.port == 8080
        assert s.bot_token == "123:abc"
        assert s.chat_id == "-100200"
        assert s.alpha_vantage_key == "demo"

    def test_invalid_trigger_mode(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, trigger_mode="cron")

    def test_invalid_interval(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, check_interval_seconds=0)


class TestMissingSecrets:
    """필수 비밀값 검사"""

    def test_all_missing(self):
        s = Settings(_env_file=None, bot_token="", chat_id="", quote_provider="yahoo")
        assert s.missing_secrets() == ["BOT_TOKEN", "CHAT_ID"]

    def test_none_missing(self):
        s = Settings(_env_file=None, bot_token="t", chat_id="c", quote_provider="yahoo")
        assert s.missing_secrets() == []

    def test_alpha_vantage_requires_key(self):
        s = Settings(
            _env_file=None,
            bot_token="t",
            chat_id="c",
            quote_provider="alphavantage",
            alpha_vantage_key="",
        )
        assert s.missing_secrets() == ["ALPHA_VANTAGE_KEY"]
