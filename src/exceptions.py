"""
커스텀 예외 클래스 및 FastAPI 예외 핸들러

모든 비즈니스 예외는 AppError를 상속하며,
HTTP 응답은 일관된 JSON 형식으로 반환됩니다.

응답 형식::

    {
        "message": "종목 코드와 목표가는 필수입니다.",
        "code": "VALIDATION_ERROR",
        "detail": { ... }  // optional
    }
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.utils.logger import get_logger

logger = get_logger(__name__)


# ───────────────────────── Base ─────────────────────────


class AppError(Exception):
    """애플리케이션 최상위 예외"""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "서버 내부 오류가 발생했습니다."

    def __init__(
        self,
        message: str | None = None,
        *,
        detail: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.__class__.message
        self.detail = detail
        super().__init__(self.message)


# ───────────────────── Concrete Errors ──────────────────


class ValidationError(AppError):
    """입력 검증 실패 (400)"""

    status_code = 400
    code = "VALIDATION_ERROR"
    message = "입력 데이터가 유효하지 않습니다."


class QuoteUnavailableError(AppError):
    """시세 조회 실패 (502)

    시세 제공자 내부에서만 사용되며 호출자에게는 None으로 변환됩니다.
    """

    status_code = 502
    code = "QUOTE_UNAVAILABLE"
    message = "현재가를 조회할 수 없습니다."


class NotificationError(AppError):
    """알림 전송 실패 (502)"""

    status_code = 502
    code = "NOTIFICATION_ERROR"
    message = "알림 전송에 실패했습니다."


class ConfigurationError(AppError):
    """필수 설정 누락 (500)"""

    status_code = 500
    code = "CONFIGURATION_ERROR"
    message = "필수 설정이 누락되었습니다."


# ──────────────────── Exception Handlers ────────────────


def _error_body(code: str, message: str, detail: Any = None) -> dict:
    body: dict[str, Any] = {"message": message, "code": code}
    if detail is not None:
        body["detail"] = detail
    return body


async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    """AppError 계열 예외를 일관된 JSON으로 변환"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.code, exc.message, exc.detail),
    )


async def request_validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 본문 파싱 실패를 400 응답으로 변환"""
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=_error_body(
            ValidationError.code,
            "요청 본문 형식이 올바르지 않습니다.",
            {"errors": errors},
        ),
    )


async def unhandled_error_handler(
    _request: Request, exc: Exception
) -> JSONResponse:
    """예상치 못한 예외에 대한 안전한 500 응답"""
    logger.error("처리되지 않은 예외 발생: %r", exc)
    return JSONResponse(
        status_code=500,
        content=_error_body("INTERNAL_ERROR", "서버 내부 오류가 발생했습니다."),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """FastAPI 앱에 예외 핸들러를 등록합니다."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        request_validation_error_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_error_handler)
