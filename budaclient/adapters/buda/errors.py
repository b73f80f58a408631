"""
Buda API 에러 정의

요청 생성/서명, 전송, 응답 디코딩 단계별 에러.
모든 에러는 BudaError를 상속하며 호출자에게 그대로 전파됨.
"""

from typing import Any


class BudaError(Exception):
    """Buda 클라이언트 에러 최상위 클래스"""
    pass


class AuthenticationRequired(BudaError):
    """인증 필요 에러

    자격 증명 없이 인증 API를 호출했을 때 발생.
    네트워크 요청 전에 발생함.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Authentication required for {operation}")


class InvalidOrderType(BudaError):
    """지원하지 않는 price_type"""

    def __init__(self, price_type: str):
        self.price_type = price_type
        super().__init__(
            f"Unsupported price type: {price_type!r} (expected 'limit' or 'market')"
        )


class SigningError(BudaError):
    """서명 생성 실패 (빈 시크릿, 지원하지 않는 메서드)"""
    pass


class TransportError(BudaError):
    """HTTP 전송 실패

    연결 실패, 타임아웃 등. 원인 예외는 cause에 보관.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class DecodeError(BudaError):
    """응답 디코딩 실패

    응답이 JSON이 아니거나 기대한 형태가 아닐 때 발생.
    API가 에러 객체를 반환한 경우 remote_error에 그 내용을 담음.
    """

    def __init__(
        self,
        expected: str,
        excerpt: str,
        remote_error: Any = None,
        status_code: int | None = None,
        reason: str | None = None,
    ):
        self.expected = expected
        self.excerpt = excerpt
        self.remote_error = remote_error
        self.status_code = status_code
        self.reason = reason

        message = f"Cannot decode response as {expected!r}"
        if status_code is not None:
            message += f" [HTTP {status_code}]"
        if remote_error is not None:
            message += f": remote error {remote_error}"
        elif reason:
            message += f": {reason}"
        message += f" (body: {excerpt})"
        super().__init__(message)
