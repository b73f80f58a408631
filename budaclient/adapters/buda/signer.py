"""
Buda 요청 서명

HMAC-SHA384 서명 생성.
서명 대상 문자열: "{METHOD} {PATH_AND_QUERY} [{BASE64_BODY} ]{NONCE}"
"""

import hashlib
import hmac

from budaclient.adapters.buda.errors import SigningError
from budaclient.core.types import HttpMethod


SUPPORTED_METHODS = tuple(m.value for m in HttpMethod)


def canonical_message(
    method: str,
    path_and_query: str,
    nonce: str,
    body_b64: str | None = None,
) -> str:
    """서명 대상 문자열 생성

    Args:
        method: HTTP 메서드 (GET, POST, PUT, DELETE)
        path_and_query: 요청 라인의 경로 + 쿼리 (예: /api/v2/balances)
        nonce: X-SBTC-NONCE 헤더와 동일한 값
        body_b64: base64 인코딩된 요청 본문 (본문이 있을 때만)

    Returns:
        공백 하나로 구분된 서명 대상 문자열

    Raises:
        SigningError: 지원하지 않는 메서드
    """
    if method not in SUPPORTED_METHODS:
        raise SigningError(f"Unsupported HTTP method for signing: {method!r}")

    parts = [method, path_and_query]
    if body_b64:
        parts.append(body_b64)
    parts.append(nonce)
    return " ".join(parts)


class Signer:
    """API 시크릿으로 요청 서명

    시크릿은 로그나 repr에 노출하지 않음.
    """

    def __init__(self, api_secret: str):
        self._secret = api_secret

    def __repr__(self) -> str:
        return "Signer(api_secret='***')"

    def sign(
        self,
        method: str,
        path_and_query: str,
        nonce: str,
        body_b64: str | None = None,
    ) -> str:
        """서명 생성

        Returns:
            소문자 16진수 HMAC-SHA384 서명 (96자)

        Raises:
            SigningError: 시크릿이 비어 있거나 메서드가 잘못된 경우
        """
        if not self._secret:
            raise SigningError("Cannot sign request with an empty API secret")

        message = canonical_message(method, path_and_query, nonce, body_b64)
        return hmac.new(
            self._secret.encode("utf-8"),
            message.encode("utf-8"),
            hashlib.sha384,
        ).hexdigest()
