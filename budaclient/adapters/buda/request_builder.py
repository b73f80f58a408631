"""
Buda 요청 생성

엔드포인트 정의 + 파라미터 -> URL, 헤더, 직렬화된 본문.
인증 엔드포인트는 nonce 발급 후 서명 헤더 첨부.
"""

import base64
import json
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping
from urllib.parse import quote, urlencode, urlsplit

from budaclient.adapters.buda.errors import AuthenticationRequired
from budaclient.adapters.buda.nonce import NonceSource
from budaclient.adapters.buda.orders import format_decimal
from budaclient.adapters.buda.signer import Signer
from budaclient.core.config.loader import Credentials
from budaclient.core.constants import AuthHeaders

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Endpoint:
    """API 엔드포인트 정의

    Attributes:
        name: 작업 이름 (에러 메시지용, 예: GetBalances)
        method: HTTP 메서드
        path: 경로 템플릿 (예: /markets/{market_id}/orders)
        auth: 인증 필요 여부
    """

    name: str
    method: str
    path: str
    auth: bool = False


@dataclass(frozen=True)
class PreparedRequest:
    """전송 준비가 끝난 요청

    headers는 repr에서 제외 (API 키, 서명 노출 방지).
    """

    name: str
    method: str
    url: str
    path_and_query: str
    headers: dict[str, str] = field(default_factory=dict, repr=False)
    content: bytes | None = None

    @property
    def is_signed(self) -> bool:
        """서명 헤더 포함 여부"""
        return AuthHeaders.SIGNATURE in self.headers

    def json(self) -> Any:
        """본문 JSON 파싱 (테스트/디버깅용)"""
        if self.content is None:
            return None
        return json.loads(self.content)


def _query_value(value: Any) -> str:
    if isinstance(value, Decimal):
        return format_decimal(value)
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _path_segment(name: str, value: Any) -> str:
    """경로 파라미터 1개 인코딩

    빈 값, ".", ".."는 거부 (전송 시 경로가 정규화되어 서명 경로와 달라짐).
    """
    text = str(value)
    if text in ("", ".", ".."):
        raise ValueError(f"Invalid path parameter {name}: {text!r}")
    return quote(text, safe="")


def encode_query(params: Mapping[str, Any] | None) -> str:
    """쿼리 스트링 생성 (입력 순서 유지, None 값 제외)"""
    if not params:
        return ""
    pairs = [(key, _query_value(value)) for key, value in params.items() if value is not None]
    return urlencode(pairs)


def serialize_body(body: Mapping[str, Any]) -> bytes:
    """JSON 본문 직렬화 (전송/서명에 같은 바이트 사용)"""
    return json.dumps(body, separators=(",", ":")).encode("utf-8")


class RequestBuilder:
    """요청 생성기

    Args:
        base_url: REST API 베이스 URL (예: https://www.buda.com/api/v2)
        credentials: 자격 증명 (None이면 비인증 모드)
        nonce_source: nonce 생성기 (클라이언트 수명 동안 공유)
    """

    def __init__(
        self,
        base_url: str,
        credentials: Credentials | None,
        nonce_source: NonceSource,
    ):
        self.base_url = base_url.rstrip("/")
        self._base_path = urlsplit(self.base_url).path
        self._credentials = credentials
        self._signer = Signer(credentials.api_secret) if credentials else None
        self.nonce_source = nonce_source

    @property
    def authenticated(self) -> bool:
        """인증 모드 여부"""
        return self._credentials is not None

    def build(
        self,
        endpoint: Endpoint,
        path_params: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> PreparedRequest:
        """요청 생성

        Args:
            endpoint: 엔드포인트 정의
            path_params: 경로 템플릿 치환값 (URL 인코딩됨)
            query: 쿼리 파라미터
            body: JSON 본문

        Returns:
            PreparedRequest

        Raises:
            AuthenticationRequired: 인증 엔드포인트인데 자격 증명이 없는 경우
            ValueError: 경로 파라미터가 비어 있거나 "." / ".."인 경우
            SigningError: 서명 실패
        """
        if endpoint.auth and self._credentials is None:
            logger.warning(
                "Authenticated endpoint called without credentials",
                extra={"operation": endpoint.name},
            )
            raise AuthenticationRequired(endpoint.name)

        encoded_params = {
            key: _path_segment(key, value)
            for key, value in (path_params or {}).items()
        }
        path = endpoint.path.format(**encoded_params)

        query_string = encode_query(query)
        relative = f"{path}?{query_string}" if query_string else path
        path_and_query = f"{self._base_path}{relative}"
        url = f"{self.base_url}{relative}"

        content = serialize_body(body) if body is not None else None
        headers: dict[str, str] = {}
        if content is not None:
            headers["Content-Type"] = "application/json"

        if endpoint.auth:
            headers.update(self._auth_headers(endpoint.method, path_and_query, content))

        return PreparedRequest(
            name=endpoint.name,
            method=endpoint.method,
            url=url,
            path_and_query=path_and_query,
            headers=headers,
            content=content,
        )

    def _auth_headers(
        self,
        method: str,
        path_and_query: str,
        content: bytes | None,
    ) -> dict[str, str]:
        """인증 헤더 3종 생성 (API 키, nonce, 서명)"""
        assert self._credentials is not None and self._signer is not None

        nonce = self.nonce_source.next()
        body_b64 = base64.b64encode(content).decode("ascii") if content else None
        signature = self._signer.sign(method, path_and_query, nonce, body_b64)

        return {
            AuthHeaders.API_KEY: self._credentials.api_key,
            AuthHeaders.NONCE: nonce,
            AuthHeaders.SIGNATURE: signature,
        }
