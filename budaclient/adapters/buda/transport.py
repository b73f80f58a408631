"""
Buda HTTP 전송

요청 1회 왕복 수행. 재시도하지 않음.
4xx/5xx 응답도 본문을 그대로 반환 (에러 내용은 JSON 본문에 담겨 있음).
"""

import logging
from dataclasses import dataclass

import httpx

from budaclient.adapters.buda.errors import TransportError
from budaclient.adapters.buda.request_builder import PreparedRequest
from budaclient.core.constants import Defaults

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """HTTP 응답 (상태 코드 + 본문 문자열)"""

    status_code: int
    text: str

    @property
    def is_success(self) -> bool:
        """2xx 여부"""
        return 200 <= self.status_code < 300


class HttpTransport:
    """httpx 기반 전송기

    ITransport Protocol 구현.
    AsyncClient는 지연 생성되며 커넥션 풀은 동시 요청 간에 공유됨.

    Args:
        timeout: 요청 타임아웃 (초)
        transport: httpx 하위 전송 (테스트에서 httpx.MockTransport 주입용)
    """

    def __init__(
        self,
        timeout: float = Defaults.TIMEOUT_SEC,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def send(self, request: PreparedRequest) -> RawResponse:
        """요청 전송

        Args:
            request: RequestBuilder가 만든 요청

        Returns:
            RawResponse (상태 코드와 무관하게 본문 반환)

        Raises:
            TransportError: 연결 실패, 타임아웃
        """
        client = await self._get_client()

        try:
            response = await client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.content,
            )
        except httpx.TimeoutException as e:
            logger.warning(
                "Request timeout",
                extra={"operation": request.name, "path": request.path_and_query},
            )
            raise TransportError(
                f"{request.name}: request timed out after {self.timeout}s",
                cause=e,
            ) from e
        except httpx.RequestError as e:
            logger.error(
                "Request error",
                extra={"operation": request.name, "path": request.path_and_query, "error": str(e)},
            )
            raise TransportError(f"{request.name}: {e}", cause=e) from e

        if response.status_code >= 400:
            logger.warning(
                "Buda API returned error status",
                extra={"operation": request.name, "status_code": response.status_code},
            )

        return RawResponse(status_code=response.status_code, text=response.text)
