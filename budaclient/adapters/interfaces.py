"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
"""

from typing import Protocol, runtime_checkable

from budaclient.adapters.buda.request_builder import PreparedRequest
from budaclient.adapters.buda.transport import RawResponse


@runtime_checkable
class ITransport(Protocol):
    """HTTP 전송 인터페이스

    요청 1회 왕복. 4xx/5xx도 예외 없이 RawResponse로 반환하고,
    네트워크 실패만 TransportError로 알림.
    """

    async def send(self, request: PreparedRequest) -> RawResponse:
        """요청 전송

        Args:
            request: 서명까지 끝난 요청

        Returns:
            상태 코드와 본문
        """
        ...

    async def close(self) -> None:
        """연결 종료"""
        ...
