"""
Mock 전송기

테스트용 ITransport 구현.
네트워크 없이 미리 등록한 응답을 반환하고 보낸 요청을 기록.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from budaclient.adapters.buda.errors import TransportError
from budaclient.adapters.buda.request_builder import PreparedRequest
from budaclient.adapters.buda.transport import RawResponse


@dataclass
class MockTransportState:
    """Mock 상태 (메모리 내 저장)"""

    # (method, path_and_query 접두어) -> 응답 목록 (순서대로 소비, 마지막 응답은 유지)
    routes: dict[tuple[str, str], list[RawResponse]] = field(default_factory=dict)

    # 보낸 요청 기록
    requests: list[PreparedRequest] = field(default_factory=list)

    # 다음 요청을 TransportError로 실패시킬지 여부
    should_fail_next: bool = False
    fail_message: str = "Mock connection error"

    closed: bool = False


class MockTransport:
    """Mock 전송기

    ITransport Protocol 구현.

    사용 예시:
    ```python
    transport = MockTransport()
    transport.add_json("GET", "/api/v2/markets/btc-clp", {"market": {...}})
    client = BudaRestClient(transport=transport)
    market = await client.get_ticker("btc-clp")
    assert transport.call_count == 1
    ```
    """

    def __init__(self, state: MockTransportState | None = None):
        self.state = state or MockTransportState()

    # -------------------------------------------------------------------------
    # 상태 조작 메서드 (테스트용)
    # -------------------------------------------------------------------------

    def add_response(self, method: str, path: str, status_code: int, text: str) -> None:
        """원시 응답 등록

        path는 path_and_query와 정확히 일치하거나 쿼리 앞부분까지 일치하면 매칭.
        """
        self.state.routes.setdefault((method, path), []).append(
            RawResponse(status_code=status_code, text=text)
        )

    def add_json(self, method: str, path: str, payload: Any, status_code: int = 200) -> None:
        """JSON 응답 등록"""
        self.add_response(method, path, status_code, json.dumps(payload))

    def fail_next(self, message: str = "Mock connection error") -> None:
        """다음 요청 실패 시뮬레이션"""
        self.state.should_fail_next = True
        self.state.fail_message = message

    @property
    def requests(self) -> list[PreparedRequest]:
        """보낸 요청 목록"""
        return self.state.requests

    @property
    def call_count(self) -> int:
        """보낸 요청 수"""
        return len(self.state.requests)

    @property
    def last_request(self) -> PreparedRequest | None:
        """마지막 요청"""
        return self.state.requests[-1] if self.state.requests else None

    # -------------------------------------------------------------------------
    # ITransport 구현
    # -------------------------------------------------------------------------

    async def send(self, request: PreparedRequest) -> RawResponse:
        """등록된 응답 반환 (없으면 404 에러 본문)"""
        self.state.requests.append(request)

        if self.state.should_fail_next:
            self.state.should_fail_next = False
            raise TransportError(self.state.fail_message, cause=ConnectionError(self.state.fail_message))

        path = request.path_and_query.split("?", 1)[0]
        queue = (
            self.state.routes.get((request.method, request.path_and_query))
            or self.state.routes.get((request.method, path))
        )
        if not queue:
            return RawResponse(status_code=404, text=json.dumps({"message": "Not found", "code": "not_found"}))

        return queue.pop(0) if len(queue) > 1 else queue[0]

    async def close(self) -> None:
        """종료 표시"""
        self.state.closed = True
