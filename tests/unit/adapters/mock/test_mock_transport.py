"""
Mock 전송기 테스트
"""

import pytest

from budaclient.adapters.buda.errors import TransportError
from budaclient.adapters.buda.request_builder import PreparedRequest
from budaclient.adapters.interfaces import ITransport
from budaclient.adapters.mock.transport import MockTransport


def _request(path_and_query: str, method: str = "GET") -> PreparedRequest:
    return PreparedRequest(
        name="Test",
        method=method,
        url="https://www.buda.com" + path_and_query,
        path_and_query=path_and_query,
        headers={},
        content=None,
    )


class TestMockTransport:
    """MockTransport 테스트"""

    def test_implements_protocol(self) -> None:
        """ITransport Protocol 준수"""
        assert isinstance(MockTransport(), ITransport)

    @pytest.mark.asyncio
    async def test_unregistered_route_returns_404(self) -> None:
        """등록되지 않은 경로"""
        transport = MockTransport()

        response = await transport.send(_request("/api/v2/markets"))

        assert response.status_code == 404
        assert "not_found" in response.text
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_path_match_ignores_query(self) -> None:
        """쿼리 없는 경로로 등록해도 매칭"""
        transport = MockTransport()
        transport.add_json("GET", "/api/v2/markets/btc-clp/orders", {"orders": []})

        response = await transport.send(_request("/api/v2/markets/btc-clp/orders?per=20"))

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_exact_match_preferred(self) -> None:
        """쿼리까지 일치하는 응답 우선"""
        transport = MockTransport()
        transport.add_json("GET", "/api/v2/x", {"which": "plain"})
        transport.add_json("GET", "/api/v2/x?page=2", {"which": "page2"})

        response = await transport.send(_request("/api/v2/x?page=2"))

        assert "page2" in response.text

    @pytest.mark.asyncio
    async def test_method_must_match(self) -> None:
        """메서드가 다르면 매칭 안 됨"""
        transport = MockTransport()
        transport.add_json("GET", "/api/v2/orders/1", {"order": {}})

        response = await transport.send(_request("/api/v2/orders/1", method="PUT"))

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_queued_responses_last_one_sticks(self) -> None:
        """순서대로 소비, 마지막 응답은 유지"""
        transport = MockTransport()
        transport.add_response("GET", "/a", 500, "first")
        transport.add_response("GET", "/a", 200, "second")

        results = [(await transport.send(_request("/a"))).text for _ in range(3)]

        assert results == ["first", "second", "second"]

    @pytest.mark.asyncio
    async def test_fail_next(self) -> None:
        """다음 요청 1회만 실패"""
        transport = MockTransport()
        transport.add_response("GET", "/a", 200, "ok")
        transport.fail_next("boom")

        with pytest.raises(TransportError, match="boom") as exc_info:
            await transport.send(_request("/a"))

        assert isinstance(exc_info.value.cause, ConnectionError)
        assert (await transport.send(_request("/a"))).text == "ok"

    @pytest.mark.asyncio
    async def test_records_requests(self) -> None:
        """요청 기록"""
        transport = MockTransport()
        assert transport.last_request is None

        await transport.send(_request("/a"))
        await transport.send(_request("/b"))

        assert [r.path_and_query for r in transport.requests] == ["/a", "/b"]
        assert transport.last_request.path_and_query == "/b"

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        """종료 표시"""
        transport = MockTransport()

        await transport.close()

        assert transport.state.closed
