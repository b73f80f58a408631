"""
core/types.py 테스트

Enum 값이 Buda API 문자열과 일치하는지 확인
"""

import json

from budaclient.core.types import HttpMethod, OrderSide, OrderState, PriceType


class TestOrderSide:
    """OrderSide 테스트"""

    def test_values(self) -> None:
        """값 확인"""
        assert OrderSide.BID.value == "bid"
        assert OrderSide.ASK.value == "ask"

    def test_from_string(self) -> None:
        """문자열에서 생성"""
        assert OrderSide("bid") is OrderSide.BID


class TestPriceType:
    """PriceType 테스트"""

    def test_values(self) -> None:
        """limit / market 두 가지"""
        assert [p.value for p in PriceType] == ["limit", "market"]


class TestOrderState:
    """OrderState 테스트"""

    def test_values(self) -> None:
        """값 확인"""
        assert {s.value for s in OrderState} == {
            "received",
            "pending",
            "traded",
            "canceling",
            "canceled",
        }

    def test_json_serialization(self) -> None:
        """str 상속이므로 JSON 직렬화 가능"""
        assert json.dumps({"state": OrderState.CANCELING}) == '{"state": "canceling"}'


def test_http_methods() -> None:
    """서명 가능한 메서드"""
    assert [m.value for m in HttpMethod] == ["GET", "POST", "PUT", "DELETE"]
