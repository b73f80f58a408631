"""
주문 요청 페이로드

price_type별로 다른 형태의 페이로드를 생성.
- limit: type, price_type, limit, amount
- market: type, price_type, amount (limit 필드 없음)

모든 금액은 Decimal로 받아 문자열로 직렬화.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from budaclient.adapters.buda.errors import InvalidOrderType
from budaclient.core.types import OrderSide, PriceType


def to_decimal(value: Decimal | str | int, field_name: str) -> Decimal:
    """금액 값을 Decimal로 변환

    float는 정밀도 손실 위험이 있으므로 거부.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"{field_name} must be Decimal, str or int, not {type(value).__name__}")
    try:
        result = Decimal(value) if isinstance(value, (Decimal, int)) else Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{field_name} is not a valid number: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"{field_name} must be a finite number")
    return result


def format_decimal(value: Decimal) -> str:
    """Decimal -> 지수 표기 없는 문자열"""
    return format(value, "f")


@dataclass(frozen=True)
class LimitOrderPayload:
    """지정가 주문"""

    side: OrderSide
    amount: Decimal
    limit: Decimal

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (API 요청용)"""
        return {
            "type": self.side.value,
            "price_type": PriceType.LIMIT.value,
            "limit": format_decimal(self.limit),
            "amount": format_decimal(self.amount),
        }


@dataclass(frozen=True)
class MarketOrderPayload:
    """시장가 주문 (limit 없음)"""

    side: OrderSide
    amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (API 요청용)"""
        return {
            "type": self.side.value,
            "price_type": PriceType.MARKET.value,
            "amount": format_decimal(self.amount),
        }


OrderPayload = LimitOrderPayload | MarketOrderPayload


def parse_price_type(price_type: str | PriceType) -> PriceType:
    """price_type 검증

    Raises:
        InvalidOrderType: limit/market 이외의 값
    """
    try:
        return PriceType(price_type)
    except ValueError:
        raise InvalidOrderType(str(price_type)) from None


def build_order_payload(
    side: str | OrderSide,
    price_type: str | PriceType,
    amount: Decimal | str | int,
    limit: Decimal | str | int | None = None,
) -> OrderPayload:
    """주문 페이로드 생성

    price_type을 가장 먼저 검증함.

    Raises:
        InvalidOrderType: price_type이 limit/market이 아닌 경우
        ValueError: side가 bid/ask가 아니거나 limit 유무가 price_type과 맞지 않는 경우
        TypeError: 금액에 float를 사용한 경우
    """
    kind = parse_price_type(price_type)

    try:
        order_side = OrderSide(side)
    except ValueError:
        raise ValueError(f"side must be 'bid' or 'ask', got {side!r}") from None

    order_amount = to_decimal(amount, "amount")
    if order_amount <= Decimal("0"):
        raise ValueError("amount must be positive")

    if kind is PriceType.LIMIT:
        if limit is None:
            raise ValueError("limit is required for limit orders")
        limit_price = to_decimal(limit, "limit")
        if limit_price <= Decimal("0"):
            raise ValueError("limit must be positive")
        return LimitOrderPayload(side=order_side, amount=order_amount, limit=limit_price)

    if limit is not None:
        raise ValueError("limit must not be given for market orders")
    return MarketOrderPayload(side=order_side, amount=order_amount)
