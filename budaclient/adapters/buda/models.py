"""
Buda API 응답 모델

Buda REST API 응답을 파싱하여 데이터클래스로 변환.
모든 금액은 ["금액", "통화"] 문자열 쌍이며 Decimal로 변환 (float 사용 금지).
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, TypeVar

from budaclient.adapters.buda.errors import DecodeError
from budaclient.adapters.buda.transport import RawResponse
from budaclient.core.constants import Defaults

logger = logging.getLogger(__name__)

T = TypeVar("T")


# -------------------------------------------------------------------------
# 필드 변환 헬퍼
# -------------------------------------------------------------------------

def parse_datetime(value: Any) -> datetime | None:
    """ISO-8601 문자열 -> datetime (null/빈 문자열이면 None)"""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected ISO-8601 string, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_decimal(value: Any) -> Decimal:
    """문자열 숫자 -> Decimal"""
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"expected decimal string, got {type(value).__name__}")
    result = Decimal(str(value))
    if not result.is_finite():
        raise ValueError(f"non-finite decimal: {value!r}")
    return result


def _optional_int(value: Any) -> int | None:
    return int(value) if value is not None else None


@dataclass(frozen=True)
class Amount:
    """금액 + 통화

    API 표현: ["0.0001", "BTC"]
    """

    amount: Decimal
    currency: str

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    @classmethod
    def from_api(cls, data: Any) -> "Amount":
        """API 응답에서 생성"""
        if not isinstance(data, (list, tuple)) or len(data) != 2:
            raise ValueError(f"expected [amount, currency] pair, got {data!r}")
        return cls(amount=parse_decimal(data[0]), currency=str(data[1]))

    @classmethod
    def from_api_optional(cls, data: Any) -> "Amount | None":
        """null 허용 버전 (예: 시장가 주문의 limit)"""
        if data is None:
            return None
        return cls.from_api(data)


# -------------------------------------------------------------------------
# 마켓 데이터
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class Market:
    """마켓 정보

    GET /markets, GET /markets/{id} 응답.

    Attributes:
        id: 마켓 ID (예: BTC-CLP)
        name: 마켓 이름 (예: btc-clp)
        base_currency: 기준 통화
        quote_currency: 호가 통화
        minimum_order_amount: 최소 주문 수량
    """

    id: str
    name: str
    base_currency: str
    quote_currency: str
    minimum_order_amount: Amount

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Market":
        """API 응답에서 생성"""
        return cls(
            id=data["id"],
            name=data["name"],
            base_currency=data["base_currency"],
            quote_currency=data["quote_currency"],
            minimum_order_amount=Amount.from_api(data["minimum_order_amount"]),
        )


@dataclass(frozen=True)
class OrderBookEntry:
    """호가 1건 (가격, 수량)"""

    price: Decimal
    amount: Decimal

    @classmethod
    def from_api(cls, data: list[Any]) -> "OrderBookEntry":
        """API 응답에서 생성 (["가격", "수량"])"""
        price, amount = data
        return cls(price=parse_decimal(price), amount=parse_decimal(amount))


@dataclass(frozen=True)
class OrderBook:
    """호가창

    GET /markets/{id}/order_book 응답.
    asks는 낮은 가격순, bids는 높은 가격순 (API 반환 순서 그대로).
    """

    asks: tuple[OrderBookEntry, ...]
    bids: tuple[OrderBookEntry, ...]

    @property
    def best_ask(self) -> OrderBookEntry | None:
        """최우선 매도 호가"""
        return self.asks[0] if self.asks else None

    @property
    def best_bid(self) -> OrderBookEntry | None:
        """최우선 매수 호가"""
        return self.bids[0] if self.bids else None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "OrderBook":
        """API 응답에서 생성"""
        return cls(
            asks=tuple(OrderBookEntry.from_api(item) for item in data["asks"]),
            bids=tuple(OrderBookEntry.from_api(item) for item in data["bids"]),
        )


@dataclass(frozen=True)
class TradeEntry:
    """체결 1건

    API 표현: [timestamp(ms), amount, price, direction, id]
    """

    timestamp: int
    amount: Decimal
    price: Decimal
    direction: str
    trade_id: int | None = None

    @classmethod
    def from_api(cls, data: list[Any]) -> "TradeEntry":
        """API 응답에서 생성"""
        if len(data) < 4:
            raise ValueError(f"trade entry too short: {data!r}")
        return cls(
            timestamp=int(data[0]),
            amount=parse_decimal(data[1]),
            price=parse_decimal(data[2]),
            direction=str(data[3]),
            trade_id=_optional_int(data[4]) if len(data) > 4 else None,
        )


@dataclass(frozen=True)
class TradeHistory:
    """최근 체결 내역

    GET /markets/{id}/trades 응답.
    """

    market_id: str
    timestamp: int | None
    last_timestamp: int | None
    entries: tuple[TradeEntry, ...]

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "TradeHistory":
        """API 응답에서 생성"""
        return cls(
            market_id=data["market_id"],
            timestamp=_optional_int(data.get("timestamp")),
            last_timestamp=_optional_int(data.get("last_timestamp")),
            entries=tuple(TradeEntry.from_api(item) for item in data.get("entries") or []),
        )


# -------------------------------------------------------------------------
# 계좌
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class Balance:
    """통화별 잔고

    Attributes:
        id: 통화 코드 (예: BTC)
        amount: 총 잔고
        available_amount: 사용 가능 잔고
        frozen_amount: 주문에 묶인 잔고
        pending_withdraw_amount: 출금 대기 잔고
        account_id: 계정 ID
    """

    id: str
    amount: Amount
    available_amount: Amount
    frozen_amount: Amount
    pending_withdraw_amount: Amount
    account_id: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Balance":
        """API 응답에서 생성"""
        return cls(
            id=data["id"],
            amount=Amount.from_api(data["amount"]),
            available_amount=Amount.from_api(data["available_amount"]),
            frozen_amount=Amount.from_api(data["frozen_amount"]),
            pending_withdraw_amount=Amount.from_api(data["pending_withdraw_amount"]),
            account_id=_optional_int(data.get("account_id")),
        )


@dataclass(frozen=True)
class PaginationMeta:
    """페이지 정보"""

    total_pages: int
    total_count: int
    current_page: int

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "PaginationMeta | None":
        """API 응답에서 생성 (meta 없으면 None)"""
        if data is None:
            return None
        return cls(
            total_pages=int(data["total_pages"]),
            total_count=int(data["total_count"]),
            current_page=int(data["current_page"]),
        )


@dataclass(frozen=True)
class Order:
    """주문 정보

    Attributes:
        id: 주문 ID
        market_id: 마켓 ID
        account_id: 계정 ID
        type: 주문 방향 (Bid/Ask)
        state: 주문 상태 (received, pending, traded, canceling, canceled)
        created_at: 생성 시각
        fee_currency: 수수료 통화
        price_type: 가격 유형 (limit/market)
        limit: 지정가 (시장가 주문은 None)
        amount: 잔여 수량
        original_amount: 최초 주문 수량
        traded_amount: 체결 수량
        total_exchanged: 체결 금액
        paid_fee: 지불 수수료
    """

    id: int
    market_id: str
    account_id: int | None
    type: str
    state: str
    created_at: datetime | None
    fee_currency: str | None
    price_type: str
    limit: Amount | None
    amount: Amount
    original_amount: Amount | None
    traded_amount: Amount | None
    total_exchanged: Amount | None
    paid_fee: Amount | None

    @property
    def is_open(self) -> bool:
        """체결 대기 여부"""
        return self.state in ("received", "pending")

    @property
    def is_cancelled(self) -> bool:
        """취소 여부"""
        return self.state == "canceled"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Order":
        """API 응답에서 생성"""
        return cls(
            id=int(data["id"]),
            market_id=data["market_id"],
            account_id=_optional_int(data.get("account_id")),
            type=data["type"],
            state=data["state"],
            created_at=parse_datetime(data.get("created_at")),
            fee_currency=data.get("fee_currency"),
            price_type=data["price_type"],
            limit=Amount.from_api_optional(data.get("limit")),
            amount=Amount.from_api(data["amount"]),
            original_amount=Amount.from_api_optional(data.get("original_amount")),
            traded_amount=Amount.from_api_optional(data.get("traded_amount")),
            total_exchanged=Amount.from_api_optional(data.get("total_exchanged")),
            paid_fee=Amount.from_api_optional(data.get("paid_fee")),
        )


@dataclass(frozen=True)
class OrdersPage:
    """주문 목록 (페이지 단위)"""

    orders: tuple[Order, ...]
    meta: PaginationMeta | None

    @classmethod
    def from_api(cls, orders: list[dict[str, Any]], meta: dict[str, Any] | None) -> "OrdersPage":
        """API 응답에서 생성"""
        return cls(
            orders=tuple(Order.from_api(item) for item in orders),
            meta=PaginationMeta.from_api(meta),
        )


# -------------------------------------------------------------------------
# 입출금
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class DepositData:
    """입금 상세"""

    type: str | None
    created_at: datetime | None
    updated_at: datetime | None
    upload_url: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "DepositData | None":
        """API 응답에서 생성"""
        if data is None:
            return None
        return cls(
            type=data.get("type"),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
            upload_url=data.get("upload_url"),
        )


@dataclass(frozen=True)
class Deposit:
    """입금 내역 1건"""

    id: int
    state: str
    currency: str
    created_at: datetime | None
    amount: Amount
    fee: Amount | None
    deposit_data: DepositData | None

    @property
    def is_confirmed(self) -> bool:
        """입금 완료 여부"""
        return self.state == "confirmed"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Deposit":
        """API 응답에서 생성"""
        return cls(
            id=int(data["id"]),
            state=data["state"],
            currency=data["currency"],
            created_at=parse_datetime(data.get("created_at")),
            amount=Amount.from_api(data["amount"]),
            fee=Amount.from_api_optional(data.get("fee")),
            deposit_data=DepositData.from_api(data.get("deposit_data")),
        )


@dataclass(frozen=True)
class FiatAccount:
    """출금 대상 은행 계좌 (법정화폐 출금)"""

    id: int
    account_number: str | None
    account_type: str | None
    bank_id: int | None
    bank_name: str | None
    currency: str | None
    full_name: str | None
    email: str | None
    document_number: str | None
    phone: str | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "FiatAccount | None":
        """API 응답에서 생성 (계좌 정보 없으면 None)"""
        if data is None:
            return None
        return cls(
            id=int(data["id"]),
            account_number=data.get("account_number"),
            account_type=data.get("account_type"),
            bank_id=_optional_int(data.get("bank_id")),
            bank_name=data.get("bank_name"),
            currency=data.get("currency"),
            full_name=data.get("full_name"),
            email=data.get("email"),
            document_number=data.get("document_number"),
            phone=data.get("phone"),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
        )


@dataclass(frozen=True)
class WithdrawalData:
    """출금 상세

    transacted_at, statement_ref, fiat_account는 처리 전이거나
    암호화폐 출금이면 None.
    """

    type: str | None
    id: int | None
    created_at: datetime | None
    updated_at: datetime | None
    transacted_at: datetime | None
    statement_ref: str | None
    fiat_account: FiatAccount | None
    target_address: str | None = None
    tx_hash: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "WithdrawalData | None":
        """API 응답에서 생성"""
        if data is None:
            return None
        return cls(
            type=data.get("type"),
            id=_optional_int(data.get("id")),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
            transacted_at=parse_datetime(data.get("transacted_at")),
            statement_ref=data.get("statement_ref"),
            fiat_account=FiatAccount.from_api(data.get("fiat_account")),
            target_address=data.get("target_address"),
            tx_hash=data.get("tx_hash"),
        )


@dataclass(frozen=True)
class Withdrawal:
    """출금 내역 1건"""

    id: int
    state: str
    currency: str
    created_at: datetime | None
    amount: Amount
    fee: Amount | None
    withdrawal_data: WithdrawalData | None

    @property
    def is_confirmed(self) -> bool:
        """출금 완료 여부"""
        return self.state == "confirmed"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Withdrawal":
        """API 응답에서 생성"""
        return cls(
            id=int(data["id"]),
            state=data["state"],
            currency=data["currency"],
            created_at=parse_datetime(data.get("created_at")),
            amount=Amount.from_api(data["amount"]),
            fee=Amount.from_api_optional(data.get("fee")),
            withdrawal_data=WithdrawalData.from_api(data.get("withdrawal_data")),
        )


@dataclass(frozen=True)
class DepositHistory:
    """입금 내역 (페이지 단위)"""

    deposits: tuple[Deposit, ...]
    meta: PaginationMeta | None


@dataclass(frozen=True)
class WithdrawalHistory:
    """출금 내역 (페이지 단위)"""

    withdrawals: tuple[Withdrawal, ...]
    meta: PaginationMeta | None


# -------------------------------------------------------------------------
# 응답 디코딩
# -------------------------------------------------------------------------

def excerpt(text: str, limit: int = Defaults.ERROR_EXCERPT_LEN) -> str:
    """에러 메시지용 본문 발췌"""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def _reject_constant(value: str) -> Any:
    """JSON 비표준 상수 (NaN, Infinity, -Infinity) 거부"""
    raise ValueError(f"non-finite number {value} is not allowed")


def _remote_error(payload: Any) -> Any:
    """API 에러 객체 추출 ({"error": ..., "message": ...})"""
    if isinstance(payload, dict) and ("error" in payload or "message" in payload):
        return payload
    return None


def decode_response(
    response: RawResponse,
    key: str,
    parse: Callable[[dict[str, Any]], T],
) -> T:
    """응답 본문 -> 타입 레코드

    Args:
        response: 전송 결과
        key: 최상위 필수 키 (예: markets, order)
        parse: 최상위 객체를 받아 레코드를 만드는 함수

    Returns:
        parse 결과

    Raises:
        DecodeError: JSON이 아니거나, 실패 상태 코드이거나,
            필수 키가 없거나, 필드 변환에 실패한 경우
    """
    body_excerpt = excerpt(response.text)

    try:
        payload = json.loads(
            response.text,
            parse_float=Decimal,
            parse_constant=_reject_constant,
        )
    except ValueError as e:
        logger.error(
            "Response is not valid JSON",
            extra={"expected": key, "status_code": response.status_code},
        )
        raise DecodeError(
            expected=key,
            excerpt=body_excerpt,
            status_code=response.status_code,
            reason=f"invalid JSON: {e}",
        ) from e

    if not response.is_success or not isinstance(payload, dict) or key not in payload:
        remote = _remote_error(payload)
        logger.error(
            "Unexpected response shape",
            extra={
                "expected": key,
                "status_code": response.status_code,
                "remote_error": remote,
            },
        )
        if remote is not None:
            reason = None
        elif not response.is_success:
            reason = f"HTTP error status {response.status_code}"
        else:
            reason = f"missing top-level key {key!r}"
        raise DecodeError(
            expected=key,
            excerpt=body_excerpt,
            remote_error=remote,
            status_code=response.status_code,
            reason=reason,
        )

    try:
        return parse(payload)
    except (KeyError, TypeError, ValueError, AttributeError, OverflowError, InvalidOperation) as e:
        logger.error(
            "Failed to parse response fields",
            extra={"expected": key, "error": repr(e)},
        )
        raise DecodeError(
            expected=key,
            excerpt=body_excerpt,
            status_code=response.status_code,
            reason=f"invalid field: {e!r}",
        ) from e


def parse_markets(payload: dict[str, Any]) -> list[Market]:
    return [Market.from_api(item) for item in payload["markets"]]


def parse_market(payload: dict[str, Any]) -> Market:
    return Market.from_api(payload["market"])


def parse_order_book(payload: dict[str, Any]) -> OrderBook:
    return OrderBook.from_api(payload["order_book"])


def parse_trades(payload: dict[str, Any]) -> TradeHistory:
    return TradeHistory.from_api(payload["trades"])


def parse_balances(payload: dict[str, Any]) -> list[Balance]:
    return [Balance.from_api(item) for item in payload["balances"]]


def parse_balance(payload: dict[str, Any]) -> Balance:
    return Balance.from_api(payload["balance"])


def parse_orders(payload: dict[str, Any]) -> OrdersPage:
    return OrdersPage.from_api(payload["orders"], payload.get("meta"))


def parse_order(payload: dict[str, Any]) -> Order:
    return Order.from_api(payload["order"])


def parse_deposits(payload: dict[str, Any]) -> DepositHistory:
    return DepositHistory(
        deposits=tuple(Deposit.from_api(item) for item in payload["deposits"]),
        meta=PaginationMeta.from_api(payload.get("meta")),
    )


def parse_withdrawals(payload: dict[str, Any]) -> WithdrawalHistory:
    return WithdrawalHistory(
        withdrawals=tuple(Withdrawal.from_api(item) for item in payload["withdrawals"]),
        meta=PaginationMeta.from_api(payload.get("meta")),
    )
