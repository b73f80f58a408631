"""
Buda REST API 클라이언트

공개 시세 API와 인증 계좌 API 제공.
인증 요청은 HMAC-SHA384 서명 (X-SBTC-APIKEY / X-SBTC-NONCE / X-SBTC-SIGNATURE).
모든 금액은 Decimal 사용. 재시도하지 않음 (재시도 시 호출을 다시 하면 새 nonce 발급).
"""

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from budaclient.adapters.buda.models import (
    Balance,
    DepositHistory,
    Market,
    Order,
    OrderBook,
    OrdersPage,
    TradeHistory,
    WithdrawalHistory,
    decode_response,
    parse_balance,
    parse_balances,
    parse_deposits,
    parse_market,
    parse_markets,
    parse_order,
    parse_order_book,
    parse_orders,
    parse_trades,
    parse_withdrawals,
)
from budaclient.adapters.buda.nonce import NonceSource
from budaclient.adapters.buda.orders import build_order_payload
from budaclient.adapters.buda.request_builder import Endpoint, RequestBuilder
from budaclient.adapters.buda.transport import HttpTransport
from budaclient.core.config.loader import ExchangeConfig
from budaclient.core.types import OrderSide, OrderState, PriceType

if TYPE_CHECKING:
    from budaclient.adapters.interfaces import ITransport

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Endpoints:
    """Buda API 엔드포인트 목록"""

    MARKETS = Endpoint("GetMarkets", "GET", "/markets")
    TICKER = Endpoint("GetTicker", "GET", "/markets/{market_id}")
    ORDER_BOOK = Endpoint("GetOrderBook", "GET", "/markets/{market_id}/order_book")
    TRADES = Endpoint("GetTrades", "GET", "/markets/{market_id}/trades")
    BALANCES = Endpoint("GetBalances", "GET", "/balances", auth=True)
    BALANCE = Endpoint("GetBalance", "GET", "/balances/{currency}", auth=True)
    ORDERS = Endpoint("GetOrders", "GET", "/markets/{market_id}/orders", auth=True)
    POST_ORDER = Endpoint("PostOrder", "POST", "/markets/{market_id}/orders", auth=True)
    ORDER = Endpoint("GetOrder", "GET", "/orders/{order_id}", auth=True)
    CANCEL_ORDER = Endpoint("CancelOrder", "PUT", "/orders/{order_id}", auth=True)
    DEPOSITS = Endpoint("GetDepositHistory", "GET", "/currencies/{currency}/deposits", auth=True)
    WITHDRAWALS = Endpoint("GetWithdrawHistory", "GET", "/currencies/{currency}/withdrawals", auth=True)


CANCEL_PAYLOAD: dict[str, str] = {"state": OrderState.CANCELING.value}


class BudaRestClient:
    """Buda REST API 클라이언트

    설정은 생성 시 한 번 주입되며 불변.
    nonce 생성기와 HTTP 커넥션 풀만 동시 호출 간에 공유됨.

    Args:
        config: 거래소 설정 (None이면 비인증 기본 설정)
        transport: ITransport 구현체 (None이면 HttpTransport 생성)
        nonce_source: nonce 생성기 (None이면 새로 생성)

    사용 예시:
    ```python
    config = ExchangeConfig.create(api_key="xxx", api_secret="xxx")
    async with BudaRestClient(config) as client:
        market = await client.get_ticker("btc-clp")
        balances = await client.get_balances()
    ```
    """

    def __init__(
        self,
        config: ExchangeConfig | None = None,
        transport: "ITransport | None" = None,
        nonce_source: NonceSource | None = None,
    ):
        self.config = config or ExchangeConfig()
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport(timeout=self.config.timeout)
        self.nonce_source = nonce_source or NonceSource()
        self._builder = RequestBuilder(
            base_url=self.config.rest_url,
            credentials=self.config.credentials,
            nonce_source=self.nonce_source,
        )

    @property
    def is_authenticated(self) -> bool:
        """인증 모드 여부"""
        return self.config.authenticated

    async def close(self) -> None:
        """직접 생성한 전송기만 종료"""
        if self._owns_transport:
            await self.transport.close()

    async def __aenter__(self) -> "BudaRestClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _call(
        self,
        endpoint: Endpoint,
        key: str,
        parse: Callable[[dict[str, Any]], T],
        path_params: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> T:
        """요청 생성 -> 전송 -> 디코딩

        Raises:
            AuthenticationRequired: 자격 증명 없이 인증 API 호출
            SigningError: 서명 실패
            TransportError: 네트워크 실패
            DecodeError: 응답 형식 불일치 또는 API 에러 응답
        """
        request = self._builder.build(
            endpoint,
            path_params=path_params,
            query=query,
            body=body,
        )
        logger.debug(
            "Buda request",
            extra={"operation": endpoint.name, "method": request.method, "path": request.path_and_query},
        )
        response = await self.transport.send(request)
        return decode_response(response, key, parse)

    # =========================================================================
    # 공개 API (시세)
    # =========================================================================

    async def get_markets(self) -> list[Market]:
        """전체 마켓 목록 조회"""
        return await self._call(Endpoints.MARKETS, "markets", parse_markets)

    async def get_ticker(self, market_id: str) -> Market:
        """특정 마켓 정보 조회

        Args:
            market_id: 마켓 ID (예: btc-clp)
        """
        return await self._call(
            Endpoints.TICKER,
            "market",
            parse_market,
            path_params={"market_id": market_id},
        )

    async def get_order_book(self, market_id: str) -> OrderBook:
        """호가창 조회"""
        return await self._call(
            Endpoints.ORDER_BOOK,
            "order_book",
            parse_order_book,
            path_params={"market_id": market_id},
        )

    async def get_trades(self, market_id: str) -> TradeHistory:
        """최근 체결 내역 조회"""
        return await self._call(
            Endpoints.TRADES,
            "trades",
            parse_trades,
            path_params={"market_id": market_id},
        )

    # =========================================================================
    # 잔고 조회
    # =========================================================================

    async def get_balances(self) -> list[Balance]:
        """전체 통화 잔고 조회"""
        return await self._call(Endpoints.BALANCES, "balances", parse_balances)

    async def get_balance(self, currency: str) -> Balance:
        """특정 통화 잔고 조회

        Args:
            currency: 통화 코드 (예: btc, clp)
        """
        return await self._call(
            Endpoints.BALANCE,
            "balance",
            parse_balance,
            path_params={"currency": currency},
        )

    # =========================================================================
    # 주문
    # =========================================================================

    async def get_orders(
        self,
        market_id: str,
        per: int | None = None,
        page: int | None = None,
        state: str | OrderState | None = None,
        minimum_exchanged: Decimal | str | None = None,
    ) -> OrdersPage:
        """내 주문 목록 조회

        Args:
            market_id: 마켓 ID
            per: 페이지당 개수
            page: 페이지 번호
            state: 주문 상태 필터
            minimum_exchanged: 최소 체결 금액 필터

        Returns:
            주문 목록 + 페이지 정보
        """
        query = {
            "per": per,
            "page": page,
            "state": state,
            "minimumExchanged": minimum_exchanged,
        }
        return await self._call(
            Endpoints.ORDERS,
            "orders",
            parse_orders,
            path_params={"market_id": market_id},
            query=query,
        )

    async def post_order(
        self,
        market_id: str,
        side: str | OrderSide,
        price_type: str | PriceType,
        amount: Decimal | str | int,
        limit: Decimal | str | int | None = None,
    ) -> Order:
        """주문 생성

        price_type은 네트워크 요청 전에 검증됨.
        market 주문은 limit 필드를 보내지 않음.

        Args:
            market_id: 마켓 ID
            side: bid(매수) / ask(매도)
            price_type: limit / market
            amount: 주문 수량
            limit: 지정가 (limit 주문만)

        Returns:
            생성된 주문

        Raises:
            InvalidOrderType: price_type이 limit/market이 아닌 경우
            ValueError: side, limit 조합이 잘못된 경우
        """
        payload = build_order_payload(side, price_type, amount, limit)

        order = await self._call(
            Endpoints.POST_ORDER,
            "order",
            parse_order,
            path_params={"market_id": market_id},
            body=payload.to_dict(),
        )
        logger.info(
            "Order placed",
            extra={
                "market_id": market_id,
                "order_id": order.id,
                "side": payload.side.value,
                "price_type": order.price_type,
            },
        )
        return order

    async def get_order(self, order_id: int | str) -> Order:
        """주문 조회"""
        return await self._call(
            Endpoints.ORDER,
            "order",
            parse_order,
            path_params={"order_id": order_id},
        )

    async def cancel_order(self, order_id: int | str) -> Order:
        """주문 취소 요청

        현재 주문 상태는 확인하지 않음 (취소 가능 여부는 서버가 판단).
        """
        order = await self._call(
            Endpoints.CANCEL_ORDER,
            "order",
            parse_order,
            path_params={"order_id": order_id},
            body=CANCEL_PAYLOAD,
        )
        logger.info(
            "Order cancel requested",
            extra={"order_id": order.id, "state": order.state},
        )
        return order

    # =========================================================================
    # 입출금 내역
    # =========================================================================

    async def get_deposit_history(self, currency: str) -> DepositHistory:
        """입금 내역 조회"""
        return await self._call(
            Endpoints.DEPOSITS,
            "deposits",
            parse_deposits,
            path_params={"currency": currency},
        )

    async def get_withdraw_history(self, currency: str) -> WithdrawalHistory:
        """출금 내역 조회"""
        return await self._call(
            Endpoints.WITHDRAWALS,
            "withdrawals",
            parse_withdrawals,
            path_params={"currency": currency},
        )
