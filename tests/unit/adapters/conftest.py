"""
어댑터 테스트 픽스처

공통 테스트 설정 및 픽스처 제공.
"""

import pytest

from budaclient.adapters.buda.nonce import NonceSource
from budaclient.adapters.buda.rest_client import BudaRestClient
from budaclient.adapters.mock.transport import MockTransport
from budaclient.core.config.loader import ExchangeConfig


# -------------------------------------------------------------------------
# 설정 / 클라이언트 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def public_config() -> ExchangeConfig:
    """비인증 설정"""
    return ExchangeConfig.create()


@pytest.fixture
def auth_config() -> ExchangeConfig:
    """인증 설정"""
    return ExchangeConfig.create(api_key="test_api_key", api_secret="test_api_secret")


@pytest.fixture
def mock_transport() -> MockTransport:
    """Mock 전송기"""
    return MockTransport()


@pytest.fixture
def fixed_nonce_source() -> NonceSource:
    """고정 시계 nonce 생성기 (1000000000부터 1씩 증가)"""
    return NonceSource(clock=lambda: 1_000_000_000)


@pytest.fixture
def public_client(public_config: ExchangeConfig, mock_transport: MockTransport) -> BudaRestClient:
    """비인증 클라이언트 (Mock 전송)"""
    return BudaRestClient(public_config, transport=mock_transport)


@pytest.fixture
def auth_client(
    auth_config: ExchangeConfig,
    mock_transport: MockTransport,
    fixed_nonce_source: NonceSource,
) -> BudaRestClient:
    """인증 클라이언트 (Mock 전송)"""
    return BudaRestClient(
        auth_config,
        transport=mock_transport,
        nonce_source=fixed_nonce_source,
    )


# -------------------------------------------------------------------------
# Buda API 응답 샘플
# -------------------------------------------------------------------------

@pytest.fixture
def buda_market_response() -> dict:
    """Buda 마켓 API 응답 샘플"""
    return {
        "market": {
            "id": "BTC-CLP",
            "name": "btc-clp",
            "base_currency": "BTC",
            "quote_currency": "CLP",
            "minimum_order_amount": ["0.0001", "BTC"],
        }
    }


@pytest.fixture
def buda_markets_response(buda_market_response: dict) -> dict:
    """Buda 마켓 목록 API 응답 샘플"""
    return {
        "markets": [
            buda_market_response["market"],
            {
                "id": "ETH-BTC",
                "name": "eth-btc",
                "base_currency": "ETH",
                "quote_currency": "BTC",
                "minimum_order_amount": ["0.001", "ETH"],
            },
        ]
    }


@pytest.fixture
def buda_order_book_response() -> dict:
    """Buda 호가창 API 응답 샘플"""
    return {
        "order_book": {
            "asks": [["836677.14", "0.447349"], ["837462.23", "1.43804963"]],
            "bids": [["821400.0", "0.53"], ["821000.01", "0.0014"]],
        }
    }


@pytest.fixture
def buda_trades_response() -> dict:
    """Buda 체결 내역 API 응답 샘플"""
    return {
        "trades": {
            "market_id": "BTC-CLP",
            "timestamp": None,
            "last_timestamp": "1476905551698",
            "entries": [
                ["1476905551687", "0.00984662", "435447.12", "buy", 3567],
                ["1476905551698", "3.13", "435400.0", "sell"],
            ],
        }
    }


@pytest.fixture
def buda_balance_response() -> dict:
    """Buda 잔고 API 응답 샘플"""
    return {
        "balance": {
            "id": "BTC",
            "amount": ["1.23456789", "BTC"],
            "available_amount": ["1.0", "BTC"],
            "frozen_amount": ["0.23456789", "BTC"],
            "pending_withdraw_amount": ["0.0", "BTC"],
            "account_id": 3,
        }
    }


@pytest.fixture
def buda_order() -> dict:
    """Buda 주문 객체 샘플 (지정가)"""
    return {
        "id": 1234567,
        "market_id": "BTC-CLP",
        "account_id": 3,
        "type": "Bid",
        "state": "pending",
        "created_at": "2017-06-15T14:45:06.474Z",
        "fee_currency": "BTC",
        "price_type": "limit",
        "limit": ["1000000.0", "CLP"],
        "amount": ["0.001", "BTC"],
        "original_amount": ["0.001", "BTC"],
        "traded_amount": ["0.0", "BTC"],
        "total_exchanged": ["0.0", "CLP"],
        "paid_fee": ["0.0", "BTC"],
    }


@pytest.fixture
def buda_orders_response(buda_order: dict) -> dict:
    """Buda 주문 목록 API 응답 샘플"""
    market_order = dict(buda_order, id=1234568, price_type="market", limit=None, state="traded")
    return {
        "orders": [buda_order, market_order],
        "meta": {"total_pages": 3, "total_count": 25, "current_page": 1},
    }


@pytest.fixture
def buda_deposits_response() -> dict:
    """Buda 입금 내역 API 응답 샘플"""
    return {
        "deposits": [
            {
                "id": 901,
                "state": "confirmed",
                "currency": "CLP",
                "created_at": "2017-06-09T02:01:33.213Z",
                "deposit_data": {
                    "type": "fiat_deposit_data",
                    "created_at": "2017-06-09T02:01:33.213Z",
                    "updated_at": "2017-06-09T02:01:34.000Z",
                    "upload_url": None,
                },
                "amount": ["10000.0", "CLP"],
                "fee": ["0.0", "CLP"],
            }
        ],
        "meta": {"total_pages": 1, "total_count": 1, "current_page": 1},
    }


@pytest.fixture
def buda_withdrawals_response() -> dict:
    """Buda 출금 내역 API 응답 샘플 (은행 계좌 정보 있음/없음)"""
    return {
        "withdrawals": [
            {
                "id": 555,
                "state": "confirmed",
                "currency": "CLP",
                "created_at": "2017-06-10T12:00:00.000Z",
                "withdrawal_data": {
                    "type": "fiat_withdrawal_data",
                    "id": 77,
                    "created_at": "2017-06-10T12:00:00.000Z",
                    "updated_at": "2017-06-10T12:30:00.000Z",
                    "transacted_at": None,
                    "statement_ref": None,
                    "fiat_account": {
                        "id": 12,
                        "account_number": "123456789",
                        "account_type": "Cuenta Corriente",
                        "bank_id": 1,
                        "created_at": "2017-01-01T00:00:00.000Z",
                        "currency": "CLP",
                        "document_number": "11.111.111-1",
                        "email": "user@example.com",
                        "full_name": "Test User",
                        "national_number_identifier": None,
                        "phone": "+56 9 1234 5678",
                        "updated_at": "2017-01-01T00:00:00.000Z",
                        "bank_name": "Banco de Chile",
                        "pe_cci_number": None,
                    },
                    "source_account": None,
                },
                "amount": ["50000.0", "CLP"],
                "fee": ["0.0", "CLP"],
            },
            {
                "id": 556,
                "state": "pending_execution",
                "currency": "CLP",
                "created_at": "2017-06-11T12:00:00.000Z",
                "withdrawal_data": {
                    "type": "fiat_withdrawal_data",
                    "id": 78,
                    "created_at": "2017-06-11T12:00:00.000Z",
                    "updated_at": "2017-06-11T12:00:00.000Z",
                    "transacted_at": None,
                    "statement_ref": None,
                    "fiat_account": None,
                    "source_account": None,
                },
                "amount": ["1000.0", "CLP"],
                "fee": None,
            },
        ],
        "meta": {"total_pages": 1, "total_count": 2, "current_page": 1},
    }
