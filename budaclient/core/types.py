"""
타입 정의 모듈

Buda API에서 사용하는 Enum 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class OrderSide(str, Enum):
    """주문 방향 (Buda API의 type 필드)"""

    BID = "bid"
    ASK = "ask"


class PriceType(str, Enum):
    """가격 유형"""

    LIMIT = "limit"
    MARKET = "market"


class OrderState(str, Enum):
    """주문 상태"""

    RECEIVED = "received"
    PENDING = "pending"
    TRADED = "traded"
    CANCELING = "canceling"
    CANCELED = "canceled"


class HttpMethod(str, Enum):
    """서명 가능한 HTTP 메서드"""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
