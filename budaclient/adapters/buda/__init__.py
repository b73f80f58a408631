"""
Buda 어댑터

Buda.com REST API 연동을 담당.
요청 서명, 전송, 응답 디코딩.
"""

from budaclient.adapters.buda.rest_client import BudaRestClient, Endpoints
from budaclient.adapters.buda.transport import HttpTransport, RawResponse
from budaclient.adapters.buda.signer import Signer, canonical_message
from budaclient.adapters.buda.nonce import NonceSource
from budaclient.adapters.buda.errors import (
    BudaError,
    AuthenticationRequired,
    InvalidOrderType,
    SigningError,
    TransportError,
    DecodeError,
)

__all__ = [
    "BudaRestClient",
    "Endpoints",
    "HttpTransport",
    "RawResponse",
    "Signer",
    "canonical_message",
    "NonceSource",
    "BudaError",
    "AuthenticationRequired",
    "InvalidOrderType",
    "SigningError",
    "TransportError",
    "DecodeError",
]
