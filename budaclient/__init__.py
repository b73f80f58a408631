"""
budaclient

Buda.com 거래소 REST API 클라이언트.
"""

from budaclient.adapters.buda import (
    BudaRestClient,
    BudaError,
    AuthenticationRequired,
    InvalidOrderType,
    SigningError,
    TransportError,
    DecodeError,
)
from budaclient.core.config import Credentials, ExchangeConfig, InvalidCredentials

__version__ = "0.1.0"

__all__ = [
    "BudaRestClient",
    "BudaError",
    "AuthenticationRequired",
    "InvalidOrderType",
    "SigningError",
    "TransportError",
    "DecodeError",
    "Credentials",
    "ExchangeConfig",
    "InvalidCredentials",
]
