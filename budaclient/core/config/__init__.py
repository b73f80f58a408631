"""
설정 모듈

자격 증명 및 클라이언트 설정 로드.
"""

from budaclient.core.config.loader import (
    Credentials,
    ExchangeConfig,
    InvalidCredentials,
    SecretsLoadError,
    credentials_from_env,
    load_credentials,
)

__all__ = [
    "Credentials",
    "ExchangeConfig",
    "InvalidCredentials",
    "SecretsLoadError",
    "credentials_from_env",
    "load_credentials",
]
