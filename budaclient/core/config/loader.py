"""
설정 로더

secrets.yaml 또는 환경 변수에서 자격 증명 로드 및 클라이언트 설정 생성
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import yaml

from budaclient.core.constants import BudaEndpoints, Defaults, EnvVars, Paths


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


class InvalidCredentials(ValueError):
    """API 키와 시크릿 중 하나만 주어진 경우"""

    pass


@dataclass(frozen=True)
class Credentials:
    """API 자격 증명 (불변)

    api_key: 공개 식별자 (X-SBTC-APIKEY)
    api_secret: 서명 키
    """

    api_key: str
    api_secret: str

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_secret:
            raise InvalidCredentials(
                "api_key and api_secret must both be provided"
            )

    def __repr__(self) -> str:
        return f"Credentials(api_key={self.api_key!r}, api_secret='***')"

    @classmethod
    def from_pair(cls, api_key: str | None, api_secret: str | None) -> "Credentials | None":
        """키/시크릿 쌍에서 생성

        둘 다 비어 있으면 None (비인증 모드).
        하나만 있으면 InvalidCredentials.
        """
        if not api_key and not api_secret:
            return None
        if not api_key or not api_secret:
            missing = "api_secret" if api_key else "api_key"
            raise InvalidCredentials(
                f"Partial credentials: {missing} is missing"
            )
        return cls(api_key=api_key, api_secret=api_secret)


@dataclass(frozen=True)
class ExchangeConfig:
    """거래소 연결 설정

    클라이언트 생성 시 한 번 전달되며 이후 변경되지 않음.
    credentials가 None이면 공개 API만 사용 가능.
    """

    rest_url: str = BudaEndpoints.PROD_REST_URL
    credentials: Credentials | None = None
    timeout: float = Defaults.TIMEOUT_SEC

    @property
    def authenticated(self) -> bool:
        """인증 모드 여부"""
        return self.credentials is not None

    @classmethod
    def create(
        cls,
        api_key: str = "",
        api_secret: str = "",
        rest_url: str = BudaEndpoints.PROD_REST_URL,
        timeout: float = Defaults.TIMEOUT_SEC,
    ) -> "ExchangeConfig":
        """ExchangeConfig 생성 헬퍼

        Raises:
            InvalidCredentials: 키/시크릿 중 하나만 주어진 경우
        """
        return cls(
            rest_url=rest_url.rstrip("/"),
            credentials=Credentials.from_pair(api_key, api_secret),
            timeout=timeout,
        )


def load_credentials(path: Path | None = None) -> Credentials | None:
    """secrets.yaml 파일에서 자격 증명 로드

    파일 형식:
        api_key: "..."
        api_secret: "..."

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Credentials 또는 None (키/시크릿 모두 비어 있는 경우)

    Raises:
        SecretsLoadError: 파일이 없거나 형식이 잘못된 경우
        InvalidCredentials: 키/시크릿 중 하나만 있는 경우
    """
    if path is None:
        path = Paths.SECRETS_FILE

    if not path.exists():
        raise SecretsLoadError(f"secrets.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SecretsLoadError(f"secrets.yaml 파싱 실패: {e}") from e

    if data is None:
        return None

    if not isinstance(data, dict):
        raise SecretsLoadError("secrets.yaml 최상위는 매핑이어야 합니다")

    return Credentials.from_pair(data.get("api_key"), data.get("api_secret"))


def credentials_from_env(environ: Mapping[str, str] | None = None) -> Credentials | None:
    """환경 변수(BUDAKEY, BUDASECRET)에서 자격 증명 로드

    Args:
        environ: 환경 변수 매핑 (None이면 os.environ)

    Returns:
        Credentials 또는 None
    """
    if environ is None:
        environ = os.environ
    return Credentials.from_pair(
        environ.get(EnvVars.API_KEY, ""),
        environ.get(EnvVars.API_SECRET, ""),
    )
