"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 3단계 상위: budaclient/core/constants.py → 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent.parent


class BudaEndpoints:
    """Buda API 엔드포인트 (고정값)

    공식 문서: https://api.buda.com
    """

    PROD_REST_URL: str = "https://www.buda.com/api/v2"


class AuthHeaders:
    """인증 헤더 이름"""

    API_KEY: str = "X-SBTC-APIKEY"
    NONCE: str = "X-SBTC-NONCE"
    SIGNATURE: str = "X-SBTC-SIGNATURE"


class EnvVars:
    """자격 증명 환경 변수 이름"""

    API_KEY: str = "BUDAKEY"
    API_SECRET: str = "BUDASECRET"


class Defaults:
    """기본값 상수"""

    TIMEOUT_SEC: float = 10.0
    ERROR_EXCERPT_LEN: int = 200


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"
