"""
Buda 시세/잔고 조회 스크립트

사용법:
    python -m scripts.market_info                      # 전체 마켓 목록
    python -m scripts.market_info --market btc-clp     # 마켓 정보 + 호가
    python -m scripts.market_info --balances           # 잔고 (BUDAKEY/BUDASECRET 또는 --secrets)
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from budaclient.adapters.buda import BudaError, BudaRestClient
from budaclient.core.config.loader import (
    Credentials,
    ExchangeConfig,
    credentials_from_env,
    load_credentials,
)
from budaclient.core.logging import setup_logging

logger = logging.getLogger(__name__)


def resolve_credentials(secrets_path: Path | None) -> Credentials | None:
    """--secrets 파일이 있으면 파일, 없으면 환경 변수에서 로드"""
    if secrets_path is not None:
        return load_credentials(secrets_path)
    return credentials_from_env()


async def main(market: str | None, balances: bool, secrets_path: Path | None) -> int:
    config = ExchangeConfig(credentials=resolve_credentials(secrets_path))

    async with BudaRestClient(config) as client:
        try:
            if market:
                info = await client.get_ticker(market)
                print(f"{info.id} ({info.name}): {info.base_currency}/{info.quote_currency}")
                print(f"  최소 주문 수량: {info.minimum_order_amount}")

                book = await client.get_order_book(market)
                if book.best_bid:
                    print(f"  최우선 매수: {book.best_bid.price} x {book.best_bid.amount}")
                if book.best_ask:
                    print(f"  최우선 매도: {book.best_ask.price} x {book.best_ask.amount}")
            else:
                for item in await client.get_markets():
                    print(f"{item.id:10} {item.name:10} min={item.minimum_order_amount}")

            if balances:
                for balance in await client.get_balances():
                    print(f"{balance.id:6} 가용 {balance.available_amount} / 총 {balance.amount}")
        except BudaError as e:
            logger.error(f"Buda 요청 실패: {e}")
            return 1

    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Buda 시세/잔고 조회"
    )
    parser.add_argument("--market", help="마켓 ID (예: btc-clp)")
    parser.add_argument("--balances", action="store_true", help="잔고 조회 (인증 필요)")
    parser.add_argument("--secrets", type=Path, help="api_key/api_secret이 담긴 YAML 파일")
    parser.add_argument("--no-log-file", action="store_true", help="파일 로그 비활성화")
    args = parser.parse_args()

    setup_logging("market_info", to_file=not args.no_log_file)
    sys.exit(asyncio.run(main(args.market, args.balances, args.secrets)))
