"""
Nonce 생성기 테스트

순차/동시 호출에서 엄격한 단조 증가 검증.
"""

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from budaclient.adapters.buda.nonce import NonceSource


class TestNonceSource:
    """NonceSource 테스트"""

    def test_returns_numeric_string(self) -> None:
        """정수 문자열 반환"""
        nonce = NonceSource().next()

        assert isinstance(nonce, str)
        assert nonce.isdigit()

    def test_sequential_strictly_increasing(self) -> None:
        """순차 호출 시 엄격히 증가"""
        source = NonceSource()

        values = [int(source.next()) for _ in range(1000)]

        assert all(a < b for a, b in zip(values, values[1:]))

    def test_same_clock_reading_still_increases(self) -> None:
        """시계 값이 같아도 증가"""
        source = NonceSource(clock=lambda: 500)

        values = [int(source.next()) for _ in range(5)]

        assert values == [500, 501, 502, 503, 504]

    def test_clock_going_backwards(self) -> None:
        """시계가 뒤로 가도 감소하지 않음"""
        readings = iter([1000, 900, 800, 2000])
        source = NonceSource(clock=lambda: next(readings))

        values = [int(source.next()) for _ in range(4)]

        assert values == [1000, 1001, 1002, 2000]

    def test_uses_wall_clock_nanoseconds(self) -> None:
        """기본 시계는 나노초 단위"""
        source = NonceSource()

        # 2017-01-01 이후 나노초
        assert int(source.next()) > 1_483_228_800 * 10**9

    def test_last_tracks_issued_value(self) -> None:
        """last 속성"""
        source = NonceSource(clock=lambda: 7)
        assert source.last == 0

        source.next()

        assert source.last == 7

    def test_concurrent_threads_distinct(self) -> None:
        """멀티스레드 동시 호출 시 중복 없음"""
        source = NonceSource(clock=lambda: 1)
        results: list[int] = []
        lock = threading.Lock()

        def worker() -> None:
            local = [int(source.next()) for _ in range(200)]
            # 스레드 내부에서도 증가
            assert all(a < b for a, b in zip(local, local[1:]))
            with lock:
                results.extend(local)

        with ThreadPoolExecutor(max_workers=8) as pool:
            for future in [pool.submit(worker) for _ in range(8)]:
                future.result()

        assert len(results) == 1600
        assert len(set(results)) == 1600

    @pytest.mark.asyncio
    async def test_concurrent_tasks_distinct(self) -> None:
        """asyncio 태스크 동시 호출 시 중복 없음"""
        source = NonceSource()

        async def take() -> int:
            await asyncio.sleep(0)
            return int(source.next())

        values = await asyncio.gather(*(take() for _ in range(500)))

        assert len(set(values)) == 500
