"""
Nonce 생성기

나노초 단위 시각 기반, 클라이언트 인스턴스 내에서 단조 증가 보장.
"""

import threading
import time
from typing import Callable


class NonceSource:
    """단조 증가 nonce 생성기

    같은 시각이 두 번 읽히거나 시계가 뒤로 가더라도
    직전 값 + 1을 반환하여 엄격한 증가를 유지.
    스레드/태스크 동시 호출에 안전.

    Args:
        clock: 나노초 정수를 반환하는 함수 (기본: time.time_ns)
    """

    def __init__(self, clock: Callable[[], int] = time.time_ns):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        """다음 nonce 반환 (문자열)"""
        with self._lock:
            value = max(self._clock(), self._last + 1)
            self._last = value
        return str(value)

    @property
    def last(self) -> int:
        """마지막으로 발급한 값 (발급 전이면 0)"""
        return self._last
