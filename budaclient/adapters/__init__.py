"""
어댑터 레이어

외부 서비스(Buda 거래소 API)와의 연동을 담당.
Protocol 기반 인터페이스로 Mock 교체 가능.
"""

from budaclient.adapters.interfaces import ITransport

__all__ = [
    "ITransport",
]
