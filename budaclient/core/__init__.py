"""
코어 모듈

설정, 상수, 타입, 로깅 등 어댑터와 독립적인 공통 요소.
"""
