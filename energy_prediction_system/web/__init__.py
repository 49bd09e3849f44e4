"""
web 모듈 - 에너지 예측 Flask 웹 API

- app: create_app 애플리케이션 팩토리 (로깅, 설정 저장소, 블루프린트 등록)
- routes: /api, /download 블루프린트
"""

from .app import create_app

__version__ = "1.0.0"
__author__ = "Energy Prediction Team"

__all__ = [
    'create_app'
]
