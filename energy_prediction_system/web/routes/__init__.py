"""
web.routes 모듈 - Flask 블루프린트

- api_routes: 소비량/발전량/배터리 예측, 설정 저장, 각도 분석, 차트 API (/api)
- download_routes: 시간별/일별 예측 데이터 CSV/JSON 다운로드 (/download)
- common: 위치 해석 및 저장소 접근 공통 함수
"""
import logging

from .api_routes import api_bp
from .download_routes import download_bp

logger = logging.getLogger(__name__)

# (블루프린트, URL 접두사)
all_blueprints = [
    (api_bp, '/api'),
    (download_bp, '/download'),
]

def register_all_blueprints(app):
    """블루프린트를 접두사와 함께 앱에 등록"""
    for blueprint, url_prefix in all_blueprints:
        app.register_blueprint(blueprint, url_prefix=url_prefix)
        logger.debug('블루프린트 등록: %s -> %s', blueprint.name, url_prefix)

__all__ = [
    'api_bp',
    'download_bp',
    'all_blueprints',
    'register_all_blueprints'
]
