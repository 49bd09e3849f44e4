"""
Flask 애플리케이션 팩토리
"""
import logging

from flask import Flask

from energy_prediction_system.config import get_config
from energy_prediction_system.utils.kv_store import create_store

def create_app(config_class=None):
    """Flask 앱 생성 및 설정"""
    config_class = config_class or get_config()

    logging.basicConfig(
        level=getattr(logging, str(config_class.LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )

    app = Flask(__name__)
    app.config.from_object(config_class)

    # 설정/가전기기 저장소 (키-값)
    app.extensions['settings_store'] = create_store(config_class)

    # 라우트 등록
    from energy_prediction_system.web.routes import register_all_blueprints
    register_all_blueprints(app)

    return app
