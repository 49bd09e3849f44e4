"""
에너지 예측 시스템 설정 파일
"""
import os
from dotenv import load_dotenv

# 환경변수 로드
load_dotenv()

class Config:
    """기본 설정"""
    # Flask 설정
    FLASK_ENV = os.getenv('FLASK_ENV', 'production')
    FLASK_DEBUG = os.getenv('FLASK_DEBUG', 'false').lower() == 'true'
    PORT = int(os.getenv('PORT', 5000))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    TESTING = False

    # Open-Meteo 예보 API 설정
    OPEN_METEO_BASE_URL = os.getenv('OPEN_METEO_BASE_URL', 'https://api.open-meteo.com/v1/forecast')
    WEATHER_TIMEZONE = os.getenv('WEATHER_TIMEZONE', 'America/Bogota')
    HOURLY_FORECAST_DAYS = int(os.getenv('HOURLY_FORECAST_DAYS', 7))
    DAILY_FORECAST_DAYS = int(os.getenv('DAILY_FORECAST_DAYS', 5))

    # 설정 저장소 (키-값 JSON 파일)
    SETTINGS_STORE_PATH = os.getenv('SETTINGS_STORE_PATH', 'data/settings.json')
    STORAGE_KEY_SOLAR_CONFIG = 'ecowatt_solar_config'
    STORAGE_KEY_PRICE = 'ecowatt_price_per_kwh'
    STORAGE_KEY_APPLIANCES = 'ecowatt_appliances'

    # 전기 요금 기본값 (kWh당)
    DEFAULT_PRICE_PER_KWH = float(os.getenv('DEFAULT_PRICE_PER_KWH', 0.15))

    # 방위/경사 보정 모델: 'bands' (구간표) 또는 'incidence' (pvlib 입사각 모델)
    ORIENTATION_MODEL = os.getenv('ORIENTATION_MODEL', 'bands')

    # 계산 상수 (달력 근사값 및 배터리 권장 용량 배수)
    DAYS_PER_MONTH = 30
    DAYS_PER_YEAR = 365
    BATTERY_SIZING_FACTOR = 1.5
    MJ_TO_KWH = 0.2778  # 1 MJ/m² = 0.2778 kWh/m²

    # 각도 분석 매개변수 (시작, 끝, 간격)
    OPTIMIZATION_TILT_RANGE = (0, 91, 5)
    OPTIMIZATION_ORIENTATION_RANGE = (0, 361, 15)
    DEFAULT_ALBEDO = float(os.getenv('DEFAULT_ALBEDO', 0.2))

class DevelopmentConfig(Config):
    """개발 환경 설정"""
    FLASK_DEBUG = True
    FLASK_ENV = 'development'
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')

class ProductionConfig(Config):
    """운영 환경 설정"""
    FLASK_DEBUG = False
    FLASK_ENV = 'production'

class TestingConfig(Config):
    """테스트 환경 설정 (메모리 저장소 사용)"""
    TESTING = True
    FLASK_ENV = 'testing'
    SETTINGS_STORE_PATH = None

# 환경에 따른 설정 선택
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}

def get_config():
    """현재 환경의 설정 반환"""
    env = os.getenv('FLASK_ENV', 'default')
    return config.get(env, config['default'])
