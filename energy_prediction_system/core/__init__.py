"""
core 모듈 - 에너지 예측 시스템의 핵심 로직

이 모듈은 다음 컴포넌트들을 포함합니다:
- consumption_calculator: 가전기기 소비 전력량/요금 계산
- orientation: 방위각/경사각 보정 모델
- solar_calculator: 태양광 발전량 계산 엔진
- battery_estimator: 배터리 저장량 및 에너지 수지 추정
- system_config: 시스템 구성 검증/이관/저장
- weather_api: Open-Meteo 예보 API 연동
- optimization: 설치 각도 분석
- prediction_service: 전체 예측 파이프라인
"""

from .consumption_calculator import calculate_consumption, validate_appliance_load
from .orientation import orientation_tilt_factor, incidence_tilt_factor
from .solar_calculator import SolarCalculator, estimate_solar_yield
from .battery_estimator import estimate_battery_balance
from .system_config import SystemConfigStore, load_config, normalize, reset_config, save_config
from .weather_api import WeatherAPI, WeatherFetchError, get_department_coordinates
from .optimization import AngleOptimizer
from .prediction_service import PredictionSession, run_daily_forecast, run_prediction

__version__ = "1.0.0"
__author__ = "Energy Prediction Team"

# 편의를 위한 단축 함수들
def create_energy_system():
    """통합 에너지 예측 객체 생성"""
    solar_calc = SolarCalculator()
    weather_api = WeatherAPI()
    angle_optimizer = AngleOptimizer()

    return {
        'calculator': solar_calc,
        'weather': weather_api,
        'optimizer': angle_optimizer
    }

def quick_prediction(loads, price_per_kwh, department='La Guajira', system_config=None):
    """주 이름으로 빠른 에너지 예측"""
    coords = get_department_coordinates(department)
    if coords is None:
        raise ValueError(f'알 수 없는 주: {department}')

    return run_prediction(
        loads, price_per_kwh, coords['latitude'], coords['longitude'], system_config
    )

__all__ = [
    'calculate_consumption',
    'validate_appliance_load',
    'orientation_tilt_factor',
    'incidence_tilt_factor',
    'SolarCalculator',
    'estimate_solar_yield',
    'estimate_battery_balance',
    'SystemConfigStore',
    'load_config',
    'normalize',
    'reset_config',
    'save_config',
    'WeatherAPI',
    'WeatherFetchError',
    'get_department_coordinates',
    'AngleOptimizer',
    'PredictionSession',
    'run_prediction',
    'run_daily_forecast',
    'create_energy_system',
    'quick_prediction'
]
