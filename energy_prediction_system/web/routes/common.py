"""
라우트 공통 함수 (위치 해석, 저장소 접근)
"""
from typing import Dict, Tuple

from flask import current_app, request

from energy_prediction_system.core.numeric import to_finite
from energy_prediction_system.core.system_config import SystemConfigStore, normalize
from energy_prediction_system.core.weather_api import WeatherAPI, get_department_coordinates
from energy_prediction_system.utils.appliance_store import ApplianceRepository, PriceSettings

DEFAULT_OWNER = 'local'


class RequestError(ValueError):
    """잘못된 요청 파라미터 (400 응답)"""


def settings_store():
    return current_app.extensions['settings_store']


def config_store() -> SystemConfigStore:
    return SystemConfigStore(settings_store())


def price_settings() -> PriceSettings:
    return PriceSettings(settings_store())


def appliance_repository() -> ApplianceRepository:
    return ApplianceRepository(settings_store())


def current_owner() -> str:
    return request.headers.get('X-Owner-Id') or request.args.get('owner') or DEFAULT_OWNER


def float_arg(name: str, default=None):
    """쿼리 실수 파라미터 (inf/nan 은 RequestError)"""
    value = request.args.get(name, default=default, type=float)
    if value is not None and to_finite(value, None) is None:
        raise RequestError(f'{name} 값은 유한한 숫자여야 합니다.')
    return value


def resolve_location(params: Dict) -> Tuple[float, float]:
    """
    주 이름 또는 위도/경도로 위치 결정

    Raises:
        RequestError: 위치 정보가 없거나 유효하지 않은 경우
    """
    department = params.get('department')
    if department:
        coords = get_department_coordinates(department)
        if coords is None:
            raise RequestError('주(departamento)를 찾을 수 없습니다.')
        return coords['latitude'], coords['longitude']

    try:
        lat = float(params.get('latitude', params.get('lat')))
        lon = float(params.get('longitude', params.get('lon')))
    except (TypeError, ValueError):
        raise RequestError('위도와 경도를 입력해주세요.')

    if not WeatherAPI().validate_coordinates(lat, lon):
        raise RequestError('유효하지 않은 좌표입니다.')

    return lat, lon


def resolve_system_config(payload: Dict):
    """요청에 구성이 있으면 검증해서 사용, 없으면 저장된 구성"""
    raw = payload.get('systemConfig')
    if raw is None:
        return config_store().load()
    return normalize(raw)
