"""
기상 예보 API 클래스
Open-Meteo 예보 API와의 연동을 담당
"""
import logging
from typing import Dict, List, Optional

import requests

from energy_prediction_system.config import get_config
from energy_prediction_system.core.models import (
    CurrentConditions,
    DailyForecast,
    DailySample,
    HourlyForecast,
    HourlySample,
)
from energy_prediction_system.core.numeric import finite_or_zero, to_finite

logger = logging.getLogger(__name__)
config = get_config()

# 콜롬비아 카리브 지역 주(departamento) 좌표
DEPARTMENT_COORDINATES = [
    {'name': 'La Guajira', 'latitude': 11.3548, 'longitude': -72.5205},
    {'name': 'Cesar', 'latitude': 10.0736, 'longitude': -73.2669},
    {'name': 'Atlántico', 'latitude': 10.9639, 'longitude': -74.7964},
    {'name': 'Magdalena', 'latitude': 10.4116, 'longitude': -74.4057},
]


def get_department_coordinates(name: str) -> Optional[Dict]:
    """주 이름으로 좌표 조회 (대소문자 무시)"""
    if not name:
        return None
    for department in DEPARTMENT_COORDINATES:
        if department['name'].lower() == name.strip().lower():
            return department
    return None


class WeatherFetchError(Exception):
    """기상 데이터 조회 실패 (네트워크 오류, 비정상 응답, 빈 응답)"""


class WeatherAPI:
    """Open-Meteo API를 사용한 기상 예보 클래스"""

    HOURLY_VARIABLES = 'shortwave_radiation,temperature_2m'
    DAILY_VARIABLES = ('temperature_2m_max,temperature_2m_min,shortwave_radiation_sum,'
                       'precipitation_sum,windspeed_10m_max')

    def __init__(self, base_url: str = None, timezone: str = None):
        self.base_url = base_url or config.OPEN_METEO_BASE_URL
        self.timezone = timezone or config.WEATHER_TIMEZONE
        self.hourly_days = config.HOURLY_FORECAST_DAYS
        self.daily_days = config.DAILY_FORECAST_DAYS

    def _request(self, params: Dict) -> Dict:
        """
        예보 API 단일 요청 (재시도 없음)

        Raises:
            WeatherFetchError: 요청 실패, 비정상 상태 코드, 빈/잘못된 응답
        """
        try:
            response = requests.get(self.base_url, params=params, timeout=10)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error('기상 API 요청 오류: %s', e)
            raise WeatherFetchError(f'기상 데이터를 가져오지 못했습니다: {e}') from e
        except ValueError as e:
            logger.error('기상 API 응답 파싱 오류: %s', e)
            raise WeatherFetchError('기상 데이터 응답을 해석할 수 없습니다.') from e

        if not data or not isinstance(data, dict):
            raise WeatherFetchError('기상 데이터 응답이 비어 있습니다.')

        return data

    def _base_params(self, lat: float, lon: float, forecast_days: int) -> Dict:
        return {
            'latitude': lat,
            'longitude': lon,
            'current': self.HOURLY_VARIABLES,
            'forecast_days': forecast_days,
            'timezone': self.timezone,
        }

    def fetch_hourly(self, lat: float, lon: float) -> HourlyForecast:
        """
        시간별 일사량/기온 예보 조회

        Args:
            lat: 위도
            lon: 경도

        Returns:
            HourlyForecast (누락된 배열은 빈 목록)
        """
        params = self._base_params(lat, lon, self.hourly_days)
        params['hourly'] = self.HOURLY_VARIABLES

        data = self._request(params)
        return HourlyForecast(
            current=self.parse_current(data),
            hourly=self.parse_hourly(data),
        )

    def fetch_daily(self, lat: float, lon: float) -> DailyForecast:
        """
        일별 누적 일사량/기온/강수/풍속 예보 조회

        Args:
            lat: 위도
            lon: 경도

        Returns:
            DailyForecast (누락된 배열은 빈 목록)
        """
        params = self._base_params(lat, lon, self.daily_days)
        params['daily'] = self.DAILY_VARIABLES

        data = self._request(params)
        return DailyForecast(
            current=self.parse_current(data),
            daily=self.parse_daily(data),
        )

    @staticmethod
    def parse_current(data: Dict) -> CurrentConditions:
        current = data.get('current') or {}
        return CurrentConditions(
            timestamp=current.get('time'),
            radiation_wm2=finite_or_zero(current.get('shortwave_radiation')),
            temperature_c=finite_or_zero(current.get('temperature_2m')),
        )

    @staticmethod
    def parse_hourly(data: Dict) -> List[HourlySample]:
        hourly = data.get('hourly') or {}
        times = hourly.get('time') or []
        radiation = hourly.get('shortwave_radiation') or []
        temperature = hourly.get('temperature_2m') or []

        return [
            HourlySample(
                timestamp=time,
                radiation_wm2=_item(radiation, i),
                temperature_c=to_finite(_item(temperature, i), None),
            )
            for i, time in enumerate(times)
        ]

    @staticmethod
    def parse_daily(data: Dict) -> List[DailySample]:
        daily = data.get('daily') or {}
        dates = daily.get('time') or []
        radiation = daily.get('shortwave_radiation_sum') or []
        temp_max = daily.get('temperature_2m_max') or []
        temp_min = daily.get('temperature_2m_min') or []
        precipitation = daily.get('precipitation_sum') or []
        wind = daily.get('windspeed_10m_max') or []

        return [
            DailySample(
                date=date,
                radiation_sum_mj_m2=_item(radiation, i),
                temp_max_c=to_finite(_item(temp_max, i), None),
                temp_min_c=to_finite(_item(temp_min, i), None),
                precipitation_mm=to_finite(_item(precipitation, i), None),
                wind_kmh=to_finite(_item(wind, i), None),
            )
            for i, date in enumerate(dates)
        ]

    def validate_coordinates(self, lat: float, lon: float) -> bool:
        """
        좌표 유효성 검증

        Args:
            lat: 위도 (-90 ~ 90)
            lon: 경도 (-180 ~ 180)

        Returns:
            유효한 좌표인지 여부
        """
        if isinstance(lat, bool) or isinstance(lon, bool):
            return False

        if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
            return False

        if not (-90 <= lat <= 90):
            return False

        if not (-180 <= lon <= 180):
            return False

        return True


def _item(values: List, index: int):
    """배열 길이가 시간 축보다 짧으면 None"""
    return values[index] if index < len(values) else None
