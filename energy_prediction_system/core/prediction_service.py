"""
에너지 예측 파이프라인

기상 예보 조회 → 발전량 예측 → 소비량 계산 → 배터리 수지 추정을 연결합니다.
각 호출은 독립적이며, 마지막 정상 결과 보존은 호출자가 소유하는
PredictionSession 에서만 이루어집니다.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence

from energy_prediction_system.core.battery_estimator import estimate_battery_balance
from energy_prediction_system.core.consumption_calculator import calculate_consumption
from energy_prediction_system.core.models import (
    ApplianceLoad,
    BatteryBalanceResult,
    ConsumptionSummary,
    CurrentConditions,
    SolarYieldResult,
)
from energy_prediction_system.core.solar_calculator import SolarCalculator
from energy_prediction_system.core.system_config import normalize
from energy_prediction_system.core.weather_api import WeatherAPI, WeatherFetchError

logger = logging.getLogger(__name__)


@dataclass
class EnergyPrediction:
    """한 번의 예측 주기 결과"""
    location: Dict
    consumption: ConsumptionSummary
    solar: SolarYieldResult
    battery: BatteryBalanceResult
    current: Optional[CurrentConditions] = None
    stale: bool = False
    error: Optional[str] = None
    daily_totals: List[Dict] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'location': self.location,
            'consumption': self.consumption.to_dict(),
            'solar': self.solar.to_dict(),
            'battery': self.battery.to_dict(),
            'current': self.current.to_dict() if self.current else None,
            'dailyTotals': self.daily_totals,
            'stale': self.stale,
            'error': self.error,
        }


def run_prediction(
    loads: Sequence[ApplianceLoad],
    price_per_kwh: float,
    latitude: float,
    longitude: float,
    system_config=None,
    weather_api: WeatherAPI = None,
    calculator: SolarCalculator = None
) -> EnergyPrediction:
    """
    전체 예측 파이프라인 실행

    Raises:
        WeatherFetchError: 기상 데이터 조회 실패 (재시도 없음)
    """
    weather_api = weather_api or WeatherAPI()
    calculator = calculator or SolarCalculator()
    system_config = normalize(system_config)

    forecast = weather_api.fetch_hourly(latitude, longitude)

    solar = calculator.estimate_solar_yield(forecast.hourly, system_config, latitude)
    consumption = calculate_consumption(loads, price_per_kwh)
    battery = estimate_battery_balance(consumption, solar, system_config)
    daily_totals = calculator.aggregate_by_day(solar.hourly_breakdown).to_dict(orient='records')

    return EnergyPrediction(
        location={'lat': latitude, 'lon': longitude},
        consumption=consumption,
        solar=solar,
        battery=battery,
        current=forecast.current,
        daily_totals=daily_totals,
    )


def run_daily_forecast(
    latitude: float,
    longitude: float,
    system_config=None,
    weather_api: WeatherAPI = None,
    calculator: SolarCalculator = None
) -> Dict:
    """일별 예보 기반 일 발전량 예측 (5일)"""
    weather_api = weather_api or WeatherAPI()
    calculator = calculator or SolarCalculator()
    system_config = normalize(system_config)

    forecast = weather_api.fetch_daily(latitude, longitude)
    solar = calculator.estimate_solar_yield(forecast.daily, system_config, latitude)

    return {
        'location': {'lat': latitude, 'lon': longitude},
        'current': forecast.current.to_dict(),
        'systemConfig': system_config.to_dict(),
        'solar': solar.to_dict(),
    }


class PredictionSession:
    """
    호출자 단위 예측 세션

    기상 조회가 실패하면 마지막 정상 예측을 stale 표시와 함께 반환하고,
    이전 결과가 없으면 오류를 그대로 전달합니다.
    """

    def __init__(self, weather_api: WeatherAPI = None, calculator: SolarCalculator = None):
        self.weather_api = weather_api or WeatherAPI()
        self.calculator = calculator or SolarCalculator()
        self.last_prediction: Optional[EnergyPrediction] = None

    def refresh(self, loads, price_per_kwh, latitude, longitude, system_config=None) -> EnergyPrediction:
        try:
            prediction = run_prediction(
                loads, price_per_kwh, latitude, longitude, system_config,
                weather_api=self.weather_api, calculator=self.calculator,
            )
        except WeatherFetchError as e:
            if self.last_prediction is None:
                raise
            logger.warning('기상 조회 실패, 이전 예측을 유지합니다: %s', e)
            return replace(self.last_prediction, stale=True, error=str(e))

        self.last_prediction = prediction
        return prediction
