"""
태양광 발전량 계산 엔진
"""
import logging
from typing import Callable, List, Sequence, Union

import pandas as pd

from energy_prediction_system.config import get_config
from energy_prediction_system.core.models import (
    DailySample,
    DailyYield,
    HourlySample,
    HourlyYield,
    SolarYieldResult,
    SystemConfig,
)
from energy_prediction_system.core.numeric import clean_series, non_negative, to_finite
from energy_prediction_system.core.orientation import get_orientation_model

logger = logging.getLogger(__name__)
config = get_config()

HOURS_PER_DAY = 24

IrradianceSample = Union[HourlySample, DailySample]


class SolarCalculator:
    """태양광 발전량 계산 클래스"""

    def __init__(self, orientation_model: Callable[[float, float, float], float] = None):
        self.config = config
        self.orientation_model = orientation_model or get_orientation_model()

    def correction_factor(self, system_config: SystemConfig, latitude: float) -> float:
        """방위/경사 보정 계수 (유한하지 않으면 0)"""
        factor = self.orientation_model(
            system_config.panel_orientation_deg, system_config.panel_tilt_deg, latitude
        )
        return non_negative(factor)

    def _system_multiplier(self, system_config: SystemConfig, factor: float) -> float:
        """면적 × 효율 × 보정 계수 × (1 - 손실)"""
        multiplier = (system_config.total_area_m2 *
                      system_config.panel_efficiency *
                      factor *
                      (1 - system_config.system_losses_frac))
        return non_negative(multiplier)

    def estimate_solar_yield(
        self,
        samples: Sequence[IrradianceSample],
        system_config: SystemConfig,
        latitude: float
    ) -> SolarYieldResult:
        """
        일사량 예보로부터 발전량 예측

        시간별 샘플은 W/m², 일별 샘플은 MJ/m² 누적값으로 계산합니다.
        일 발전량은 시간별 계열이 있으면 처음 24개 항목의 합, 일별 계열만
        있으면 첫째 날의 발전량입니다. 월/연 값은 30일/365일 근사입니다.

        Args:
            samples: HourlySample 또는 DailySample 목록
            system_config: 정규화된 시스템 구성
            latitude: 설치 위치 위도

        Returns:
            SolarYieldResult (모든 값 0 이상, NaN 없음)
        """
        factor = self.correction_factor(system_config, latitude)
        multiplier = self._system_multiplier(system_config, factor)

        hourly = [s for s in samples if isinstance(s, HourlySample)]
        daily = [s for s in samples if isinstance(s, DailySample)]

        # 시간별: W/m² → kWh (잘못된 일사량은 0 기여)
        radiation = clean_series([s.radiation_wm2 for s in hourly])
        hourly_energy = clean_series(radiation * multiplier / 1000)
        hourly_breakdown = [
            HourlyYield(timestamp=s.timestamp, kwh=float(kwh), radiation_wm2=float(rad))
            for s, kwh, rad in zip(hourly, hourly_energy, radiation)
        ]

        # 일별: MJ/m² → kWh/m² → kWh
        radiation_sum = clean_series([s.radiation_sum_mj_m2 for s in daily])
        daily_energy = clean_series(radiation_sum * self.config.MJ_TO_KWH * multiplier)
        daily_breakdown = [
            DailyYield(
                date=s.date,
                kwh=float(kwh),
                radiation_sum_mj_m2=float(rad),
                temp_max_c=s.temp_max_c,
                temp_min_c=s.temp_min_c,
                precipitation_mm=s.precipitation_mm,
                wind_kmh=s.wind_kmh,
            )
            for s, kwh, rad in zip(daily, daily_energy, radiation_sum)
        ]

        if hourly:
            daily_kwh = hourly_energy[:HOURS_PER_DAY].sum()
        elif daily:
            daily_kwh = daily_energy[0]
        else:
            daily_kwh = 0.0
        daily_kwh = non_negative(daily_kwh)
        logger.debug('발전량 계산: 시간별 %d개, 일별 %d개, 보정 계수 %.3f, 일 발전량 %.3f kWh',
                     len(hourly), len(daily), factor, daily_kwh)

        return SolarYieldResult(
            daily_kwh=daily_kwh,
            monthly_kwh=non_negative(daily_kwh * self.config.DAYS_PER_MONTH),
            yearly_kwh=non_negative(daily_kwh * self.config.DAYS_PER_YEAR),
            hourly_breakdown=hourly_breakdown,
            daily_breakdown=daily_breakdown,
            orientation_factor=factor,
        )

    def aggregate_by_day(self, hourly_breakdown: List[HourlyYield]) -> pd.DataFrame:
        """시간별 발전량을 날짜별로 집계 (7일 예보 화면용)"""
        if not hourly_breakdown:
            return pd.DataFrame(columns=['date', 'kwh', 'peak_radiation_wm2', 'hours'])

        df = pd.DataFrame({
            'timestamp': pd.to_datetime([h.timestamp for h in hourly_breakdown], errors='coerce'),
            'kwh': [h.kwh for h in hourly_breakdown],
            'radiation_wm2': [h.radiation_wm2 for h in hourly_breakdown],
        }).dropna(subset=['timestamp'])

        grouped = df.groupby(df['timestamp'].dt.date).agg(
            kwh=('kwh', 'sum'),
            peak_radiation_wm2=('radiation_wm2', 'max'),
            hours=('kwh', 'size'),
        ).reset_index().rename(columns={'timestamp': 'date'})
        grouped['date'] = grouped['date'].astype(str)
        grouped['kwh'] = grouped['kwh'].round(3)

        return grouped


def estimate_solar_yield(samples, system_config: SystemConfig, latitude: float) -> SolarYieldResult:
    """기본 보정 모델을 사용한 발전량 예측 (편의 함수)"""
    return SolarCalculator().estimate_solar_yield(samples, system_config, to_finite(latitude))
