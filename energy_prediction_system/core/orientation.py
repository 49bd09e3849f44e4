"""
패널 방위각/경사각 보정 모델

기본 모델은 저위도 지역에 맞춘 경험적 구간표(step function)로, 태양 위치를
직접 계산하지 않는 근사 모델입니다. 보다 엄밀한 대안으로 pvlib 기반의
입사각(청천 일사량 투영) 모델을 제공합니다. 두 모델 모두 (0, 1] 범위의
무차원 보정 계수를 반환하며, 최적 각도에서 멀어질수록 계수가 줄어듭니다.
"""
import logging
from functools import lru_cache
from typing import Callable, Sequence, Tuple

import pandas as pd
import pvlib
from scipy.optimize import minimize_scalar

from energy_prediction_system.config import get_config
from energy_prediction_system.core.numeric import to_finite, clamp

logger = logging.getLogger(__name__)
config = get_config()

OPTIMAL_ORIENTATION_DEG = 180.0  # 적도(남쪽) 방향
TILT_LATITUDE_OFFSET_DEG = 10.0

# (편차 상한, 계수) - 편차가 상한 이하인 첫 구간의 계수를 사용
ORIENTATION_BANDS: Sequence[Tuple[float, float]] = (
    (30.0, 1.00),
    (60.0, 0.95),
    (90.0, 0.85),
    (135.0, 0.70),
)
ORIENTATION_FLOOR = 0.60

TILT_BANDS: Sequence[Tuple[float, float]] = (
    (10.0, 1.00),
    (20.0, 0.98),
    (30.0, 0.95),
)
TILT_DECAY_START_DEG = 30.0
TILT_DECAY_PER_DEG = 0.005
TILT_FLOOR = 0.85

MIN_INCIDENCE_FACTOR = 0.01


def band_factor(deviation: float, bands: Sequence[Tuple[float, float]], fallback: float) -> float:
    """구간표에서 편차에 해당하는 계수 조회"""
    for threshold, factor in bands:
        if deviation <= threshold:
            return factor
    return fallback


def optimal_tilt(latitude_deg: float) -> float:
    """위도 기반 최적 경사각 (위도 - 10도, 최소 0도)"""
    return max(0.0, to_finite(latitude_deg) - TILT_LATITUDE_OFFSET_DEG)


def orientation_factor(orientation_deg: float) -> float:
    orientation = to_finite(orientation_deg, OPTIMAL_ORIENTATION_DEG)
    deviation = abs(orientation - OPTIMAL_ORIENTATION_DEG)
    return band_factor(deviation, ORIENTATION_BANDS, ORIENTATION_FLOOR)


def tilt_factor(tilt_deg: float, latitude_deg: float) -> float:
    tilt = to_finite(tilt_deg)
    deviation = abs(tilt - optimal_tilt(latitude_deg))
    tail = max(TILT_FLOOR, 1 - (deviation - TILT_DECAY_START_DEG) * TILT_DECAY_PER_DEG)
    return band_factor(deviation, TILT_BANDS, tail)


def orientation_tilt_factor(orientation_deg: float, tilt_deg: float, latitude_deg: float) -> float:
    """
    방위각/경사각 보정 계수 계산 (구간표 모델)

    Args:
        orientation_deg: 패널 방위각 (0=북, 180=남)
        tilt_deg: 수평면 기준 경사각
        latitude_deg: 설치 위치 위도

    Returns:
        (0, 1] 범위의 보정 계수
    """
    return orientation_factor(orientation_deg) * tilt_factor(tilt_deg, latitude_deg)


class IncidenceAngleModel:
    """pvlib 청천 일사량을 패널면에 투영하여 보정 계수를 구하는 모델"""

    def __init__(self, latitude: float, longitude: float = 0.0, year: int = 2023, albedo: float = None):
        self.latitude = clamp(to_finite(latitude), -90.0, 90.0)
        self.longitude = clamp(to_finite(longitude), -180.0, 180.0)
        self.year = year
        self.albedo = config.DEFAULT_ALBEDO if albedo is None else albedo
        self._components = None
        self._reference = None

    @property
    def equator_azimuth(self) -> float:
        return 180.0 if self.latitude >= 0 else 0.0

    def _clear_sky_components(self) -> pd.DataFrame:
        """1년 시간별 태양 위치와 청천 GHI/DNI/DHI (낮 시간만)"""
        if self._components is None:
            times = pd.date_range(start=f'{self.year}-01-01', end=f'{self.year}-12-31 23:00:00',
                                  freq='h', tz='UTC')
            solpos = pvlib.solarposition.get_solarposition(times, self.latitude, self.longitude)
            ghi = pvlib.clearsky.haurwitz(solpos['apparent_zenith'])['ghi']
            irradiance = pvlib.irradiance.erbs(ghi, solpos['apparent_zenith'], times)

            components = pd.DataFrame({
                'zenith': solpos['apparent_zenith'],
                'azimuth': solpos['azimuth'],
                'ghi': ghi,
                'dni': irradiance['dni'],
                'dhi': irradiance['dhi'],
            }).fillna(0)
            self._components = components[components['zenith'] < 90]
        return self._components

    def plane_of_array_sum(self, orientation_deg: float, tilt_deg: float) -> float:
        """패널면 연간 누적 일사량 (Wh/m²)"""
        c = self._clear_sky_components()
        poa = pvlib.irradiance.get_total_irradiance(
            surface_tilt=clamp(to_finite(tilt_deg), 0.0, 90.0),
            surface_azimuth=to_finite(orientation_deg, OPTIMAL_ORIENTATION_DEG) % 360,
            solar_zenith=c['zenith'],
            solar_azimuth=c['azimuth'],
            dni=c['dni'],
            ghi=c['ghi'],
            dhi=c['dhi'],
            albedo=self.albedo,
            model='isotropic',
        )
        return float(poa['poa_global'].fillna(0).clip(lower=0).sum())

    def optimal_tilt(self) -> float:
        """적도 방향 기준 최적 경사각 (scipy 경계 최적화)"""
        result = minimize_scalar(
            lambda tilt: -self.plane_of_array_sum(self.equator_azimuth, tilt),
            bounds=(0, 90),
            method='bounded',
        )
        return round(float(result.x), 1)

    def reference_sum(self) -> float:
        if self._reference is None:
            self._reference = self.plane_of_array_sum(self.equator_azimuth, self.optimal_tilt())
        return self._reference

    def factor(self, orientation_deg: float, tilt_deg: float) -> float:
        reference = self.reference_sum()
        if reference <= 0:
            return 1.0
        ratio = self.plane_of_array_sum(orientation_deg, tilt_deg) / reference
        return clamp(to_finite(ratio, 1.0), MIN_INCIDENCE_FACTOR, 1.0)


@lru_cache(maxsize=32)
def get_incidence_model(latitude: float, longitude: float = 0.0) -> IncidenceAngleModel:
    logger.debug('입사각 모델 생성: lat=%s lon=%s', latitude, longitude)
    return IncidenceAngleModel(latitude, longitude)


def incidence_tilt_factor(orientation_deg: float, tilt_deg: float, latitude_deg: float) -> float:
    """입사각 모델 기반 보정 계수 (orientation_tilt_factor 와 동일한 시그니처)"""
    model = get_incidence_model(round(to_finite(latitude_deg), 2))
    return model.factor(orientation_deg, tilt_deg)


ORIENTATION_MODELS = {
    'bands': orientation_tilt_factor,
    'incidence': incidence_tilt_factor,
}


def get_orientation_model(name: str = None) -> Callable[[float, float, float], float]:
    """설정 이름으로 보정 모델 함수 조회 (알 수 없는 이름이면 구간표 모델)"""
    name = name or config.ORIENTATION_MODEL
    if name not in ORIENTATION_MODELS:
        logger.warning('알 수 없는 보정 모델 %r, 구간표 모델을 사용합니다.', name)
        return orientation_tilt_factor
    return ORIENTATION_MODELS[name]
