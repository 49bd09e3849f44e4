"""
태양광 패널 설치 각도 분석 모듈
"""
import logging
from typing import Dict, Tuple

import numpy as np

from energy_prediction_system.config import get_config
from energy_prediction_system.core.numeric import clamp, safe_divide
from energy_prediction_system.core.orientation import (
    OPTIMAL_ORIENTATION_DEG,
    get_incidence_model,
    optimal_tilt,
    orientation_tilt_factor,
)

logger = logging.getLogger(__name__)
config = get_config()


class AngleOptimizer:
    """패널 방위각/경사각 권장값 및 민감도 분석 클래스"""

    def __init__(self, orientation_model=None):
        self.orientation_model = orientation_model or orientation_tilt_factor
        self.config = config

    def find_optimal_angles_simple(self, lat: float) -> Tuple[float, float]:
        """
        구간표 모델 기준 권장 각도

        Args:
            lat: 위도

        Returns:
            (권장 방위각, 권장 경사각)
        """
        return OPTIMAL_ORIENTATION_DEG, round(optimal_tilt(lat), 1)

    def find_optimal_angles_detailed(self, lat: float, lon: float = 0.0) -> Tuple[float, float, float]:
        """
        입사각 모델과 scipy 경계 최적화를 사용한 권장 각도

        Returns:
            (권장 방위각, 권장 경사각, 구간표 모델 보정 계수)
        """
        try:
            model = get_incidence_model(round(lat, 2), round(lon, 2))
            tilt = model.optimal_tilt()
            orientation = model.equator_azimuth
        except (ValueError, RuntimeError) as e:
            logger.error('최적 각도 계산 오류: %s', e)
            orientation, tilt = self.find_optimal_angles_simple(lat)

        return orientation, tilt, round(self.orientation_model(orientation, tilt, lat), 4)

    def calculate_angle_sensitivity(
        self,
        lat: float,
        orientation: float,
        tilt: float
    ) -> Dict:
        """
        현재 각도 주변의 민감도 분석

        Args:
            lat: 위도
            orientation: 기준 방위각
            tilt: 기준 경사각

        Returns:
            경사각(±30도)/방위각(±90도) 변화에 따른 계수와 손실률
        """
        base_factor = self.orientation_model(orientation, tilt, lat)

        tilt_variations = np.arange(
            max(0, tilt - 30),
            min(90, tilt + 30) + 1,
            5
        )
        tilt_sensitivity = []
        for variation in tilt_variations:
            factor = self.orientation_model(orientation, float(variation), lat)
            tilt_sensitivity.append({
                'angle': float(variation),
                'factor': round(factor, 4),
                'loss_percent': round((1 - safe_divide(factor, base_factor)) * 100, 2)
            })

        orientation_variations = np.arange(
            max(0, orientation - 90),
            min(360, orientation + 90) + 1,
            15
        )
        orientation_sensitivity = []
        for variation in orientation_variations:
            factor = self.orientation_model(float(variation), tilt, lat)
            orientation_sensitivity.append({
                'angle': float(variation),
                'factor': round(factor, 4),
                'loss_percent': round((1 - safe_divide(factor, base_factor)) * 100, 2)
            })

        return {
            'base_factor': round(base_factor, 4),
            'tilt_sensitivity': tilt_sensitivity,
            'orientation_sensitivity': orientation_sensitivity
        }

    def calculate_factor_matrix(self, lat: float):
        """경사각 × 방위각 조합별 보정 계수 매트릭스 계산"""
        tilt_range = range(*self.config.OPTIMIZATION_TILT_RANGE)
        orientation_range = range(*self.config.OPTIMIZATION_ORIENTATION_RANGE)

        factor_matrix = np.zeros((len(tilt_range), len(orientation_range)))

        for i, tilt in enumerate(tilt_range):
            for j, orientation in enumerate(orientation_range):
                factor_matrix[i, j] = clamp(self.orientation_model(orientation, tilt, lat), 0.0, 1.0)

        return factor_matrix, tilt_range, orientation_range
