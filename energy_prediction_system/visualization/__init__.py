"""
visualization 모듈 - 데이터 시각화 및 차트 생성

이 모듈은 다음 컴포넌트들을 포함합니다:
- chart_generator: 발전량/에너지 수지/각도 히트맵 차트
"""

from .chart_generator import ChartGenerator

__version__ = "1.0.0"
__author__ = "Energy Prediction Team"

__all__ = [
    'ChartGenerator'
]
