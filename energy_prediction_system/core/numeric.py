"""
수치 안전 경계 함수

추정기 내부의 모든 나눗셈과 외부 입력 곱셈은 이 함수들을 거칩니다.
NaN/Infinity 는 호출자에게 전달되기 전에 0 으로 정리됩니다.
"""
import numpy as np


def to_finite(value, default=0.0) -> float:
    """숫자로 변환 가능한 유한값이면 float, 아니면 default 반환"""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not np.isfinite(number):
        return default
    return number


def finite_or_zero(value) -> float:
    return to_finite(value, 0.0)


def non_negative(value) -> float:
    """유한하지 않거나 음수이면 0"""
    return max(0.0, finite_or_zero(value))


def safe_divide(numerator, denominator) -> float:
    """분모가 0 이거나 결과가 유한하지 않으면 0"""
    numerator = finite_or_zero(numerator)
    denominator = finite_or_zero(denominator)
    if denominator == 0:
        return 0.0
    return finite_or_zero(numerator / denominator)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def clean_series(values) -> np.ndarray:
    """일사량 배열 정리: 숫자가 아닌 값/NaN/Infinity 는 0, 음수는 0"""
    array = np.array([finite_or_zero(v) for v in values], dtype=float)
    return array.clip(min=0)
