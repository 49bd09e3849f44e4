"""
가전기기 전력 소비량 및 요금 계산 모듈
"""
from typing import Iterable, Tuple

from energy_prediction_system.config import get_config
from energy_prediction_system.core.models import ApplianceLoad, ConsumptionSummary
from energy_prediction_system.core.numeric import to_finite

config = get_config()

APPLIANCE_CATEGORIES = [
    'Refrigeración',
    'Climatización',
    'Cocina',
    'Lavado',
    'Entretenimiento',
    'Iluminación',
    'Otro',
]


def calculate_consumption(loads: Iterable[ApplianceLoad], price_per_kwh: float) -> ConsumptionSummary:
    """
    가전기기 목록의 일/월/연 소비 전력량과 요금 계산

    월 30일, 연 365일의 고정 근사값을 사용합니다. 개별 부하 값은
    보정하지 않고 합산만 하므로, 음수 전력 등 잘못된 입력은 호출자가
    validate_appliance_load 로 사전에 걸러야 합니다.

    Args:
        loads: ApplianceLoad 목록 (빈 목록이면 모두 0)
        price_per_kwh: kWh당 전기 요금 (0 이상)

    Returns:
        ConsumptionSummary
    """
    daily_kwh = sum(load.power_watts * load.hours_per_day / 1000 for load in loads)
    daily_kwh = float(daily_kwh)

    monthly_kwh = daily_kwh * config.DAYS_PER_MONTH
    yearly_kwh = daily_kwh * config.DAYS_PER_YEAR

    return ConsumptionSummary(
        daily_kwh=daily_kwh,
        monthly_kwh=monthly_kwh,
        yearly_kwh=yearly_kwh,
        daily_cost=daily_kwh * price_per_kwh,
        monthly_cost=monthly_kwh * price_per_kwh,
        yearly_cost=yearly_kwh * price_per_kwh,
    )


def validate_appliance_load(power_watts, hours_per_day) -> Tuple[bool, str]:
    """
    가전 부하 입력 검증

    Returns:
        (유효 여부, 오류 메시지) 튜플
    """
    if isinstance(power_watts, bool) or not isinstance(power_watts, (int, float)):
        return False, '전력(W)은 숫자여야 합니다.'
    if isinstance(hours_per_day, bool) or not isinstance(hours_per_day, (int, float)):
        return False, '사용 시간은 숫자여야 합니다.'
    if to_finite(power_watts, None) is None:
        return False, '전력(W)은 유한한 숫자여야 합니다.'
    if to_finite(hours_per_day, None) is None:
        return False, '사용 시간은 유한한 숫자여야 합니다.'
    if not power_watts > 0:
        return False, '전력(W)은 0보다 커야 합니다.'
    if not 0 <= hours_per_day <= 24:
        return False, '하루 사용 시간은 0~24시간 사이여야 합니다.'
    return True, ''
