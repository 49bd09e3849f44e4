"""
배터리 저장 용량 및 에너지 수지 추정 모듈
"""
from energy_prediction_system.config import get_config
from energy_prediction_system.core.models import (
    BatteryBalanceResult,
    ConsumptionSummary,
    SolarYieldResult,
    SystemConfig,
)
from energy_prediction_system.core.numeric import finite_or_zero, non_negative, safe_divide

config = get_config()


def estimate_battery_balance(
    consumption: ConsumptionSummary,
    solar_yield: SolarYieldResult,
    system_config: SystemConfig
) -> BatteryBalanceResult:
    """
    소비량과 발전량으로부터 배터리 저장량, 잉여/부족량, 자립 일수 계산

    저장 가능량은 잉여 전력(충전 효율 반영)과 배터리 가용 용량 중 작은 값입니다.
    권장 용량은 하루 소비량의 1.5배입니다. 분모가 0 인 경우와 유한하지 않은
    중간값은 모두 0 으로 처리되어 결과에 NaN/Infinity 가 나타나지 않습니다.

    Args:
        consumption: 소비 요약
        solar_yield: 발전량 예측 결과
        system_config: 정규화된 시스템 구성

    Returns:
        BatteryBalanceResult
    """
    daily_consumption = non_negative(consumption.daily_kwh)
    daily_generation = non_negative(solar_yield.daily_kwh)
    efficiency = non_negative(system_config.battery_efficiency)

    usable_capacity = finite_or_zero(
        system_config.battery_capacity_kwh * system_config.battery_depth_of_discharge
    )

    surplus = max(0.0, daily_generation - daily_consumption)
    deficit = max(0.0, daily_consumption - daily_generation)

    # 충전 손실 반영 후 배터리 용량으로 제한
    storable_from_surplus = finite_or_zero(surplus * efficiency)
    daily_storable = min(max(0.0, storable_from_surplus), max(0.0, usable_capacity))

    recommended_capacity = non_negative(daily_consumption * config.BATTERY_SIZING_FACTOR)

    if usable_capacity > 0 and daily_consumption > 0:
        autonomy_days = safe_divide(usable_capacity * efficiency, daily_consumption)
    else:
        autonomy_days = 0.0

    if daily_consumption > 0:
        coverage = min(100.0, safe_divide(daily_generation, daily_consumption) * 100)
    else:
        coverage = 0.0

    return BatteryBalanceResult(
        daily_consumption_kwh=daily_consumption,
        daily_generation_kwh=daily_generation,
        daily_storable_kwh=daily_storable,
        recommended_capacity_kwh=recommended_capacity,
        surplus_kwh=surplus,
        deficit_kwh=deficit,
        autonomy_days=non_negative(autonomy_days),
        solar_coverage_percent=non_negative(coverage),
        usable_capacity_kwh=max(0.0, usable_capacity),
    )
