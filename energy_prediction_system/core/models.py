"""
에너지 예측 데이터 모델

가전 부하, 소비 요약, 시스템 구성, 일사량 샘플 및 계산 결과를 정의합니다.
결과 객체는 모두 to_dict()로 JSON API 형식(camelCase)으로 직렬화됩니다.
"""
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ApplianceLoad:
    """가전기기 한 대의 사용 프로필 (전력 W, 하루 사용 시간)"""
    power_watts: float
    hours_per_day: float


@dataclass(frozen=True)
class Appliance(ApplianceLoad):
    """저장소에 기록되는 가전기기"""
    name: str = ''
    category: str = 'Otro'
    id: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'powerWatts': self.power_watts,
            'hoursPerDay': self.hours_per_day,
        }


@dataclass(frozen=True)
class ConsumptionSummary:
    """일/월/연 소비 전력량 및 요금"""
    daily_kwh: float = 0.0
    monthly_kwh: float = 0.0
    yearly_kwh: float = 0.0
    daily_cost: float = 0.0
    monthly_cost: float = 0.0
    yearly_cost: float = 0.0

    def to_dict(self) -> Dict:
        return {
            'dailyKwh': self.daily_kwh,
            'monthlyKwh': self.monthly_kwh,
            'yearlyKwh': self.yearly_kwh,
            'dailyCost': self.daily_cost,
            'monthlyCost': self.monthly_cost,
            'yearlyCost': self.yearly_cost,
        }


@dataclass(frozen=True)
class SystemConfig:
    """태양광 패널 및 배터리 설치 구성

    값의 범위 검증과 기본값 대체는 core.system_config.normalize 가 담당합니다.
    """
    panel_count: int = 10
    panel_area_m2: float = 1.0
    panel_efficiency: float = 0.20
    battery_capacity_kwh: float = 10.0
    battery_efficiency: float = 0.90
    battery_depth_of_discharge: float = 0.80
    panel_orientation_deg: float = 180.0
    panel_tilt_deg: float = 10.0
    system_losses_frac: float = 0.12

    @property
    def total_area_m2(self) -> float:
        return self.panel_count * self.panel_area_m2

    @property
    def usable_capacity_kwh(self) -> float:
        return self.battery_capacity_kwh * self.battery_depth_of_discharge

    def to_dict(self) -> Dict:
        return {
            'panelCount': self.panel_count,
            'panelAreaM2': self.panel_area_m2,
            'panelEfficiency': self.panel_efficiency,
            'batteryCapacityKwh': self.battery_capacity_kwh,
            'batteryEfficiency': self.battery_efficiency,
            'batteryDepthOfDischarge': self.battery_depth_of_discharge,
            'panelOrientationDeg': self.panel_orientation_deg,
            'panelTiltDeg': self.panel_tilt_deg,
            'systemLossesFrac': self.system_losses_frac,
        }


@dataclass(frozen=True)
class HourlySample:
    """시간별 일사량 (W/m²)"""
    timestamp: str
    radiation_wm2: Optional[float]
    temperature_c: Optional[float] = None


@dataclass(frozen=True)
class DailySample:
    """일별 누적 일사량 (MJ/m²) 및 기상 요약"""
    date: str
    radiation_sum_mj_m2: Optional[float]
    temp_max_c: Optional[float] = None
    temp_min_c: Optional[float] = None
    precipitation_mm: Optional[float] = None
    wind_kmh: Optional[float] = None


@dataclass(frozen=True)
class CurrentConditions:
    timestamp: Optional[str] = None
    radiation_wm2: float = 0.0
    temperature_c: float = 0.0

    def to_dict(self) -> Dict:
        return {
            'timestamp': self.timestamp,
            'radiationWm2': self.radiation_wm2,
            'tempC': self.temperature_c,
        }


@dataclass
class HourlyForecast:
    current: CurrentConditions
    hourly: List[HourlySample] = field(default_factory=list)


@dataclass
class DailyForecast:
    current: CurrentConditions
    daily: List[DailySample] = field(default_factory=list)


@dataclass(frozen=True)
class HourlyYield:
    timestamp: str
    kwh: float
    radiation_wm2: float

    def to_dict(self) -> Dict:
        return {'timestamp': self.timestamp, 'kwh': self.kwh, 'radiationWm2': self.radiation_wm2}


@dataclass(frozen=True)
class DailyYield:
    date: str
    kwh: float
    radiation_sum_mj_m2: float
    temp_max_c: Optional[float] = None
    temp_min_c: Optional[float] = None
    precipitation_mm: Optional[float] = None
    wind_kmh: Optional[float] = None

    def to_dict(self) -> Dict:
        return {
            'date': self.date,
            'kwh': self.kwh,
            'radiationSumMJm2': self.radiation_sum_mj_m2,
            'tempMaxC': self.temp_max_c,
            'tempMinC': self.temp_min_c,
            'precipMm': self.precipitation_mm,
            'windKmh': self.wind_kmh,
        }


@dataclass
class SolarYieldResult:
    """태양광 발전량 예측 결과"""
    daily_kwh: float = 0.0
    monthly_kwh: float = 0.0
    yearly_kwh: float = 0.0
    hourly_breakdown: List[HourlyYield] = field(default_factory=list)
    daily_breakdown: List[DailyYield] = field(default_factory=list)
    orientation_factor: float = 1.0

    def to_dict(self) -> Dict:
        return {
            'dailyKwh': self.daily_kwh,
            'monthlyKwh': self.monthly_kwh,
            'yearlyKwh': self.yearly_kwh,
            'orientationFactor': self.orientation_factor,
            'hourlyBreakdown': [entry.to_dict() for entry in self.hourly_breakdown],
            'dailyBreakdown': [entry.to_dict() for entry in self.daily_breakdown],
        }


@dataclass(frozen=True)
class BatteryBalanceResult:
    """배터리 저장 및 에너지 수지 예측 결과"""
    daily_consumption_kwh: float = 0.0
    daily_generation_kwh: float = 0.0
    daily_storable_kwh: float = 0.0
    recommended_capacity_kwh: float = 0.0
    surplus_kwh: float = 0.0
    deficit_kwh: float = 0.0
    autonomy_days: float = 0.0
    solar_coverage_percent: float = 0.0
    usable_capacity_kwh: float = 0.0

    def to_dict(self) -> Dict:
        return {
            'dailyConsumptionKwh': self.daily_consumption_kwh,
            'dailyGenerationKwh': self.daily_generation_kwh,
            'dailyStorableKwh': self.daily_storable_kwh,
            'recommendedCapacityKwh': self.recommended_capacity_kwh,
            'surplusKwh': self.surplus_kwh,
            'deficitKwh': self.deficit_kwh,
            'autonomyDays': self.autonomy_days,
            'solarCoveragePercent': self.solar_coverage_percent,
            'usableCapacityKwh': self.usable_capacity_kwh,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "BatteryBalanceResult":
        keys = {camel: snake for snake, camel in zip(
            cls.__dataclass_fields__, cls().to_dict()
        )}
        values = {}
        for key, value in data.items():
            name = keys.get(key, key)
            if name in cls.__dataclass_fields__:
                values[name] = float(value or 0)
        return cls(**values)


def snake_dict(obj) -> Dict:
    """데이터클래스를 snake_case 딕셔너리로 변환 (CSV/내부용)"""
    return asdict(obj)
