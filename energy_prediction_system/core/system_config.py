"""
시스템 구성 검증 및 저장 모듈

모든 읽기/쓰기 경로는 normalize 를 거치므로 저장소에는 항상 범위 내의
값만 기록됩니다. 구버전 저장값(패널당 면적 10 m² 버그)은 로드 시 이관됩니다.
"""
import json
import logging
from collections import namedtuple
from typing import Dict, Optional

from energy_prediction_system.config import get_config
from energy_prediction_system.core.models import SystemConfig
from energy_prediction_system.core.numeric import clamp, to_finite

logger = logging.getLogger(__name__)
config = get_config()

FieldSpec = namedtuple('FieldSpec', ['minimum', 'maximum', 'default', 'integer', 'aliases'])

# 필드별 (최소, 최대, 기본값, 정수 여부, 허용 키 별칭)
FIELD_SPECS = {
    'panel_count': FieldSpec(1, 100, 10, True, ('panelCount', 'solarPanelsCount')),
    'panel_area_m2': FieldSpec(0.5, 5.0, 1.0, False, ('panelAreaM2', 'solarPanelAreaM2')),
    'panel_efficiency': FieldSpec(0.1, 0.5, 0.20, False, ('panelEfficiency', 'solarPanelEfficiency')),
    'battery_capacity_kwh': FieldSpec(0.1, 1000.0, 10.0, False, ('batteryCapacityKwh',)),
    'battery_efficiency': FieldSpec(0.5, 1.0, 0.90, False, ('batteryEfficiency',)),
    'battery_depth_of_discharge': FieldSpec(0.5, 1.0, 0.80, False, ('batteryDepthOfDischarge',)),
    'panel_orientation_deg': FieldSpec(0.0, 360.0, 180.0, False, ('panelOrientationDeg', 'panelOrientation')),
    'panel_tilt_deg': FieldSpec(0.0, 90.0, 10.0, False, ('panelTiltDeg', 'panelTilt')),
    'system_losses_frac': FieldSpec(0.0, 0.5, 0.12, False, ('systemLossesFrac', 'systemLosses')),
}

LEGACY_PANEL_AREA_LIMIT = 5.0


def default_config() -> SystemConfig:
    return SystemConfig(**{name: spec.default for name, spec in FIELD_SPECS.items()})


def _raw_value(raw: Dict, name: str, spec: FieldSpec):
    """snake_case 키, API 키, 구버전 키 순서로 값 조회"""
    for key in (name,) + spec.aliases:
        if key in raw:
            return raw[key]
    return None


def normalize_field(value, spec: FieldSpec):
    """숫자가 아니거나 누락된 값은 기본값, 범위 밖의 값은 경계로 보정"""
    if isinstance(value, int) and not isinstance(value, bool):
        # float 범위를 넘는 정수도 경계로 보정
        value = clamp(value, spec.minimum, spec.maximum)
    number = to_finite(value, None)
    if number is None:
        return spec.default
    number = clamp(number, spec.minimum, spec.maximum)
    if spec.integer:
        return int(round(number))
    return float(number)


def normalize(raw) -> SystemConfig:
    """
    임의의 입력을 완전한 SystemConfig 로 변환

    Args:
        raw: SystemConfig, 딕셔너리 또는 None

    Returns:
        모든 필드가 범위 내로 보정된 SystemConfig
    """
    if isinstance(raw, SystemConfig):
        raw = raw.to_dict()
    if not isinstance(raw, dict):
        raw = {}

    values = {
        name: normalize_field(_raw_value(raw, name, spec), spec)
        for name, spec in FIELD_SPECS.items()
    }
    return SystemConfig(**values)


def migrate_legacy(raw: Dict) -> Dict:
    """
    구버전 저장값 이관

    과거 버전은 패널당 면적 대신 전체 면적(10 m²)을 저장했으므로, 5 m² 를
    초과하는 패널당 면적은 기본값 1.0 m² 로 교체합니다.
    """
    migrated = dict(raw)
    spec = FIELD_SPECS['panel_area_m2']
    for key in ('panel_area_m2',) + spec.aliases:
        if key not in migrated:
            continue
        area = migrated[key]
        if isinstance(area, bool) or not isinstance(area, int):
            area = to_finite(area, None)
        if area is not None and area > LEGACY_PANEL_AREA_LIMIT:
            logger.warning('구버전 패널 면적 값 이관: %s=%s -> %s', key, migrated[key], spec.default)
            migrated[key] = spec.default
    return migrated


def load_config(raw) -> SystemConfig:
    """
    저장된 구성을 읽어 이관 및 검증 후 반환

    Args:
        raw: JSON 문자열, 딕셔너리 또는 None

    Returns:
        SystemConfig (해석할 수 없는 입력이면 기본값)
    """
    if raw is None:
        return default_config()

    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            logger.warning('저장된 시스템 구성을 해석할 수 없어 기본값을 사용합니다: %s', e)
            return default_config()

    if isinstance(raw, SystemConfig):
        return normalize(raw)

    if not isinstance(raw, dict):
        logger.warning('저장된 시스템 구성 형식 오류 (%s), 기본값을 사용합니다.', type(raw).__name__)
        return default_config()

    return normalize(migrate_legacy(raw))


class SystemConfigStore:
    """
    키-값 저장소 위의 시스템 구성 저장소

    상태: 미로드 → 로드(기본값 또는 이관값) → 변경 → 검증 및 저장 → ...
    모든 변경은 전체 객체 교체 후 재검증을 거쳐 즉시 저장됩니다.
    """

    def __init__(self, store, key: str = None):
        self.store = store
        self.key = key or config.STORAGE_KEY_SOLAR_CONFIG
        self._config: Optional[SystemConfig] = None

    @property
    def is_loaded(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> SystemConfig:
        if self._config is None:
            return self.load()
        return self._config

    def load(self) -> SystemConfig:
        self._config = load_config(self.store.get(self.key))
        return self._config

    def save(self, system_config) -> SystemConfig:
        validated = normalize(system_config)
        self.store.set(self.key, json.dumps(validated.to_dict()))
        self._config = validated
        return validated

    def update(self, **changes) -> SystemConfig:
        """일부 필드 변경 (현재 구성과 병합 후 전체 재검증)"""
        merged = self.config.to_dict()
        for name, value in changes.items():
            spec = FIELD_SPECS.get(name)
            if spec is None:
                matches = [n for n, s in FIELD_SPECS.items() if name in s.aliases]
                if not matches:
                    logger.warning('알 수 없는 구성 필드 무시: %s', name)
                    continue
                spec = FIELD_SPECS[matches[0]]
            merged[spec.aliases[0]] = value
        return self.save(merged)

    def reset(self) -> SystemConfig:
        return self.save(default_config())


def save_config(store, system_config, key: str = None) -> SystemConfig:
    """구성을 검증 후 저장하고 저장된 값을 반환"""
    return SystemConfigStore(store, key).save(system_config)


def reset_config(store=None, key: str = None) -> SystemConfig:
    """기본 구성 반환 (저장소가 주어지면 기본값으로 저장)"""
    if store is None:
        return default_config()
    return SystemConfigStore(store, key).reset()
