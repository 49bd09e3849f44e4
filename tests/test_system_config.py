"""Tests for system configuration validation, legacy migration and storage."""

import json

import pytest

from energy_prediction_system.core.models import SystemConfig
from energy_prediction_system.core.system_config import (
    SystemConfigStore,
    default_config,
    load_config,
    normalize,
    reset_config,
    save_config,
)
from energy_prediction_system.utils.kv_store import InMemoryStore

STORAGE_KEY = 'ecowatt_solar_config'


class TestNormalize:
    def test_defaults(self):
        assert normalize(None) == SystemConfig()
        assert default_config() == SystemConfig()

    def test_out_of_range_values_clamped(self):
        cfg = normalize({'panelCount': 500, 'panelEfficiency': 0.9, 'systemLossesFrac': -1})
        assert cfg.panel_count == 100
        assert cfg.panel_efficiency == 0.5
        assert cfg.system_losses_frac == 0.0

    def test_non_numeric_value_uses_default(self):
        assert normalize({'panelCount': 'abc'}).panel_count == 10
        assert normalize({'panelTiltDeg': None}).panel_tilt_deg == 10.0
        assert normalize({'batteryEfficiency': True}).battery_efficiency == 0.9

    def test_numeric_strings_accepted(self):
        assert normalize({'panelCount': '12'}).panel_count == 12

    def test_panel_count_rounded_to_integer(self):
        cfg = normalize({'panelCount': 7.6})
        assert cfg.panel_count == 8
        assert isinstance(cfg.panel_count, int)

    def test_zero_tilt_is_kept(self):
        assert normalize({'panelTiltDeg': 0}).panel_tilt_deg == 0.0

    def test_legacy_key_names(self):
        cfg = normalize({
            'solarPanelsCount': 20,
            'solarPanelAreaM2': 1.6,
            'solarPanelEfficiency': 0.21,
            'panelOrientation': 170,
            'panelTilt': 15,
            'systemLosses': 0.1,
        })
        assert cfg.panel_count == 20
        assert cfg.panel_area_m2 == 1.6
        assert cfg.panel_efficiency == 0.21
        assert cfg.panel_orientation_deg == 170.0
        assert cfg.panel_tilt_deg == 15.0
        assert cfg.system_losses_frac == 0.1

    def test_normalize_is_idempotent(self):
        cfg = normalize({'panelCount': 500, 'batteryCapacityKwh': 0})
        assert normalize(cfg) == cfg


class TestLoadConfig:
    def test_legacy_panel_area_migrated(self):
        assert load_config({'solarPanelAreaM2': 10}).panel_area_m2 == 1.0
        assert load_config({'panelAreaM2': 10}).panel_area_m2 == 1.0

    def test_panel_area_at_limit_kept(self):
        assert load_config({'panelAreaM2': 5}).panel_area_m2 == 5.0

    def test_json_string(self):
        cfg = load_config(json.dumps({'panelCount': 500}))
        assert cfg.panel_count == 100

    def test_invalid_json_gives_defaults(self):
        assert load_config('{not json') == SystemConfig()

    def test_non_object_json_gives_defaults(self):
        assert load_config('[1, 2, 3]') == SystemConfig()

    def test_none_gives_defaults(self):
        assert load_config(None) == SystemConfig()

    def test_integer_beyond_float_range_clamped(self):
        huge = '1' + '0' * 400
        assert load_config('{"panelCount": ' + huge + '}').panel_count == 100
        assert load_config('{"panelCount": -' + huge + '}').panel_count == 1
        assert load_config({'batteryCapacityKwh': 10 ** 400}).battery_capacity_kwh == 1000.0

    def test_legacy_area_beyond_float_range_migrated(self):
        assert load_config({'solarPanelAreaM2': 10 ** 400}).panel_area_m2 == 1.0

    def test_update_with_huge_integer(self):
        store = SystemConfigStore(InMemoryStore())
        assert store.update(panelTiltDeg=10 ** 400).panel_tilt_deg == 90.0


class TestSystemConfigStore:
    def test_load_from_empty_store(self):
        store = SystemConfigStore(InMemoryStore())
        assert not store.is_loaded
        assert store.load() == SystemConfig()
        assert store.is_loaded

    def test_load_migrates_stored_legacy_value(self):
        backing = InMemoryStore({STORAGE_KEY: json.dumps({'solarPanelAreaM2': 10, 'solarPanelsCount': 4})})
        cfg = SystemConfigStore(backing).load()
        assert cfg.panel_area_m2 == 1.0
        assert cfg.panel_count == 4

    def test_save_persists_normalized_value(self):
        backing = InMemoryStore()
        saved = save_config(backing, {'panelCount': 500})
        assert saved.panel_count == 100
        assert json.loads(backing.get(STORAGE_KEY))['panelCount'] == 100

    def test_update_merges_and_validates(self):
        backing = InMemoryStore()
        store = SystemConfigStore(backing)
        store.load()
        updated = store.update(panelTilt=0, panel_count=150, unknownField=3)
        assert updated.panel_tilt_deg == 0.0
        assert updated.panel_count == 100
        assert updated.panel_efficiency == 0.2
        assert SystemConfigStore(backing).load() == updated

    def test_reset(self):
        backing = InMemoryStore()
        save_config(backing, {'panelCount': 40})
        assert reset_config(backing) == SystemConfig()
        assert SystemConfigStore(backing).load().panel_count == 10

    def test_reset_without_store(self):
        assert reset_config() == SystemConfig()
