"""Tests for the end-to-end prediction pipeline and session behaviour."""

import pytest
import requests

from energy_prediction_system.core import create_energy_system, quick_prediction
from energy_prediction_system.core.models import ApplianceLoad
from energy_prediction_system.core.prediction_service import (
    PredictionSession,
    run_daily_forecast,
    run_prediction,
)
from energy_prediction_system.core.weather_api import WeatherFetchError

LOADS = [
    ApplianceLoad(power_watts=150, hours_per_day=24),
    ApplianceLoad(power_watts=100, hours_per_day=5),
    ApplianceLoad(power_watts=1800, hours_per_day=1),
]


class TestRunPrediction:
    def test_full_pipeline(self, fake_weather):
        prediction = run_prediction(LOADS, 0.15, 11.3548, -72.5205)

        assert prediction.consumption.daily_kwh == pytest.approx(5.9)
        assert prediction.solar.daily_kwh == pytest.approx(21.12)
        assert prediction.battery.surplus_kwh == pytest.approx(15.22)
        assert prediction.battery.daily_storable_kwh == pytest.approx(8.0)
        assert prediction.stale is False
        assert [d['date'] for d in prediction.daily_totals] == ['2024-03-01', '2024-03-02']

    def test_to_dict_shape(self, fake_weather):
        data = run_prediction(LOADS, 0.15, 11.3548, -72.5205).to_dict()
        assert set(data) == {'location', 'consumption', 'solar', 'battery', 'current',
                             'dailyTotals', 'stale', 'error'}
        assert data['current']['radiationWm2'] == 650.0

    def test_raw_system_config_is_normalized(self, fake_weather):
        prediction = run_prediction(LOADS, 0.15, 11.3548, -72.5205, {'solarPanelsCount': 20})
        assert prediction.solar.daily_kwh == pytest.approx(42.24)

    def test_weather_failure_propagates(self, fake_weather):
        fake_weather.error = requests.Timeout('slow')
        with pytest.raises(WeatherFetchError):
            run_prediction(LOADS, 0.15, 11.3548, -72.5205)


class TestRunDailyForecast:
    def test_daily_forecast(self, fake_weather):
        result = run_daily_forecast(10.0736, -73.2669)
        assert result['solar']['dailyKwh'] == pytest.approx(9.77856)
        assert len(result['solar']['dailyBreakdown']) == 2
        assert result['systemConfig']['panelCount'] == 10


class TestPredictionSession:
    def test_first_failure_raises(self, fake_weather):
        fake_weather.error = requests.ConnectionError('offline')
        session = PredictionSession()
        with pytest.raises(WeatherFetchError):
            session.refresh(LOADS, 0.15, 11.3548, -72.5205)

    def test_failure_keeps_last_good_result(self, fake_weather):
        session = PredictionSession()
        first = session.refresh(LOADS, 0.15, 11.3548, -72.5205)

        fake_weather.error = requests.ConnectionError('offline')
        second = session.refresh(LOADS, 0.15, 11.3548, -72.5205)

        assert second.stale is True
        assert 'offline' in second.error
        assert second.solar == first.solar
        assert session.last_prediction is first

    def test_recovery_clears_stale_flag(self, fake_weather):
        session = PredictionSession()
        session.refresh(LOADS, 0.15, 11.3548, -72.5205)
        fake_weather.error = requests.ConnectionError('offline')
        session.refresh(LOADS, 0.15, 11.3548, -72.5205)

        fake_weather.error = None
        recovered = session.refresh(LOADS, 0.15, 11.3548, -72.5205)
        assert recovered.stale is False
        assert recovered.error is None


class TestQuickPrediction:
    def test_by_department(self, fake_weather):
        prediction = quick_prediction(LOADS, 0.15, 'Magdalena')
        assert prediction.location == {'lat': 10.4116, 'lon': -74.4057}

    def test_unknown_department(self):
        with pytest.raises(ValueError):
            quick_prediction(LOADS, 0.15, 'Bogotá')

    def test_energy_system_components(self):
        system = create_energy_system()
        assert set(system) == {'calculator', 'weather', 'optimizer'}
