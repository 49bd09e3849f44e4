"""Shared fixtures for the energy prediction tests.

The settings module picks its configuration class at import time, so the
testing environment is selected here before any package import.
"""

import os

os.environ['FLASK_ENV'] = 'testing'

import pytest
import requests

from energy_prediction_system.config import TestingConfig
from energy_prediction_system.core.models import SystemConfig
from energy_prediction_system.web import create_app


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} error')

    def json(self):
        if self.invalid_json:
            raise ValueError('Expecting value')
        return self.payload


def hourly_payload(days=2, first_day_wm2=500.0, other_days_wm2=250.0):
    times, radiation, temperature = [], [], []
    for day in range(days):
        for hour in range(24):
            times.append(f'2024-03-{day + 1:02d}T{hour:02d}:00')
            radiation.append(first_day_wm2 if day == 0 else other_days_wm2)
            temperature.append(28.0)
    return {
        'current': {'time': '2024-03-01T12:00', 'shortwave_radiation': 650.0, 'temperature_2m': 31.5},
        'hourly': {
            'time': times,
            'shortwave_radiation': radiation,
            'temperature_2m': temperature,
        },
    }


def daily_payload():
    return {
        'current': {'time': '2024-03-01T12:00', 'shortwave_radiation': 650.0, 'temperature_2m': 31.5},
        'daily': {
            'time': ['2024-03-01', '2024-03-02'],
            'shortwave_radiation_sum': [20.0, 10.0],
            'temperature_2m_max': [33.1, 32.4],
            'temperature_2m_min': [24.0, 23.8],
            'precipitation_sum': [0.0, 2.5],
            'windspeed_10m_max': [18.0, 21.3],
        },
    }


class FakeWeather:
    """Records requests.get calls and answers with a canned response."""

    def __init__(self):
        self.calls = []
        self.response = None
        self.error = None

    def __call__(self, url, params=None, timeout=None):
        self.calls.append({'url': url, 'params': params, 'timeout': timeout})
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        if params and 'daily' in params:
            return FakeResponse(daily_payload())
        return FakeResponse(hourly_payload())


@pytest.fixture
def fake_weather(monkeypatch):
    fake = FakeWeather()
    monkeypatch.setattr('energy_prediction_system.core.weather_api.requests.get', fake)
    return fake


@pytest.fixture
def default_system():
    return SystemConfig()


@pytest.fixture
def app():
    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()
