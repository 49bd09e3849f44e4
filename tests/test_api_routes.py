"""Flask client tests for the JSON API and download endpoints."""

import pytest

from conftest import FakeResponse

APPLIANCES = [
    {'name': 'Nevera', 'category': 'Refrigeración', 'powerWatts': 150, 'hoursPerDay': 24},
    {'name': 'TV', 'category': 'Entretenimiento', 'powerWatts': 100, 'hoursPerDay': 5},
    {'name': 'Aire', 'category': 'Climatización', 'powerWatts': 1800, 'hoursPerDay': 1},
]


class TestDepartmentsAndConsumption:
    def test_departments(self, client):
        response = client.get('/api/departments')
        assert response.status_code == 200
        assert len(response.get_json()['departments']) == 4

    def test_consumption(self, client):
        response = client.post('/api/consumption', json={'appliances': APPLIANCES, 'pricePerKwh': 0.15})
        data = response.get_json()
        assert response.status_code == 200
        assert data['dailyKwh'] == pytest.approx(5.9)
        assert data['dailyCost'] == pytest.approx(0.885)

    def test_consumption_rejects_invalid_appliance(self, client):
        response = client.post('/api/consumption', json={'appliances': [{'powerWatts': -5, 'hoursPerDay': 2}]})
        assert response.status_code == 400
        assert 'error' in response.get_json()

    @pytest.mark.parametrize('price', [-1, float('inf'), float('nan'), True])
    def test_consumption_rejects_invalid_price(self, client, price):
        response = client.post('/api/consumption', json={'appliances': APPLIANCES, 'pricePerKwh': price})
        assert response.status_code == 400

    def test_consumption_rejects_infinite_power(self, client):
        body = '{"appliances": [{"powerWatts": Infinity, "hoursPerDay": 1}], "pricePerKwh": 0.1}'
        response = client.post('/api/consumption', data=body, content_type='application/json')
        assert response.status_code == 400
        assert 'error' in response.get_json()

    def test_consumption_uses_stored_appliances_and_price(self, client):
        for item in APPLIANCES:
            assert client.post('/api/appliances', json=item).status_code == 201
        client.put('/api/price', json={'pricePerKwh': 0.2})

        data = client.post('/api/consumption', json={}).get_json()
        assert data['dailyKwh'] == pytest.approx(5.9)
        assert data['dailyCost'] == pytest.approx(1.18)


class TestOrientationFactor:
    def test_optimal(self, client):
        data = client.get('/api/orientation_factor?orientation=180&tilt=1.35&lat=11.35').get_json()
        assert data['factor'] == 1.0

    def test_missing_latitude(self, client):
        assert client.get('/api/orientation_factor?orientation=180&tilt=10').status_code == 400


class TestPredictions:
    def test_solar_prediction_by_department(self, client, fake_weather):
        response = client.post('/api/solar_prediction', json={'department': 'La Guajira'})
        data = response.get_json()
        assert response.status_code == 200
        assert data['solar']['dailyKwh'] == pytest.approx(21.12)
        assert len(data['solar']['hourlyBreakdown']) == 48
        assert len(data['dailyTotals']) == 2

    def test_solar_prediction_with_inline_config(self, client, fake_weather):
        payload = {'latitude': 11.3548, 'longitude': -72.5205, 'systemConfig': {'panelCount': 20}}
        data = client.post('/api/solar_prediction', json=payload).get_json()
        assert data['solar']['dailyKwh'] == pytest.approx(42.24)

    def test_missing_location(self, client, fake_weather):
        assert client.post('/api/solar_prediction', json={}).status_code == 400

    def test_unknown_department(self, client, fake_weather):
        assert client.post('/api/solar_prediction', json={'department': 'Antioquia'}).status_code == 400

    def test_invalid_coordinates(self, client, fake_weather):
        response = client.post('/api/solar_prediction', json={'latitude': 120, 'longitude': 0})
        assert response.status_code == 400

    def test_weather_failure_is_bad_gateway(self, client, fake_weather):
        fake_weather.response = FakeResponse({}, status_code=503)
        response = client.post('/api/solar_prediction', json={'department': 'Cesar'})
        assert response.status_code == 502
        assert 'error' in response.get_json()

    def test_battery_prediction(self, client, fake_weather):
        payload = {'department': 'La Guajira', 'appliances': APPLIANCES, 'pricePerKwh': 0.15}
        data = client.post('/api/battery_prediction', json=payload).get_json()
        assert data['battery']['surplusKwh'] == pytest.approx(15.22)
        assert data['battery']['dailyStorableKwh'] == pytest.approx(8.0)
        assert data['battery']['solarCoveragePercent'] == pytest.approx(100.0)
        assert data['stale'] is False

    def test_daily_forecast(self, client, fake_weather):
        data = client.get('/api/daily_forecast?department=Cesar').get_json()
        assert data['solar']['dailyKwh'] == pytest.approx(9.77856)


class TestSystemConfigEndpoints:
    def test_defaults(self, client):
        data = client.get('/api/system_config').get_json()
        assert data['systemConfig']['panelCount'] == 10
        assert data['systemConfig']['panelAreaM2'] == 1.0

    def test_update_clamps_and_persists(self, client):
        data = client.put('/api/system_config', json={'panelCount': 500, 'panelTilt': 0}).get_json()
        assert data['systemConfig']['panelCount'] == 100
        assert data['systemConfig']['panelTiltDeg'] == 0.0
        assert client.get('/api/system_config').get_json()['systemConfig']['panelCount'] == 100

    def test_reset(self, client):
        client.put('/api/system_config', json={'panelCount': 40})
        data = client.delete('/api/system_config').get_json()
        assert data['systemConfig']['panelCount'] == 10

    def test_stored_config_feeds_prediction(self, client, fake_weather):
        client.put('/api/system_config', json={'panelCount': 20})
        data = client.post('/api/solar_prediction', json={'department': 'La Guajira'}).get_json()
        assert data['solar']['dailyKwh'] == pytest.approx(42.24)


class TestPriceAndAppliances:
    def test_price_default(self, client):
        assert client.get('/api/price').get_json()['pricePerKwh'] == 0.15

    def test_price_requires_value(self, client):
        assert client.put('/api/price', json={}).status_code == 400

    def test_appliance_lifecycle(self, client):
        created = client.post('/api/appliances', json=APPLIANCES[0]).get_json()['appliance']
        listed = client.get('/api/appliances').get_json()
        assert [a['id'] for a in listed['appliances']] == [created['id']]
        assert 'Otro' in listed['categories']

        assert client.delete(f"/api/appliances/{created['id']}").status_code == 200
        assert client.delete(f"/api/appliances/{created['id']}").status_code == 404

    def test_appliances_scoped_by_owner(self, client):
        client.post('/api/appliances', json=APPLIANCES[0], headers={'X-Owner-Id': 'house-a'})
        assert client.get('/api/appliances?owner=house-b').get_json()['appliances'] == []

    def test_unknown_category_becomes_other(self, client):
        item = {'name': 'Bomba', 'category': 'Jardín', 'powerWatts': 750, 'hoursPerDay': 2}
        created = client.post('/api/appliances', json=item).get_json()['appliance']
        assert created['category'] == 'Otro'


class TestAnglesAndCharts:
    def test_optimize_angles(self, client):
        data = client.get('/api/optimize_angles?lat=11.3548').get_json()
        assert data['optimal_orientation'] == 180.0
        assert data['optimal_tilt'] == 1.4
        assert data['factor'] == 1.0

    def test_sensitivity_requires_params(self, client):
        assert client.get('/api/sensitivity_analysis?lat=11').status_code == 400

    @pytest.mark.parametrize('query', [
        'lat=11&orientation=180&tilt=inf',
        'lat=nan&orientation=180&tilt=10',
        'lat=11&orientation=-inf&tilt=10',
    ])
    def test_sensitivity_rejects_non_finite(self, client, query):
        response = client.get(f'/api/sensitivity_analysis?{query}')
        assert response.status_code == 400
        assert 'error' in response.get_json()

    def test_non_finite_angle_queries_rejected(self, client):
        assert client.get('/api/orientation_factor?lat=inf').status_code == 400
        assert client.get('/api/optimize_angles?lat=11&lon=nan').status_code == 400
        assert client.get('/api/charts/angle_heatmap?lat=inf').status_code == 400

    def test_sensitivity(self, client):
        data = client.get('/api/sensitivity_analysis?lat=11.3548&orientation=180&tilt=10').get_json()
        assert data['base_factor'] == 1.0

    def test_balance_chart(self, client):
        battery = {'dailyConsumptionKwh': 5.9, 'dailyGenerationKwh': 21.12, 'dailyStorableKwh': 8.0}
        response = client.post('/api/charts/balance', json={'battery': battery})
        assert response.status_code == 200
        assert response.mimetype == 'image/png'

    def test_hourly_chart_requires_data(self, client):
        assert client.post('/api/charts/hourly', json={}).status_code == 400


class TestDownloads:
    def test_hourly_csv(self, client, fake_weather):
        response = client.get('/download/hourly', query_string={'department': 'La Guajira', 'format': 'csv'})
        assert response.status_code == 200
        assert response.mimetype == 'text/csv'
        lines = response.data.decode('utf-8-sig').splitlines()
        assert lines[0] == 'timestamp,kwh,radiation_wm2'
        assert len(lines) == 49

    def test_daily_json(self, client, fake_weather):
        response = client.get('/download/daily?lat=10.0736&lon=-73.2669&format=json')
        assert response.status_code == 200
        rows = response.get_json()
        assert [row['date'] for row in rows] == ['2024-03-01', '2024-03-02']
        assert rows[0]['kwh'] == pytest.approx(9.77856)

    def test_unsupported_format(self, client):
        response = client.get('/download/hourly?department=Cesar&format=xlsx')
        assert response.status_code == 400
