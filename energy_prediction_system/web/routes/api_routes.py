"""
API 엔드포인트 라우트
"""
import logging

from flask import Blueprint, request, jsonify, send_file

from energy_prediction_system.core.consumption_calculator import (
    APPLIANCE_CATEGORIES,
    calculate_consumption,
    validate_appliance_load,
)
from energy_prediction_system.core.models import Appliance, BatteryBalanceResult
from energy_prediction_system.core.numeric import to_finite
from energy_prediction_system.core.optimization import AngleOptimizer
from energy_prediction_system.core.orientation import get_orientation_model
from energy_prediction_system.core.prediction_service import run_daily_forecast, run_prediction
from energy_prediction_system.core.solar_calculator import SolarCalculator
from energy_prediction_system.core.weather_api import (
    DEPARTMENT_COORDINATES,
    WeatherAPI,
    WeatherFetchError,
)
from energy_prediction_system.visualization.chart_generator import ChartGenerator
from energy_prediction_system.web.routes.common import (
    RequestError,
    appliance_repository,
    config_store,
    current_owner,
    float_arg,
    price_settings,
    resolve_location,
    resolve_system_config,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)

# 전역 인스턴스 생성
solar_calc = SolarCalculator()
weather_api = WeatherAPI()
angle_optimizer = AngleOptimizer()
chart_gen = ChartGenerator()


@api_bp.app_errorhandler(RequestError)
def handle_request_error(error):
    return jsonify({'error': str(error)}), 400


@api_bp.app_errorhandler(WeatherFetchError)
def handle_weather_error(error):
    logger.warning('기상 데이터 조회 실패: %s', error)
    return jsonify({'error': str(error)}), 502


def _json_body():
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise RequestError('JSON 객체 형식의 요청이 필요합니다.')
    return payload


def _parse_appliance(item) -> Appliance:
    """요청 항목을 검증해 Appliance 로 변환"""
    if not isinstance(item, dict):
        raise RequestError('가전기기 항목 형식이 올바르지 않습니다.')

    power = item.get('powerWatts', item.get('power_watts'))
    hours = item.get('hoursPerDay', item.get('hours_per_day'))
    is_valid, message = validate_appliance_load(power, hours)
    if not is_valid:
        raise RequestError(message)

    return Appliance(
        power_watts=float(power),
        hours_per_day=float(hours),
        name=str(item.get('name', '')),
        category=item.get('category') if item.get('category') in APPLIANCE_CATEGORIES else 'Otro',
        id=item.get('id'),
    )


def _appliances_from(payload):
    """요청의 가전기기 목록, 없으면 저장된 목록"""
    items = payload.get('appliances')
    if items is None:
        return appliance_repository().list(current_owner())
    if not isinstance(items, list):
        raise RequestError('appliances 는 목록이어야 합니다.')
    return [_parse_appliance(item) for item in items]


def _price_from(payload) -> float:
    if 'pricePerKwh' not in payload:
        return price_settings().load()
    price = payload['pricePerKwh']
    if not isinstance(price, (int, float)) or to_finite(price, None) is None or price < 0:
        raise RequestError('전기 요금은 0 이상의 유한한 숫자여야 합니다.')
    return float(price)


@api_bp.route('/departments')
def get_departments():
    """선택 가능한 주(departamento) 목록"""
    return jsonify({'success': True, 'departments': DEPARTMENT_COORDINATES})


@api_bp.route('/consumption', methods=['POST'])
def consumption():
    """가전기기 소비 전력량 및 요금 계산"""
    payload = _json_body()
    appliances = _appliances_from(payload)
    summary = calculate_consumption(appliances, _price_from(payload))
    return jsonify({'success': True, **summary.to_dict()})


@api_bp.route('/orientation_factor')
def orientation_factor():
    """방위각/경사각 보정 계수 조회"""
    orientation = float_arg('orientation', default=180)
    tilt = float_arg('tilt', default=10)
    lat = float_arg('lat')
    model_name = request.args.get('model', default='bands')

    if lat is None:
        raise RequestError('위도를 입력해주세요.')

    model = get_orientation_model(model_name)
    return jsonify({
        'success': True,
        'orientation': orientation,
        'tilt': tilt,
        'lat': lat,
        'factor': round(model(orientation, tilt, lat), 4)
    })


@api_bp.route('/solar_prediction', methods=['POST'])
def solar_prediction():
    """시간별 예보 기반 태양광 발전량 예측"""
    payload = _json_body()
    lat, lon = resolve_location(payload)
    system_config = resolve_system_config(payload)

    forecast = weather_api.fetch_hourly(lat, lon)
    result = solar_calc.estimate_solar_yield(forecast.hourly, system_config, lat)

    return jsonify({
        'success': True,
        'location': {'lat': lat, 'lon': lon},
        'current': forecast.current.to_dict(),
        'systemConfig': system_config.to_dict(),
        'solar': result.to_dict(),
        'dailyTotals': solar_calc.aggregate_by_day(result.hourly_breakdown).to_dict(orient='records')
    })


@api_bp.route('/battery_prediction', methods=['POST'])
def battery_prediction():
    """소비량 + 발전량 기반 배터리 저장/에너지 수지 예측"""
    payload = _json_body()
    lat, lon = resolve_location(payload)
    appliances = _appliances_from(payload)
    price = _price_from(payload)
    system_config = resolve_system_config(payload)

    prediction = run_prediction(
        appliances, price, lat, lon, system_config,
        weather_api=weather_api, calculator=solar_calc
    )

    return jsonify({'success': True, 'systemConfig': system_config.to_dict(), **prediction.to_dict()})


@api_bp.route('/daily_forecast')
def daily_forecast():
    """일별 예보 기반 일 발전량 예측"""
    lat, lon = resolve_location(request.args)
    result = run_daily_forecast(
        lat, lon, config_store().load(), weather_api=weather_api, calculator=solar_calc
    )
    return jsonify({'success': True, **result})


@api_bp.route('/system_config', methods=['GET'])
def get_system_config():
    """저장된 시스템 구성 조회 (구버전 값 이관 포함)"""
    return jsonify({'success': True, 'systemConfig': config_store().load().to_dict()})


@api_bp.route('/system_config', methods=['PUT'])
def update_system_config():
    """시스템 구성 변경 (범위 보정 후 저장)"""
    payload = _json_body()
    store = config_store()
    store.load()
    updated = store.update(**payload)
    return jsonify({'success': True, 'systemConfig': updated.to_dict()})


@api_bp.route('/system_config', methods=['DELETE'])
def reset_system_config():
    """시스템 구성 기본값 복원"""
    return jsonify({'success': True, 'systemConfig': config_store().reset().to_dict()})


@api_bp.route('/price', methods=['GET'])
def get_price():
    return jsonify({'success': True, 'pricePerKwh': price_settings().load()})


@api_bp.route('/price', methods=['PUT'])
def update_price():
    payload = _json_body()
    if 'pricePerKwh' not in payload:
        raise RequestError('pricePerKwh 값이 필요합니다.')
    price = _price_from(payload)
    return jsonify({'success': True, 'pricePerKwh': price_settings().save(price)})


@api_bp.route('/appliances', methods=['GET'])
def list_appliances():
    appliances = appliance_repository().list(current_owner())
    return jsonify({
        'success': True,
        'appliances': [a.to_dict() for a in appliances],
        'categories': APPLIANCE_CATEGORIES
    })


@api_bp.route('/appliances', methods=['POST'])
def create_appliance():
    appliance = _parse_appliance(_json_body())
    created = appliance_repository().create(current_owner(), appliance)
    return jsonify({'success': True, 'appliance': created.to_dict()}), 201


@api_bp.route('/appliances/<appliance_id>', methods=['DELETE'])
def delete_appliance(appliance_id):
    if not appliance_repository().delete(current_owner(), appliance_id):
        return jsonify({'error': '가전기기를 찾을 수 없습니다.'}), 404
    return jsonify({'success': True})


@api_bp.route('/optimize_angles')
def optimize_angles():
    """권장 설치 각도"""
    lat = float_arg('lat')
    lon = float_arg('lon', default=0.0)
    method = request.args.get('method', 'simple')  # simple or detailed

    if lat is None:
        raise RequestError('위도를 입력해주세요.')

    if method == 'detailed':
        orientation, tilt, factor = angle_optimizer.find_optimal_angles_detailed(lat, lon)
    else:
        orientation, tilt = angle_optimizer.find_optimal_angles_simple(lat)
        factor = angle_optimizer.orientation_model(orientation, tilt, lat)

    return jsonify({
        'success': True,
        'optimal_orientation': orientation,
        'optimal_tilt': tilt,
        'factor': factor
    })


@api_bp.route('/sensitivity_analysis')
def sensitivity_analysis():
    """현재 각도 주변 민감도 분석"""
    lat = float_arg('lat')
    orientation = float_arg('orientation')
    tilt = float_arg('tilt')

    if lat is None or orientation is None or tilt is None:
        raise RequestError('필수 파라미터가 누락되었습니다.')

    result = angle_optimizer.calculate_angle_sensitivity(lat, orientation, tilt)
    return jsonify({'success': True, **result})


@api_bp.route('/charts/hourly', methods=['POST'])
def get_hourly_chart():
    """시간별 발전량 차트"""
    hourly = _json_body().get('hourlyBreakdown')
    if not isinstance(hourly, list):
        return "시간별 발전량 데이터가 필요합니다.", 400

    img_bytes = chart_gen.generate_hourly_chart([h for h in hourly if isinstance(h, dict)])
    return send_file(img_bytes, mimetype='image/png')


@api_bp.route('/charts/balance', methods=['POST'])
def get_balance_chart():
    """일일 에너지 수지 차트"""
    payload = _json_body()
    try:
        battery = BatteryBalanceResult.from_dict(payload.get('battery') or {})
    except (TypeError, ValueError):
        return "에너지 수지 데이터 형식이 올바르지 않습니다.", 400

    img_bytes = chart_gen.generate_balance_chart(battery)
    return send_file(img_bytes, mimetype='image/png')


@api_bp.route('/charts/angle_heatmap')
def get_angle_heatmap_chart():
    """방위각/경사각 보정 계수 히트맵"""
    lat = float_arg('lat')
    if lat is None:
        return "위도가 필요합니다.", 400

    factor_matrix, tilt_range, orientation_range = angle_optimizer.calculate_factor_matrix(lat)
    img_bytes = chart_gen.generate_angle_heatmap(factor_matrix, tilt_range, orientation_range)

    return send_file(img_bytes, mimetype='image/png')
