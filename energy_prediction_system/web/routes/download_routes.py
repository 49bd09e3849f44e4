"""
예측 데이터 다운로드 라우트
"""
import logging
from io import BytesIO

import pandas as pd
from flask import Blueprint, request, send_file

from energy_prediction_system.core.models import snake_dict
from energy_prediction_system.core.solar_calculator import SolarCalculator
from energy_prediction_system.core.weather_api import WeatherAPI
from energy_prediction_system.web.routes.common import config_store, resolve_location

logger = logging.getLogger(__name__)

download_bp = Blueprint('download', __name__)

# 인스턴스 생성
solar_calc = SolarCalculator()
weather_api = WeatherAPI()

SUPPORTED_FORMATS = ('csv', 'json')


def _file_format():
    file_format = request.args.get('format', default='csv').lower()
    if file_format not in SUPPORTED_FORMATS:
        return None
    return file_format


@download_bp.route('/hourly')
def download_hourly():
    """시간별 예상 발전량 데이터 다운로드"""
    file_format = _file_format()
    if file_format is None:
        return "지원하지 않는 파일 형식입니다.", 400

    lat, lon = resolve_location(request.args)
    forecast = weather_api.fetch_hourly(lat, lon)
    result = solar_calc.estimate_solar_yield(forecast.hourly, config_store().load(), lat)

    df = pd.DataFrame(
        [snake_dict(entry) for entry in result.hourly_breakdown],
        columns=['timestamp', 'kwh', 'radiation_wm2']
    )
    logger.info('시간별 데이터 %d행 다운로드 (%s)', len(df), file_format)
    return _download(df, lat, lon, 'hourly', file_format)


@download_bp.route('/daily')
def download_daily():
    """일별 예상 발전량 데이터 다운로드"""
    file_format = _file_format()
    if file_format is None:
        return "지원하지 않는 파일 형식입니다.", 400

    lat, lon = resolve_location(request.args)
    forecast = weather_api.fetch_daily(lat, lon)
    result = solar_calc.estimate_solar_yield(forecast.daily, config_store().load(), lat)

    df = pd.DataFrame(
        [snake_dict(entry) for entry in result.daily_breakdown],
        columns=['date', 'kwh', 'radiation_sum_mj_m2', 'temp_max_c',
                 'temp_min_c', 'precipitation_mm', 'wind_kmh']
    )
    logger.info('일별 데이터 %d행 다운로드 (%s)', len(df), file_format)
    return _download(df, lat, lon, 'daily', file_format)


def _download(df, lat, lon, data_type, file_format):
    output = BytesIO()
    if file_format == 'json':
        output.write(df.to_json(orient='records').encode('utf-8'))
        mimetype = 'application/json'
    else:
        df.to_csv(output, index=False, encoding='utf-8-sig')
        mimetype = 'text/csv'
    output.seek(0)

    return send_file(
        output,
        mimetype=mimetype,
        as_attachment=True,
        download_name=f'energy_data_{lat}_{lon}_{data_type}.{file_format}'
    )
