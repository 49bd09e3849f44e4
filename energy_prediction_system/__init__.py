"""
energy_prediction_system - 가정용 에너지 소비/태양광 발전/배터리 수지 예측

하위 패키지:
- core: 소비량, 발전량, 배터리 수지 계산 및 기상 예보 조회
- utils: 설정/가전기기 저장소
- visualization: 차트 생성
- web: Flask 웹 API
"""

__version__ = "1.0.0"
