# 🌞 에너지 예측 시스템 실행 스크립트
from energy_prediction_system.config import get_config
from energy_prediction_system.web import create_app

app = create_app()

if __name__ == '__main__':
    config = get_config()

    print("🌞 에너지 예측 시스템 시작")
    print(f"🌍 포트: {config.PORT}")
    print(f"📊 API: http://localhost:{config.PORT}/api/departments")

    app.run(host='0.0.0.0', port=config.PORT, debug=config.FLASK_DEBUG)
