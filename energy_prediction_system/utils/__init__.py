"""
utils 모듈 - 공통 유틸리티 함수들

이 모듈은 다음 유틸리티들을 포함합니다:
- file_utils: JSON 파일 처리
- kv_store: 키-값 설정 저장소
- appliance_store: 가전기기 기록 및 요금 설정 저장소
"""

from .file_utils import (
    load_json_file,
    save_json_file,
    backup_file
)
from .kv_store import InMemoryStore, JsonFileStore, create_store
from .appliance_store import ApplianceRepository, PriceSettings

__version__ = "1.0.0"
__author__ = "Energy Prediction Team"

__all__ = [
    'load_json_file',
    'save_json_file',
    'backup_file',
    'InMemoryStore',
    'JsonFileStore',
    'create_store',
    'ApplianceRepository',
    'PriceSettings'
]
