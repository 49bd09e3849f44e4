"""
키-값 설정 저장소

get(key) -> str | None, set(key, str) 계약을 따르는 저장소 구현입니다.
update(key, fn) 은 읽기-변경-쓰기를 하나의 잠금 안에서 수행합니다.
"""
import logging
import os
import threading
from typing import Callable, Dict, Optional

from energy_prediction_system.utils.file_utils import backup_file, load_json_file, save_json_file

logger = logging.getLogger(__name__)


class InMemoryStore:
    """메모리 저장소 (테스트 및 비영속 세션용)"""

    def __init__(self, initial: Dict[str, str] = None):
        self._data = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str):
        with self._lock:
            self._data[key] = str(value)

    def delete(self, key: str):
        with self._lock:
            self._data.pop(key, None)

    def update(self, key: str, fn: Callable[[Optional[str]], Optional[str]]) -> Optional[str]:
        with self._lock:
            value = fn(self._data.get(key))
            if value is not None:
                self._data[key] = str(value)
        return value


class JsonFileStore:
    """단일 JSON 파일에 키-값 쌍을 저장하는 저장소"""

    def __init__(self, file_path: str):
        self.file_path = file_path
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, str]:
        data = load_json_file(self.file_path)
        if data is None:
            if os.path.exists(self.file_path):
                # 손상된 파일은 백업 후 빈 저장소로 시작
                backup_file(self.file_path)
            return {}
        if not isinstance(data, dict):
            logger.warning('설정 파일 형식 오류, 빈 저장소로 시작합니다: %s', self.file_path)
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str):
        with self._lock:
            data = self._read()
            data[key] = str(value)
            if not save_json_file(data, self.file_path):
                raise OSError(f'설정 파일을 저장할 수 없습니다: {self.file_path}')

    def delete(self, key: str):
        with self._lock:
            data = self._read()
            if data.pop(key, None) is not None:
                if not save_json_file(data, self.file_path):
                    raise OSError(f'설정 파일을 저장할 수 없습니다: {self.file_path}')

    def update(self, key: str, fn: Callable[[Optional[str]], Optional[str]]) -> Optional[str]:
        """현재 값을 fn 에 넘겨 반환값을 저장 (None 이면 저장하지 않음)"""
        with self._lock:
            data = self._read()
            current = data.get(key)
            value = fn(None if current is None else str(current))
            if value is not None:
                data[key] = str(value)
                if not save_json_file(data, self.file_path):
                    raise OSError(f'설정 파일을 저장할 수 없습니다: {self.file_path}')
        return value


def create_store(config_class):
    """설정에 맞는 저장소 생성 (경로가 없으면 메모리 저장소)"""
    path = getattr(config_class, 'SETTINGS_STORE_PATH', None)
    if not path:
        return InMemoryStore()
    logger.info('설정 저장소: %s', path)
    return JsonFileStore(path)
