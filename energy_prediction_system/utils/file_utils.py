import os
import json
import shutil
import datetime
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

def ensure_parent_directory(file_path: str):
    """파일의 상위 디렉토리 생성"""
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

def load_json_file(file_path: str) -> Optional[Dict]:
    """JSON 파일 로드 (파일이 없거나 손상된 경우 None)"""
    if not os.path.exists(file_path):
        logger.debug('파일이 존재하지 않습니다: %s', file_path)
        return None

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.error('JSON 파일 로드 오류: %s - %s', file_path, e)
        return None

def save_json_file(data: Dict, file_path: str) -> bool:
    """JSON 파일 저장 (임시 파일에 쓴 뒤 교체)"""
    try:
        ensure_parent_directory(file_path)

        temp_path = f'{file_path}.tmp'
        with open(temp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(temp_path, file_path)

        logger.debug('JSON 파일 저장 완료: %s', file_path)
        return True

    except (OSError, TypeError) as e:
        logger.error('JSON 파일 저장 오류: %s - %s', file_path, e)
        return False

def backup_file(file_path: str, backup_dir: str = None) -> Optional[str]:
    """파일 백업 (타임스탬프 포함 사본 경로 반환)"""
    if not os.path.exists(file_path):
        logger.warning('백업할 파일이 존재하지 않습니다: %s', file_path)
        return None

    if backup_dir is None:
        backup_dir = os.path.join(os.path.dirname(file_path) or '.', 'backups')

    try:
        os.makedirs(backup_dir, exist_ok=True)

        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        name, ext = os.path.splitext(os.path.basename(file_path))
        backup_path = os.path.join(backup_dir, f"{name}_{timestamp}{ext}")

        shutil.copy2(file_path, backup_path)
        logger.info('파일 백업 완료: %s -> %s', file_path, backup_path)
        return backup_path

    except OSError as e:
        logger.error('파일 백업 오류: %s - %s', file_path, e)
        return None
