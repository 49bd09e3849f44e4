"""
가전기기 기록 및 전기 요금 설정 저장소

가전기기는 소유자별 키 아래 JSON 목록으로 저장되며, 저장 형식은
(power_watts, daily_hours, quantity) 기록 스키마를 따릅니다.
"""
import json
import logging
import uuid
from typing import Callable, Dict, List, Optional

from energy_prediction_system.config import get_config
from energy_prediction_system.core.models import Appliance
from energy_prediction_system.core.numeric import to_finite

logger = logging.getLogger(__name__)
config = get_config()


def record_to_appliance(record: Dict) -> Appliance:
    """저장 기록을 Appliance 로 변환"""
    return Appliance(
        id=record.get('id'),
        name=record.get('name', ''),
        category=record.get('category', 'Otro'),
        power_watts=to_finite(record.get('power_watts')),
        hours_per_day=to_finite(record.get('daily_hours')),
    )


def appliance_to_record(appliance: Appliance) -> Dict:
    """Appliance 를 저장 기록으로 변환 (수량은 1)"""
    return {
        'id': appliance.id,
        'name': appliance.name,
        'category': appliance.category,
        'power_watts': appliance.power_watts,
        'daily_hours': appliance.hours_per_day,
        'quantity': 1,
    }


class ApplianceRepository:
    """
    소유자별 가전기기 CRUD 저장소

    쓰기 작업은 저장소의 update 로 목록 전체를 한 번에 읽고 교체하므로,
    같은 소유자에 대한 동시 요청에서도 기록이 유실되지 않습니다.
    """

    def __init__(self, store, key_prefix: str = None):
        self.store = store
        self.key_prefix = key_prefix or config.STORAGE_KEY_APPLIANCES

    def _key(self, owner: str) -> str:
        return f'{self.key_prefix}:{owner}'

    def _parse(self, owner: str, raw: Optional[str]) -> List[Dict]:
        if not raw:
            return []
        try:
            records = json.loads(raw)
        except ValueError as e:
            logger.error('가전기기 목록 로드 오류 (%s): %s', owner, e)
            return []
        if not isinstance(records, list):
            return []
        return [r for r in records if isinstance(r, dict)]

    def _modify(self, owner: str, change: Callable[[List[Dict]], Optional[List[Dict]]]):
        """잠금 안에서 목록 변경 (change 가 None 을 반환하면 저장하지 않음)"""
        def apply(raw):
            records = change(self._parse(owner, raw))
            if records is None:
                return None
            return json.dumps(records, ensure_ascii=False)

        return self.store.update(self._key(owner), apply) is not None

    def list(self, owner: str) -> List[Appliance]:
        raw = self.store.get(self._key(owner))
        return [record_to_appliance(r) for r in self._parse(owner, raw)]

    def get(self, owner: str, appliance_id: str) -> Optional[Appliance]:
        for appliance in self.list(owner):
            if appliance.id == appliance_id:
                return appliance
        return None

    def create(self, owner: str, appliance: Appliance) -> Appliance:
        record = appliance_to_record(appliance)
        record['id'] = appliance.id or uuid.uuid4().hex
        self._modify(owner, lambda records: records + [record])
        return record_to_appliance(record)

    def update(self, owner: str, appliance: Appliance) -> Optional[Appliance]:
        def replace_record(records):
            for i, record in enumerate(records):
                if record.get('id') == appliance.id:
                    records[i] = appliance_to_record(appliance)
                    return records
            return None

        return appliance if self._modify(owner, replace_record) else None

    def delete(self, owner: str, appliance_id: str) -> bool:
        def remove_record(records):
            remaining = [r for r in records if r.get('id') != appliance_id]
            if len(remaining) == len(records):
                return None
            return remaining

        return self._modify(owner, remove_record)


class PriceSettings:
    """kWh당 전기 요금 설정 (음수이거나 숫자가 아니면 기본값)"""

    def __init__(self, store, key: str = None):
        self.store = store
        self.key = key or config.STORAGE_KEY_PRICE

    @staticmethod
    def normalize(value) -> float:
        price = to_finite(value, None)
        if price is None or price < 0:
            return config.DEFAULT_PRICE_PER_KWH
        return price

    def load(self) -> float:
        return self.normalize(self.store.get(self.key))

    def save(self, value) -> float:
        price = self.normalize(value)
        self.store.set(self.key, str(price))
        return price
