# petshop/api/colors/services.py
import logging
from typing import Any, Dict, List

from bson import ObjectId

from petshop.core.database import COLORS, PETS, MongoStore
from petshop.models.reference import Color
from petshop.services.reference_service import ReferenceDataService

logger = logging.getLogger(__name__)


class ColorService(ReferenceDataService):
    """
    반려동물 털색 관련 비즈니스 로직을 처리하는 서비스 클래스.
    이름과 hex 코드 모두 고유해야 합니다.
    """
    collection_name = COLORS
    entity_label = 'Color'
    unique_fields = {'name': 'name', 'hex_code': 'hex code'}
    model = Color

    def __init__(self, store: MongoStore):
        super().__init__(store)
        self.pets = store.collection(PETS)

    def bulk_delete(self, color_ids: List[ObjectId]) -> int:
        """여러 색상을 한 번에 삭제하고 실제로 삭제된 개수를 반환합니다."""
        with self.store.transaction() as session:
            result = self.collection.delete_many({'_id': {'$in': color_ids}}, session=session)
        logger.info(f"색상 일괄 삭제 완료: 요청 {len(color_ids)}개, 삭제 {result.deleted_count}개")
        return result.deleted_count

    def get_usage_stats(self, color_id: ObjectId) -> Dict[str, Any]:
        """해당 색상을 참조하는 반려동물 수를 집계합니다."""
        color = self.get(color_id)
        total_pets = self.pets.count_documents({'color': color_id})
        available_pets = self.pets.count_documents({'color': color_id, 'is_available': True})
        return {
            'color': color,
            'total_pets': total_pets,
            'available_pets': available_pets
        }
