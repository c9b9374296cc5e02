# petshop/api/breeds/services.py
from petshop.core.database import BREEDS
from petshop.models.reference import Breed
from petshop.services.reference_service import ReferenceDataService


class BreedService(ReferenceDataService):
    """
    반려동물 품종 관련 비즈니스 로직을 처리하는 서비스 클래스.
    품종 문서는 등록한 직원의 ID(created_by)를 함께 저장합니다.
    """
    collection_name = BREEDS
    entity_label = 'Breed'
    model = Breed
