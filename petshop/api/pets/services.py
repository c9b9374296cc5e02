# petshop/api/pets/services.py
import logging
from typing import Any, Dict, List, Mapping, Tuple

from bson import ObjectId

from petshop.core.database import BREEDS, COLORS, PETS, MongoStore
from petshop.core.errors import BadRequestError, NotFoundError
from petshop.listing import BuiltQuery, Page, build_pet_query, normalize_pet_filters, paginate
from petshop.models.pet import Pet, PetGender, PetSize
from petshop.services.reference_service import populate_references
from petshop.utils.datetime_utils import DateTimeUtils, ensure_utc

logger = logging.getLogger(__name__)

BREED_SUMMARY_PROJECTION = {'name': 1, 'description': 1}
COLOR_SUMMARY_PROJECTION = {'name': 1, 'hex_code': 1, 'description': 1}


class PetService:
    """
    반려동물 분양 정보 관련 비즈니스 로직을 처리하는 서비스 클래스.
    breed, color 는 활성 상태의 품종/색상 문서만 참조할 수 있습니다.
    """

    def __init__(self, store: MongoStore, default_page_size: int = 10, max_page_size: int = 100):
        self.store = store
        self.pets = store.collection(PETS)
        self.breeds = store.collection(BREEDS)
        self.colors = store.collection(COLORS)
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def list_pets(self, raw_filters: Mapping[str, Any]) -> Tuple[Page, BuiltQuery]:
        criteria = normalize_pet_filters(raw_filters, self.default_page_size, self.max_page_size)
        built_query = build_pet_query(criteria)
        page = paginate(self.pets, built_query.predicate, criteria.sort, criteria.page, criteria.limit)
        self._populate(page.records)
        return page, built_query

    def get_pet(self, pet_id: ObjectId) -> Dict[str, Any]:
        pet = self._find_or_404(pet_id)
        self._populate([pet])
        return pet

    def get_filter_options(self) -> Dict[str, Any]:
        """
        반려동물 목록 필터 선택지.
        품종/색상은 실제로 등록된 반려동물이 참조하는 것만 돌려줍니다.
        """
        breed_ids = [b for b in self.pets.distinct('breed') if isinstance(b, ObjectId)]
        color_ids = [c for c in self.pets.distinct('color') if isinstance(c, ObjectId)]
        breeds = list(self.breeds.find({'_id': {'$in': breed_ids}}, BREED_SUMMARY_PROJECTION).sort('name', 1))
        colors = list(self.colors.find({'_id': {'$in': color_ids}}, COLOR_SUMMARY_PROJECTION).sort('name', 1))

        price_data = list(self.pets.aggregate([
            {'$group': {'_id': None, 'min': {'$min': '$price'}, 'max': {'$max': '$price'}}}
        ]))
        price_row = price_data[0] if price_data else {}
        price_range = {'min': price_row.get('min') or 0, 'max': price_row.get('max') or 0}

        return {
            'breeds': breeds,
            'colors': colors,
            'genders': [g.value for g in PetGender],
            'sizes': [s.value for s in PetSize],
            'price_range': price_range
        }

    def create_pet(self, data: Dict[str, Any]) -> Dict[str, Any]:
        fields = dict(data, gender=PetGender(data['gender']), size=PetSize(data['size']))
        if fields.get('published_date') is not None:
            fields['published_date'] = ensure_utc(fields['published_date'])
        else:
            fields.pop('published_date', None)

        with self.store.transaction() as session:
            self._ensure_active_references(data, session)
            document = Pet(**fields).to_document()
            result = self.pets.insert_one(document, session=session)
            document['_id'] = result.inserted_id

        logger.info(f"반려동물 등록 완료: {document['name']} ({result.inserted_id})")
        self._populate([document])
        return document

    def update_pet(self, pet_id: ObjectId, data: Dict[str, Any]) -> Dict[str, Any]:
        changes = dict(data, updated_at=DateTimeUtils.now())
        if changes.get('published_date') is not None:
            changes['published_date'] = ensure_utc(changes['published_date'])

        with self.store.transaction() as session:
            self._find_or_404(pet_id, session)
            self._ensure_active_references(data, session)
            self.pets.update_one({'_id': pet_id}, {'$set': changes}, session=session)
            pet = self.pets.find_one({'_id': pet_id}, session=session)

        logger.info(f"반려동물 정보 수정 완료: {pet_id} (fields: {sorted(data)})")
        self._populate([pet])
        return pet

    def update_availability(self, pet_id: ObjectId, is_available: bool) -> Dict[str, Any]:
        with self.store.transaction() as session:
            self._find_or_404(pet_id, session)
            self.pets.update_one(
                {'_id': pet_id},
                {'$set': {'is_available': is_available, 'updated_at': DateTimeUtils.now()}},
                session=session
            )
            pet = self.pets.find_one({'_id': pet_id}, session=session)

        logger.info(f"분양 가능 여부 변경: {pet_id} -> {is_available}")
        self._populate([pet])
        return pet

    def delete_pet(self, pet_id: ObjectId) -> None:
        with self.store.transaction() as session:
            self._find_or_404(pet_id, session)
            self.pets.delete_one({'_id': pet_id}, session=session)
        logger.info(f"반려동물 삭제 완료: {pet_id}")

    def _find_or_404(self, pet_id: ObjectId, session=None) -> Dict[str, Any]:
        pet = self.pets.find_one({'_id': pet_id}, session=session)
        if not pet:
            raise NotFoundError('Pet not found', 'PET_NOT_FOUND')
        return pet

    def _ensure_active_references(self, data: Dict[str, Any], session=None) -> None:
        if 'breed' in data and not self.breeds.find_one({'_id': data['breed'], 'is_active': True}, {'_id': 1}, session=session):
            raise BadRequestError('Invalid breed selected', 'INVALID_BREED')
        if 'color' in data and not self.colors.find_one({'_id': data['color'], 'is_active': True}, {'_id': 1}, session=session):
            raise BadRequestError('Invalid color selected', 'INVALID_COLOR')

    def _populate(self, pets: List[Dict[str, Any]]) -> None:
        populate_references(pets, 'breed', self.breeds, BREED_SUMMARY_PROJECTION)
        populate_references(pets, 'color', self.colors, COLOR_SUMMARY_PROJECTION)
