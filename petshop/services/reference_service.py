# petshop/services/reference_service.py
"""
카테고리/품종/색상처럼 이름 하나로 식별되는 참조 데이터용 기본 서비스.
하위 클래스는 collection_name, entity_label, unique_fields, model 을 지정합니다.
"""

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from petshop.core.database import MongoStore
from petshop.core.errors import ConflictError, NotFoundError
from petshop.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)


class ReferenceDataService:
    collection_name: str = None
    entity_label: str = None
    # 문서 필드명 -> 오류 메시지에 쓰일 이름
    unique_fields: Dict[str, str] = {'name': 'name'}
    model = None

    def __init__(self, store: MongoStore):
        self.store = store
        self.collection = store.collection(self.collection_name)

    @property
    def not_found_code(self) -> str:
        return f"{self.entity_label.upper()}_NOT_FOUND"

    def list(self, is_active: Optional[bool] = None) -> List[Dict[str, Any]]:
        query = {} if is_active is None else {'is_active': is_active}
        items = list(self.collection.find(query).sort('name', ASCENDING))
        logger.info(f"{self.entity_label} 목록 조회 완료: {len(items)}개")
        return items

    def get(self, item_id: ObjectId) -> Dict[str, Any]:
        item = self.collection.find_one({'_id': item_id})
        if not item:
            raise NotFoundError(f"{self.entity_label} not found", self.not_found_code)
        return item

    def create(self, data: Dict[str, Any], **extra) -> Dict[str, Any]:
        self._ensure_unique(data)
        document = self.model(**data, **extra).to_document()
        try:
            result = self.collection.insert_one(document)
        except DuplicateKeyError:
            raise ConflictError(f"{self.entity_label} already exists")
        document['_id'] = result.inserted_id
        logger.info(f"{self.entity_label} 생성 완료: {document['name']} ({result.inserted_id})")
        return document

    def update(self, item_id: ObjectId, data: Dict[str, Any]) -> Dict[str, Any]:
        self.get(item_id)
        self._ensure_unique(data, exclude_id=item_id)
        changes = dict(data, updated_at=DateTimeUtils.now())
        try:
            self.collection.update_one({'_id': item_id}, {'$set': changes})
        except DuplicateKeyError:
            raise ConflictError(f"{self.entity_label} already exists")
        logger.info(f"{self.entity_label} 수정 완료: {item_id}")
        return self.get(item_id)

    def delete(self, item_id: ObjectId) -> None:
        self.get(item_id)
        self.collection.delete_one({'_id': item_id})
        logger.info(f"{self.entity_label} 삭제 완료: {item_id}")

    def _ensure_unique(self, data: Dict[str, Any], exclude_id: Optional[ObjectId] = None) -> None:
        """고유 필드 중복 여부를 저장 전에 명시적으로 확인합니다. 인덱스는 마지막 방어선입니다."""
        for field_name, label in self.unique_fields.items():
            if field_name not in data:
                continue
            query = {field_name: data[field_name]}
            if exclude_id is not None:
                query['_id'] = {'$ne': exclude_id}
            if self.collection.find_one(query, {'_id': 1}):
                logger.warning(f"{self.entity_label} {label} 중복: {data[field_name]}")
                raise ConflictError(f"{self.entity_label} {label} already exists")


def populate_references(records: List[Dict[str, Any]], field_name: str, collection,
                        projection: Optional[Dict[str, int]] = None) -> None:
    """
    records[*][field_name] 에 들어 있는 ObjectId 참조를 참조 문서로 교체합니다.
    참조 문서가 없으면 ObjectId를 그대로 둡니다. 조회는 한 번의 $in 쿼리로 처리합니다.
    """
    ref_ids = {r[field_name] for r in records if isinstance(r.get(field_name), ObjectId)}
    if not ref_ids:
        return
    documents = {doc['_id']: doc for doc in collection.find({'_id': {'$in': list(ref_ids)}}, projection)}
    for record in records:
        ref_id = record.get(field_name)
        if isinstance(ref_id, ObjectId):
            record[field_name] = documents.get(ref_id, ref_id)
