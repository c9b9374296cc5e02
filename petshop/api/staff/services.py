# petshop/api/staff/services.py
import logging
from typing import Any, Dict, Mapping, Tuple

from bson import ObjectId
from werkzeug.security import generate_password_hash

from petshop.api.users.services import WITHOUT_PASSWORD, ensure_unique_user_field
from petshop.core.database import USERS, MongoStore
from petshop.core.errors import BadRequestError, NotFoundError
from petshop.listing import BuiltQuery, Page, build_staff_query, normalize_staff_filters, paginate
from petshop.models.user import User, UserRole
from petshop.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)


class StaffService:
    """
    [관리자] 직원 계정 관리 서비스.
    직원은 role이 'staff'인 사용자 문서이며, 이메일/이름은 전체 사용자 사이에서 고유합니다.
    """

    def __init__(self, store: MongoStore, default_page_size: int = 10, max_page_size: int = 100):
        self.store = store
        self.users = store.collection(USERS)
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def list_staff(self, raw_filters: Mapping[str, Any]) -> Tuple[Page, BuiltQuery]:
        criteria = normalize_staff_filters(raw_filters, self.default_page_size, self.max_page_size)
        built_query = build_staff_query(criteria)
        page = paginate(self.users, built_query.predicate, criteria.sort, criteria.page, criteria.limit,
                        projection=WITHOUT_PASSWORD)
        return page, built_query

    def get_staff(self, staff_id: ObjectId) -> Dict[str, Any]:
        staff = self.users.find_one({'_id': staff_id, 'role': UserRole.STAFF.value}, WITHOUT_PASSWORD)
        if not staff:
            raise NotFoundError('Staff not found', 'STAFF_NOT_FOUND')
        return staff

    def create_staff(self, data: Dict[str, Any]) -> Dict[str, Any]:
        with self.store.transaction() as session:
            ensure_unique_user_field(self.users, 'email', data['email'], session=session)
            ensure_unique_user_field(self.users, 'name', data['name'], session=session)

            user = User(
                name=data['name'],
                email=data['email'],
                password=generate_password_hash(data['password']),
                role=UserRole.STAFF,
                avatar_url=data.get('avatar_url')
            )
            result = self.users.insert_one(user.to_document(), session=session)

        logger.info(f"직원 계정 생성 완료: {data['email']} ({result.inserted_id})")
        return self.get_staff(result.inserted_id)

    def update_staff(self, staff_id: ObjectId, data: Dict[str, Any]) -> Dict[str, Any]:
        self.get_staff(staff_id)
        changes = dict(data, updated_at=DateTimeUtils.now())

        with self.store.transaction() as session:
            if 'email' in data:
                ensure_unique_user_field(self.users, 'email', data['email'], exclude_id=staff_id, session=session)
            if 'name' in data:
                ensure_unique_user_field(self.users, 'name', data['name'], exclude_id=staff_id, session=session)
            if 'password' in data:
                changes['password'] = generate_password_hash(data['password'])
            self.users.update_one({'_id': staff_id}, {'$set': changes}, session=session)

        logger.info(f"직원 정보 수정 완료: {staff_id} (fields: {sorted(data)})")
        return self.get_staff(staff_id)

    def deactivate_staff(self, staff_id: ObjectId) -> None:
        """소프트 삭제: 계정을 비활성화만 하고 문서는 남겨둡니다."""
        self.get_staff(staff_id)
        self.users.update_one({'_id': staff_id}, {'$set': {'is_active': False, 'updated_at': DateTimeUtils.now()}})
        logger.info(f"직원 계정 비활성화: {staff_id}")

    def delete_staff_permanently(self, staff_id: ObjectId) -> None:
        self.get_staff(staff_id)
        self.users.delete_one({'_id': staff_id})
        logger.info(f"직원 계정 영구 삭제: {staff_id}")

    def activate_staff(self, staff_id: ObjectId) -> Dict[str, Any]:
        staff = self.get_staff(staff_id)
        if staff.get('is_active'):
            raise BadRequestError('Staff account is already active', 'ALREADY_ACTIVE')
        self.users.update_one({'_id': staff_id}, {'$set': {'is_active': True, 'updated_at': DateTimeUtils.now()}})
        logger.info(f"직원 계정 재활성화: {staff_id}")
        return self.get_staff(staff_id)
