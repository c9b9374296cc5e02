# petshop/api/categories/services.py
from petshop.core.database import CATEGORIES
from petshop.models.reference import Category
from petshop.services.reference_service import ReferenceDataService


class CategoryService(ReferenceDataService):
    """
    상품 카테고리 관련 비즈니스 로직을 처리하는 서비스 클래스.
    비활성화(isActive=false)는 소프트 삭제로 사용되며, 비활성 카테고리는
    상품 등록과 상품 목록의 카테고리 이름 해석에서 제외됩니다.
    """
    collection_name = CATEGORIES
    entity_label = 'Category'
    model = Category
