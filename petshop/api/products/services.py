# petshop/api/products/services.py
import logging
from typing import Any, Dict, List, Mapping, Tuple

from bson import ObjectId

from petshop.core.database import CATEGORIES, PRODUCTS, MongoStore
from petshop.core.errors import BadRequestError, ConflictError, InsufficientStockError, NotFoundError
from petshop.listing import (
    BuiltQuery, CategoryResolver, Page,
    build_product_query, normalize_product_filters, paginate
)
from petshop.models.product import Product
from petshop.services.reference_service import populate_references
from petshop.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)

CATEGORY_SUMMARY_PROJECTION = {'name': 1, 'description': 1}


class ProductService:
    """
    상품 관련 비즈니스 로직을 처리하는 서비스 클래스.
    변경 작업은 모두 트랜잭션 범위 안에서 수행합니다.
    """

    def __init__(self, store: MongoStore, default_page_size: int = 15, max_page_size: int = 100):
        self.store = store
        self.products = store.collection(PRODUCTS)
        self.categories = store.collection(CATEGORIES)
        self.category_resolver = CategoryResolver(self.categories)
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    # ------------------------------------------------------------------
    # 목록 / 조회
    # ------------------------------------------------------------------
    def list_products(self, raw_filters: Mapping[str, Any]) -> Tuple[Page, BuiltQuery]:
        """
        쿼리 파라미터로 상품 목록 한 페이지를 조회합니다.

        Returns:
            Tuple[페이지, 적용된 조회 조건]
            카테고리 이름이 어떤 활성 카테고리와도 일치하지 않으면
            저장소를 조회하지 않고 빈 페이지를 돌려줍니다.
        """
        criteria = normalize_product_filters(raw_filters, self.default_page_size, self.max_page_size)

        category_id = None
        if criteria.category is not None:
            category_id = self.category_resolver.resolve(criteria.category)
            if category_id is None:
                return Page.empty(criteria.page, criteria.limit), build_product_query(criteria, unsatisfiable=True)

        built_query = build_product_query(criteria, category_id)
        page = paginate(self.products, built_query.predicate, criteria.sort, criteria.page, criteria.limit)
        self._populate_categories(page.records)
        return page, built_query

    def get_product(self, product_id: ObjectId) -> Dict[str, Any]:
        product = self._find_or_404(product_id)
        self._populate_categories([product])
        return product

    def get_filter_options(self) -> Dict[str, Any]:
        """상품 목록 사이드바용 선택지 (활성 카테고리, 브랜드, 반려동물 종류, 가격 범위)"""
        categories = list(self.categories.find({'is_active': True}, CATEGORY_SUMMARY_PROJECTION).sort('name', 1))
        brands = sorted(b for b in self.products.distinct('brand') if b)
        pet_types = sorted(p for p in self.products.distinct('specifications.petType') if p)

        price_data = list(self.products.aggregate([
            {'$group': {'_id': None, 'min': {'$min': '$price'}, 'max': {'$max': '$price'}}}
        ]))
        price_row = price_data[0] if price_data else {}
        price_range = {'min': price_row.get('min') or 0, 'max': price_row.get('max') or 0}

        return {
            'categories': categories,
            'brands': brands,
            'pet_types': pet_types,
            'price_range': price_range
        }

    # ------------------------------------------------------------------
    # 변경
    # ------------------------------------------------------------------
    def create_product(self, data: Dict[str, Any], created_by: ObjectId = None) -> Dict[str, Any]:
        with self.store.transaction() as session:
            self._ensure_active_category(data['category'], session)
            document = Product(**data, created_by=created_by).to_document()
            result = self.products.insert_one(document, session=session)
            document['_id'] = result.inserted_id

        logger.info(f"상품 등록 완료: {document['name']} ({result.inserted_id})")
        self._populate_categories([document])
        return document

    def update_product(self, product_id: ObjectId, data: Dict[str, Any]) -> Dict[str, Any]:
        with self.store.transaction() as session:
            self._find_or_404(product_id, session)
            if 'category' in data:
                self._ensure_active_category(data['category'], session)

            changes = dict(data, updated_at=DateTimeUtils.now())
            if 'stock' in data and 'is_in_stock' not in data:
                changes['is_in_stock'] = data['stock'] > 0

            self.products.update_one({'_id': product_id}, {'$set': changes}, session=session)
            product = self.products.find_one({'_id': product_id}, session=session)

        logger.info(f"상품 수정 완료: {product_id} (fields: {sorted(data)})")
        self._populate_categories([product])
        return product

    def delete_product(self, product_id: ObjectId) -> None:
        with self.store.transaction() as session:
            self._find_or_404(product_id, session)
            self.products.delete_one({'_id': product_id}, session=session)
        logger.info(f"상품 삭제 완료: {product_id}")

    def update_stock(self, product_id: ObjectId, quantity: int, operation: str) -> Dict[str, Any]:
        """
        재고를 더하거나 뺍니다. 결과가 음수가 되면 InsufficientStockError 를 던지고
        재고는 그대로 둡니다.

        읽은 시점의 재고 값을 갱신 조건에 포함시켜(compare-and-set), 그 사이에
        다른 요청이 재고를 바꿨다면 갱신하지 않고 ConflictError 를 던집니다.
        """
        with self.store.transaction() as session:
            product = self._find_or_404(product_id, session)
            current_stock = product.get('stock', 0)
            new_stock = current_stock + quantity if operation == 'add' else current_stock - quantity

            if new_stock < 0:
                logger.warning(f"재고 부족: {product_id} (현재 {current_stock}, 요청 -{quantity})")
                raise InsufficientStockError('Insufficient stock')

            result = self.products.update_one(
                {'_id': product_id, 'stock': current_stock},
                {'$set': {'stock': new_stock, 'is_in_stock': new_stock > 0, 'updated_at': DateTimeUtils.now()}},
                session=session
            )
            if result.matched_count == 0:
                raise ConflictError('Stock was modified by another request, please retry', 'STOCK_CONFLICT')

            product = self.products.find_one({'_id': product_id}, session=session)

        logger.info(f"재고 변경 완료: {product_id} {current_stock} -> {new_stock} ({operation} {quantity})")
        return product

    # ------------------------------------------------------------------
    # 내부 헬퍼
    # ------------------------------------------------------------------
    def _find_or_404(self, product_id: ObjectId, session=None) -> Dict[str, Any]:
        product = self.products.find_one({'_id': product_id}, session=session)
        if not product:
            raise NotFoundError('Product not found', 'PRODUCT_NOT_FOUND')
        return product

    def _ensure_active_category(self, category_id: ObjectId, session=None) -> None:
        if not self.categories.find_one({'_id': category_id, 'is_active': True}, {'_id': 1}, session=session):
            raise BadRequestError('Invalid category selected', 'INVALID_CATEGORY')

    def _populate_categories(self, products: List[Dict[str, Any]]) -> None:
        populate_references(products, 'category', self.categories, CATEGORY_SUMMARY_PROJECTION)
