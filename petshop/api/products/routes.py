# petshop/api/products/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app

from petshop.core.security import staff_required, current_user_id
from petshop.listing import assemble
from petshop.utils.mongo_utils import parse_object_id
from .schemas import (
    ProductCreateSchema,
    ProductResponseSchema,
    ProductFilterOptionsSchema,
    StockUpdateSchema
)

logger = logging.getLogger(__name__)

products_bp = Blueprint('products_bp', __name__)


@products_bp.route('/', methods=['GET'])
def get_products():
    """
    상품 목록을 필터/정렬/페이지네이션하여 조회합니다.

    Query Parameters:
        - category (str): 카테고리 ObjectId 또는 카테고리 이름 ('all'이면 전체)
        - brand, search, petType (str)
        - minPrice, maxPrice (number)
        - inStock, isActive ('true' / 'false')
        - page (기본 1), limit (기본 15)
        - sortBy (name | price | rating | createdAt), sortOrder (asc | desc)
    """
    product_service = current_app.services['products']
    page, built_query = product_service.list_products(request.args.to_dict())
    return jsonify(assemble('Products retrieved successfully', page, ProductResponseSchema(), built_query)), 200


@products_bp.route('/options/filters', methods=['GET'])
def get_filter_options():
    """상품 목록 사이드바의 필터 선택지를 조회합니다."""
    product_service = current_app.services['products']
    options = product_service.get_filter_options()
    return jsonify({
        "message": "Filter options retrieved successfully",
        "data": ProductFilterOptionsSchema().dump(options)
    }), 200


@products_bp.route('/<string:product_id>', methods=['GET'])
def get_product(product_id: str):
    product_service = current_app.services['products']
    product = product_service.get_product(parse_object_id(product_id, 'product ID'))
    return jsonify({
        "message": "Product retrieved successfully",
        "data": {"product": ProductResponseSchema().dump(product)}
    }), 200


@products_bp.route('/', methods=['POST'])
@staff_required
def create_product():
    """[직원/관리자] 상품을 등록합니다. category는 활성 카테고리여야 합니다."""
    product_service = current_app.services['products']
    data = ProductCreateSchema().load(request.get_json(silent=True) or {})
    product = product_service.create_product(data, created_by=parse_object_id(current_user_id(), 'user ID'))
    return jsonify({
        "message": "Product created successfully",
        "data": {"product": ProductResponseSchema().dump(product)}
    }), 201


@products_bp.route('/<string:product_id>', methods=['PUT'])
@staff_required
def update_product(product_id: str):
    """[직원/관리자] 상품 정보를 수정합니다 (부분 업데이트)."""
    product_service = current_app.services['products']
    object_id = parse_object_id(product_id, 'product ID')
    data = ProductCreateSchema(partial=True).load(request.get_json(silent=True) or {})
    product = product_service.update_product(object_id, data)
    return jsonify({
        "message": "Product updated successfully",
        "data": {"product": ProductResponseSchema().dump(product)}
    }), 200


@products_bp.route('/<string:product_id>', methods=['DELETE'])
@staff_required
def delete_product(product_id: str):
    product_service = current_app.services['products']
    product_service.delete_product(parse_object_id(product_id, 'product ID'))
    return jsonify({"message": "Product deleted successfully"}), 200


@products_bp.route('/<string:product_id>/stock', methods=['PATCH'])
@staff_required
def update_stock(product_id: str):
    """
    [직원/관리자] 재고 수량을 변경합니다.

    Body:
        - quantity (int): 1 이상
        - operation (str): 'add' | 'subtract'
    """
    product_service = current_app.services['products']
    object_id = parse_object_id(product_id, 'product ID')
    data = StockUpdateSchema().load(request.get_json(silent=True) or {})
    product = product_service.update_stock(object_id, data['quantity'], data['operation'])
    logger.info(f"재고 변경 요청 처리: {product_id} by {current_user_id()}")
    return jsonify({
        "message": "Stock updated successfully",
        "data": {"product": ProductResponseSchema().dump(product)}
    }), 200
