# petshop/api/categories/routes.py
from flask import Blueprint, request, jsonify, current_app

from petshop.core.security import staff_required
from petshop.utils.mongo_utils import parse_object_id
from .schemas import CategoryCreateSchema, CategoryResponseSchema

categories_bp = Blueprint('categories_bp', __name__)


@categories_bp.route('/', methods=['GET'])
def get_categories():
    """
    카테고리 목록을 이름순으로 조회합니다.

    Query Parameters:
        - isActive (str, optional): 'true' / 'false' 인 경우에만 활성 여부로 필터링
    """
    category_service = current_app.services['categories']
    is_active = {'true': True, 'false': False}.get(request.args.get('isActive'))
    categories = category_service.list(is_active)
    return jsonify({
        "message": "Categories retrieved successfully",
        "data": CategoryResponseSchema(many=True).dump(categories)
    }), 200


@categories_bp.route('/<string:category_id>', methods=['GET'])
def get_category(category_id: str):
    category_service = current_app.services['categories']
    category = category_service.get(parse_object_id(category_id, 'category ID'))
    return jsonify({
        "message": "Category retrieved successfully",
        "data": CategoryResponseSchema().dump(category)
    }), 200


@categories_bp.route('/', methods=['POST'])
@staff_required
def create_category():
    """[직원/관리자] 카테고리를 등록합니다. 이름이 중복되면 409."""
    category_service = current_app.services['categories']
    data = CategoryCreateSchema().load(request.get_json(silent=True) or {})
    category = category_service.create(data)
    return jsonify({
        "message": "Category created successfully",
        "data": CategoryResponseSchema().dump(category)
    }), 201


@categories_bp.route('/<string:category_id>', methods=['PATCH'])
@staff_required
def update_category(category_id: str):
    """[직원/관리자] 카테고리 부분 수정. isActive=false 로 소프트 삭제합니다."""
    category_service = current_app.services['categories']
    object_id = parse_object_id(category_id, 'category ID')
    data = CategoryCreateSchema(partial=True).load(request.get_json(silent=True) or {})
    category = category_service.update(object_id, data)
    return jsonify({
        "message": "Category updated successfully",
        "data": CategoryResponseSchema().dump(category)
    }), 200


@categories_bp.route('/<string:category_id>', methods=['DELETE'])
@staff_required
def delete_category(category_id: str):
    category_service = current_app.services['categories']
    category_service.delete(parse_object_id(category_id, 'category ID'))
    return jsonify({"message": "Category deleted successfully"}), 200
