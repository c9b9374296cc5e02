# petshop/api/pets/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app

from petshop.core.security import staff_required
from petshop.listing import assemble
from petshop.utils.mongo_utils import parse_object_id
from .schemas import PetAvailabilitySchema, PetCreateSchema, PetFilterOptionsSchema, PetResponseSchema

logger = logging.getLogger(__name__)

pets_bp = Blueprint('pets_bp', __name__)


@pets_bp.route('/', methods=['GET'])
def get_pets():
    """
    분양 중인 반려동물 목록을 필터/정렬/페이지네이션하여 조회합니다.

    Query Parameters:
        - breed, color (str): ObjectId
        - gender (Male | Female), size (Small | Medium | Large), location (str)
        - minPrice, maxPrice (number)
        - isAvailable ('true' / 'false')
        - page (기본 1), limit (기본 10)
        - sortBy (publishedDate | price | name | createdAt), sortOrder (asc | desc)
    """
    pet_service = current_app.services['pets']
    page, built_query = pet_service.list_pets(request.args.to_dict())
    return jsonify(assemble('Pets retrieved successfully', page, PetResponseSchema(), built_query)), 200


@pets_bp.route('/filter-options', methods=['GET'])
def get_filter_options():
    pet_service = current_app.services['pets']
    options = pet_service.get_filter_options()
    return jsonify({
        "message": "Filter options retrieved successfully",
        "data": PetFilterOptionsSchema().dump(options)
    }), 200


@pets_bp.route('/<string:pet_id>', methods=['GET'])
def get_pet(pet_id: str):
    pet_service = current_app.services['pets']
    pet = pet_service.get_pet(parse_object_id(pet_id, 'pet ID'))
    return jsonify({
        "message": "Pet retrieved successfully",
        "data": {"pet": PetResponseSchema().dump(pet)}
    }), 200


@pets_bp.route('/', methods=['POST'])
@staff_required
def create_pet():
    """[직원/관리자] 반려동물을 등록합니다. breed, color는 활성 품종/색상이어야 합니다."""
    pet_service = current_app.services['pets']
    data = PetCreateSchema().load(request.get_json(silent=True) or {})
    pet = pet_service.create_pet(data)
    return jsonify({
        "message": "Pet created successfully",
        "data": {"pet": PetResponseSchema().dump(pet)}
    }), 201


@pets_bp.route('/<string:pet_id>', methods=['PATCH'])
@staff_required
def update_pet(pet_id: str):
    pet_service = current_app.services['pets']
    object_id = parse_object_id(pet_id, 'pet ID')
    data = PetCreateSchema(partial=True).load(request.get_json(silent=True) or {})
    pet = pet_service.update_pet(object_id, data)
    return jsonify({
        "message": "Pet updated successfully",
        "data": {"pet": PetResponseSchema().dump(pet)}
    }), 200


@pets_bp.route('/<string:pet_id>/availability', methods=['PATCH'])
@staff_required
def update_availability(pet_id: str):
    """[직원/관리자] 분양 가능 여부만 변경합니다. Body: { isAvailable: bool }"""
    pet_service = current_app.services['pets']
    object_id = parse_object_id(pet_id, 'pet ID')
    data = PetAvailabilitySchema().load(request.get_json(silent=True) or {})
    pet = pet_service.update_availability(object_id, data['is_available'])
    return jsonify({
        "message": "Pet availability updated successfully",
        "data": {"pet": PetResponseSchema().dump(pet)}
    }), 200


@pets_bp.route('/<string:pet_id>', methods=['DELETE'])
@staff_required
def delete_pet(pet_id: str):
    pet_service = current_app.services['pets']
    pet_service.delete_pet(parse_object_id(pet_id, 'pet ID'))
    logger.info(f"반려동물 삭제 요청 처리: {pet_id}")
    return jsonify({"message": "Pet deleted successfully"}), 200
