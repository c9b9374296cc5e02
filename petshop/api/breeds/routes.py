# petshop/api/breeds/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app

from petshop.core.security import staff_required, current_user_id
from petshop.utils.mongo_utils import parse_object_id
from .schemas import BreedCreateSchema, BreedResponseSchema

logger = logging.getLogger(__name__)

breeds_bp = Blueprint('breeds_bp', __name__)


@breeds_bp.route('/', methods=['GET'])
def get_all_breeds():
    """
    모든 품종 목록을 이름순으로 조회합니다.

    Query Parameters:
        - isActive (str, optional): 'true' / 'false'
    """
    breed_service = current_app.services['breeds']
    is_active = {'true': True, 'false': False}.get(request.args.get('isActive'))
    breeds = breed_service.list(is_active)
    return jsonify({
        "message": "Breeds retrieved successfully",
        "data": BreedResponseSchema(many=True).dump(breeds)
    }), 200


@breeds_bp.route('/<string:breed_id>', methods=['GET'])
def get_breed(breed_id: str):
    breed_service = current_app.services['breeds']
    breed = breed_service.get(parse_object_id(breed_id, 'breed ID'))
    return jsonify({
        "message": "Breed retrieved successfully",
        "data": BreedResponseSchema().dump(breed)
    }), 200


@breeds_bp.route('/', methods=['POST'])
@staff_required
def create_breed():
    """[직원/관리자] 품종을 등록합니다. 등록자는 토큰의 사용자입니다."""
    breed_service = current_app.services['breeds']
    data = BreedCreateSchema().load(request.get_json(silent=True) or {})
    creator_id = parse_object_id(current_user_id(), 'user ID')
    breed = breed_service.create(data, created_by=creator_id)
    logger.info(f"품종 등록 요청 처리: {breed['name']} (by {creator_id})")
    return jsonify({
        "message": "Breed created successfully",
        "data": BreedResponseSchema().dump(breed)
    }), 201


@breeds_bp.route('/<string:breed_id>', methods=['PATCH'])
@staff_required
def update_breed(breed_id: str):
    breed_service = current_app.services['breeds']
    object_id = parse_object_id(breed_id, 'breed ID')
    data = BreedCreateSchema(partial=True).load(request.get_json(silent=True) or {})
    breed = breed_service.update(object_id, data)
    return jsonify({
        "message": "Breed updated successfully",
        "data": BreedResponseSchema().dump(breed)
    }), 200


@breeds_bp.route('/<string:breed_id>', methods=['DELETE'])
@staff_required
def delete_breed(breed_id: str):
    breed_service = current_app.services['breeds']
    breed_service.delete(parse_object_id(breed_id, 'breed ID'))
    return jsonify({"message": "Breed deleted successfully"}), 200
