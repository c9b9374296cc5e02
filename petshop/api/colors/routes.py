# petshop/api/colors/routes.py
from flask import Blueprint, request, jsonify, current_app

from petshop.core.security import staff_required
from petshop.utils.mongo_utils import parse_object_id
from .schemas import (
    ColorCreateSchema, ColorBulkDeleteSchema,
    ColorResponseSchema, ColorUsageStatsSchema
)

colors_bp = Blueprint('colors_bp', __name__)


@colors_bp.route('/', methods=['GET'])
def get_colors():
    """
    색상 목록을 이름순으로 조회합니다.

    Query Parameters:
        - isActive (str, optional): 'true' / 'false'
    """
    color_service = current_app.services['colors']
    is_active = {'true': True, 'false': False}.get(request.args.get('isActive'))
    colors = color_service.list(is_active)
    return jsonify({
        "message": "Colors retrieved successfully",
        "data": ColorResponseSchema(many=True).dump(colors)
    }), 200


@colors_bp.route('/<string:color_id>', methods=['GET'])
def get_color(color_id: str):
    color_service = current_app.services['colors']
    color = color_service.get(parse_object_id(color_id, 'color ID'))
    return jsonify({
        "message": "Color retrieved successfully",
        "data": ColorResponseSchema().dump(color)
    }), 200


@colors_bp.route('/', methods=['POST'])
@staff_required
def create_color():
    """[직원/관리자] 색상을 등록합니다. 이름 또는 hex 코드가 중복되면 409."""
    color_service = current_app.services['colors']
    data = ColorCreateSchema().load(request.get_json(silent=True) or {})
    color = color_service.create(data)
    return jsonify({
        "message": "Color created successfully",
        "data": ColorResponseSchema().dump(color)
    }), 201


@colors_bp.route('/<string:color_id>', methods=['PATCH'])
@staff_required
def update_color(color_id: str):
    color_service = current_app.services['colors']
    object_id = parse_object_id(color_id, 'color ID')
    data = ColorCreateSchema(partial=True).load(request.get_json(silent=True) or {})
    color = color_service.update(object_id, data)
    return jsonify({
        "message": "Color updated successfully",
        "data": ColorResponseSchema().dump(color)
    }), 200


@colors_bp.route('/<string:color_id>', methods=['DELETE'])
@staff_required
def delete_color(color_id: str):
    color_service = current_app.services['colors']
    color_service.delete(parse_object_id(color_id, 'color ID'))
    return jsonify({"message": "Color deleted successfully"}), 200


@colors_bp.route('/bulk-delete', methods=['POST'])
@staff_required
def bulk_delete_colors():
    """[직원/관리자] 여러 색상을 한 번에 삭제합니다."""
    color_service = current_app.services['colors']
    data = ColorBulkDeleteSchema().load(request.get_json(silent=True) or {})
    deleted_count = color_service.bulk_delete(data['ids'])
    return jsonify({
        "message": "Colors deleted successfully",
        "data": {"deletedCount": deleted_count}
    }), 200


@colors_bp.route('/<string:color_id>/usage-stats', methods=['GET'])
@staff_required
def get_color_usage_stats(color_id: str):
    """[직원/관리자] 해당 색상을 사용하는 반려동물 수를 조회합니다."""
    color_service = current_app.services['colors']
    stats = color_service.get_usage_stats(parse_object_id(color_id, 'color ID'))
    return jsonify({
        "message": "Color usage stats retrieved successfully",
        "data": ColorUsageStatsSchema().dump(stats)
    }), 200
