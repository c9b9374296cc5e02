# petshop/api/staff/routes.py
from flask import Blueprint, request, jsonify, current_app

from petshop.api.users.schemas import UserResponseSchema
from petshop.core.security import admin_required
from petshop.listing import assemble
from petshop.utils.mongo_utils import parse_object_id
from .schemas import StaffCreateSchema

staff_bp = Blueprint('staff_bp', __name__)


@staff_bp.route('/', methods=['GET'])
@admin_required
def get_staff_list():
    """
    [관리자] 직원 목록 (최신 등록순)

    Query Parameters:
        - search (str): 이름/이메일 부분 일치
        - isActive ('true' / 'false')
        - page (기본 1), limit (기본 10)
    """
    staff_service = current_app.services['staff']
    page, built_query = staff_service.list_staff(request.args.to_dict())
    return jsonify(assemble('Staff retrieved successfully', page, UserResponseSchema(), built_query)), 200


@staff_bp.route('/<string:staff_id>', methods=['GET'])
@admin_required
def get_staff(staff_id: str):
    staff_service = current_app.services['staff']
    staff = staff_service.get_staff(parse_object_id(staff_id, 'staff ID'))
    return jsonify({
        "message": "Staff retrieved successfully",
        "data": {"staff": UserResponseSchema().dump(staff)}
    }), 200


@staff_bp.route('/', methods=['POST'])
@admin_required
def create_staff():
    """[관리자] 직원 계정을 생성합니다. 이메일/이름이 이미 사용 중이면 409."""
    staff_service = current_app.services['staff']
    data = StaffCreateSchema().load(request.get_json(silent=True) or {})
    staff = staff_service.create_staff(data)
    return jsonify({
        "message": "Staff created successfully",
        "data": {"staff": UserResponseSchema().dump(staff)}
    }), 201


@staff_bp.route('/<string:staff_id>', methods=['PATCH'])
@admin_required
def update_staff(staff_id: str):
    staff_service = current_app.services['staff']
    object_id = parse_object_id(staff_id, 'staff ID')
    data = StaffCreateSchema(partial=True).load(request.get_json(silent=True) or {})
    staff = staff_service.update_staff(object_id, data)
    return jsonify({
        "message": "Staff updated successfully",
        "data": {"staff": UserResponseSchema().dump(staff)}
    }), 200


@staff_bp.route('/<string:staff_id>', methods=['DELETE'])
@admin_required
def deactivate_staff(staff_id: str):
    """[관리자] 직원 계정 비활성화 (소프트 삭제)"""
    staff_service = current_app.services['staff']
    staff_service.deactivate_staff(parse_object_id(staff_id, 'staff ID'))
    return jsonify({"message": "Staff deactivated successfully"}), 200


@staff_bp.route('/<string:staff_id>/permanent', methods=['DELETE'])
@admin_required
def delete_staff_permanently(staff_id: str):
    staff_service = current_app.services['staff']
    staff_service.delete_staff_permanently(parse_object_id(staff_id, 'staff ID'))
    return jsonify({"message": "Staff deleted permanently"}), 200


@staff_bp.route('/<string:staff_id>/activate', methods=['PATCH'])
@admin_required
def activate_staff(staff_id: str):
    staff_service = current_app.services['staff']
    staff = staff_service.activate_staff(parse_object_id(staff_id, 'staff ID'))
    return jsonify({
        "message": "Staff activated successfully",
        "data": {"staff": UserResponseSchema().dump(staff)}
    }), 200
