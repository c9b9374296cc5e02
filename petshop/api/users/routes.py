# petshop/api/users/routes.py
from flask import Blueprint, request, jsonify, current_app

from petshop.core.security import jwt_required, admin_required, current_user_id
from petshop.utils.mongo_utils import parse_object_id
from .schemas import PasswordChangeSchema, ProfileUpdateSchema, UserResponseSchema, UserStatusSchema

users_bp = Blueprint('users_bp', __name__)


@users_bp.route('/me', methods=['GET'])
@jwt_required
def get_my_profile():
    user_service = current_app.services['users']
    user = user_service.get_user(parse_object_id(current_user_id(), 'user ID'))
    return jsonify({
        "message": "User retrieved successfully",
        "data": {"user": UserResponseSchema().dump(user)}
    }), 200


@users_bp.route('/me', methods=['PATCH'])
@jwt_required
def update_my_profile():
    """현재 사용자의 이름/이메일을 수정합니다."""
    user_service = current_app.services['users']
    data = ProfileUpdateSchema().load(request.get_json(silent=True) or {})
    user = user_service.update_profile(parse_object_id(current_user_id(), 'user ID'), data)
    return jsonify({
        "message": "Profile updated successfully",
        "data": {"user": UserResponseSchema().dump(user)}
    }), 200


@users_bp.route('/me/password', methods=['PATCH'])
@jwt_required
def change_my_password():
    user_service = current_app.services['users']
    data = PasswordChangeSchema().load(request.get_json(silent=True) or {})
    user_service.change_password(
        parse_object_id(current_user_id(), 'user ID'),
        data['current_password'],
        data['new_password']
    )
    return jsonify({"message": "Password changed successfully"}), 200


@users_bp.route('/', methods=['GET'])
@admin_required
def get_customers():
    """[관리자] 고객 계정 목록 (최신 가입순)"""
    user_service = current_app.services['users']
    customers = user_service.list_customers()
    return jsonify({
        "message": "Users retrieved successfully",
        "data": UserResponseSchema(many=True).dump(customers)
    }), 200


@users_bp.route('/<string:user_id>/status', methods=['PATCH'])
@admin_required
def update_user_status(user_id: str):
    """
    [관리자] 계정 활성 상태를 변경합니다.

    Body:
        - isActive (bool)
        - reason (str, optional): 변경 사유 (로그에 기록)
    """
    user_service = current_app.services['users']
    object_id = parse_object_id(user_id, 'user ID')
    data = UserStatusSchema().load(request.get_json(silent=True) or {})
    user = user_service.update_status(object_id, data['is_active'], data.get('reason'))
    return jsonify({
        "message": "User status updated successfully",
        "data": {"user": UserResponseSchema().dump(user)}
    }), 200
