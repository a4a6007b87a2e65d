# app/api/settings/routes.py
import logging
from dataclasses import asdict
from flask import Blueprint, request, jsonify, Response, current_app
from marshmallow import ValidationError

from app.api.settings.schemas import (
    AnnouncementCreateSchema, AnnouncementResponseSchema,
    AnnouncementSettingsSchema, SocialLinksSchema
)
from app.core.security import roles_required
from app.models.user import UserRole


settings_bp = Blueprint('settings_bp', __name__)

@settings_bp.route('/announcements', methods=['GET'])
def get_announcements():
    """공지 목록, 순환 설정, 현재 표시할 공지를 함께 반환합니다."""
    settings_service = current_app.services['settings']
    announcements = settings_service.get_announcements()
    settings = settings_service.get_announcement_settings()
    current = settings_service.get_current_announcement()
    return jsonify({
        "announcements": AnnouncementResponseSchema(many=True).dump(announcements),
        "settings": AnnouncementSettingsSchema().dump(asdict(settings)),
        "current": AnnouncementResponseSchema().dump(current) if current else None
    }), 200


@settings_bp.route('/announcements', methods=['POST'])
@roles_required(UserRole.ADMIN)
def add_announcement():
    settings_service = current_app.services['settings']
    try:
        data = AnnouncementCreateSchema().load(request.get_json(silent=True) or {})
        announcement = settings_service.add_announcement(data['message'])
        return jsonify(AnnouncementResponseSchema().dump(announcement)), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except Exception as e:
        logging.error(f"공지 추가 중 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "ANNOUNCEMENT_CREATION_FAILED", "message": "공지 추가 중 오류가 발생했습니다."}), 500


@settings_bp.route('/announcements/<string:announcement_id>', methods=['DELETE'])
@roles_required(UserRole.ADMIN)
def delete_announcement(announcement_id: str):
    settings_service = current_app.services['settings']
    try:
        settings_service.delete_announcement(announcement_id)
        return Response(status=204)
    except ValueError as e:
        return jsonify({"error_code": "NOT_FOUND", "message": str(e)}), 404


@settings_bp.route('/announcements/settings', methods=['PUT'])
@roles_required(UserRole.ADMIN)
def save_announcement_settings():
    settings_service = current_app.services['settings']
    try:
        data = AnnouncementSettingsSchema().load(request.get_json(silent=True) or {})
        settings = settings_service.save_announcement_settings(data['rotation_interval'])
        return jsonify(AnnouncementSettingsSchema().dump(asdict(settings))), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400


@settings_bp.route('/social-links', methods=['GET'])
def get_social_links():
    settings_service = current_app.services['settings']
    return jsonify(SocialLinksSchema().dump(asdict(settings_service.get_social_links()))), 200


@settings_bp.route('/social-links', methods=['PUT'])
@roles_required(UserRole.ADMIN)
def save_social_links():
    settings_service = current_app.services['settings']
    try:
        data = SocialLinksSchema().load(request.get_json(silent=True) or {})
        links = settings_service.save_social_links(data)
        return jsonify(SocialLinksSchema().dump(asdict(links))), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
