# blockhub/api/v1/apps.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from blockhub.application import apps as app_usecases
from blockhub.normalizers.app import normalize_app, normalize_member
from blockhub.normalizers.pagination import normalize_pagination
from blockhub.schemas.apps import AddMemberRequest, CreateAppRequest, ListAppsQuery, UpdateMemberRequest
from blockhub.schemas.common import PageParams, parse_request
from blockhub.utils.decorators import current_actor_email, current_actor_id
from . import v1_bp


@v1_bp.route("/apps", methods=["GET"])
@jwt_required()
def list_apps():
    query = parse_request(ListAppsQuery, request.args)
    result = app_usecases.list_apps(keyword=query.keyword, page=query.page, page_size=query.page_size)
    return jsonify(normalize_pagination(result, normalize_app))


@v1_bp.route("/apps/stats", methods=["GET"])
@jwt_required()
def app_stats():
    return jsonify(app_usecases.app_stats())


@v1_bp.route("/apps/<app_id>", methods=["GET"])
@jwt_required()
def get_app(app_id):
    return jsonify(normalize_app(app_usecases.get_app(app_id=app_id)))


@v1_bp.route("/apps", methods=["POST"])
@jwt_required()
def create_app():
    body = parse_request(CreateAppRequest, request.get_json(silent=True))
    app = app_usecases.register_app(
        actor_id=current_actor_id(),
        actor_email=current_actor_email(),
        name=body.name,
        description=body.description,
        platform=body.platform,
        icon=body.icon,
    )
    return jsonify(normalize_app(app)), 201


# ------------------------
# Members
# ------------------------

@v1_bp.route("/apps/<app_id>/members", methods=["GET"])
@jwt_required()
def list_members(app_id):
    query = parse_request(PageParams, request.args)
    result = app_usecases.list_members(app_id=app_id, page=query.page, page_size=query.page_size)
    return jsonify(normalize_pagination(result, normalize_member))


@v1_bp.route("/apps/<app_id>/members/me", methods=["GET"])
@jwt_required()
def get_my_membership(app_id):
    member = app_usecases.get_my_membership(app_id=app_id, actor_id=current_actor_id())
    return jsonify(normalize_member(member))


@v1_bp.route("/apps/<app_id>/members", methods=["POST"])
@jwt_required()
def add_member(app_id):
    body = parse_request(AddMemberRequest, request.get_json(silent=True))
    member = app_usecases.add_member(
        app_id=app_id,
        actor_id=current_actor_id(),
        user_email=body.user_email,
        role=body.role,
        regions=body.regions,
        user_id=body.user_id,
    )
    return jsonify(normalize_member(member)), 201


@v1_bp.route("/apps/<app_id>/members/<member_id>", methods=["PUT"])
@jwt_required()
def update_member(app_id, member_id):
    body = parse_request(UpdateMemberRequest, request.get_json(silent=True))
    member = app_usecases.update_member(
        app_id=app_id,
        member_id=member_id,
        actor_id=current_actor_id(),
        role=body.role,
        regions=body.regions,
    )
    return jsonify(normalize_member(member))


@v1_bp.route("/apps/<app_id>/members/<member_id>", methods=["DELETE"])
@jwt_required()
def remove_member(app_id, member_id):
    app_usecases.remove_member(app_id=app_id, member_id=member_id, actor_id=current_actor_id())
    return "", 204
