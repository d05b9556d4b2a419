# blockhub/api/v1/approvals.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from blockhub.application import release
from blockhub.normalizers.approval import normalize_approval_request
from blockhub.normalizers.pagination import normalize_pagination
from blockhub.schemas.common import parse_request
from blockhub.schemas.release import (
    ApproveRequest,
    ListApprovalRequestsQuery,
    RejectRequest,
    SubmitApprovalRequest,
)
from blockhub.utils.decorators import current_actor_id, roles_required
from . import v1_bp

REVIEWER_ROLES = ("reviewer", "admin")


@v1_bp.route("/approvals/list", methods=["GET"])
@jwt_required()
def list_approval_requests():
    query = parse_request(ListApprovalRequestsQuery, request.args)
    result = release.list_approval_requests(
        status=query.status,
        block_id=query.block_id,
        page=query.page,
        page_size=query.page_size,
    )
    return jsonify(normalize_pagination(result, normalize_approval_request))


@v1_bp.route("/approvals/submit", methods=["POST"])
@jwt_required()
def submit_approval():
    body = parse_request(SubmitApprovalRequest, request.get_json(silent=True))
    approval = release.submit_approval(version_id=body.version_id, actor_id=current_actor_id())
    return jsonify(normalize_approval_request(approval)), 201


@v1_bp.route("/approvals/<request_id>/approve", methods=["POST"])
@jwt_required()
@roles_required(*REVIEWER_ROLES)
def approve_request(request_id):
    body = parse_request(ApproveRequest, request.get_json(silent=True))
    approval = release.approve_request(
        request_id=request_id,
        actor_id=current_actor_id(),
        comment=body.comment,
    )
    return jsonify(normalize_approval_request(approval))


@v1_bp.route("/approvals/<request_id>/reject", methods=["POST"])
@jwt_required()
@roles_required(*REVIEWER_ROLES)
def reject_request(request_id):
    body = parse_request(RejectRequest, request.get_json(silent=True))
    approval = release.reject_request(
        request_id=request_id,
        actor_id=current_actor_id(),
        comment=body.comment,
    )
    return jsonify(normalize_approval_request(approval))


@v1_bp.route("/approvals/version/<version_id>", methods=["GET"])
@jwt_required()
def get_approval_by_version(version_id):
    approval = release.get_approval_for_version(version_id=version_id)
    return jsonify(normalize_approval_request(approval))
