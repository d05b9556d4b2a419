# blockhub/api/v1/blocks.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from blockhub.application import blocks as block_usecases
from blockhub.application import release
from blockhub.normalizers.block import normalize_block
from blockhub.normalizers.block_version import normalize_block_version
from blockhub.normalizers.pagination import normalize_pagination
from blockhub.schemas.blocks import CreateBlockRequest, ListBlocksQuery, UpdateBlockRequest
from blockhub.schemas.common import parse_request
from blockhub.schemas.release import ListBlockVersionsQuery
from blockhub.utils.decorators import current_actor_id
from blockhub.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp


@v1_bp.route("/blocks", methods=["GET"])
@jwt_required()
def list_blocks():
    query = parse_request(ListBlocksQuery, request.args)
    result = block_usecases.list_blocks(
        app_id=query.app_id,
        status=query.status,
        type=query.type,
        category=query.category,
        keyword=query.keyword,
        page=query.page,
        page_size=query.page_size,
    )
    return jsonify(normalize_pagination(result, normalize_block))


@v1_bp.route("/blocks/stats", methods=["GET"])
@jwt_required()
def block_stats():
    return jsonify(block_usecases.block_stats())


@v1_bp.route("/blocks/categories/list", methods=["GET"])
@jwt_required()
def list_categories():
    return jsonify(block_usecases.list_categories())


@v1_bp.route("/blocks/<block_id>", methods=["GET"])
@jwt_required()
def get_block(block_id):
    return jsonify(normalize_block(block_usecases.get_block(block_id=block_id)))


@v1_bp.route("/blocks", methods=["POST"])
@jwt_required()
def create_block():
    body = parse_request(CreateBlockRequest, request.get_json(silent=True))
    block = block_usecases.create_block(
        actor_id=current_actor_id(),
        app_id=body.app_id,
        name=body.name,
        type=body.type,
        description=body.description,
        category=body.category,
    )
    return jsonify(normalize_block(block)), 201


@v1_bp.route("/blocks/<block_id>", methods=["PUT"])
@jwt_required()
def update_block(block_id):
    body = parse_request(UpdateBlockRequest, request.get_json(silent=True))
    block = block_usecases.update_block(
        block_id=block_id,
        actor_id=current_actor_id(),
        data=body.model_dump(exclude_none=True),
        # -----------------------
        # Optimistic Locking Check
        # -----------------------
        before_update=enforce_optimistic_lock,
    )
    return jsonify(normalize_block(block))


@v1_bp.route("/blocks/<block_id>", methods=["DELETE"])
@jwt_required()
def archive_block(block_id):
    block = block_usecases.archive_block(block_id=block_id, actor_id=current_actor_id())
    return jsonify(normalize_block(block))


@v1_bp.route("/blocks/<block_id>/download", methods=["POST"])
@jwt_required()
def record_download(block_id):
    block = block_usecases.record_download(block_id=block_id)
    return jsonify({"id": block.id, "downloadCount": block.download_count})


@v1_bp.route("/blocks/<block_id>/versions", methods=["GET"])
@jwt_required()
def list_block_versions(block_id):
    query = parse_request(ListBlockVersionsQuery, request.args)
    versions = release.list_block_versions(block_id=block_id, region=query.region)
    return jsonify([normalize_block_version(v) for v in versions])


@v1_bp.route("/blocks/<block_id>/regions", methods=["GET"])
@jwt_required()
def list_block_regions(block_id):
    return jsonify(release.list_block_regions(block_id=block_id))
