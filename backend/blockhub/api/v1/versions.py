# blockhub/api/v1/versions.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from blockhub.application import blocks as block_usecases
from blockhub.application import release
from blockhub.normalizers.block_version import normalize_block_version
from blockhub.schemas.blocks import CreateVersionForm, UpdateVersionForm
from blockhub.schemas.common import parse_request
from blockhub.schemas.release import PublishVersionRequest, UnpublishVersionRequest
from blockhub.utils.decorators import current_actor_id
from . import v1_bp


def _form_or_json():
    # multipart when a package is uploaded, JSON for config-only versions
    if request.mimetype == "multipart/form-data" or request.form:
        return request.form.to_dict()
    return request.get_json(silent=True) or {}


@v1_bp.route("/blocks/versions/<version_id>", methods=["GET"])
@jwt_required()
def get_block_version(version_id):
    return jsonify(normalize_block_version(release.get_block_version(version_id=version_id)))


@v1_bp.route("/blocks/versions", methods=["POST"])
@jwt_required()
def create_block_version():
    form = parse_request(CreateVersionForm, _form_or_json())
    version = block_usecases.create_version(
        actor_id=current_actor_id(),
        block_id=form.block_id,
        version=form.version,
        type=form.type,
        region=form.region,
        changelog=form.changelog,
        config=form.config,
        package=request.files.get("package"),
    )
    return jsonify(normalize_block_version(version)), 201


@v1_bp.route("/blocks/versions/<version_id>", methods=["PUT"])
@jwt_required()
def update_block_version(version_id):
    form = parse_request(UpdateVersionForm, _form_or_json())
    version = block_usecases.update_version(
        version_id=version_id,
        actor_id=current_actor_id(),
        changelog=form.changelog,
        config=form.config,
        package=request.files.get("package"),
    )
    return jsonify(normalize_block_version(version))


@v1_bp.route("/blocks/versions/<version_id>", methods=["DELETE"])
@jwt_required()
def delete_block_version(version_id):
    block_usecases.delete_version(version_id=version_id, actor_id=current_actor_id())
    return "", 204


@v1_bp.route("/blocks/versions/<version_id>/publish", methods=["POST"])
@jwt_required()
def publish_version(version_id):
    body = parse_request(PublishVersionRequest, request.get_json(silent=True))
    version = release.publish_version(
        version_id=version_id,
        environment=body.environment,
        region=body.region,
        actor_id=current_actor_id(),
    )
    return jsonify(normalize_block_version(version))


@v1_bp.route("/blocks/versions/<version_id>/unpublish", methods=["POST"])
@jwt_required()
def unpublish_version(version_id):
    body = parse_request(UnpublishVersionRequest, request.get_json(silent=True))
    version = release.unpublish_version(
        version_id=version_id,
        environment=body.environment,
        actor_id=current_actor_id(),
    )
    return jsonify(normalize_block_version(version))
