from flask import jsonify
from blockhub.catalog.environments import environments_sorted
from blockhub.catalog.regions import ALL_REGIONS, MEMBER_REGION_OPTIONS, REGIONS
from blockhub.normalizers.catalog import normalize_environment, normalize_region
from . import v1_bp


@v1_bp.route("/catalog/environments", methods=["GET"])
def list_environments():
    return jsonify([normalize_environment(env) for env in environments_sorted()])


@v1_bp.route("/catalog/regions", methods=["GET"])
def list_regions():
    return jsonify({
        "regions": [normalize_region(r) for r in REGIONS],
        "memberOptions": [normalize_region(r) for r in MEMBER_REGION_OPTIONS],
        "allRegions": ALL_REGIONS,
    })
