from .common import iso

def normalize_block_version(version):
    return {
        "id": version.id,
        "blockId": version.block_id,
        "version": version.version,
        "type": version.type,
        "region": version.region,
        "changelog": version.changelog,
        "config": version.config,
        "packageUrl": version.package_url,
        "packageSize": version.package_size,
        "createdBy": version.created_by,
        "createdAt": iso(version.created_at),
        "approvedBy": version.approved_by,
        "approvedAt": iso(version.approved_at),
        "stagingStatus": version.staging_status,
        "productionStatus": version.production_status,
        "stagingPublishedAt": iso(version.staging_published_at),
        "productionPublishedAt": iso(version.production_published_at),
        # derived, kept for older clients
        "status": version.status,
        "environments": version.environments,
        "publishedAt": iso(version.published_at),
    }
