from .common import iso

def normalize_block(block):
    return {
        "id": block.id,
        "name": block.name,
        "description": block.description,
        "appId": block.app_id,
        "appName": block.app_name,
        "type": block.type,
        "category": block.category,
        "status": block.status,
        "latestVersion": block.latest_version,
        "downloadCount": block.download_count,
        "createdBy": block.created_by,
        "createdAt": iso(block.created_at),
        "updatedAt": iso(block.updated_at),
        "stagingVersion": block.staging_version,
        "productionVersion": block.production_version,
    }
