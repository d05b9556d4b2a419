from .common import iso

def normalize_approval_request(request):
    return {
        "id": request.id,
        "blockId": request.block_id,
        "blockName": request.block_name,
        "versionId": request.version_id,
        "version": request.version,
        "requestedBy": request.requested_by,
        "requestedAt": iso(request.requested_at),
        "status": request.status,
        "reviewedBy": request.reviewed_by,
        "reviewedAt": iso(request.reviewed_at),
        "comment": request.comment,
    }
