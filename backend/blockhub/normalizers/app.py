from .common import iso

def normalize_app(app):
    return {
        "id": app.id,
        "name": app.name,
        "description": app.description,
        "icon": app.icon,
        "platform": app.platform,
        "status": app.status,
        "memberCount": app.member_count,
        "createdAt": iso(app.created_at),
        "updatedAt": iso(app.updated_at),
    }


def normalize_member(member):
    return {
        "id": member.id,
        "appId": member.app_id,
        "userId": member.user_id,
        "userName": member.user_name,
        "userEmail": member.user_email,
        "role": member.role,
        "avatar": member.avatar,
        "joinedAt": iso(member.joined_at),
        "regions": list(member.regions or []),
    }
