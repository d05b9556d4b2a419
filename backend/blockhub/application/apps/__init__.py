from .register_app import register_app
from .members import add_member, update_member, remove_member, list_members, get_my_membership
from .queries import list_apps, get_app, app_stats

__all__ = [
    "register_app",
    "add_member",
    "update_member",
    "remove_member",
    "list_members",
    "get_my_membership",
    "list_apps",
    "get_app",
    "app_stats",
]
