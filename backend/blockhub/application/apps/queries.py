from typing import Dict, Optional
from blockhub.models.app import App
from blockhub.repositories import Stores, get_stores
from blockhub.utils.pagination import PageResult


def list_apps(
    *,
    keyword: Optional[str] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    stores: Optional[Stores] = None,
) -> PageResult[App]:
    stores = stores or get_stores()
    return stores.apps.list(keyword=keyword, page=page, page_size=page_size)


def get_app(*, app_id: str, stores: Optional[Stores] = None) -> App:
    stores = stores or get_stores()
    return stores.apps.require(app_id)


def app_stats(*, stores: Optional[Stores] = None) -> Dict[str, int]:
    stores = stores or get_stores()
    return {"total": stores.apps.count()}
