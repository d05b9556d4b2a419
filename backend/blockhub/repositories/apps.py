# blockhub/repositories/apps.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func, select

from blockhub.models.app import App, AppMember
from blockhub.utils.pagination import PageResult, paginate
from .base import BaseRepository


class AppRepository(BaseRepository[App]):
    model = App
    entity_name = "App"

    def list(
        self,
        *,
        keyword: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> PageResult[App]:
        stmt = select(App)
        if keyword:
            stmt = stmt.where(func.lower(App.name).contains(keyword.lower(), autoescape=True))
        stmt = stmt.order_by(App.created_at.desc(), App.id.desc())
        return paginate(self.session, stmt, page=page, page_size=page_size)

    def count(self) -> int:
        return self.session.execute(select(func.count(App.id))).scalar_one()


class AppMemberRepository(BaseRepository[AppMember]):
    model = AppMember
    entity_name = "Member"

    def list_for_app(
        self,
        app_id: str,
        *,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> PageResult[AppMember]:
        stmt = (
            select(AppMember)
            .where(AppMember.app_id == app_id)
            .order_by(AppMember.joined_at.asc(), AppMember.id.asc())
        )
        return paginate(self.session, stmt, page=page, page_size=page_size)

    def find_by_email(self, app_id: str, user_email: str) -> Optional[AppMember]:
        stmt = select(AppMember).where(
            AppMember.app_id == app_id,
            func.lower(AppMember.user_email) == user_email.lower(),
        )
        return self.session.execute(stmt).scalars().first()

    def find_by_user(self, app_id: str, user_id: str) -> Optional[AppMember]:
        stmt = select(AppMember).where(
            AppMember.app_id == app_id,
            AppMember.user_id == user_id,
        )
        return self.session.execute(stmt).scalars().first()

    def all_for_app(self, app_id: str) -> List[AppMember]:
        stmt = select(AppMember).where(AppMember.app_id == app_id)
        return list(self.session.execute(stmt).scalars())
