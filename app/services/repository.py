"""
services/repository.py

회원 검색 저장소(MemberRepository)의 SQLAlchemy 구현.

app.engine.matcher 가 요구하는 조회 인터페이스만 제공하며,
조회 결과는 ORM 객체가 아닌 불변 스냅샷(MemberSnapshot)으로 돌려준다.
엔진은 이 저장소를 통해 아무것도 수정하지 않는다.

"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.engine.types import MemberSnapshot
from app.models.member import Member


class SqlMemberRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_member_number(self, member_id: int) -> MemberSnapshot | None:
        member = self.db.get(Member, member_id)
        return MemberSnapshot.from_orm(member) if member else None

    def find_by_phone(self, phone: str) -> list[MemberSnapshot]:
        rows = self.db.scalars(select(Member).where(Member.phone == phone).order_by(Member.id)).all()
        return [MemberSnapshot.from_orm(m) for m in rows]

    def find_by_name_like(self, fragment: str) -> list[MemberSnapshot]:
        rows = self.db.scalars(
            select(Member)
            .where(func.lower(Member.name).contains(fragment.lower(), autoescape=True))
            .order_by(Member.id)
        ).all()
        return [MemberSnapshot.from_orm(m) for m in rows]
