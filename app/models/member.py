"""
member.py

헬스장 회원(Member) 모델 정의 파일.

- id 는 회원번호(member number)로도 사용되며 생성 후 바뀌지 않는다.
- membership_type 은 가입/연장 시점의 패키지 이름을 복사해 둔 값이다.
  (패키지를 수정/비활성화해도 회원 정보는 바뀌지 않음)
- 회원권 상태(active / expiring_soon / expired / inactive)는 저장하지 않고
  조회할 때마다 app.engine.status 로 계산한다.

"""

from datetime import date, datetime

from sqlalchemy import CheckConstraint, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Member(Base):
    __tablename__ = "members"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_members_date_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30), index=True, nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    membership_type: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, index=True, nullable=False)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
