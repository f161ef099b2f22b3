"""
base.py

SQLAlchemy ORM Base 정의 파일.

모든 모델(Member, Package, Transaction, CheckIn, StaffUser 등)은
이 Base를 기준으로 테이블 메타데이터가 관리되며,
Alembic 마이그레이션 또한 이 Base를 기준으로 동작한다.

"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
