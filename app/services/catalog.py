"""
services/catalog.py

회원권 상품(Package) / 결제 수단(PaymentMethod) 관리 서비스.

주요 기능:
- 패키지 생성 / 수정 / 삭제
- 거래 내역이 있는 패키지는 삭제 대신 비활성화 (Soft Delete)
- 활성 결제 수단 조회

설계 원칙:
- HTTP / FastAPI 의존성 없음
- 트랜잭션 제어(commit/rollback)는 라우터에서 수행

관련 파일:
- app.models.package     : Package / PaymentMethod 모델
- app.routers.packages   : 패키지 API

"""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.engine.errors import NotFoundError, ValidationError
from app.models.package import Package, PaymentMethod
from app.models.transaction import Transaction

logger = logging.getLogger(__name__)


def get_package(db: Session, package_id: int, *, active_only: bool = False) -> Package:
    package = db.get(Package, package_id)
    if not package or (active_only and not package.is_active):
        raise NotFoundError("Package not found")
    return package


def get_package_by_name(db: Session, name: str) -> Package | None:
    return db.scalar(select(Package).where(Package.name == name))


def get_payment_method(db: Session, payment_method_id: int) -> PaymentMethod:
    method = db.get(PaymentMethod, payment_method_id)
    if not method or not method.is_active:
        raise NotFoundError("Payment method not found")
    return method


def list_packages(db: Session, *, include_inactive: bool = False) -> list[Package]:
    stmt = select(Package).order_by(Package.duration_months, Package.name)
    if not include_inactive:
        stmt = stmt.where(Package.is_active.is_(True))
    return list(db.scalars(stmt).all())


def list_payment_methods(db: Session) -> list[PaymentMethod]:
    return list(db.scalars(select(PaymentMethod).where(PaymentMethod.is_active.is_(True)).order_by(PaymentMethod.id)).all())


def _ensure_unique_name(db: Session, name: str, *, exclude_id: int | None = None) -> None:
    stmt = select(Package).where(Package.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Package.id != exclude_id)
    if db.scalar(stmt):
        raise ValidationError("package name already exists", field="name")


def create_package(db: Session, *, name: str, duration_months: int, price, description: str | None = None) -> Package:
    name = name.strip()
    _ensure_unique_name(db, name)

    package = Package(name=name, duration_months=duration_months, price=price, description=description, is_active=True)
    db.add(package)
    db.flush()
    return package


def update_package(db: Session, package_id: int, **changes) -> Package:
    package = get_package(db, package_id)

    if changes.get("name") is not None:
        changes["name"] = changes["name"].strip()
        _ensure_unique_name(db, changes["name"], exclude_id=package.id)

    for field, value in changes.items():
        if value is not None:
            setattr(package, field, value)

    db.flush()
    return package


"""
패키지 삭제

- 거래 내역이 참조 중이면 삭제하지 않고 비활성화 (히스토리 보존)
- 참조가 없으면 실제 삭제
- 반환값: "deactivated" 또는 "deleted"

"""

def delete_package(db: Session, package_id: int) -> str:
    package = get_package(db, package_id)

    used = db.scalar(select(func.count()).select_from(Transaction).where(Transaction.package_id == package.id)) or 0
    if used:
        package.is_active = False
        db.flush()
        logger.info("package %s referenced by %d transactions, deactivated", package.id, used)
        return "deactivated"

    db.delete(package)
    db.flush()
    return "deleted"
