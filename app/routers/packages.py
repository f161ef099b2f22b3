"""
packages.py

회원권 상품(Package) / 결제 수단 API.

- 패키지 목록 (기본: 활성 패키지만) / 생성 / 수정 / 삭제
- 거래 내역이 있는 패키지는 삭제 요청 시 비활성화로 처리
- 결제 수단 목록

"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import StaffSession, get_current_staff, get_db
from app.schemas.package import (
    PackageCreateRequest,
    PackageResponse,
    PackageUpdateRequest,
    PaymentMethodResponse,
)
from app.services import catalog

router = APIRouter(tags=["packages"])


@router.get("/packages", response_model=list[PackageResponse])
def list_packages(
    include_inactive: bool = Query(default=False),
    db: Session = Depends(get_db),
    _: StaffSession = Depends(get_current_staff),
):
    return catalog.list_packages(db, include_inactive=include_inactive)


@router.post("/packages", response_model=PackageResponse)
def create_package(
    body: PackageCreateRequest,
    db: Session = Depends(get_db),
    _: StaffSession = Depends(get_current_staff),
):
    try:
        package = catalog.create_package(
            db,
            name=body.name,
            duration_months=body.duration_months,
            price=body.price,
            description=body.description,
        )
        db.commit()
        db.refresh(package)
        return package
    except Exception:
        db.rollback()
        raise


@router.put("/packages/{package_id}", response_model=PackageResponse)
def update_package(
    package_id: int,
    body: PackageUpdateRequest,
    db: Session = Depends(get_db),
    _: StaffSession = Depends(get_current_staff),
):
    try:
        package = catalog.update_package(db, package_id, **body.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(package)
        return package
    except Exception:
        db.rollback()
        raise


@router.delete("/packages/{package_id}")
def delete_package(
    package_id: int,
    db: Session = Depends(get_db),
    _: StaffSession = Depends(get_current_staff),
):
    try:
        outcome = catalog.delete_package(db, package_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    message = "Package deactivated" if outcome == "deactivated" else "Package deleted"
    return {"message": message, "data": {"id": package_id, "result": outcome}}


@router.get("/payment-methods", response_model=list[PaymentMethodResponse])
def list_payment_methods(
    db: Session = Depends(get_db),
    _: StaffSession = Depends(get_current_staff),
):
    return catalog.list_payment_methods(db)
