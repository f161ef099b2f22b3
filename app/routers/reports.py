"""
reports.py

대시보드 / 매출 리포트 API 모음.

주요 기능:
- 대시보드 통계 (상태별 회원 수, 오늘 입장 수, 이번 달 매출, 만료 임박 회원)
- 월별 리포트 (패키지별 / 결제 수단별 매출)
- 월별 거래 내역 CSV / Excel(xlsx) 내보내기

설계 원칙:
- 계산 로직은 service 계층(app.services.reports)에 위임
- 이 라우터는 요청/응답 처리 및 파일 포맷 변환에만 집중

"""

import csv
import io
from datetime import date

from fastapi import APIRouter, Depends, Query
from openpyxl import Workbook
from sqlalchemy.orm import Session
from starlette.responses import Response, StreamingResponse

from app.core.deps import StaffSession, get_current_staff, get_db, get_today
from app.schemas.member import MemberResponse
from app.schemas.report import DashboardStats, MonthlyReport, RevenueRow
from app.services.reports import EXPORT_HEADER, dashboard_stats, month_range, monthly_report, transaction_rows

router = APIRouter(tags=["reports"])


@router.get("/dashboard/stats", response_model=DashboardStats)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
    _: StaffSession = Depends(get_current_staff),
):
    stats = dashboard_stats(db, today=today)
    stats["expiring_soon_members"] = [MemberResponse.build(m, today) for m in stats["expiring_soon_members"]]
    return DashboardStats(**stats)


@router.get("/reports/monthly", response_model=MonthlyReport)
def get_monthly_report(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
    _: StaffSession = Depends(get_current_staff),
):
    report = monthly_report(db, year=year, month=month)
    report["by_package"] = [RevenueRow(**r) for r in report["by_package"]]
    report["by_payment_method"] = [RevenueRow(**r) for r in report["by_payment_method"]]
    return MonthlyReport(**report)


"""
월별 거래 내역 CSV 다운로드 API

- StreamingResponse로 행 단위 전송
- UTF-8 BOM을 먼저 출력하여 Excel에서 한글/비ASCII 이름이 깨지지 않도록 처리

"""
@router.get("/reports/transactions/export")
def export_transactions_csv(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
    _: StaffSession = Depends(get_current_staff),
):
    month_range(year, month)
    rows = transaction_rows(db, year=year, month=month)

    def generate():
        yield "\ufeff"

        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(EXPORT_HEADER)
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)

        for row in rows:
            writer.writerow(row)
            yield output.getvalue()
            output.seek(0)
            output.truncate(0)

    filename = f"transactions_{year}-{month:02d}.csv"
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    return StreamingResponse(generate(), media_type="text/csv; charset=utf-8", headers=headers)


@router.get("/reports/transactions/export.xlsx")
def export_transactions_xlsx(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
    _: StaffSession = Depends(get_current_staff),
):
    rows = transaction_rows(db, year=year, month=month)

    wb = Workbook()
    ws = wb.active
    ws.title = "transactions"

    ws.append(EXPORT_HEADER)
    for row in rows:
        ws.append(row)

    buf = io.BytesIO()
    wb.save(buf)

    filename = f"transactions_{year}-{month:02d}.xlsx"
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    return Response(
        content=buf.getvalue(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=headers,
    )
