from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from core.database import get_db
from modules.business_settings.service import resolve_settings
from modules.reports.excel import build_summary_excel
from modules.summary import schemas, service

router = APIRouter(prefix="/api/summary", tags=["summary"])


@router.get("", response_model=schemas.SummaryTotals)
def get_summary_endpoint(db: Session = Depends(get_db)):
    return service.get_summary(db)


@router.get("/excel")
def download_summary_excel(db: Session = Depends(get_db)):
    report_data = service.build_report_data(db)
    report_data["currency"] = resolve_settings(db).currency
    report_data["generated_on"] = date.today().isoformat()
    stream = build_summary_excel(report_data)
    filename = f"summary_{report_data['generated_on']}.xlsx"
    return StreamingResponse(
        stream,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
