# cantera_backend/routes/scouting_routes.py
# Scouting reports on players from other clubs

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from cantera_backend.core.crud import apply_update, delete, get_or_404, save
from cantera_backend.core.database import get_session
from cantera_backend.models.scouting_model import (
    ScoutingReport, ScoutingReportCreate, ScoutingReportUpdate
)

router = APIRouter()

NOT_FOUND = "Informe de scouting no encontrado"


@router.get("")
def get_reports(
    report_id: Optional[int] = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
):
    if report_id is not None:
        return get_or_404(session, ScoutingReport, report_id, NOT_FOUND)
    return session.exec(select(ScoutingReport).order_by(ScoutingReport.id)).all()


@router.post("", status_code=201)
def create_report(data: ScoutingReportCreate, session: Session = Depends(get_session)):
    return save(session, ScoutingReport.model_validate(data))


@router.put("")
def update_report(data: ScoutingReportUpdate, session: Session = Depends(get_session)):
    report = get_or_404(session, ScoutingReport, data.id, NOT_FOUND)
    apply_update(report, data, exclude=("id", "extra"))
    if data.extra is not None:
        # JSON columns are only flushed when reassigned
        report.extra = {**(report.extra or {}), **data.extra}
    return save(session, report)


@router.delete("")
def delete_report(report_id: int = Query(alias="id"), session: Session = Depends(get_session)):
    report = get_or_404(session, ScoutingReport, report_id, NOT_FOUND)
    return delete(session, report)
