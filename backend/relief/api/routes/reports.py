from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from relief.api.deps import get_db, read_store
from relief.core.config import get_settings
from relief.schemas.leave import LeaveStatus
from relief.schemas.report import DashboardOut, ExportFileOut, ReliefSummaryEntry
from relief.services.audit import log_activity
from relief.services.export import build_export_document, write_export
from relief.services.repository import CollectionRepository

router = APIRouter()


@router.get("/reports/dashboard", response_model=DashboardOut)
def dashboard(db: Session = Depends(get_db)) -> DashboardOut:
    store = read_store(db)
    return DashboardOut(
        pendingLeaves=sum(1 for item in store.leaves if item.status == LeaveStatus.pending),
        totalTeachers=len(store.teachers),
    )


@router.get("/reports/relief-summary", response_model=list[ReliefSummaryEntry])
def relief_summary(db: Session = Depends(get_db)) -> list[ReliefSummaryEntry]:
    return [
        ReliefSummaryEntry(teacherId=item.id, name=item.name, workloadToday=item.workload_today)
        for item in read_store(db).teachers
    ]


@router.get("/reports/export")
def export_document(db: Session = Depends(get_db)) -> dict:
    return build_export_document(read_store(db))


@router.post("/reports/export", response_model=ExportFileOut)
def export_to_file(db: Session = Depends(get_db)) -> ExportFileOut:
    document = build_export_document(read_store(db))
    path = write_export(document, get_settings().export_dir)
    log_activity(
        db,
        action="data.export",
        message=f"Data exported: {path}",
        details={"path": str(path)},
    )
    CollectionRepository(db).commit()
    return ExportFileOut(
        path=str(path),
        teacherCount=len(document["teachers"]),
        timetableCount=len(document["timetable"]),
        leaveCount=len(document["leaves"]),
    )
