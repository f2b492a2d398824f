from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from db.database import get_db
from interfaces.authModels import Identity
from interfaces.reportModels import ReportCreate, ReportResponse, ReportStats, ReportStatus, ReportUpdate
from logger_manager import log_info, log_error
from services.ai_gateway import AIGateway, get_ai_gateway
from services.auth_service import get_current_identity
from services.report_service import ReportService, get_score_rng
from utils.errors import AppError, ServerFault
from utils.response_utils import paginated, serialize, serialize_many

router = APIRouter()


def get_report_service(
    db: Session = Depends(get_db),
    gateway: AIGateway = Depends(get_ai_gateway),
    rng=Depends(get_score_rng),
) -> ReportService:
    return ReportService(db, gateway, rng=rng)


@router.get("/stats/overview")
def report_stats(
    identity: Identity = Depends(get_current_identity),
    service: ReportService = Depends(get_report_service),
):
    log_info("Report stats endpoint called")
    try:
        stats = ReportStats.model_validate(service.stats_overview(identity))
        return {"success": True, "data": stats.model_dump(by_alias=True, mode="json")}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in report_stats endpoint: {str(e)}", e)
        raise ServerFault("Server error fetching statistics")


@router.get("")
def list_reports(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[ReportStatus] = Query(None),
    min_score: Optional[int] = Query(None, alias="minScore", ge=0, le=100),
    max_score: Optional[int] = Query(None, alias="maxScore", ge=0, le=100),
    identity: Identity = Depends(get_current_identity),
    service: ReportService = Depends(get_report_service),
):
    log_info("List reports endpoint called")
    try:
        reports, total = service.list_reports(identity, page, limit, status, min_score, max_score)
        return paginated(serialize_many(ReportResponse, reports), total, page, limit)
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in list_reports endpoint: {str(e)}", e)
        raise ServerFault("Server error fetching reports")


@router.get("/{report_id}")
def read_report(
    report_id: int,
    identity: Identity = Depends(get_current_identity),
    service: ReportService = Depends(get_report_service),
):
    log_info(f"Read report endpoint called for {report_id}")
    try:
        report = service.get_report(identity, report_id)
        return {"success": True, "data": serialize(ReportResponse, report)}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in read_report endpoint: {str(e)}", e)
        raise ServerFault("Server error fetching report")


@router.post("", status_code=201)
def create_report(
    report_create: ReportCreate,
    identity: Identity = Depends(get_current_identity),
    service: ReportService = Depends(get_report_service),
):
    log_info(f"Create report endpoint called for product {report_create.product_id}")
    try:
        report = service.create_report(identity, report_create)
        return {"success": True, "data": serialize(ReportResponse, report)}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in create_report endpoint: {str(e)}", e)
        raise ServerFault("Server error creating report")


@router.put("/{report_id}")
def update_report(
    report_id: int,
    report_update: ReportUpdate,
    identity: Identity = Depends(get_current_identity),
    service: ReportService = Depends(get_report_service),
):
    log_info(f"Update report endpoint called for {report_id}")
    try:
        report = service.update_report(identity, report_id, report_update)
        return {"success": True, "data": serialize(ReportResponse, report)}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in update_report endpoint: {str(e)}", e)
        raise ServerFault("Server error updating report")


@router.delete("/{report_id}")
def delete_report(
    report_id: int,
    identity: Identity = Depends(get_current_identity),
    service: ReportService = Depends(get_report_service),
):
    log_info(f"Delete report endpoint called for {report_id}")
    try:
        service.delete_report(identity, report_id)
        return {"success": True, "message": "Report deleted successfully"}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in delete_report endpoint: {str(e)}", e)
        raise ServerFault("Server error deleting report")
