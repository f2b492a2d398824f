import random
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from db.models import Report
from db.repositories import ReportRepository
from interfaces.authModels import Identity
from interfaces.reportModels import ReportCreate, ReportUpdate
from logger_manager import log_info
from services.ai_gateway import AIGateway
from services.product_service import ProductService
from services.scoring import derive_transparency_score
from utils.errors import NotFound
from utils.permissions import ensure_can_manage


class ReportService:
    """Report lifecycle: create (scored), read, update, delete, list and stats.

    Reads, updates and deletes go through the owner-or-admin check; listings
    and statistics are always scoped to the caller's own reports.
    """

    def __init__(self, db: Session, gateway: AIGateway, rng: Optional[random.Random] = None):
        self.db = db
        self.repo = ReportRepository(db)
        self.products = ProductService(db)
        self.gateway = gateway
        self.rng = rng

    def create_report(self, identity: Identity, report_create: ReportCreate) -> Report:
        product = self.products.require_product(report_create.product_id)
        answers = report_create.answers

        ai_result = self.gateway.request_analysis(product, answers)
        score = derive_transparency_score(ai_result, product.category, answers, rng=self.rng)

        report = self.repo.create({
            "product_id": product.id,
            "user_id": identity.user_id,
            "summary": ai_result["summary"],
            "transparency_score": score,
            "analysis": ai_result["analysis"],
            "answers": answers,
            "status": "completed",
        })
        log_info(f"Report {report.id} created for product {product.id} with score {score}")
        return report

    def get_report(self, identity: Identity, report_id: int) -> Report:
        report = self.repo.get_by_id(report_id)
        if not report:
            raise NotFound("Report not found")
        ensure_can_manage(identity.user_id, identity.role, report.user_id)
        return report

    def update_report(self, identity: Identity, report_id: int, report_update: ReportUpdate) -> Report:
        report = self.get_report(identity, report_id)
        changes = report_update.model_dump(exclude_unset=True)
        updated = self.repo.update(report, changes)
        log_info(f"Report {report_id} updated fields: {', '.join(sorted(changes)) or 'none'}")
        return updated

    def delete_report(self, identity: Identity, report_id: int):
        report = self.get_report(identity, report_id)
        self.repo.delete(report)
        log_info(f"Report {report_id} deleted by user {identity.user_id}")

    def list_reports(self, identity: Identity, page: int = 1, limit: int = 10, status: Optional[str] = None,
                     min_score: Optional[int] = None, max_score: Optional[int] = None) -> Tuple[List[Report], int]:
        return self.repo.list(
            user_id=identity.user_id,
            status=status,
            min_score=min_score,
            max_score=max_score,
            skip=(page - 1) * limit,
            limit=limit,
        )

    def stats_overview(self, identity: Identity) -> Dict[str, Any]:
        return {
            "overview": self.repo.overview(identity.user_id),
            "score_distribution": self.repo.score_distribution(identity.user_id),
        }


def get_score_rng() -> Optional[random.Random]:
    """Randomness source for the scorer's fallback baseline, overridable in tests."""
    return None
