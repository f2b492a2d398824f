from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import case, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from logger_manager import log_debug
from utils.validators import validate_product, validate_question, validate_report
from . import models

# Histogram edges for score distribution, last bucket includes 100
SCORE_BUCKETS = [(0, 20), (20, 40), (40, 60), (60, 80), (80, 100)]


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(func.lower(models.User.email) == email.lower()).first()

    def create(self, name: str, email: str, hashed_password: str, company: Optional[str] = None, role: str = "user") -> models.User:
        db_user = models.User(
            name=name,
            email=email.lower(),
            hashed_password=hashed_password,
            company=company,
            role=role,
        )
        self.db.add(db_user)
        self.db.commit()
        self.db.refresh(db_user)
        return db_user

    def save(self, db_user: models.User) -> models.User:
        self.db.commit()
        self.db.refresh(db_user)
        return db_user


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, product_id: int) -> Optional[models.Product]:
        return self.db.query(models.Product).filter(models.Product.id == product_id).first()

    def search(self, search: Optional[str] = None, category: Optional[str] = None, skip: int = 0, limit: int = 10) -> Tuple[List[models.Product], int]:
        query = self.db.query(models.Product)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                models.Product.name.ilike(pattern),
                models.Product.brand.ilike(pattern),
                models.Product.description.ilike(pattern),
            ))
        if category:
            query = query.filter(models.Product.category == category)

        total = query.count()
        products = query.order_by(models.Product.created_at.desc(), models.Product.id.desc())\
            .offset(skip)\
            .limit(limit)\
            .all()
        log_debug(f"Product search '{search}' category '{category}' matched {total}")
        return products, total

    def create(self, data: Dict[str, Any]) -> models.Product:
        db_product = models.Product(**data)
        validate_product(db_product)
        self.db.add(db_product)
        self.db.commit()
        self.db.refresh(db_product)
        return db_product

    def update(self, db_product: models.Product, changes: Dict[str, Any]) -> models.Product:
        for field, value in changes.items():
            setattr(db_product, field, value)
        try:
            validate_product(db_product)
        except Exception:
            self.db.rollback()
            raise
        self.db.commit()
        self.db.refresh(db_product)
        return db_product

    def has_reports(self, product_id: int) -> bool:
        return self.db.query(models.Report.id).filter(models.Report.product_id == product_id).first() is not None

    def delete(self, db_product: models.Product):
        self.db.delete(db_product)
        self.db.commit()


class QuestionRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, question_id: int) -> Optional[models.Question]:
        return self.db.query(models.Question).filter(models.Question.id == question_id).first()

    def list_for_product(self, product_id: int) -> List[models.Question]:
        return self.db.query(models.Question)\
            .filter(models.Question.product_id == product_id)\
            .order_by(models.Question.order.asc())\
            .all()

    def create_many(self, product_id: int, questions: List[Dict[str, Any]]) -> List[models.Question]:
        """Store questions after any existing ones, keeping order unique per product."""
        start = self.db.query(func.max(models.Question.order))\
            .filter(models.Question.product_id == product_id)\
            .scalar()
        start = 0 if start is None else start + 1

        created = []
        for offset, question in enumerate(questions):
            db_question = models.Question(product_id=product_id, order=start + offset, **question)
            validate_question(db_question)
            created.append(db_question)

        self.db.add_all(created)
        try:
            self.db.commit()
        except IntegrityError:
            # another request stored questions at the same orders first
            self.db.rollback()
            raise
        for db_question in created:
            self.db.refresh(db_question)
        return created

    def set_answer(self, db_question: models.Question, answer: str) -> models.Question:
        db_question.answer = answer
        self.db.commit()
        self.db.refresh(db_question)
        return db_question


class ReportRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, report_id: int) -> Optional[models.Report]:
        return self.db.query(models.Report).filter(models.Report.id == report_id).first()

    def _filtered(self, user_id: Optional[int], status: Optional[str] = None, min_score: Optional[int] = None, max_score: Optional[int] = None):
        query = self.db.query(models.Report)
        if user_id is not None:
            query = query.filter(models.Report.user_id == user_id)
        if status:
            query = query.filter(models.Report.status == status)
        if min_score is not None:
            query = query.filter(models.Report.transparency_score >= min_score)
        if max_score is not None:
            query = query.filter(models.Report.transparency_score <= max_score)
        return query

    def list(self, user_id: Optional[int], status: Optional[str] = None, min_score: Optional[int] = None,
             max_score: Optional[int] = None, skip: int = 0, limit: int = 10) -> Tuple[List[models.Report], int]:
        query = self._filtered(user_id, status, min_score, max_score)
        total = query.count()
        reports = query.order_by(models.Report.created_at.desc(), models.Report.id.desc())\
            .offset(skip)\
            .limit(limit)\
            .all()
        return reports, total

    def create(self, data: Dict[str, Any]) -> models.Report:
        db_report = models.Report(**data)
        validate_report(db_report)
        self.db.add(db_report)
        self.db.commit()
        self.db.refresh(db_report)
        return db_report

    def update(self, db_report: models.Report, changes: Dict[str, Any]) -> models.Report:
        for field, value in changes.items():
            setattr(db_report, field, value)
        try:
            validate_report(db_report)
        except Exception:
            # drop the merged fields, nothing is written on a rejected update
            self.db.rollback()
            raise
        self.db.commit()
        self.db.refresh(db_report)
        return db_report

    def delete(self, db_report: models.Report):
        self.db.delete(db_report)
        self.db.commit()

    def overview(self, user_id: Optional[int]) -> Dict[str, Any]:
        score = models.Report.transparency_score
        status = models.Report.status
        query = self.db.query(
            func.count(models.Report.id),
            func.avg(score),
            func.max(score),
            func.min(score),
            func.sum(case((status == "completed", 1), else_=0)),
            func.sum(case((status == "pending", 1), else_=0)),
            func.sum(case((status == "draft", 1), else_=0)),
        )
        if user_id is not None:
            query = query.filter(models.Report.user_id == user_id)
        total, average, maximum, minimum, completed, pending, draft = query.one()

        return {
            "total_reports": total or 0,
            "average_score": round(float(average), 2) if average is not None else 0,
            "max_score": maximum or 0,
            "min_score": minimum or 0,
            "completed_reports": int(completed or 0),
            "pending_reports": int(pending or 0),
            "draft_reports": int(draft or 0),
        }

    def score_distribution(self, user_id: Optional[int]) -> List[Dict[str, Any]]:
        score = models.Report.transparency_score
        last = len(SCORE_BUCKETS) - 1
        bucket = case(
            *[
                ((score >= low) & ((score <= high) if index == last else (score < high)), index)
                for index, (low, high) in enumerate(SCORE_BUCKETS)
            ],
            else_=-1,
        ).label("bucket")

        query = self.db.query(bucket, func.count(models.Report.id))
        if user_id is not None:
            query = query.filter(models.Report.user_id == user_id)
        counts = dict(query.group_by(bucket).all())

        distribution = []
        for index, (low, high) in enumerate(SCORE_BUCKETS):
            upper = high if index == last else high - 1
            distribution.append({
                "range": f"{low}-{upper}",
                "min": low,
                "max": upper,
                "count": counts.get(index, 0),
            })
        return distribution
