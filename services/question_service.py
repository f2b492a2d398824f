from typing import Any, Dict, List

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db.models import Question
from db.repositories import QuestionRepository
from interfaces.questionModels import GeneratedQuestion
from logger_manager import log_info, log_warning
from services.ai_gateway import AIGateway, generate_fallback_questions, product_to_payload
from services.product_service import ProductService
from utils.errors import NotFound, ValidationFailure, field_error


def normalize_questions(raw_questions: List[Any]) -> List[Dict[str, Any]]:
    """Turn AI output (dicts or bare strings) into question columns, skipping unusable items."""
    questions = []
    for raw in raw_questions:
        if isinstance(raw, str):
            raw = {"questionText": raw}
        if not isinstance(raw, dict):
            continue
        try:
            question = GeneratedQuestion.model_validate(raw)
        except ValidationError as e:
            log_warning(f"Skipping malformed generated question: {e.error_count()} errors")
            continue
        questions.append({
            "question_text": question.question_text,
            "question_type": question.question_type,
            "options": question.options,
            "is_required": question.is_required,
        })
    return questions


def check_answer_against_options(question: Question, answer: str):
    options = question.options or []
    if not options or not answer:
        return
    if question.question_type == "select" and answer not in options:
        raise ValidationFailure(details=[field_error("answer", "Answer must be one of the question options")])
    if question.question_type == "multiselect":
        chosen = [value.strip() for value in answer.split(",") if value.strip()]
        invalid = [value for value in chosen if value not in options]
        if invalid:
            raise ValidationFailure(details=[field_error("answer", f"Invalid options: {', '.join(invalid)}")])


class QuestionService:
    def __init__(self, db: Session, gateway: AIGateway):
        self.db = db
        self.repo = QuestionRepository(db)
        self.products = ProductService(db)
        self.gateway = gateway

    def list_questions(self, product_id: int) -> List[Question]:
        self.products.require_product(product_id)
        return self.repo.list_for_product(product_id)

    def generate_questions(self, product_id: int) -> List[Question]:
        product = self.products.require_product(product_id)
        existing = self.repo.list_for_product(product_id)
        if existing:
            log_info(f"Product {product_id} already has {len(existing)} questions")
            return existing

        questions = normalize_questions(self.gateway.generate_questions(product))
        if not questions:
            questions = normalize_questions(generate_fallback_questions(product_to_payload(product)))

        try:
            created = self.repo.create_many(product_id, questions)
        except IntegrityError:
            log_warning(f"Questions for product {product_id} were generated concurrently, returning stored ones")
            return self.repo.list_for_product(product_id)
        log_info(f"Stored {len(created)} questions for product {product_id}")
        return created

    def answer_question(self, question_id: int, answer: str) -> Question:
        question = self.repo.get_by_id(question_id)
        if not question:
            raise NotFound("Question not found")
        check_answer_against_options(question, answer)
        return self.repo.set_answer(question, answer)
