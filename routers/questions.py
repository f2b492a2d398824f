from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from db.database import get_db
from db.models import User
from interfaces.questionModels import AnswerUpdate, QuestionResponse
from logger_manager import log_info, log_error
from services.ai_gateway import AIGateway, get_ai_gateway
from services.auth_service import get_current_user
from services.question_service import QuestionService
from utils.errors import AppError, ServerFault
from utils.response_utils import serialize, serialize_many

# Mounted twice: product-scoped routes under /api/products, answers under /api/questions
product_questions_router = APIRouter()
router = APIRouter()


def get_question_service(db: Session = Depends(get_db), gateway: AIGateway = Depends(get_ai_gateway)) -> QuestionService:
    return QuestionService(db, gateway)


@product_questions_router.get("/{product_id}/questions")
def list_questions(
    product_id: int,
    service: QuestionService = Depends(get_question_service),
    current_user: User = Depends(get_current_user),
):
    log_info(f"List questions endpoint called for product {product_id}")
    try:
        questions = service.list_questions(product_id)
        return {"success": True, "count": len(questions), "data": serialize_many(QuestionResponse, questions)}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in list_questions endpoint: {str(e)}", e)
        raise ServerFault("Server error fetching questions")


@product_questions_router.post("/{product_id}/questions/generate", status_code=201)
def generate_questions(
    product_id: int,
    service: QuestionService = Depends(get_question_service),
    current_user: User = Depends(get_current_user),
):
    log_info(f"Generate questions endpoint called for product {product_id}")
    try:
        questions = service.generate_questions(product_id)
        return {"success": True, "count": len(questions), "data": serialize_many(QuestionResponse, questions)}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in generate_questions endpoint: {str(e)}", e)
        raise ServerFault("Server error generating questions")


@router.put("/{question_id}/answer")
def answer_question(
    question_id: int,
    body: AnswerUpdate,
    service: QuestionService = Depends(get_question_service),
    current_user: User = Depends(get_current_user),
):
    log_info(f"Answer question endpoint called for {question_id}")
    try:
        question = service.answer_question(question_id, body.answer)
        return {"success": True, "data": serialize(QuestionResponse, question)}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in answer_question endpoint: {str(e)}", e)
        raise ServerFault("Server error saving answer")
