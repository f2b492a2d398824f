from fastapi import APIRouter, Depends

from db.models import User
from interfaces.aiModels import AnalyzeProductRequest, GenerateQuestionsRequest, TransparencyScoreRequest
from logger_manager import log_info, log_error
from services.ai_gateway import AIGateway, generate_fallback_questions, get_ai_gateway
from services.auth_service import get_current_user
from services.question_service import normalize_questions
from services.report_service import get_score_rng
from services.scoring import derive_transparency_score
from utils.errors import AppError, ServerFault
from utils.report_utils import completion_percentage, score_category

router = APIRouter()


@router.post("/generate-questions")
def generate_questions(
    request: GenerateQuestionsRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
    current_user: User = Depends(get_current_user),
):
    log_info(f"Generate questions endpoint called for {request.productData.name}")
    try:
        product_data = request.productData.model_dump()
        generated = normalize_questions(gateway.generate_questions(product_data))
        if not generated:
            generated = normalize_questions(generate_fallback_questions(product_data))
        questions = [
            {
                "questionText": question["question_text"],
                "questionType": question["question_type"],
                "options": question["options"],
                "isRequired": question["is_required"],
                "order": order,
            }
            for order, question in enumerate(generated)
        ]
        return {"success": True, "questions": questions}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in generate_questions endpoint: {str(e)}", e)
        raise ServerFault("Server error generating questions")


@router.post("/transparency-score")
def transparency_score(
    request: TransparencyScoreRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
    rng=Depends(get_score_rng),
    current_user: User = Depends(get_current_user),
):
    log_info("Transparency score endpoint called")
    try:
        score_data = gateway.calculate_score(request.productData, request.answers)
        score = derive_transparency_score(score_data, request.productData.get("category"), request.answers, rng=rng)
        return {
            "success": True,
            "data": {
                "transparencyScore": score,
                "scoreCategory": score_category(score),
                "completionPercentage": completion_percentage(request.answers),
            },
        }
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in transparency_score endpoint: {str(e)}", e)
        raise ServerFault("Server error calculating score")


@router.post("/analyze-product")
def analyze_product(
    request: AnalyzeProductRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
    current_user: User = Depends(get_current_user),
):
    log_info("Analyze product endpoint called")
    try:
        analysis = gateway.request_analysis(request.product, request.answers)
        return {"success": True, "data": analysis}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in analyze_product endpoint: {str(e)}", e)
        raise ServerFault("Server error analyzing product")
