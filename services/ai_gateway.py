from typing import Any, Dict, List, Mapping, Optional

import requests

from env import AI_SERVICE_URL, AI_SERVICE_TIMEOUT
from logger_manager import log_debug, log_info, log_warning
from utils.validators import SUMMARY_MAX_LENGTH

ANALYZE_PRODUCT_PATH = "/api/ai/analyze-product"
GENERATE_QUESTIONS_PATH = "/api/ai/generate-questions"
TRANSPARENCY_SCORE_PATH = "/api/ai/transparency-score"

# answer key fragments -> (strength, improvement, recommendation)
ANSWER_HEURISTICS = [
    (("sustainab", "environment", "carbon"),
     "Sustainability practices disclosed",
     "Add sustainability data",
     "Add eco-impact information"),
    (("certif",),
     "Certification details provided",
     "Include certification details",
     "Publish third-party certification documents"),
    (("sourc", "origin", "supplier"),
     "Ingredient sourcing information shared",
     "Disclose ingredient sourcing",
     "Provide sourcing details"),
    (("packag", "recycl"),
     "Packaging information provided",
     "Describe packaging materials",
     "Document packaging recyclability"),
    (("manufactur", "labor", "factory"),
     "Manufacturing conditions described",
     "Share manufacturing practices",
     "Disclose manufacturing locations and labor standards"),
]


def product_to_payload(product) -> Dict[str, Any]:
    """Plain-dict view of a product ORM object or mapping, as sent to the AI service."""
    if isinstance(product, Mapping):
        return dict(product)
    return {
        "id": product.id,
        "name": product.name,
        "category": product.category,
        "brand": product.brand,
        "ingredients": list(product.ingredients or []),
        "description": product.description,
        "certifications": list(product.certifications or []),
        "packaging": product.packaging,
        "sustainability": product.sustainability,
    }


def _string_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def generate_fallback_analysis(product: Mapping[str, Any], answers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Local analysis used when the AI service can't be reached.

    No transparencyScore is set so the scorer falls back to its baseline.
    """
    name = product.get("name") or "this product"
    keys = [str(key).lower() for key in (answers or {}).keys()]

    strengths = ["Product information provided"]
    improvements = []
    recommendations = []
    if product.get("ingredients"):
        strengths.append("Basic ingredient list available")
    else:
        improvements.append("List all ingredients")

    for fragments, strength, improvement, recommendation in ANSWER_HEURISTICS:
        if any(fragment in key for key in keys for fragment in fragments):
            strengths.append(strength)
        else:
            improvements.append(improvement)
            recommendations.append(recommendation)

    if not recommendations:
        recommendations.append("Keep disclosures up to date as formulations change")
    if not improvements:
        improvements.append("Add independent verification of disclosed information")

    return {
        "summary": f"Analysis for {name}: This product shows basic transparency with room for improvement.",
        "analysis": {
            "strengths": strengths,
            "improvements": improvements,
            "recommendations": recommendations,
        },
    }


def generate_fallback_questions(product: Mapping[str, Any]) -> List[Dict[str, Any]]:
    name = product.get("name") or "this product"
    category = str(product.get("category") or "").lower()

    questions = [
        {
            "questionText": f"Where are the ingredients in {name} sourced from?",
            "questionType": "text",
            "options": [],
            "isRequired": True,
        },
        {
            "questionText": f"Which third-party certifications does {name} hold?",
            "questionType": "multiselect",
            "options": ["Organic", "Fair Trade", "Cruelty-Free", "Vegan", "None"],
            "isRequired": False,
        },
        {
            "questionText": f"What is the primary packaging material of {name}?",
            "questionType": "select",
            "options": ["Plastic", "Glass", "Paper/Cardboard", "Metal", "Compostable", "Other"],
            "isRequired": True,
        },
        {
            "questionText": f"Describe the sustainability practices behind {name}.",
            "questionType": "text",
            "options": [],
            "isRequired": False,
        },
    ]

    if "skincare" in category or "personal" in category:
        questions.append({
            "questionText": f"Has {name} been dermatologically tested?",
            "questionType": "select",
            "options": ["Yes", "No", "In progress"],
            "isRequired": False,
        })
    elif "food" in category:
        questions.append({
            "questionText": f"Which common allergens does {name} contain?",
            "questionType": "multiselect",
            "options": ["Gluten", "Dairy", "Nuts", "Soy", "Eggs", "None"],
            "isRequired": True,
        })
    elif "electronics" in category:
        questions.append({
            "questionText": f"Is there a take-back or recycling program for {name}?",
            "questionType": "select",
            "options": ["Yes", "No"],
            "isRequired": False,
        })
    elif "clothing" in category or "apparel" in category:
        questions.append({
            "questionText": f"In which countries is {name} manufactured?",
            "questionType": "text",
            "options": [],
            "isRequired": False,
        })
    elif "cleaning" in category:
        questions.append({
            "questionText": f"Is {name} biodegradable?",
            "questionType": "select",
            "options": ["Yes", "Partially", "No"],
            "isRequired": False,
        })

    return questions


class AIGateway:
    """Client for the external AI service.

    Every call makes a single attempt bounded by ``timeout``; any failure is
    logged and replaced by a locally generated result, so callers never see
    an AI error.
    """

    def __init__(self, base_url: Optional[str], timeout: float = AI_SERVICE_TIMEOUT, session: Optional[requests.Session] = None):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, path: str, payload: Dict[str, Any]) -> Optional[Any]:
        if not self.base_url:
            log_debug("AI service URL not configured, using fallback")
            return None
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            log_warning(f"AI service unavailable at {url}, using fallback: {e}")
            return None
        except ValueError as e:
            log_warning(f"AI service returned a non-JSON body from {url}, using fallback: {e}")
            return None

        # some deployments wrap results as {success, data}
        if isinstance(body, dict) and isinstance(body.get("data"), dict) and "summary" not in body:
            body = body["data"]
        return body

    def request_analysis(self, product, answers: Mapping[str, Any]) -> Dict[str, Any]:
        product_data = product_to_payload(product)
        fallback = generate_fallback_analysis(product_data, answers)
        body = self._post(ANALYZE_PRODUCT_PATH, {"product": product_data, "answers": dict(answers or {})})
        if not isinstance(body, dict):
            return fallback

        log_info(f"AI analysis received for product {product_data.get('name')}")
        summary = body.get("summary")
        if not isinstance(summary, str) or not summary.strip():
            summary = fallback["summary"]

        raw_analysis = body.get("analysis") if isinstance(body.get("analysis"), dict) else {}
        analysis = {}
        for key in ("strengths", "improvements", "recommendations"):
            values = _string_list(raw_analysis.get(key))
            analysis[key] = values if values is not None else fallback["analysis"][key]

        result = {"summary": summary.strip()[:SUMMARY_MAX_LENGTH], "analysis": analysis}
        for key in ("transparencyScore", "score", "questions", "expectedQuestions"):
            if key in body:
                result[key] = body[key]
        return result

    def generate_questions(self, product) -> List[Dict[str, Any]]:
        product_data = product_to_payload(product)
        body = self._post(GENERATE_QUESTIONS_PATH, {"productData": product_data})
        questions = body.get("questions") if isinstance(body, dict) else body
        if isinstance(questions, list) and questions:
            return questions
        return generate_fallback_questions(product_data)

    def calculate_score(self, product, answers: Mapping[str, Any]) -> Dict[str, Any]:
        """Raw score data from the AI service, or an empty result for the scorer's baseline."""
        product_data = product_to_payload(product)
        body = self._post(TRANSPARENCY_SCORE_PATH, {"productData": product_data, "answers": dict(answers or {})})
        if isinstance(body, dict):
            return body
        return {}


def get_ai_gateway() -> AIGateway:
    return AIGateway(base_url=AI_SERVICE_URL, timeout=AI_SERVICE_TIMEOUT)
