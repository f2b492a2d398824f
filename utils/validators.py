"""Checks run against ORM objects right before they are committed.

Request bodies are already validated by the pydantic interfaces; these
functions guard the rules of the stored records themselves, whatever
path produced them.
"""
from db.models import Product, Question, Report, PRODUCT_CATEGORIES, QUESTION_TYPES, REPORT_STATUSES
from utils.errors import ValidationFailure, field_error

SUMMARY_MAX_LENGTH = 2000
ANALYSIS_KEYS = ("strengths", "improvements", "recommendations")


def validate_product(product: Product):
    errors = []
    if not product.name or not product.name.strip():
        errors.append(field_error("name", "Product name is required"))
    if product.category not in PRODUCT_CATEGORIES:
        errors.append(field_error("category", "Invalid category"))
    if not product.brand or not product.brand.strip():
        errors.append(field_error("brand", "Brand is required"))
    if not product.ingredients:
        errors.append(field_error("ingredients", "At least one ingredient is required"))
    if errors:
        raise ValidationFailure(details=errors)


def validate_question(question: Question):
    errors = []
    if not question.question_text or not question.question_text.strip():
        errors.append(field_error("questionText", "Question text is required"))
    if question.question_type not in QUESTION_TYPES:
        errors.append(field_error("questionType", "Invalid question type"))
    if question.order is None or question.order < 0:
        errors.append(field_error("order", "Order must be non-negative"))
    if errors:
        raise ValidationFailure(details=errors)


def validate_report(report: Report):
    errors = []
    if report.status not in REPORT_STATUSES:
        errors.append(field_error("status", "Invalid report status"))
    if report.summary is None or not str(report.summary).strip():
        errors.append(field_error("summary", "Report summary is required"))
    elif len(report.summary) > SUMMARY_MAX_LENGTH:
        errors.append(field_error("summary", f"Summary cannot exceed {SUMMARY_MAX_LENGTH} characters"))
    score = report.transparency_score
    if score is None:
        message = "Completed reports must have a valid transparency score" if report.status == "completed" \
            else "Transparency score is required"
        errors.append(field_error("transparencyScore", message))
    elif score < 0 or score > 100:
        errors.append(field_error("transparencyScore", "Score must be between 0 and 100"))
    if not isinstance(report.answers, dict):
        errors.append(field_error("answers", "Answers must be an object"))
    analysis = report.analysis
    if not isinstance(analysis, dict):
        errors.append(field_error("analysis", "Analysis must be an object"))
    else:
        for key in ANALYSIS_KEYS:
            if not isinstance(analysis.get(key), list):
                errors.append(field_error(f"analysis.{key}", f"{key} must be a list"))
    if errors:
        raise ValidationFailure(details=errors)
