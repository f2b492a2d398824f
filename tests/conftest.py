import os

# Must be set before env.py is imported by the app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["AI_SERVICE_URL"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db.database import Base, get_db
from db.models import Product, Report, User
from main import app
from services.ai_gateway import generate_fallback_analysis, get_ai_gateway, product_to_payload
from services.auth_service import create_token_for_user
from services.report_service import get_score_rng

SQLALCHEMY_DATABASE_URL = "sqlite://"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class StubRandom:
    """Stands in for random.Random so the fallback baseline is fixed."""

    def __init__(self, value):
        self.value = value
        self.calls = []

    def randint(self, low, high):
        self.calls.append((low, high))
        return self.value


class FakeGateway:
    """AI gateway double: canned analysis, or the local fallback when none is given."""

    def __init__(self, analysis=None, questions=None, score_data=None):
        self.analysis = analysis
        self.questions = questions
        self.score_data = score_data or {}
        self.analysis_calls = []

    def request_analysis(self, product, answers):
        self.analysis_calls.append((product, answers))
        if self.analysis is None:
            return generate_fallback_analysis(product_to_payload(product), answers)
        return dict(self.analysis)

    def generate_questions(self, product):
        if self.questions is None:
            return []
        return list(self.questions)

    def calculate_score(self, product, answers):
        return dict(self.score_data)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def gateway():
    return FakeGateway(analysis={
        "summary": "Clear disclosure of sourcing and packaging.",
        "transparencyScore": 70,
        "analysis": {
            "strengths": ["Full ingredient list"],
            "improvements": ["Publish audit results"],
            "recommendations": ["Add supplier names"],
        },
    })


@pytest.fixture()
def rng():
    return StubRandom(50)


@pytest.fixture()
def client(tables, gateway, rng):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ai_gateway] = lambda: gateway
    app.dependency_overrides[get_score_rng] = lambda: rng
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_user(name="Alice", email="alice@example.com", role="user", is_active=True):
    with TestingSessionLocal() as db:
        user = User(name=name, email=email, hashed_password="not-used", role=role, is_active=is_active)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user.id, create_token_for_user(user)


def create_product(**overrides):
    data = {
        "name": "Glow Serum",
        "category": "Skincare",
        "brand": "Lumen",
        "ingredients": ["Water", "Niacinamide"],
        "description": "Brightening serum",
    }
    data.update(overrides)
    with TestingSessionLocal() as db:
        product = Product(**data)
        db.add(product)
        db.commit()
        return product.id


def create_report(user_id, product_id, score=50, status="completed", answers=None):
    with TestingSessionLocal() as db:
        report = Report(
            product_id=product_id,
            user_id=user_id,
            summary="Stored report",
            transparency_score=score,
            analysis={"strengths": [], "improvements": [], "recommendations": []},
            answers=answers if answers is not None else {"sourcing": "EU"},
            status=status,
        )
        db.add(report)
        db.commit()
        return report.id


def count_reports():
    with TestingSessionLocal() as db:
        return db.query(Report).count()


def auth(token):
    return {"Authorization": f"Bearer {token}"}
