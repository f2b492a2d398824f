from conftest import FakeGateway, auth, create_user
from main import app
from services.ai_gateway import get_ai_gateway

PRODUCT_DATA = {"name": "Glow Serum", "category": "Skincare", "ingredients": ["Water", "Niacinamide"]}
ANSWERS = {"sourcing": "France", "packaging": "Glass"}


def test_generate_questions_falls_back_locally(client):
    _, token = create_user()

    response = client.post("/api/ai/generate-questions", json={"productData": PRODUCT_DATA}, headers=auth(token))

    assert response.status_code == 200
    questions = response.json()["questions"]
    assert len(questions) == 5
    assert [question["order"] for question in questions] == [0, 1, 2, 3, 4]
    assert questions[-1]["questionText"] == "Has Glow Serum been dermatologically tested?"


def test_generate_questions_requires_ingredients(client):
    _, token = create_user()

    response = client.post(
        "/api/ai/generate-questions",
        json={"productData": dict(PRODUCT_DATA, ingredients=[])},
        headers=auth(token),
    )

    assert response.status_code == 400


def test_transparency_score_uses_ai_score(client, rng):
    app.dependency_overrides[get_ai_gateway] = lambda: FakeGateway(score_data={"score": 60, "questions": ["a", "b", "c", "d"]})
    _, token = create_user()

    response = client.post(
        "/api/ai/transparency-score",
        json={"productData": PRODUCT_DATA, "answers": ANSWERS},
        headers=auth(token),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    # round(60*0.6 + 50*0.4) + 5 for skincare at half completion
    assert data["transparencyScore"] == 61
    assert data["scoreCategory"] == "Good"
    assert data["completionPercentage"] == 100
    assert rng.calls == []


def test_transparency_score_falls_back_to_baseline(client, rng):
    app.dependency_overrides[get_ai_gateway] = lambda: FakeGateway()
    _, token = create_user()

    response = client.post(
        "/api/ai/transparency-score",
        json={"productData": {"name": "Gadget", "category": "Electronics"}, "answers": {"origin": "China"}},
        headers=auth(token),
    )

    # round(50*0.6 + 100*0.4) + 1 for electronics
    assert response.json()["data"]["transparencyScore"] == 71
    assert rng.calls == [(40, 79)]


def test_analyze_product_returns_analysis(client, gateway):
    _, token = create_user()

    response = client.post(
        "/api/ai/analyze-product",
        json={"product": PRODUCT_DATA, "answers": ANSWERS},
        headers=auth(token),
    )

    assert response.status_code == 200
    assert response.json()["data"]["summary"] == "Clear disclosure of sourcing and packaging."
    assert len(gateway.analysis_calls) == 1


def test_ai_routes_require_authentication(client):
    assert client.post("/api/ai/analyze-product", json={"product": {}, "answers": {}}).status_code == 401


def test_root_and_health(client):
    assert client.get("/").json() == {"message": "Product Transparency API is running"}

    health = client.get("/health")

    assert health.status_code == 200
    body = health.json()
    assert body["status"] == "OK"
    assert body["environment"] == "test"
    assert "uptime" in body


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json()["success"] is False
