from conftest import auth, create_product, create_report, create_user


def test_stats_for_empty_report_set_are_zeroed(client):
    _, token = create_user()

    response = client.get("/api/reports/stats/overview", headers=auth(token))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["overview"] == {
        "totalReports": 0,
        "averageScore": 0,
        "maxScore": 0,
        "minScore": 0,
        "completedReports": 0,
        "pendingReports": 0,
        "draftReports": 0,
    }
    assert [bucket["count"] for bucket in data["scoreDistribution"]] == [0, 0, 0, 0, 0]
    assert [bucket["range"] for bucket in data["scoreDistribution"]] == ["0-19", "20-39", "40-59", "60-79", "80-100"]


def test_stats_are_scoped_to_caller(client):
    alice_id, alice_token = create_user()
    bob_id, _ = create_user(name="Bob", email="bob@example.com")
    product_id = create_product()
    for score, status in [(10, "draft"), (20, "pending"), (59, "completed"), (80, "completed"), (100, "completed")]:
        create_report(alice_id, product_id, score=score, status=status)
    create_report(bob_id, product_id, score=45)

    data = client.get("/api/reports/stats/overview", headers=auth(alice_token)).json()["data"]

    overview = data["overview"]
    assert overview["totalReports"] == 5
    assert overview["averageScore"] == 53.8
    assert overview["maxScore"] == 100
    assert overview["minScore"] == 10
    assert overview["completedReports"] == 3
    assert overview["pendingReports"] == 1
    assert overview["draftReports"] == 1
    # 100 lands in the last bucket, 20 in the second
    assert [bucket["count"] for bucket in data["scoreDistribution"]] == [1, 1, 1, 0, 2]


def test_stats_require_authentication(client):
    assert client.get("/api/reports/stats/overview").status_code == 401
