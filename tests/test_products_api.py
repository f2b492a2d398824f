from conftest import auth, create_product, create_report, create_user

NEW_PRODUCT = {
    "name": "  Citrus Cleaner ",
    "category": "Cleaning Products",
    "brand": "Fresh Co",
    "ingredients": ["Water", " Citric acid "],
    "certifications": ["EU Ecolabel"],
    "packaging": "Recycled PET",
}


def test_create_product(client):
    _, token = create_user()

    response = client.post("/api/products", json=NEW_PRODUCT, headers=auth(token))

    assert response.status_code == 201
    product = response.json()["data"]
    assert product["name"] == "Citrus Cleaner"
    assert product["ingredients"] == ["Water", "Citric acid"]
    assert product["ingredientCount"] == 2
    assert product["certifications"] == ["EU Ecolabel"]
    assert "createdAt" in product


def test_create_product_validation(client):
    _, token = create_user()

    no_ingredients = client.post("/api/products", json=dict(NEW_PRODUCT, ingredients=[]), headers=auth(token))
    bad_category = client.post("/api/products", json=dict(NEW_PRODUCT, category="Toys"), headers=auth(token))

    assert no_ingredients.status_code == 400
    assert no_ingredients.json()["details"][0]["field"] == "ingredients"
    assert bad_category.status_code == 400


def test_products_require_authentication(client):
    assert client.get("/api/products").status_code == 401


def test_search_and_category_filter(client):
    _, token = create_user()
    create_product(name="Glow Serum", category="Skincare", brand="Lumen")
    create_product(name="Oat Bar", category="Food & Beverage", brand="Grain House", description="Crunchy snack")
    create_product(name="Night Cream", category="Skincare", brand="Lumen")

    by_brand = client.get("/api/products?search=lumen", headers=auth(token)).json()
    by_description = client.get("/api/products?search=crunchy", headers=auth(token)).json()
    by_category = client.get("/api/products", params={"category": "Food & Beverage"}, headers=auth(token)).json()

    assert by_brand["total"] == 2
    assert [product["name"] for product in by_description["data"]] == ["Oat Bar"]
    assert by_category["count"] == 1
    assert by_category["totalPages"] == 1


def test_update_product_partial(client):
    _, token = create_user()
    product_id = create_product()

    response = client.put(f"/api/products/{product_id}", json={"brand": "Lumen Labs"}, headers=auth(token))

    assert response.status_code == 200
    assert response.json()["data"]["brand"] == "Lumen Labs"
    assert response.json()["data"]["name"] == "Glow Serum"


def test_update_product_cannot_clear_ingredients(client):
    _, token = create_user()
    product_id = create_product()

    response = client.put(f"/api/products/{product_id}", json={"ingredients": None}, headers=auth(token))

    assert response.status_code == 400
    assert client.get(f"/api/products/{product_id}", headers=auth(token)).json()["data"]["ingredientCount"] == 2


def test_delete_product(client):
    _, token = create_user()
    product_id = create_product()

    assert client.delete(f"/api/products/{product_id}", headers=auth(token)).status_code == 200
    assert client.get(f"/api/products/{product_id}", headers=auth(token)).status_code == 404


def test_delete_product_with_reports_is_rejected(client):
    user_id, token = create_user()
    product_id = create_product()
    create_report(user_id, product_id)

    response = client.delete(f"/api/products/{product_id}", headers=auth(token))

    assert response.status_code == 400
    assert client.get(f"/api/products/{product_id}", headers=auth(token)).status_code == 200
