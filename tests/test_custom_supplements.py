"""Custom supplement API tests."""


def test_add_custom_supplement(client, auth_headers):
    """Test creating a custom supplement with every field."""
    response = client.post(
        "/api/custom-supplements/add",
        headers=auth_headers,
        json={
            "productName": "Beet Root Powder",
            "brandName": "Local Farm",
            "upcSku": "LF-001",
            "servingSize": "1 scoop",
            "productType": "Botanical",
            "description": "Nitrate boost before long rides",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Custom supplement added"
    assert data["customSupplementId"] > 0


def test_add_custom_supplement_requires_name(client, auth_headers):
    """Test a name is required."""
    response = client.post(
        "/api/custom-supplements/add", headers=auth_headers, json={"brandName": "Nobody"}
    )
    assert response.status_code == 400


def test_add_custom_supplement_blank_name(client, auth_headers):
    """Test a whitespace-only name is rejected."""
    response = client.post(
        "/api/custom-supplements/add", headers=auth_headers, json={"productName": "   "}
    )
    assert response.status_code == 400


def test_list_custom_supplements(client, auth_headers):
    """Test listing returns the user's supplements, newest first."""
    for name in ["First Blend", "Second Blend"]:
        client.post(
            "/api/custom-supplements/add", headers=auth_headers, json={"productName": name}
        )

    response = client.get("/api/custom-supplements", headers=auth_headers)
    assert response.status_code == 200
    supplements = response.json()["customSupplements"]
    assert [s["productName"] for s in supplements] == ["Second Blend", "First Blend"]
    assert supplements[0]["userId"] == auth_headers.user_id
    assert supplements[0]["brandName"] is None


def test_list_custom_supplements_scoped_to_user(client, auth_headers, other_auth_headers):
    """Test users never see each other's custom supplements."""
    client.post(
        "/api/custom-supplements/add", headers=auth_headers, json={"productName": "Private Mix"}
    )

    response = client.get("/api/custom-supplements", headers=other_auth_headers)
    assert response.json()["customSupplements"] == []


def test_custom_supplements_require_auth(client):
    """Test custom supplement endpoints need a token."""
    assert client.get("/api/custom-supplements").status_code == 401
