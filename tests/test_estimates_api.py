"""
/api/estimates and /api/materials: the stateless pricing surface.
"""


def test_materials_catalog(client):
    resp = client.get("/api/materials")
    assert resp.status_code == 200
    materials = {m["id"]: m for m in resp.json()["materials"]}
    assert set(materials) == {"three-tab", "architectural", "metal-pbr", "standing-seam"}
    arch = materials["architectural"]
    assert arch["basePricePerSquare"] == 500
    assert arch["bundlesPerSquare"] == 4
    assert arch["minPricePerSquare"] == 250
    assert arch["maxPricePerSquare"] == 1000
    assert arch["displayName"] == "Architectural Shingles"


def test_estimate_endpoint(client):
    resp = client.post("/api/estimates", json={
        "roofSquares": 20,
        "selectedMaterialId": "three-tab",
        "pricePerSquareOverride": 450,
        "laborRate": 50,
        "laborHours": 40,
        "additionalCosts": 200,
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["grandTotal"] == 10162
    assert data["materialsTotal"] == 7962
    assert data["shingleBundles"] == 60
    assert data["ridgeCap"] == 55


def test_estimate_needs_no_account(client):
    resp = client.post("/api/estimates", json={"roofSquares": 10, "selectedMaterialId": "metal-pbr"})
    assert resp.status_code == 200
    assert resp.json()["pricePerSquare"] == 800


def test_estimate_invalid_input(client):
    resp = client.post("/api/estimates", json={
        "roofSquares": 20, "selectedMaterialId": "three-tab", "laborHours": -5,
    })
    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["field"] == "laborHours"
    assert "laborHours" in detail["error"]


def test_estimate_string_number_rejected(client):
    resp = client.post("/api/estimates", json={"roofSquares": "20", "selectedMaterialId": "three-tab"})
    assert resp.status_code == 422
    assert resp.json()["detail"]["field"] == "roofSquares"


def test_estimate_unknown_material(client):
    resp = client.post("/api/estimates", json={"roofSquares": 20, "selectedMaterialId": "asphalt-deluxe"})
    assert resp.status_code == 404
    detail = resp.json()["detail"]
    assert detail["field"] == "selectedMaterialId"
    assert "three-tab" in detail["available"]


def test_health_and_config_status(client):
    assert client.get("/health").json()["status"] == "ok"
    status = client.get("/api/config/status").json()
    assert status == {
        "googleMapsConfigured": False,
        "googleSolarConfigured": False,
        "shovelsConfigured": False,
        "openaiConfigured": False,
    }
