"""
Estimate document tests: PDF bytes from snapshots and saved projects.
"""

from roofmaster.pdf_generator import _safe, generate_estimate_pdf, is_valid_logo_uri

# 1x1 transparent PNG
TINY_PNG = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def _project_snapshot():
    return {
        "id": "abc-123",
        "address": "123 Main St, Springfield, IL 62701",
        "roofArea": 2000,
        "roofSquares": 20,
        "pitch": 6,
        "selectedMaterial": "three-tab",
        "materialPricePerSquare": 450,
        "laborRate": 50,
        "laborHours": 40,
        "estimateTotal": 10162,
        "createdAt": "2024-05-01T12:00:00",
        "microBreakdown": {
            "shingles": 5580, "waste": 837, "underlayment": 315, "flashing": 90,
            "nails": 120, "venting": 350, "ridgeCap": 55, "labor": 2000, "additional": 200,
        },
    }


def test_generate_pdf_bytes():
    pdf = generate_estimate_pdf(_project_snapshot(), {"companyName": "Acme Roofing"})
    assert isinstance(pdf, bytes)
    assert pdf.startswith(b"%PDF")


def test_generate_pdf_with_logo_and_no_breakdown():
    project = _project_snapshot()
    project["microBreakdown"] = None
    pdf = generate_estimate_pdf(project, {"companyName": "Acme", "logoUri": TINY_PNG})
    assert pdf.startswith(b"%PDF")


def test_generate_pdf_minimal_project():
    assert generate_estimate_pdf({"address": "Somewhere"}).startswith(b"%PDF")


def test_broken_logo_falls_back_to_initial():
    pdf = generate_estimate_pdf(_project_snapshot(), {"logoUri": "data:image/png;base64,bm90IGFuIGltYWdl"})
    assert pdf.startswith(b"%PDF")


def test_logo_uri_validation():
    assert is_valid_logo_uri("data:image/png;base64,xyz")
    assert is_valid_logo_uri("https://cdn.example.com/logo.png")
    assert is_valid_logo_uri("file:///var/mobile/logo.png")
    assert not is_valid_logo_uri("http://example.com/logo.png")
    assert not is_valid_logo_uri("javascript:alert(1)")
    assert not is_valid_logo_uri(None)


def test_safe_text():
    assert _safe("Smith\u2019s Roofing \u2014 \u201cbest\u201d") == "Smith's Roofing  -  \"best\""
    assert _safe(None) == ""


def test_generate_pdf_endpoint(client):
    resp = client.post("/api/generate-pdf", json={
        "project": _project_snapshot(),
        "branding": {"companyName": "Acme Roofing", "logoUri": TINY_PNG},
    })
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert "abc-123" in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")


def test_generate_pdf_requires_project(client):
    assert client.post("/api/generate-pdf", json={}).status_code == 400


def test_saved_project_pdf(client, auth_headers, other_headers):
    project = client.post("/api/projects", json={
        "address": "9 Elm St", "length": 40, "width": 50,
    }, headers=auth_headers).json()["project"]
    client.post(f"/api/projects/{project['id']}/estimate",
                json={"selectedMaterial": "architectural"}, headers=auth_headers)
    url = f"/api/projects/{project['id']}/pdf"

    by_header = client.get(url, headers=auth_headers)
    assert by_header.status_code == 200
    assert by_header.content.startswith(b"%PDF")

    token = auth_headers["Authorization"].split(" ", 1)[1]
    by_query = client.get(f"{url}?token={token}")
    assert by_query.status_code == 200

    assert client.get(url).status_code == 401
    assert client.get(f"{url}?token=garbage").status_code == 401
    assert client.get(url, headers=other_headers).status_code == 403
