from io import BytesIO

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from barcode_engine.config import settings
from barcode_engine.main import app

# barcode_engine/tests/test_api.py


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == settings.API_VERSION
    assert 0 <= data["memory_usage"] <= 100
    assert response.headers["server"] == f"BarcodeEngine/{settings.API_VERSION}"


def test_formats(client: TestClient):
    response = client.get("/api/formats")
    assert response.status_code == 200
    formats = response.json()
    assert len(formats) == 10
    code128 = next(f for f in formats if f["code"] == "CODE128")
    assert code128["capacity"]["maxLength"] == 80
    assert code128["industryStandards"] == ["GS1-128", "ISBT 128", "USS Code 128"]


def test_validate(client: TestClient):
    response = client.post("/api/validate", json={"content": "123456789012", "format": "EAN13"})
    assert response.status_code == 200
    data = response.json()
    assert data["isValid"] is False
    assert data["errors"][0]["message"] == "Content must be at least 13 characters for EAN13"
    assert data["errors"][0]["type"] == "content"
    assert "recommendedSettings" in data


def test_generate_store_and_delete(client: TestClient):
    response = client.post("/api/generate", json={"content": "HELLO", "displayValue": False})
    assert response.status_code == 200
    result = response.json()
    assert result["isValid"] is True
    assert result["metadata"]["dataLength"] == 5
    assert result["metadata"]["actualSize"]["width"] == 40
    assert result["metadata"]["checksum"] == "40"

    barcode_id = result["id"]
    assert client.get(f"/api/barcodes/{barcode_id}").json()["id"] == barcode_id
    assert [r["id"] for r in client.get("/api/barcodes").json()] == [barcode_id]

    assert client.delete(f"/api/barcodes/{barcode_id}").status_code == 204
    assert client.get(f"/api/barcodes/{barcode_id}").status_code == 404
    assert client.delete(f"/api/barcodes/{barcode_id}").status_code == 404


def test_generate_invalid_content_returns_failed_result(client: TestClient):
    response = client.post("/api/generate", json={"content": "", "format": "CODE39"})
    assert response.status_code == 200
    result = response.json()
    assert result["isValid"] is False
    assert result["errorType"] == "ContentError"
    assert "metadata" not in result or result["metadata"] is None


def test_generate_missing_content_is_validation_error(client: TestClient):
    response = client.post("/api/generate", json={"format": "CODE128"})
    assert response.status_code == 400
    data = response.json()
    assert data["error_type"] == "ValidationError"
    assert "content" in data["message"]


def test_clear_barcodes(client: TestClient):
    client.post("/api/generate", json={"content": "ONE"})
    client.post("/api/generate", json={"content": "TWO"})
    response = client.delete("/api/barcodes")
    assert response.status_code == 200
    assert response.json()["removed"] >= 2
    assert client.get("/api/barcodes").json() == []


def test_generate_png(client: TestClient):
    response = client.get("/api/generate", params={"content": "HELLO", "display_value": False})
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(b"\x89PNG")


def test_generate_png_with_invalid_content(client: TestClient):
    response = client.get("/api/generate", params={"content": "123", "format": "EAN13"})
    assert response.status_code == 400
    data = response.json()
    assert data["error_type"] == "ContentError"
    assert "at least 13" in data["message"]


def test_templates(client: TestClient):
    templates = client.get("/api/templates").json()
    assert len(templates) == 6
    assert client.get("/api/templates", params={"category": "Healthcare"}).json()[0]["id"] == "pharmaceutical"
    assert client.get("/api/templates/high-density").json()["format"] == "CODE93"
    assert client.get("/api/templates/missing").status_code == 404


def test_generate_from_template(client: TestClient):
    response = client.post("/api/templates/ean13-retail/generate", params={"content": "4006381333931"})
    assert response.status_code == 200
    result = response.json()
    assert result["isValid"] is True
    assert result["settings"]["content"] == "4006381333931"
    assert result["settings"]["width"] == 1.5
    assert client.post("/api/templates/missing/generate").status_code == 404


def test_bulk_generate(client: TestClient):
    response = client.post("/api/bulk/generate", json={
        "contentList": ["A1", "", "B2"],
        "baseSettings": {"content": "", "format": "CODE128"},
        "namingPattern": "Shelf",
    })
    assert response.status_code == 200
    batch = response.json()
    assert batch["name"] == "Shelf"
    assert batch["status"] == "completed"
    assert batch["statistics"]["totalGenerated"] == 3
    assert batch["statistics"]["failedGenerated"] == 1
    assert batch["statistics"]["formatDistribution"] == {"CODE128": 2}


def test_bulk_generate_rejects_oversized_batches(client: TestClient, monkeypatch):
    monkeypatch.setattr(settings, "BATCH_MAX_ITEMS", 2)
    response = client.post("/api/bulk/generate", json={
        "contentList": ["A", "B", "C"],
        "baseSettings": {"content": ""},
    })
    assert response.status_code == 413


def test_upload_text_file(client: TestClient):
    files = [("files", ("items.txt", BytesIO(b"ONE\nTWO\n\nTHREE\n"), "text/plain"))]
    response = client.post("/api/bulk/generate_upload", files=files, data={"format": "CODE39"})
    assert response.status_code == 200
    data = response.json()
    file_meta = data["files_processed"][0]
    assert file_meta["status"] == "Uploaded"
    assert file_meta["item_count"] == 3
    assert data["batch"]["statistics"]["successfulGenerated"] == 3
    assert data["batch"]["statistics"]["formatDistribution"] == {"CODE39": 3}


def test_upload_csv_and_excel(client: TestClient):
    excel = BytesIO()
    pd.DataFrame({"content": ["X1", "X2"]}).to_excel(excel, index=False)
    excel.seek(0)
    files = [
        ("files", ("items.csv", BytesIO(b"data,note\nA1,first\nA2,second\n,blank\n"), "text/csv")),
        ("files", ("items.xlsx", excel, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")),
    ]
    response = client.post("/api/bulk/generate_upload", files=files)
    assert response.status_code == 200
    data = response.json()
    assert [f["item_count"] for f in data["files_processed"]] == [2, 2]
    assert [r["settings"]["content"] for r in data["batch"]["results"]] == ["A1", "A2", "X1", "X2"]


def test_upload_with_template(client: TestClient):
    files = [("files", ("items.txt", BytesIO(b"A111B\n"), "text/plain"))]
    response = client.post("/api/bulk/generate_upload", files=files, data={"template_id": "library-codabar"})
    assert response.status_code == 200
    result = response.json()["batch"]["results"][0]
    assert result["isValid"] is True
    assert result["settings"]["format"] == "codabar"


def test_upload_failures(client: TestClient):
    files = [
        ("files", ("image.jpg", BytesIO(b"fakeimagedata"), "image/jpeg")),
        ("files", ("items.csv", BytesIO(b"foo\n1\n"), "text/csv")),
    ]
    response = client.post("/api/bulk/generate_upload", files=files)
    assert response.status_code == 200
    data = response.json()
    assert [f["status"] for f in data["files_processed"]] == ["Failed", "Failed"]
    assert "Invalid file type" in data["files_processed"][0]["message"]
    assert "Missing 'data' or 'content' column" in data["files_processed"][1]["message"]
    assert data["batch"] is None


def test_upload_too_many_files(client: TestClient):
    files = [("files", (f"test{i}.txt", BytesIO(b"A"), "text/plain")) for i in range(settings.MAX_UPLOAD_FILES + 1)]
    response = client.post("/api/bulk/generate_upload", files=files)
    assert response.status_code == 413
    assert "Too many files" in response.json()["detail"]


def test_generate_png_rejects_non_finite_width(client: TestClient):
    response = client.get("/api/generate", params={"content": "HELLO", "width": "nan"})
    assert response.status_code == 400
    assert response.json()["error_type"] == "ValidationError"


def test_generate_png_allows_oversized_dimensions(client: TestClient):
    response = client.get("/api/generate", params={"content": "HELLO", "width": 12, "height": 600})
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"


def test_validate_oversized_dimensions_are_warnings(client: TestClient):
    response = client.post("/api/validate", json={"content": "HELLO", "width": 12, "height": 600})
    data = response.json()
    assert data["isValid"] is True
    assert "Very wide bars may cause scanning issues" in data["warnings"]
