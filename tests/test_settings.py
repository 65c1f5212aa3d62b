"""Tests for company settings, custom units and logo upload."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from models.settings import CompanySettings
from services.errors import ValidationError
from services.storage import LogoStorage

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def profile():
    return {
        "company_name": "Lens & Light Studio",
        "company_email": "hello@lenslight.test",
        "company_address": "12 Park Road\nPune",
        "tax_number": "27AAPFU0939F1ZV",
        "bank_name": "State Bank",
        "account_number": "001122334455",
        "ifsc_code": "SBIN0000001",
        "currency": "inr",
        "tax_enabled": True,
        "tax_rate": "18",
        "default_payment_terms": "Due on receipt",
    }


def test_defaults_created_on_first_read(client: TestClient, session: Session):
    response = client.get("/api/settings")
    assert response.status_code == 200
    data = response.json()

    assert data["company_name"] == "My Company"
    assert data["currency"] == "USD"
    assert data["tax_enabled"] is True
    assert Decimal(str(data["tax_rate"])) == Decimal("10")
    assert data["default_payment_terms"] == "Due within 30 days"
    assert (data["next_invoice_number"], data["next_quotation_number"], data["next_proforma_number"]) == (1, 1, 1)

    # A second read returns the same row
    assert client.get("/api/settings").json()["id"] == data["id"]
    assert len(session.exec(select(CompanySettings)).all()) == 1


def test_update_settings(client: TestClient, profile: dict):
    response = client.put("/api/settings", json=profile)
    assert response.status_code == 200
    data = response.json()

    assert data["company_name"] == "Lens & Light Studio"
    assert data["currency"] == "INR"
    assert Decimal(str(data["tax_rate"])) == Decimal("18")
    assert data["ifsc_code"] == "SBIN0000001"


def test_update_leaves_counters_alone(client: TestClient, session: Session, profile: dict):
    session.add(CompanySettings(next_invoice_number=42, next_quotation_number=7, next_proforma_number=3))
    session.commit()

    client.put("/api/settings", json=profile)

    session.expire_all()
    stored = session.exec(select(CompanySettings)).one()
    assert (stored.next_invoice_number, stored.next_quotation_number, stored.next_proforma_number) == (42, 7, 3)


def test_blank_company_name_rejected(client: TestClient, profile: dict):
    profile["company_name"] = "   "
    response = client.put("/api/settings", json=profile)
    assert response.status_code == 422
    assert response.json()["detail"] == "Company name is required"


def test_tax_rate_bounds(client: TestClient, profile: dict):
    profile["tax_rate"] = "101"
    assert client.put("/api/settings", json=profile).status_code == 422


def test_new_documents_follow_settings(client: TestClient, profile: dict):
    profile["tax_enabled"] = False
    client.put("/api/settings", json=profile)

    data = client.post("/api/editors", json={}).json()
    assert data["currency"] == "INR"
    assert data["tax_enabled"] is False
    assert data["payment_terms"] == "Due on receipt"


def test_custom_units(client: TestClient):
    response = client.post("/api/settings/units", json={"label": " Reels "})
    assert response.status_code == 201
    assert response.json() == {"default_units": ["item", "shots", "sec", "minute"], "custom_units": ["Reels"]}

    # Case-insensitive duplicates are ignored
    response = client.post("/api/settings/units", json={"label": "reels"})
    assert response.json()["custom_units"] == ["Reels"]

    client.post("/api/settings/units", json={"label": "Frames"})
    response = client.delete("/api/settings/units/REELS")
    assert response.status_code == 200
    assert response.json()["custom_units"] == ["Frames"]

    assert client.get("/api/settings/units").json()["custom_units"] == ["Frames"]


def test_blank_unit_rejected(client: TestClient):
    response = client.post("/api/settings/units", json={"label": "  "})
    assert response.status_code == 422


def test_upload_logo(client: TestClient, storage: LogoStorage):
    response = client.post(
        "/api/settings/logo",
        files={"file": ("logo.PNG", PNG, "image/png")},
    )
    assert response.status_code == 200
    logo_url = response.json()["logo_url"]
    assert logo_url.startswith("/media/")
    assert logo_url.endswith(".png")

    path = storage.local_path(logo_url)
    assert path is not None
    assert path.read_bytes() == PNG


def test_upload_rejects_non_image(client: TestClient):
    response = client.post(
        "/api/settings/logo",
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Please upload an image file"
    assert client.get("/api/settings").json()["logo_url"] is None


def test_update_keeps_logo_unless_given(client: TestClient, profile: dict):
    logo_url = client.post(
        "/api/settings/logo",
        files={"file": ("logo.png", PNG, "image/png")},
    ).json()["logo_url"]

    assert client.put("/api/settings", json=profile).json()["logo_url"] == logo_url

    response = client.delete("/api/settings/logo")
    assert response.json()["logo_url"] is None


def test_storage_rejects_non_image(storage: LogoStorage):
    with pytest.raises(ValidationError, match="Please upload an image file"):
        storage.save(b"hello", "notes.txt", "text/plain")
    assert storage.local_path("/media/unknown.png") is None
    assert storage.local_path("https://cdn.example.com/logo.png") is None
