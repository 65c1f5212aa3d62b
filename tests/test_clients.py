"""Tests for the client address book API."""

from datetime import datetime, timedelta

from fastapi.testclient import TestClient
from sqlmodel import Session

from models.client import Client


def test_create_client(client: TestClient):
    response = client.post("/api/clients", json={
        "name": "  John Doe ",
        "email": "john@example.com",
        "tax_number": "27AAPFU0939F1ZV",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "John Doe"
    assert data["email"] == "john@example.com"
    assert data["tax_number"] == "27AAPFU0939F1ZV"
    assert data["pan_number"] is None


def test_create_client_requires_name(client: TestClient):
    assert client.post("/api/clients", json={"email": "x@example.com"}).status_code == 422
    assert client.post("/api/clients", json={"name": "   "}).status_code == 422


def test_list_clients_ordered_by_name(client: TestClient, session: Session):
    for name in ("Zeta Films", "Acme Corp", "Midway Media"):
        session.add(Client(name=name))
    session.commit()

    response = client.get("/api/clients")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert [c["name"] for c in data["clients"]] == ["Acme Corp", "Midway Media", "Zeta Films"]


def test_get_client(client: TestClient, session: Session):
    saved = Client(name="Acme Corp", phone="+91 98765 43210")
    session.add(saved)
    session.commit()

    response = client.get(f"/api/clients/{saved.id}")
    assert response.status_code == 200
    assert response.json()["phone"] == "+91 98765 43210"


def test_update_client(client: TestClient, session: Session):
    saved = Client(name="Acme Corp", email="old@acme.test", created_at=datetime.utcnow() - timedelta(days=1))
    session.add(saved)
    session.commit()
    client_id = saved.id

    response = client.put(f"/api/clients/{client_id}", json={"email": "new@acme.test"})
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Acme Corp"
    assert data["email"] == "new@acme.test"
    assert data["updated_at"] > data["created_at"]


def test_delete_client(client: TestClient, session: Session):
    saved = Client(name="Acme Corp")
    session.add(saved)
    session.commit()
    client_id = saved.id

    response = client.delete(f"/api/clients/{client_id}")
    assert response.status_code == 204

    session.expire_all()
    assert session.get(Client, client_id) is None


def test_delete_client_keeps_document_snapshot(client: TestClient, session: Session):
    saved = Client(name="Acme Corp", email="billing@acme.test")
    session.add(saved)
    session.commit()
    client_id = saved.id

    document = client.post("/api/documents", json={
        "client_name": saved.name,
        "client_email": saved.email,
    }).json()
    client.delete(f"/api/clients/{client_id}")

    stored = client.get(f"/api/documents/{document['id']}").json()
    assert stored["client_name"] == "Acme Corp"
    assert stored["client_email"] == "billing@acme.test"


def test_client_not_found(client: TestClient):
    assert client.get("/api/clients/missing").status_code == 404
    assert client.put("/api/clients/missing", json={"name": "X"}).status_code == 404
    response = client.delete("/api/clients/missing")
    assert response.status_code == 404
    assert response.json()["detail"] == "Client not found"
