"""Tests for the reset and seed scripts."""

import random

from sqlmodel import Session, select

from models.client import Client
from models.document import Document, LineItem
from models.settings import CompanySettings
from reset_db import reset_db
from seed_data import create_clients, create_documents


def test_reset_db(engine):
    company = reset_db(engine, company_name="Lens & Light")
    assert company.company_name == "Lens & Light"

    with Session(engine) as session:
        assert len(session.exec(select(CompanySettings)).all()) == 1
        assert len(session.exec(select(Client)).all()) == 1
        assert session.exec(select(Document)).all() == []


def test_seed_advances_counters(session: Session):
    random.seed(7)
    clients = create_clients(session, count=3)
    documents = create_documents(session, clients, count=12)

    assert len(session.exec(select(Client)).all()) == 3
    assert len(session.exec(select(Document)).all()) == 12
    for document in documents:
        assert document.client_name in {c.name for c in clients}
        assert session.exec(select(LineItem).where(LineItem.document_id == document.id)).all()

    company = session.exec(select(CompanySettings)).one()
    assert company.next_invoice_number + company.next_quotation_number + company.next_proforma_number == 12 + 3
