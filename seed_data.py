"""
Database Seeder Script

Generates fake data for testing purposes using Faker.
Creates address-book clients and documents of every type. Documents go
through the regular create path, so number counters advance as they would
from the form.

Usage:
    python seed_data.py [--clients 30] [--documents 100]
"""

import argparse
import random
from datetime import timedelta
from decimal import Decimal

from faker import Faker
from loguru import logger
from sqlmodel import Session

from core.logging import configure_logging
from db.session import engine
from models.client import Client
from models.document import Document
from models.enums import DocumentStatus, DocumentType, DEFAULT_UNITS
from schemas.document import DocumentPayload, LineItemPayload
from services.documents import create_document

fake = Faker('en_IN')

# Sample descriptions for line items
SERVICE_DESCRIPTIONS = [
    "Product photography - half day",
    "Video editing",
    "Colour grading",
    "Drone footage",
    "Studio rental",
    "Motion graphics",
    "Voice-over recording",
    "Social media cut-downs",
    "Location scouting",
    "Script writing",
    "Sound design",
    "Event coverage",
]


def create_clients(session: Session, count: int = 30) -> list[Client]:
    """Create fake clients."""
    logger.info(f"Creating {count} clients...")
    clients = []

    for _ in range(count):
        client = Client(
            name=fake.company() if random.random() > 0.3 else fake.name(),
            email=fake.email(),
            phone=fake.phone_number() if random.random() > 0.2 else None,
            address=fake.address(),
            tax_number=fake.bothify("##?????####?#Z#").upper() if random.random() > 0.5 else None,
            pan_number=fake.bothify("?????####?").upper() if random.random() > 0.5 else None,
        )
        clients.append(client)
        session.add(client)

    session.commit()
    logger.info(f"Created {count} clients")
    return clients


def fake_payload(client: Client) -> DocumentPayload:
    document_date = fake.date_between(start_date='-1y', end_date='today')
    items = [
        LineItemPayload(
            description=random.choice(SERVICE_DESCRIPTIONS),
            unit=random.choice(DEFAULT_UNITS),
            quantity=Decimal(random.randint(1, 10)),
            rate=Decimal(random.randint(10, 500) * 10),
        )
        for _ in range(random.randint(1, 5))
    ]
    return DocumentPayload(
        document_type=random.choice(list(DocumentType)),
        document_date=document_date,
        due_date=document_date + timedelta(days=30) if random.random() > 0.3 else None,
        status=random.choice(list(DocumentStatus)),
        client_name=client.name,
        client_email=client.email,
        client_address=client.address,
        client_tax_number=client.tax_number,
        client_pan_number=client.pan_number,
        notes=fake.sentence() if random.random() > 0.7 else None,
        items=items,
    )


def create_documents(session: Session, clients: list[Client], count: int = 100) -> list[Document]:
    """Create fake documents with line items."""
    logger.info(f"Creating {count} documents...")
    documents = []
    for i in range(count):
        documents.append(create_document(session, fake_payload(random.choice(clients))))
        if (i + 1) % 50 == 0:
            logger.info(f"  Processed {i + 1}/{count} documents...")
    logger.info(f"Created {count} documents")
    return documents


def main():
    parser = argparse.ArgumentParser(description='Seed database with fake data')
    parser.add_argument('--clients', type=int, default=30, help='Number of clients to create (default: 30)')
    parser.add_argument('--documents', type=int, default=100, help='Number of documents to create (default: 100)')

    args = parser.parse_args()
    configure_logging()

    with Session(engine) as session:
        clients = create_clients(session, args.clients)
        documents = create_documents(session, clients, args.documents)

        type_counts = {}
        for d in documents:
            type_counts[d.document_type.value] = type_counts.get(d.document_type.value, 0) + 1

        logger.info(f"Total clients: {len(clients)}")
        logger.info(f"Total documents: {len(documents)}")
        for kind, count in type_counts.items():
            logger.info(f"  - {kind}: {count}")


if __name__ == "__main__":
    main()
