import argparse

from loguru import logger
from sqlmodel import SQLModel, Session

import models  # noqa: F401  registers the tables on SQLModel.metadata
from core.logging import configure_logging
from db.session import engine
from models.client import Client
from models.settings import CompanySettings


def reset_db(target_engine=engine, company_name: str = "My Company") -> CompanySettings:
    """Drop and recreate every table, then store default company settings."""
    logger.info("Dropping all tables...")
    SQLModel.metadata.drop_all(target_engine)

    logger.info("Creating all tables...")
    SQLModel.metadata.create_all(target_engine)

    with Session(target_engine) as session:
        company = CompanySettings(company_name=company_name)
        session.add(company)

        client = Client(
            name="Client Test",
            email="client@test.com",
            address="20 Market Street"
        )
        session.add(client)
        session.commit()
        session.refresh(company)

        logger.info(f"Database reset complete. Settings ID: {company.id}")
        return company


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Drop and recreate the database")
    parser.add_argument("--company-name", default="My Company", help="Company name for the settings row")
    args = parser.parse_args()

    configure_logging()
    reset_db(company_name=args.company_name)
