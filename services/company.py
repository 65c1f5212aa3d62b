"""Company settings singleton and custom unit labels."""

from datetime import datetime

from loguru import logger
from sqlmodel import Session, select

from models.enums import DEFAULT_UNITS
from models.settings import CompanySettings
from services.errors import ValidationError


def get_company_settings(session: Session) -> CompanySettings:
    """Return the settings row, creating it with defaults on first use."""
    company = session.exec(select(CompanySettings)).first()
    if not company:
        company = CompanySettings()
        session.add(company)
        session.commit()
        session.refresh(company)
        logger.info("Created default company settings")
    return company


def available_units(company: CompanySettings) -> list[str]:
    """Unit values a line item may use: defaults then custom units, lowercased."""
    units = list(DEFAULT_UNITS)
    for label in company.custom_units or []:
        value = label.lower()
        if value not in units:
            units.append(value)
    return units


def add_custom_unit(session: Session, label: str) -> CompanySettings:
    label = (label or "").strip()
    if not label:
        raise ValidationError("Unit label is required")

    company = get_company_settings(session)
    existing = [unit.lower() for unit in company.custom_units or []]
    if label.lower() in existing:
        return company

    # Reassign so the JSON column is flagged dirty
    company.custom_units = [*(company.custom_units or []), label]
    company.updated_at = datetime.utcnow()
    session.add(company)
    session.commit()
    session.refresh(company)
    return company


def remove_custom_unit(session: Session, label: str) -> CompanySettings:
    company = get_company_settings(session)
    company.custom_units = [
        unit for unit in company.custom_units or [] if unit.lower() != label.lower()
    ]
    company.updated_at = datetime.utcnow()
    session.add(company)
    session.commit()
    session.refresh(company)
    return company
