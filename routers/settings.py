from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlmodel import Session
from datetime import datetime

from db.session import get_session
from models.enums import DEFAULT_UNITS
from schemas.settings import CompanySettingsSchema, CompanySettingsUpdate, UnitCreate, UnitsResponse
from services.company import add_custom_unit, get_company_settings, remove_custom_unit
from services.errors import ValidationError
from services.storage import LogoStorage, get_logo_storage

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=CompanySettingsSchema)
def get_settings(session: Session = Depends(get_session)):
    """Get company settings, created with defaults on first access."""
    return get_company_settings(session)


@router.put("", response_model=CompanySettingsSchema)
def update_settings(
    payload: CompanySettingsUpdate,
    session: Session = Depends(get_session),
):
    """Update the company profile and defaults. Number counters are left alone."""
    settings = get_company_settings(session)

    data = payload.model_dump()
    data["company_name"] = data["company_name"].strip()
    if not data["company_name"]:
        raise ValidationError("Company name is required")
    data["currency"] = data["currency"].upper()
    data["custom_units"] = [unit.strip() for unit in data["custom_units"] if unit.strip()]
    # The logo is managed through /logo; only an explicit value overrides it
    if "logo_url" not in payload.model_fields_set:
        data.pop("logo_url")
    for key, value in data.items():
        setattr(settings, key, value)
    settings.updated_at = datetime.utcnow()

    session.add(settings)
    session.commit()
    session.refresh(settings)
    return settings


@router.get("/units", response_model=UnitsResponse)
def list_units(session: Session = Depends(get_session)):
    settings = get_company_settings(session)
    return UnitsResponse(default_units=list(DEFAULT_UNITS), custom_units=settings.custom_units or [])


@router.post("/units", response_model=UnitsResponse, status_code=201)
def add_unit(payload: UnitCreate, session: Session = Depends(get_session)):
    """Add a custom unit label; duplicates are ignored."""
    settings = add_custom_unit(session, payload.label)
    return UnitsResponse(default_units=list(DEFAULT_UNITS), custom_units=settings.custom_units)


@router.delete("/units/{label}", response_model=UnitsResponse)
def delete_unit(label: str, session: Session = Depends(get_session)):
    settings = remove_custom_unit(session, label)
    return UnitsResponse(default_units=list(DEFAULT_UNITS), custom_units=settings.custom_units)


@router.post("/logo", response_model=CompanySettingsSchema)
async def upload_logo(
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
    storage: LogoStorage = Depends(get_logo_storage),
):
    """Upload a company logo and keep its public URL in the settings."""
    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Please upload an image file")

    data = await file.read()
    url = storage.save(data, file.filename, file.content_type)

    settings = get_company_settings(session)
    settings.logo_url = url
    settings.updated_at = datetime.utcnow()
    session.add(settings)
    session.commit()
    session.refresh(settings)
    return settings


@router.delete("/logo", response_model=CompanySettingsSchema)
def remove_logo(session: Session = Depends(get_session)):
    """Forget the logo reference. The stored file is left in place."""
    settings = get_company_settings(session)
    settings.logo_url = None
    settings.updated_at = datetime.utcnow()
    session.add(settings)
    session.commit()
    session.refresh(settings)
    return settings
