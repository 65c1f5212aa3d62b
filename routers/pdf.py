"""API routes for PDF generation."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from loguru import logger
from sqlmodel import Session

from db.session import get_session
from services.company import get_company_settings
from services.documents import get_document
from services.pdf_generator import PrintOptions, document_title, generate_document_pdf
from services.storage import LogoStorage, get_logo_storage

router = APIRouter()


@router.get("/documents/{document_id}/pdf")
def get_pdf(
    document_id: str,
    download: bool = False,
    margin_mm: float = Query(0, ge=0, le=50),
    exact_colors: bool = True,
    db: Session = Depends(get_session),
    storage: LogoStorage = Depends(get_logo_storage),
):
    """
    Render a stored document as an A4 PDF.

    Shown inline unless `download` is set.
    """
    document = get_document(db, document_id)
    company = get_company_settings(db)
    options = PrintOptions(margin_mm=margin_mm, exact_colors=exact_colors)

    try:
        pdf_bytes = generate_document_pdf(
            document,
            list(document.items),
            company,
            options=options,
            logo_path=storage.local_path(company.logo_url),
        )
    except Exception as e:
        logger.error(f"Failed to generate PDF for {document.document_number}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate PDF")

    disposition = "attachment" if download else "inline"
    filename = f"{document_title(document)}.pdf"

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"{disposition}; filename={filename}"
        }
    )
