"""API routes for invoices, quotes and proformas."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from db.session import get_session
from models.enums import DocumentType
from schemas.document import (
    DocumentListResponse,
    DocumentPayload,
    DocumentResponse,
    DocumentSummary,
    NextNumberResponse,
)
from services.company import get_company_settings
from services.documents import (
    create_document as create_document_record,
    delete_document as delete_document_record,
    get_document as get_document_record,
    list_documents as list_document_records,
    update_document as update_document_record,
)
from services.numbering import preview_document_number

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=DocumentListResponse)
def list_documents(session: Session = Depends(get_session)):
    """List stored documents split into invoices, quotes and proformas."""
    grouped = list_document_records(session)
    return DocumentListResponse(
        invoices=[DocumentSummary.model_validate(d) for d in grouped[DocumentType.INVOICE]],
        quotes=[DocumentSummary.model_validate(d) for d in grouped[DocumentType.QUOTE]],
        proformas=[DocumentSummary.model_validate(d) for d in grouped[DocumentType.PROFORMA]],
        total=sum(len(documents) for documents in grouped.values()),
    )


@router.get("/next-number", response_model=NextNumberResponse)
def next_number(
    document_type: DocumentType = Query(DocumentType.INVOICE),
    session: Session = Depends(get_session),
):
    """Number a new document of this type would get today. Nothing is reserved."""
    company = get_company_settings(session)
    return NextNumberResponse(
        document_type=document_type,
        document_number=preview_document_number(company, document_type, date.today()),
    )


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
def create_document(payload: DocumentPayload, session: Session = Depends(get_session)):
    """Create a document with its line items and advance the number counter."""
    document = create_document_record(session, payload)
    return DocumentResponse.model_validate(document)


@router.get("/{document_id}", response_model=DocumentResponse)
def get_document(document_id: str, session: Session = Depends(get_session)):
    return DocumentResponse.model_validate(get_document_record(session, document_id))


@router.put("/{document_id}", response_model=DocumentResponse)
def update_document(document_id: str, payload: DocumentPayload, session: Session = Depends(get_session)):
    """Save a document; its line items are replaced as a whole."""
    document = update_document_record(session, document_id, payload)
    return DocumentResponse.model_validate(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document(document_id: str, session: Session = Depends(get_session)):
    delete_document_record(session, document_id)
    return None
