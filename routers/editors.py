"""API routes for the document form: server-held editor sessions."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlmodel import Session

from db.session import get_session
from models.client import Client
from schemas.document import DocumentResponse
from schemas.editor import (
    AutoSaveStatus,
    ClientSelect,
    EditorLineResponse,
    EditorOpen,
    EditorResponse,
    EditorUpdate,
    LineItemUpdate,
)
from services.editor import DocumentEditor, EditorRegistry
from services.pdf_generator import document_title, generate_document_pdf
from services.storage import LogoStorage, get_logo_storage

router = APIRouter(prefix="/editors", tags=["editors"])


def get_editor_registry(request: Request) -> EditorRegistry:
    return request.app.state.editors


def editor_response(editor: DocumentEditor) -> EditorResponse:
    totals = editor.totals
    autosave = editor.autosave
    return EditorResponse(
        id=editor.id,
        document_id=editor.document_id,
        is_new=editor.is_new,
        has_changes=editor.has_changes,
        **asdict(editor.fields),
        items=[
            EditorLineResponse(
                description=line.description,
                unit=line.unit,
                quantity=line.quantity,
                rate=line.rate,
                amount=line.amount,
            )
            for line in editor.lines
        ],
        subtotal=totals.subtotal,
        tax_amount=totals.tax_amount,
        total=totals.total,
        units=editor.units,
        autosave=AutoSaveStatus(
            state=autosave.state,
            last_error=autosave.last_error,
            last_saved_at=autosave.last_saved_at,
            save_count=autosave.save_count,
        ),
    )


@router.post("", response_model=EditorResponse, status_code=status.HTTP_201_CREATED)
def open_editor(
    payload: EditorOpen,
    session: Session = Depends(get_session),
    editors: EditorRegistry = Depends(get_editor_registry),
):
    """Start editing a new document, or load an existing one."""
    editor = editors.open(session, document_id=payload.document_id, document_type=payload.document_type)
    return editor_response(editor)


@router.get("/{editor_id}", response_model=EditorResponse)
def get_editor(editor_id: str, editors: EditorRegistry = Depends(get_editor_registry)):
    return editor_response(editors.get(editor_id))


@router.patch("/{editor_id}", response_model=EditorResponse)
def update_editor(
    editor_id: str,
    payload: EditorUpdate,
    editors: EditorRegistry = Depends(get_editor_registry),
):
    """Apply field changes. Existing documents are auto-saved after a pause."""
    editor = editors.get(editor_id)
    editor.update(payload.model_dump(exclude_unset=True))
    return editor_response(editor)


@router.delete("/{editor_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_editor(editor_id: str, editors: EditorRegistry = Depends(get_editor_registry)):
    """Leave the form; unsaved state is discarded."""
    editors.close(editor_id)
    return None


@router.post("/{editor_id}/client", response_model=EditorResponse)
def select_client(
    editor_id: str,
    payload: ClientSelect,
    session: Session = Depends(get_session),
    editors: EditorRegistry = Depends(get_editor_registry),
):
    """Copy a saved client into the document's client fields."""
    editor = editors.get(editor_id)
    client = session.get(Client, payload.client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    editor.select_client(client)
    return editor_response(editor)


@router.post("/{editor_id}/line-items", response_model=EditorResponse, status_code=status.HTTP_201_CREATED)
def add_line_item(editor_id: str, editors: EditorRegistry = Depends(get_editor_registry)):
    editor = editors.get(editor_id)
    editor.add_line_item()
    return editor_response(editor)


@router.patch("/{editor_id}/line-items/{index}", response_model=EditorResponse)
def update_line_item(
    editor_id: str,
    index: int,
    payload: LineItemUpdate,
    editors: EditorRegistry = Depends(get_editor_registry),
):
    editor = editors.get(editor_id)
    editor.update_line_item(index, payload.model_dump(exclude_unset=True))
    return editor_response(editor)


@router.delete("/{editor_id}/line-items/{index}", response_model=EditorResponse)
def remove_line_item(
    editor_id: str,
    index: int,
    editors: EditorRegistry = Depends(get_editor_registry),
):
    editor = editors.get(editor_id)
    editor.remove_line_item(index)
    return editor_response(editor)


@router.post("/{editor_id}/save", response_model=DocumentResponse)
def save_editor(
    editor_id: str,
    session: Session = Depends(get_session),
    editors: EditorRegistry = Depends(get_editor_registry),
):
    """Create the document on first save, update it afterwards."""
    editor = editors.get(editor_id)
    return DocumentResponse.model_validate(editor.save(session))


@router.get("/{editor_id}/pdf")
def get_editor_pdf(
    editor_id: str,
    editors: EditorRegistry = Depends(get_editor_registry),
    storage: LogoStorage = Depends(get_logo_storage),
):
    """Preview of the current form state. A pending auto-save is written first."""
    editor = editors.get(editor_id)
    editor.autosave.flush()
    document, items = editor.preview_document()
    company = editor.company
    pdf_bytes = generate_document_pdf(
        document, items, company, logo_path=storage.local_path(company.logo_url)
    )

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"inline; filename={document_title(document)}.pdf"
        }
    )
