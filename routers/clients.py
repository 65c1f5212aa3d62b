"""API routes for the client address book."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlmodel import Session, select

from db.session import get_session
from models.client import Client
from schemas.client import ClientCreate, ClientUpdate, ClientResponse, ClientListResponse

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=ClientListResponse)
def list_clients(db: Session = Depends(get_session)):
    """List saved clients ordered by name."""
    clients = db.exec(select(Client).order_by(Client.name)).all()
    return ClientListResponse(clients=clients, total=len(clients))


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(client_data: ClientCreate, db: Session = Depends(get_session)):
    name = client_data.name.strip()
    if not name:
        raise HTTPException(status_code=422, detail="Client name is required")

    client = Client(**client_data.model_dump(exclude={"name"}), name=name)
    db.add(client)
    db.commit()
    db.refresh(client)
    logger.info(f"Added client {client.name}")
    return client


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(client_id: str, db: Session = Depends(get_session)):
    client = db.get(Client, client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.put("/{client_id}", response_model=ClientResponse)
def update_client(client_id: str, client_data: ClientUpdate, db: Session = Depends(get_session)):
    client = db.get(Client, client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")

    for key, value in client_data.model_dump(exclude_unset=True).items():
        setattr(client, key, value)
    client.updated_at = datetime.utcnow()

    db.add(client)
    db.commit()
    db.refresh(client)
    return client


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(client_id: str, db: Session = Depends(get_session)):
    """Remove a client. Documents keep the snapshot they copied."""
    client = db.get(Client, client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    db.delete(client)
    db.commit()
    return None
