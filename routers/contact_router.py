import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.auth import get_current_user_id
from core.config import settings
from core.database import get_db
from core.errors import NotFoundError
from core.mailer import Mailer, contact_autoreply_email, contact_relay_email, get_mailer
from crud.contact_crud import create_contact, list_contacts, update_contact
from schemas.contact_schema import ContactCreate, ContactResponse, ContactUpdate, SendEmailRequest
from schemas.envelope import Envelope, envelope

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Contact"])


@router.get("/contact", response_model=Envelope[list[ContactResponse]])
def list_all(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1), db: Session = Depends(get_db)):
    contacts = list_contacts(db, skip=skip, limit=limit)
    return envelope("Contact found", [ContactResponse.model_validate(c) for c in contacts])


@router.post("/contact", response_model=Envelope[ContactResponse], status_code=201)
def create(payload: ContactCreate, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    contact = create_contact(db, payload)
    return envelope("Contact created", ContactResponse.model_validate(contact))


@router.patch("/contact/{contact_id}", response_model=Envelope[ContactResponse])
def update(contact_id: str, payload: ContactUpdate, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    contact = update_contact(db, contact_id, payload)
    if not contact:
        raise NotFoundError("Contact not found")
    return envelope("Contact updated", ContactResponse.model_validate(contact))


@router.post("/sendemail", response_model=Envelope[None])
def send_email(payload: SendEmailRequest, mailer: Mailer = Depends(get_mailer)):
    """
    Relay a contact-form message to the site owner, then thank the sender.
    Only the relay has to succeed; the auto-reply is best effort.
    """
    subject, html = contact_relay_email(payload.name, payload.email, payload.body)
    mailer.send(settings.CONTACT_INBOX or settings.mail_sender, subject, html)

    subject, html = contact_autoreply_email(payload.name)
    try:
        mailer.send(payload.email, subject, html)
    except Exception:
        logger.exception("Auto-reply to %s failed", payload.email)
    return envelope("Email sent")
