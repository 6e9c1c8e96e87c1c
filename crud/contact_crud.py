from sqlalchemy.orm import Session
from sqlalchemy import desc
from models.contact import Contact
from schemas.contact_schema import ContactCreate, ContactUpdate


def get_contact(db: Session, contact_id: str):
    return db.query(Contact).filter(Contact.id == contact_id).first()


def list_contacts(db: Session, skip: int = 0, limit: int = 100):
    return db.query(Contact).order_by(desc(Contact.created_at)).offset(skip).limit(limit).all()


def create_contact(db: Session, payload: ContactCreate):
    contact = Contact(**payload.model_dump())
    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact


def update_contact(db: Session, contact_id: str, payload: ContactUpdate):
    contact = get_contact(db, contact_id)
    if not contact:
        return None
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(contact, k, v)
    db.commit()
    db.refresh(contact)
    return contact
