from sqlalchemy.orm import Session
from sqlalchemy import desc
from models.certificate import Certificate


def get_certificate(db: Session, certificate_id: str):
    return db.query(Certificate).filter(Certificate.id == certificate_id).first()


def list_certificates(db: Session, author_id: str | None = None, skip: int = 0, limit: int = 100):
    q = db.query(Certificate)
    if author_id:
        q = q.filter(Certificate.author_id == author_id)
    return q.order_by(desc(Certificate.created_at)).offset(skip).limit(limit).all()


def create_certificate(db: Session, name: str, author_id: str, image: str, image_ref: str):
    cert = Certificate(name=name, author_id=author_id, image=image, image_ref=image_ref)
    db.add(cert)
    db.commit()
    db.refresh(cert)
    return cert


def update_certificate(db: Session, cert: Certificate, name: str | None = None, image: str | None = None, image_ref: str | None = None):
    if name:
        cert.name = name
    if image_ref is not None:
        cert.image = image
        cert.image_ref = image_ref
    db.commit()
    db.refresh(cert)
    return cert


def delete_certificate(db: Session, cert: Certificate) -> None:
    db.delete(cert)
    db.commit()
