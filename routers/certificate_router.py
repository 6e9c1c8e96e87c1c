from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from core.assets import discard_asset, discard_on_error, store_upload
from core.auth import ensure_owner, get_current_user_id
from core.database import get_db
from core.errors import NotFoundError
from core.forms import require_fields
from core.storage import AssetStore, get_asset_store
from crud.certificate_crud import (
    create_certificate,
    delete_certificate,
    get_certificate,
    list_certificates,
    update_certificate,
)
from schemas.certificate_schema import CertificateResponse
from schemas.envelope import Envelope, envelope

router = APIRouter(prefix="/certificates", tags=["Certificates"])


@router.get("", response_model=Envelope[list[CertificateResponse]])
def list_all(author_id: str | None = None, skip: int = Query(0, ge=0), limit: int = Query(100, ge=1), db: Session = Depends(get_db)):
    certs = list_certificates(db, author_id=author_id, skip=skip, limit=limit)
    return envelope("Certificates found", [CertificateResponse.model_validate(c) for c in certs])


@router.get("/{certificate_id}", response_model=Envelope[CertificateResponse])
def read_one(certificate_id: str, db: Session = Depends(get_db)):
    cert = get_certificate(db, certificate_id)
    if not cert:
        raise NotFoundError("Certificate not found")
    return envelope("Certificate found", CertificateResponse.model_validate(cert))


@router.post("", response_model=Envelope[CertificateResponse], status_code=201)
def create(
    name: str | None = Form(None),
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    user_id: str = Depends(get_current_user_id),
):
    require_fields(name, file)
    asset = store_upload(store, file, "certificates", user_id)
    with discard_on_error(store, asset):
        cert = create_certificate(db, name=name, author_id=user_id, image=asset.url, image_ref=asset.key)
    return envelope("Certificate created", CertificateResponse.model_validate(cert))


@router.patch("/{certificate_id}", response_model=Envelope[CertificateResponse])
def update(
    certificate_id: str,
    name: str | None = Form(None),
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    user_id: str = Depends(get_current_user_id),
):
    cert = ensure_owner(get_certificate(db, certificate_id), user_id, "Certificate")
    if file is None:
        cert = update_certificate(db, cert, name=name)
        return envelope("Certificate updated", CertificateResponse.model_validate(cert))

    old_ref = cert.image_ref
    asset = store_upload(store, file, "certificates", user_id)
    with discard_on_error(store, asset):
        cert = update_certificate(db, cert, name=name, image=asset.url, image_ref=asset.key)
    discard_asset(store, old_ref)
    return envelope("Certificate updated", CertificateResponse.model_validate(cert))


@router.delete("/{certificate_id}", response_model=Envelope[CertificateResponse])
def delete(
    certificate_id: str,
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
    user_id: str = Depends(get_current_user_id),
):
    cert = ensure_owner(get_certificate(db, certificate_id), user_id, "Certificate")
    deleted = CertificateResponse.model_validate(cert)
    image_ref = cert.image_ref
    delete_certificate(db, cert)
    discard_asset(store, image_ref)
    return envelope("Certificate deleted", deleted)
