import io
import logging
import os
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from core.errors import ValidationError
from core.storage import AssetStore

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024


@dataclass
class StoredAsset:
    url: str
    key: str


def _normalize_filename(original_name: str) -> str:
    """Normalize filename without adding randomness.
    - Trim whitespace
    - Replace spaces with underscores
    - Drop any directory part sent by the client
    """
    name, ext = os.path.splitext(os.path.basename(original_name or "file"))
    name = name.strip().replace(" ", "_") or "file"
    return f"{name}{ext.lower()}"


def build_asset_key(namespace: str, owner_id: str, filename: str) -> str:
    stamp = int(time.time() * 1000)
    return f"{namespace}/{owner_id}/{stamp}-{uuid.uuid4().hex[:8]}-{_normalize_filename(filename)}"


def compress_image(data: bytes, content_type: str, filename: str) -> bytes:
    """Re-encode an image in its own format, keeping whichever bytes are smaller."""
    if not content_type.startswith("image/"):
        return data
    ext = os.path.splitext(filename)[1].lower()
    try:
        with Image.open(io.BytesIO(data)) as img:
            if ext in (".jpg", ".jpeg"):
                if img.mode in ("RGBA", "P"):
                    img = img.convert("RGB")
                save_kwargs = {"format": "JPEG", "quality": 85, "optimize": True, "progressive": True}
            elif ext == ".png":
                # Preserve PNG but try strongest compression
                save_kwargs = {"format": "PNG", "optimize": True, "compress_level": 9}
            elif ext == ".webp":
                save_kwargs = {"format": "WEBP", "quality": 85, "method": 6}
            else:
                return data
            out = io.BytesIO()
            img.save(out, **save_kwargs)
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        logger.warning("Keeping original bytes for %s: %s", filename, exc)
        return data
    compressed = out.getvalue()
    return compressed if len(compressed) < len(data) else data


def store_upload(store: AssetStore, upload: UploadFile, namespace: str, owner_id: str) -> StoredAsset:
    data = upload.file.read()
    if not data:
        raise ValidationError("File is empty")
    if len(data) > MAX_UPLOAD_BYTES:
        raise ValidationError("File is too large")
    filename = upload.filename or "file"
    content_type = upload.content_type or "application/octet-stream"
    data = compress_image(data, content_type, filename)
    key = build_asset_key(namespace, owner_id, filename)
    url = store.upload(key, data, content_type, filename=_normalize_filename(filename))
    logger.info("Uploaded %s (%d bytes)", key, len(data))
    return StoredAsset(url=url, key=key)


def discard_asset(store: AssetStore, key: str | None) -> None:
    """Best-effort delete for cleanup paths; failures are logged, not raised."""
    if not key:
        return
    try:
        store.delete(key)
        logger.info("Deleted asset %s", key)
    except Exception:
        logger.exception("Failed to delete asset %s", key)


@contextmanager
def discard_on_error(store: AssetStore, asset: StoredAsset):
    """Remove a freshly uploaded asset when the write that references it fails."""
    try:
        yield asset
    except Exception:
        discard_asset(store, asset.key)
        raise
