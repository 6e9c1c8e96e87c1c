from datetime import datetime
from pydantic import BaseModel


class CertificateResponse(BaseModel):
    id: str
    name: str
    image: str | None = None
    author_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
