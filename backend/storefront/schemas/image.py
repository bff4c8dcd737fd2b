import uuid

from pydantic import BaseModel, ConfigDict


class ImagePublic(BaseModel):
    id: uuid.UUID
    url: str
    product_id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)
