from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Largest value SQLite can store in an INTEGER column
MAX_URL_ID = 2**63 - 1


class StoredURL(BaseModel):
    """JSON view of a stored record, shared by create and metadata responses.

    The identifier is rendered as a string to match the public URL segment.
    """
    stored_id: str = Field(..., description="Identifier used in /{id}")
    stored_url: str = Field(..., description="Target URL the identifier resolves to")

    model_config = ConfigDict(json_schema_extra={
        "example": {"stored_id": "1", "stored_url": "https://openai.com"}
    })

    @classmethod
    def from_record(cls, url_id: int, target_url: str) -> "StoredURL":
        return cls(stored_id=str(url_id), stored_url=target_url)


class QRFormat(str, Enum):
    """Output formats of the QR endpoint; anything but exactly ``ascii`` is PNG"""
    ASCII = "ascii"
    PNG = "png"

    @classmethod
    def parse(cls, value: Optional[str]) -> "QRFormat":
        if value == cls.ASCII.value:
            return cls.ASCII
        return cls.PNG


class RenderedQR(BaseModel):
    """A rendered symbol ready to be sent as a response body"""
    content: bytes
    media_type: str
