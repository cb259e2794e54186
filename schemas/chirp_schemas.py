import uuid
from datetime import datetime
from enum import Enum
from schemas.common import CamelModel


class CreateChirpRequest(CamelModel):
    body: str
    user_id: uuid.UUID


class ChirpResponse(CamelModel):
    id: uuid.UUID
    body: str
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class CreateChirpResponse(CamelModel):
    chirp: ChirpResponse


class ChirpListResponse(CamelModel):
    user_chirps: list[ChirpResponse]


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"
