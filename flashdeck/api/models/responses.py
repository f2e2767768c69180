from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class CardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    question: str
    answer: str
    flipped: bool
    face: str


class CardPageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    cards: List[CardResponse]
    total: int
    offset: int
    next_offset: Optional[int]


class FormResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    visible: bool
    question: str
    answer: str


class DeckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    page: CardPageResponse
    form: FormResponse


class HealthResponse(BaseModel):
    status: str
    environment: str
    sessions: int
    connections: int
