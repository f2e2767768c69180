from typing import Optional

from pydantic import BaseModel, Field


class CardRequest(BaseModel):
    """Request schema for adding a card directly to the deck"""

    question: str = Field("", description="Question side; empty text is allowed")
    answer: str = Field("", description="Answer side; empty text is allowed")

    class Config:
        json_schema_extra = {"example": {"question": "2+2?", "answer": "4"}}


class DraftUpdate(BaseModel):
    """Request schema for a single input event on a form field"""

    text: str = Field(..., description="Full current content of the field")

    class Config:
        json_schema_extra = {"example": {"text": "Capital of France?"}}


class FormSubmit(BaseModel):
    """Optional final field contents sent with the Add action; omitted fields keep the current draft"""

    question: Optional[str] = Field(None, description="Final question text")
    answer: Optional[str] = Field(None, description="Final answer text")
