from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class PasteIn(BaseModel):
    title: Optional[str] = None
    body: str


class PasteOut(BaseModel):
    id: int
    title: Optional[str]
    body: str
    creation_date: datetime


class Envelope(BaseModel):
    status: str
    data: Optional[List[PasteOut]] = None
    message: Optional[str] = None
