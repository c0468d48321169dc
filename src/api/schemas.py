# src/api/schemas.py
from typing import List, Optional, Tuple, Union
from pydantic import BaseModel, Field


class SerialsIn(BaseModel):
    """Seriales a agregar: texto separado por comas o lista."""
    serials: Union[str, List[str]]


class SerialsOut(BaseModel):
    serials: List[str]
    added: List[str] = Field(default_factory=list)


class ScansOut(BaseModel):
    scanned: List[str]
    total: int


class HighlightOut(BaseModel):
    payload: str
    bounds: Optional[Tuple[int, int, int, int]] = None
