# api/schemas.py

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

Identifier = Union[int, str]


class HighlightSchema(BaseModel):
    id: Identifier
    start: int
    end: int
    color: Optional[str] = None


class EmphasisSchema(BaseModel):
    start: int
    end: int
    id: Optional[Identifier] = None
    # either a style mapping or a list of flag names ("bold", "italic", ...)
    style: Union[Dict[str, Any], List[str]] = Field(default_factory=dict)


class MergedHighlightSchema(BaseModel):
    start: int
    end: int
    id: Identifier
    color: str


class SegmentSchema(BaseModel):
    start: int
    end: int
    is_highlight: bool
    highlight_color: Optional[str] = None
    highlight_id: Optional[Identifier] = None
    style: Dict[str, Any]


class TextRunSchema(BaseModel):
    text: str
    start: int
    end: int
    is_highlight: bool
    highlight_color: Optional[str] = None
    highlight_id: Optional[Identifier] = None
    style: Dict[str, Any]
    font_style: Dict[str, Any]


class MergeRequest(BaseModel):
    highlights: List[HighlightSchema] = Field(default_factory=list)


class MergeResponse(BaseModel):
    highlights: List[MergedHighlightSchema]


class SegmentsRequest(BaseModel):
    highlights: List[HighlightSchema] = Field(default_factory=list)
    emphases: List[EmphasisSchema] = Field(default_factory=list)


class SegmentsResponse(BaseModel):
    segments: List[SegmentSchema]


class RunsRequest(BaseModel):
    text: str
    highlights: List[HighlightSchema] = Field(default_factory=list)
    emphases: List[EmphasisSchema] = Field(default_factory=list)
    policy_name: str = "configs/render.yaml"
    include_html: bool = False


class RunsResponse(BaseModel):
    runs: List[TextRunSchema]
    html: Optional[str] = None


class PressRequest(BaseModel):
    highlights: List[HighlightSchema] = Field(default_factory=list)
    range_start: int
    range_end: int
    policy_name: str = "configs/render.yaml"


class PressResponse(BaseModel):
    id: Optional[Identifier] = None
