"""
Layout Pydantic Schemas

Request models for the layout endpoints. Sections stay loosely typed:
section config is a free-form object read by the renderer it belongs to.
"""

from pydantic import BaseModel
from typing import Optional, List, Dict, Any

from schemas_quote import QuoteRenderRequest


class SectionCondition(BaseModel):
    field: str                                      # Dot path, e.g. job.moveType
    operator: str                                   # ==, !=, contains, isBlank, ...
    value: Optional[str] = None


class LayoutSection(BaseModel):
    id: str
    label: Optional[str] = None
    type: Optional[str] = None                      # custom_html, component
    component: Optional[str] = None                 # HeaderSection, EstimateCard, ...
    html: Optional[str] = None
    css: Optional[str] = None
    visible: Optional[bool] = None
    condition: Optional[SectionCondition] = None
    config: Optional[Dict[str, Any]] = None

    class Config:
        extra = "allow"


class LayoutConfigIn(BaseModel):
    version: int = 1
    globalStyles: Dict[str, Any] = {}
    sections: List[LayoutSection] = []

    def to_layout(self) -> dict:
        return self.model_dump(exclude_none=True)


class LayoutPreviewRequest(BaseModel):
    """Render a draft layout; sample quote data is used when quote is omitted"""
    layout: LayoutConfigIn
    quote: Optional[QuoteRenderRequest] = None
    companyId: Optional[str] = None                 # Apply this company's branding to sample data
