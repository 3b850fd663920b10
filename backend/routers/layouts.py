"""
Quote Layout Router

Layout defaults, the placeholder picker, per-company resolution,
validation and draft previews for the layout builder.
Layouts are read-only here; templates are managed elsewhere.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from database import get_db
from schemas_layout import LayoutPreviewRequest
from quote_engine.branding_config import get_branding, merge_branding
from quote_engine.layout_config import default_layout, validate_layout
from quote_engine.layout_renderer import render_quote_page
from quote_engine.layout_store import resolve_layout_config
from quote_engine.mock_data import sample_quote_data
from quote_engine.placeholders import PLACEHOLDER_CATEGORIES, registry_for_display
from quote_engine.quote_data import build_quote_page_data

router = APIRouter()


@router.get("/defaults")
async def get_default_layout():
    return default_layout()


@router.get("/placeholders")
async def get_placeholders(category: Optional[str] = None):
    placeholders = registry_for_display()
    if category:
        placeholders = [p for p in placeholders if p["category"] == category]
    return {
        "categories": PLACEHOLDER_CATEGORIES,
        "placeholders": placeholders,
        "total": len(placeholders),
    }


@router.post("/validate")
async def validate(layout: dict):
    errors = validate_layout(layout)
    return {"valid": not errors, "errors": errors}


@router.post("/preview", response_class=HTMLResponse)
async def preview_layout(request: LayoutPreviewRequest, db: Session = Depends(get_db)):
    layout = request.layout.to_layout()
    errors = validate_layout(layout)
    if errors:
        raise HTTPException(status_code=400, detail={"message": "Invalid layout", "errors": errors})

    branding = get_branding(db, request.companyId) if request.companyId else None
    if request.quote:
        args = request.quote.page_data_args()
        args["branding"] = merge_branding(branding, args["branding"])
        data = build_quote_page_data(**args)
        slots = request.quote.slots()
    else:
        data = sample_quote_data(branding=branding)
        slots = None

    return HTMLResponse(content=render_quote_page(layout, data, slots))


@router.get("/{company_id}")
async def get_company_layout(company_id: str, db: Session = Depends(get_db)):
    resolved = resolve_layout_config(db, company_id)
    return {
        "companyId": company_id,
        "source": resolved.source,
        "templateId": resolved.template_id,
        "templateName": resolved.template_name,
        "layout": resolved.layout,
    }
