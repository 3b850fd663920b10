"""
Quote Page Router

Renders a company's quote page from job, inventory and costings posted
by the quoting system.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from database import get_db
from schemas_quote import QuoteRenderRequest
from quote_engine.branding_config import get_branding, merge_branding
from quote_engine.layout_renderer import render_layout, render_quote_page
from quote_engine.layout_store import resolve_layout_config
from quote_engine.quote_data import build_quote_page_data

router = APIRouter()


def _page_data(db: Session, company_id: str, request: QuoteRenderRequest) -> dict:
    args = request.page_data_args()
    args["branding"] = merge_branding(get_branding(db, company_id), args["branding"])
    return build_quote_page_data(**args)


@router.post("/render-nodes")
async def render_quote_nodes(request: QuoteRenderRequest, company_id: str = None, db: Session = Depends(get_db)):
    """Ordered section nodes for hosts that compose the page themselves."""
    resolved = resolve_layout_config(db, company_id)
    result = render_layout(resolved.layout, _page_data(db, company_id, request), request.slots())
    return {
        "source": resolved.source,
        "templateId": resolved.template_id,
        **result.to_dict(),
    }


@router.post("/{company_id}/render", response_class=HTMLResponse)
async def render_quote(company_id: str, request: QuoteRenderRequest, db: Session = Depends(get_db)):
    resolved = resolve_layout_config(db, company_id)
    html = render_quote_page(resolved.layout, _page_data(db, company_id, request), request.slots())
    return HTMLResponse(content=html)
