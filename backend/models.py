"""
SQLAlchemy models for QuotePage

Tables read when a quote page is rendered:
    - LayoutTemplate: saved layout configs, shareable across companies
    - BrandingSettings: per-company branding and assigned layout template

Both are written by the admin side (layout builder, company settings).
The quote page only ever reads them.
"""

from sqlalchemy import Column, Integer, String, Boolean, Text, ForeignKey
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.sql import func

from database import Base


class LayoutTemplate(Base):
    """
    A saved quote page layout.

    layout_config is the layout JSON stored as text, exactly as the
    layout builder saved it. At most one active template is the default.
    """
    __tablename__ = "layout_templates"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    layout_config = Column(Text, nullable=False)
    version = Column(Integer, default=1)
    is_default = Column(Boolean, default=False)   # Used by companies with no assigned template
    is_active = Column(Boolean, default=True)
    created_at = Column(TIMESTAMP(timezone=True), default=func.current_timestamp())
    updated_at = Column(TIMESTAMP(timezone=True), default=func.current_timestamp(), onupdate=func.current_timestamp())


class BrandingSettings(Base):
    """Company branding used on the customer quote page"""
    __tablename__ = "branding_settings"

    id = Column(Integer, primary_key=True)
    company_id = Column(String(100), nullable=False, unique=True, index=True)
    company_name = Column(String(200))
    logo_url = Column(Text)
    hero_banner_url = Column(Text)
    footer_image_url = Column(Text)
    primary_color = Column(String(20))
    secondary_color = Column(String(20))
    font_family = Column(String(200))
    layout_template_id = Column(Integer, ForeignKey("layout_templates.id"), nullable=True)
    updated_at = Column(TIMESTAMP(timezone=True), default=func.current_timestamp(), onupdate=func.current_timestamp())
