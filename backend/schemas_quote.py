"""
Quote Pydantic Schemas

Request models for rendering a quote page. Field names are camelCase to
match the quote data the layouts' placeholders read ({{job.upliftCity}}).
Unknown job fields are kept so conditions can test them.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Union
from datetime import date


# =============================================================================
# JOB
# =============================================================================

class JobBranding(BaseModel):
    """Per-job branding, wins over the company's branding settings"""
    companyName: Optional[str] = None
    logoUrl: Optional[str] = None
    heroBannerUrl: Optional[str] = None
    footerImageUrl: Optional[str] = None
    primaryColor: Optional[str] = None
    secondaryColor: Optional[str] = None


class Job(BaseModel):
    id: Union[int, str]
    titleName: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    moveManager: Optional[str] = None
    moveType: Optional[str] = None                  # LR, EX, ...
    brandCode: Optional[str] = None
    branchCode: Optional[str] = None
    estimatedDeliveryDetails: Optional[str] = None
    jobValue: Optional[float] = None

    upliftLine1: Optional[str] = None
    upliftLine2: Optional[str] = None
    upliftCity: Optional[str] = None
    upliftState: Optional[str] = None
    upliftPostcode: Optional[str] = None
    upliftCountry: Optional[str] = None

    deliveryLine1: Optional[str] = None
    deliveryLine2: Optional[str] = None
    deliveryCity: Optional[str] = None
    deliveryState: Optional[str] = None
    deliveryPostcode: Optional[str] = None
    deliveryCountry: Optional[str] = None

    measuresVolumeGrossM3: Optional[float] = None
    measuresWeightGrossKg: Optional[float] = None

    branding: Optional[JobBranding] = None

    class Config:
        extra = "allow"


# =============================================================================
# INVENTORY AND COSTINGS
# =============================================================================

class InventoryItem(BaseModel):
    id: Optional[Union[int, str]] = None
    description: Optional[str] = None
    room: Optional[str] = None
    quantity: Optional[int] = None
    cube: Optional[float] = None                    # m3
    typeCode: Optional[str] = None
    weightKg: Optional[float] = None


class CostingCharge(BaseModel):
    id: Optional[Union[int, str]] = None
    heading: Optional[str] = None
    quantity: Optional[float] = None
    price: Optional[float] = None
    isBaseCharge: bool = False                      # Aggregate total line for the option
    included: bool = False                          # Add-on selected by default
    notes: Optional[str] = None


class CostingRawData(BaseModel):
    inclusions: List[str] = []
    exclusions: List[str] = []


class Costing(BaseModel):
    """One pricing option on the quote"""
    id: Union[int, str]
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[float] = None
    rate: Optional[float] = None
    netTotal: Optional[str] = None
    totalPrice: Optional[float] = None
    currency: Optional[str] = None                  # AUD
    currencySymbol: Optional[str] = None            # $
    charges: List[CostingCharge] = []
    rawData: Optional[CostingRawData] = None

    @field_validator("charges")
    @classmethod
    def single_base_charge(cls, charges):
        if sum(1 for c in charges if c.isBaseCharge) > 1:
            raise ValueError("Only one charge may be the base charge")
        return charges


# =============================================================================
# RENDER REQUESTS
# =============================================================================

class QuoteRenderRequest(BaseModel):
    """Render a company's quote page"""
    job: Job
    inventory: List[InventoryItem] = []
    costings: List[Costing] = []
    branding: Optional[JobBranding] = None
    quoteDate: Optional[date] = None                # Defaults to today
    inventoryPage: int = Field(1, ge=1)
    inventoryPageSize: int = 10                     # -1 shows all
    acceptanceFormSlot: Optional[str] = None        # Host HTML for the acceptance form
    nextStepsFormSlot: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "job": {
                    "id": 111505,
                    "titleName": "Mr",
                    "firstName": "Leigh",
                    "lastName": "Morrow",
                    "moveType": "LR",
                },
                "inventory": [{"description": "Bed, King", "room": "Main Bedroom", "quantity": 1, "cube": 2.2}],
                "costings": [{"id": "1", "name": "Local Move", "totalPrice": 2675.0}],
            }
        }

    def page_data_args(self) -> dict:
        """Keyword arguments for quote_data.build_quote_page_data"""
        return {
            "job": self.job.model_dump(exclude_none=True),
            "inventory": [i.model_dump(exclude_none=True) for i in self.inventory],
            "costings": [c.model_dump(exclude_none=True) for c in self.costings],
            "branding": self.branding.model_dump(exclude_none=True) if self.branding else None,
            "quote_date": self.quoteDate,
            "inventory_page": self.inventoryPage,
            "inventory_page_size": self.inventoryPageSize,
        }

    def slots(self) -> dict:
        slots = {}
        if self.acceptanceFormSlot:
            slots["acceptanceFormSlot"] = self.acceptanceFormSlot
        if self.nextStepsFormSlot:
            slots["nextStepsFormSlot"] = self.nextStepsFormSlot
        return slots
