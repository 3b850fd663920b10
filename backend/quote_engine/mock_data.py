"""
Sample quote used to preview layouts in the builder
"""

from datetime import date
from typing import Optional

from .quote_data import build_quote_page_data

SAMPLE_JOB = {
    "id": 111505,
    "titleName": "Mr",
    "firstName": "Leigh",
    "lastName": "Morrow",
    "moveManager": "Sarah Johnson",
    "moveType": "LR",
    "brandCode": "MWB",
    "branchCode": "MEL",
    "estimatedDeliveryDetails": "27/02/2026",
    "jobValue": 2675.00,
    "upliftLine1": "3 Spring Water Crescent",
    "upliftLine2": "",
    "upliftCity": "Cranbourne",
    "upliftState": "VIC",
    "upliftPostcode": "3977",
    "upliftCountry": "Australia",
    "deliveryLine1": "12 Cato Street",
    "deliveryLine2": "",
    "deliveryCity": "Hawthorn East",
    "deliveryState": "VIC",
    "deliveryPostcode": "3123",
    "deliveryCountry": "Australia",
    "measuresVolumeGrossM3": 0.62,
    "measuresWeightGrossKg": 70,
}

SAMPLE_INVENTORY = [
    {"id": 1, "description": "Bed, King", "room": "Main Bedroom", "quantity": 1, "cube": 2.2, "typeCode": "FUR", "weightKg": 55},
    {"id": 2, "description": "Bedside Table", "room": "Main Bedroom", "quantity": 2, "cube": 0.3, "typeCode": "FUR", "weightKg": 12},
    {"id": 3, "description": "Sofa, 3 Seater", "room": "Lounge", "quantity": 1, "cube": 1.8, "typeCode": "FUR", "weightKg": 60},
    {"id": 4, "description": "Television, Large", "room": "Lounge", "quantity": 1, "cube": 0.4, "typeCode": "ELE", "weightKg": 18},
    {"id": 5, "description": "Dining Table", "room": "Dining", "quantity": 1, "cube": 1.2, "typeCode": "FUR", "weightKg": 40},
    {"id": 6, "description": "Dining Chair", "room": "Dining", "quantity": 6, "cube": 0.25, "typeCode": "FUR", "weightKg": 6},
    {"id": 7, "description": "Refrigerator", "room": "Kitchen", "quantity": 1, "cube": 0.9, "typeCode": "APP", "weightKg": 75},
    {"id": 8, "description": "Carton, Medium", "room": "Kitchen", "quantity": 12, "cube": 0.1, "typeCode": "CTN", "weightKg": 10},
]

SAMPLE_COSTINGS = [
    {
        "id": "1",
        "name": "Local Move - Standard",
        "category": "Removal",
        "description": "2 removalists and truck, billed to the nearest 15 minutes",
        "quantity": 1,
        "rate": 2675.00,
        "netTotal": "2675.00",
        "totalPrice": 2675.00,
        "currency": "AUD",
        "currencySymbol": "$",
        "charges": [
            {"id": "c1", "heading": "Local Move - Standard", "quantity": 1, "price": 2675.00, "isBaseCharge": True},
            {"id": "c2", "heading": "Packing Service", "quantity": 1, "price": 450.00, "included": False,
             "notes": "Full kitchen pack"},
            {"id": "c3", "heading": "Transit Insurance", "quantity": 1, "price": 120.00, "included": True},
        ],
        "rawData": {
            "inclusions": ["Furniture blankets", "Wardrobe cartons on the day"],
            "exclusions": ["Piano handling", "Disassembly of flat-pack furniture"],
        },
    },
]


def sample_quote_data(branding: Optional[dict] = None, quote_date: Optional[date] = None) -> dict:
    """Quote page data for the sample quote, optionally with a company's branding."""
    return build_quote_page_data(
        SAMPLE_JOB,
        inventory=SAMPLE_INVENTORY,
        costings=SAMPLE_COSTINGS,
        branding=branding,
        quote_date=quote_date or date(2026, 2, 18),
    )
