import json
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models import BrandingSettings, LayoutTemplate
from quote_engine.quote_data import build_quote_page_data


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def add_template(db_session):
    def _add(layout, name="Template", is_default=False, is_active=True):
        raw = layout if isinstance(layout, str) else json.dumps(layout)
        template = LayoutTemplate(name=name, layout_config=raw, is_default=is_default, is_active=is_active)
        db_session.add(template)
        db_session.commit()
        return template

    return _add


@pytest.fixture
def add_branding(db_session):
    def _add(company_id, **fields):
        branding = BrandingSettings(company_id=company_id, **fields)
        db_session.add(branding)
        db_session.commit()
        return branding

    return _add


@pytest.fixture
def job():
    return {
        "id": 111505,
        "titleName": "Mr",
        "firstName": "Leigh",
        "lastName": "Morrow",
        "moveType": "LR",
        "moveManager": "Sarah Johnson",
        "jobValue": 2675,
        "upliftLine1": "3 Spring Water Crescent",
        "upliftCity": "Cranbourne",
        "upliftState": "VIC",
        "upliftPostcode": "3977",
        "upliftCountry": "Australia",
        "deliveryLine1": "12 Cato Street",
        "deliveryCity": "Hawthorn East",
        "deliveryState": "VIC",
        "deliveryPostcode": "3123",
        "deliveryCountry": "Australia",
    }


@pytest.fixture
def inventory():
    return [
        {"id": 1, "description": "Bed, King", "room": "Main Bedroom", "quantity": 1, "cube": 2.2, "weightKg": 55},
        {"id": 2, "description": "Bedside Table", "room": "Main Bedroom", "quantity": 2, "cube": 0.3, "weightKg": 12},
        {"id": 3, "description": "Sofa", "room": "Lounge", "quantity": 1, "cube": 1.8},
    ]


@pytest.fixture
def costings():
    return [
        {
            "id": "a",
            "name": "Local Move",
            "totalPrice": 1000,
            "currency": "AUD",
            "currencySymbol": "$",
            "netTotal": "1000.00",
            "charges": [
                {"id": "c1", "heading": "Local Move", "quantity": 1, "price": 1000, "isBaseCharge": True},
                {"id": "c2", "heading": "Packing", "quantity": 2, "price": 150, "included": True},
                {"id": "c3", "heading": "Storage", "quantity": 1, "price": 300, "included": False},
            ],
            "rawData": {"inclusions": ["Blankets"], "exclusions": ["Piano"]},
        },
        {"id": "b", "name": "Interstate Move", "totalPrice": 4200.5, "charges": []},
    ]


@pytest.fixture
def quote_data(job, inventory, costings):
    return build_quote_page_data(
        job,
        inventory=inventory,
        costings=costings,
        branding={"companyName": "Grace Removals", "primaryColor": "#cc0000"},
        quote_date=date(2026, 2, 18),
    )
