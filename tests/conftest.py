"""Pytest fixtures for testing"""

import pytest
from typing import Any, Dict, Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from cashflow_gateway.api.main import create_app
from cashflow_gateway.infrastructure.database.models import Base
from cashflow_gateway.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def app(db: Session):
    """FastAPI app bound to the test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Create FastAPI test client with test database"""
    return TestClient(app)


@pytest.fixture
def sample_debts() -> List[Dict[str, Any]]:
    """Debts as the debts step stores them: formatted currency text"""
    return [
        {
            "category": "REAL_ESTATE",
            "description": "123 Main St",
            "monthlyPayment": "$2,000",
            "originalLoanAmount": "$300,000",
            "outstandingBalance": "$250,000",
            "notes": "",
        },
        {
            "category": "VEHICLE_EQUIPMENT",
            "description": "2022 Ford F-150",
            "monthlyPayment": "$650.50",
            "originalLoanAmount": "$45,000",
            "outstandingBalance": "$30,000",
            "notes": "",
        },
        {
            "category": "CREDIT_CARD",
            "description": "Chase Ink Business",
            "monthlyPayment": "$150",
            "originalLoanAmount": "$10,000",
            "outstandingBalance": "$2,500",
            "notes": "",
        },
        {
            "category": "LINE_OF_CREDIT",
            "description": "Wells Fargo LOC",
            "monthlyPayment": "$199.50",
            "originalLoanAmount": "$40,000",
            "outstandingBalance": "$7,500",
            "notes": "",
        },
    ]


@pytest.fixture
def sample_financials() -> Dict[str, Any]:
    """Financials blob as stored: prefixed year keys with input and summary"""
    return {
        "year2023": {"summary": {"ebitda": 180000, "adjustedEbitda": 175000}},
        "year2024": {"summary": {"ebitda": 240000, "adjustedEbitda": 230000}},
        "year2025YTD": {"summary": {"ebitda": 90000, "adjustedEbitda": 90000}, "ytdMonth": "6"},
    }
