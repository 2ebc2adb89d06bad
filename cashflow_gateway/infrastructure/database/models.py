"""SQLAlchemy ORM models for stored cash flow analyses"""

import uuid
from sqlalchemy import Column, DateTime, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class CashFlowAnalysisRecord(Base):
    """
    Submitted cash flow analysis.

    Loan request columns are JSON rather than numeric: older rows hold
    formatted currency text ("$250,000") where newer rows hold numbers.
    """

    __tablename__ = "cash_flow_analyses"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=True, index=True)
    business_name = Column(Text, nullable=False, default="")
    first_name = Column(Text, nullable=True)
    last_name = Column(Text, nullable=True)
    loan_purpose = Column(Text, nullable=True)
    desired_amount = Column(JSON, nullable=True)
    estimated_payment = Column(JSON, nullable=True)
    annualized_loan = Column(JSON, nullable=True)
    term = Column(JSON, nullable=True)
    interest_rate = Column(JSON, nullable=True)
    down_payment = Column(JSON, nullable=True)
    down_payment293 = Column(JSON, nullable=True)  # down payment percent, column name kept from the form field
    proposed_loan = Column(JSON, nullable=True)
    financials = Column(JSON, nullable=True)
    debts = Column(JSON, nullable=True)
    debt_summary = Column(JSON, nullable=True)
    dscr = Column(JSON, nullable=True)
    status = Column(Text, nullable=True)
    cash_flow_pdf_url = Column(Text, nullable=True)
    debt_summary_pdf_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
