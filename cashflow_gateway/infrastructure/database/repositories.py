"""Data access layer for cash flow analyses"""

import logging
import uuid
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from cashflow_gateway.infrastructure.database.models import CashFlowAnalysisRecord
from cashflow_gateway.domain.models import CashFlowAnalysis
from cashflow_gateway.domain.reconstruction import reconstruct_analysis

logger = logging.getLogger(__name__)


def record_to_dict(record: CashFlowAnalysisRecord) -> Dict[str, Any]:
    """Row as a plain mapping of column name to stored value"""
    return {column.name: getattr(record, column.name) for column in CashFlowAnalysisRecord.__table__.columns}


class AnalysisRepository:
    """Repository for cash flow analyses"""

    def __init__(self, db: Session):
        self.db = db

    def create_analysis(self, fields: Dict[str, Any]) -> CashFlowAnalysisRecord:
        """Persist a submitted analysis; unknown keys are ignored"""
        columns = set(CashFlowAnalysisRecord.__table__.columns.keys()) - {"id", "created_at", "updated_at"}
        db_analysis = CashFlowAnalysisRecord(**{k: v for k, v in fields.items() if k in columns})
        self.db.add(db_analysis)
        self.db.flush()  # Get ID without committing
        return db_analysis

    def get_record(self, analysis_id: uuid.UUID) -> Optional[Dict[str, Any]]:
        """Fetch the raw stored row"""
        record = (
            self.db.query(CashFlowAnalysisRecord)
            .filter(CashFlowAnalysisRecord.id == analysis_id)
            .first()
        )
        if record is None:
            logger.warning("No analysis stored for id", extra={"analysis_id": str(analysis_id)})
            return None
        return record_to_dict(record)

    def get_analysis(self, analysis_id: uuid.UUID) -> Optional[CashFlowAnalysis]:
        """Fetch and normalize an analysis; None when it does not exist"""
        return reconstruct_analysis(self.get_record(analysis_id))
