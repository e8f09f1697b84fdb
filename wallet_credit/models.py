"""SQLAlchemy ORM models for the wallet credit scoring service."""
import uuid
from datetime import datetime

from sqlalchemy import Column, BigInteger, DateTime, Float, Text
from sqlalchemy.dialects.postgresql import UUID, JSONB

from wallet_credit.database import Base


class CreditScoreEvaluation(Base):
    """Records one credit score evaluation for a wallet."""
    __tablename__ = "credit_score_evaluation"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    wallet_address = Column(Text, nullable=False, index=True)
    score = Column(BigInteger, nullable=False)  # 300-850
    risk_level = Column(Text, nullable=False)
    max_credit_limit = Column(BigInteger, nullable=False)
    available_credit = Column(Float, nullable=False)
    balance_source = Column(Text, nullable=False)  # "estimate" or "ledger"
    factors = Column(JSONB, nullable=False)
    recommendations = Column(JSONB, nullable=False)
    snapshot = Column(JSONB, nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
