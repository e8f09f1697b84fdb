"""Pydantic schemas for request/response validation."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from wallet_credit.scoring import CreditScoreResult, LendingHistory, WalletActivitySnapshot


class LendingHistorySchema(BaseModel):
    """Cumulative lending activity."""
    borrowed: float = Field(0, ge=0, description="Total amount borrowed")
    repaid: float = Field(0, ge=0, description="Total amount repaid")
    defaults: int = Field(0, ge=0, description="Number of default events")


class WalletActivityRequest(BaseModel):
    """Request body for POST /v1/credit-score: a wallet activity snapshot."""
    wallet_address: str = Field(..., min_length=1, description="Wallet address")
    total_transactions: int = Field(0, ge=0)
    total_volume: float = Field(0, ge=0, description="Total volume in currency units")
    avg_transaction_size: float = Field(0, ge=0)
    unique_contracts: int = Field(0, ge=0)
    failed_transactions: int = Field(0, ge=0)
    successful_transactions: int = Field(0, ge=0)
    gas_spent: float = Field(0, ge=0)
    tokens_held: int = Field(0, ge=0)
    nft_count: int = Field(0, ge=0)
    days_since_first_tx: float = Field(0, ge=0)
    days_since_last_tx: float = Field(0, ge=0)
    defi_protocols: list[str] = Field(default_factory=list)
    lending_history: LendingHistorySchema = Field(default_factory=LendingHistorySchema)
    use_ledger_balance: Optional[bool] = Field(
        None, description="Fetch the outstanding balance from the ledger (defaults to settings)"
    )

    def to_snapshot(self) -> WalletActivitySnapshot:
        """Build the immutable snapshot consumed by the scoring engine."""
        return WalletActivitySnapshot(
            address=self.wallet_address,
            total_transactions=self.total_transactions,
            total_volume=self.total_volume,
            avg_transaction_size=self.avg_transaction_size,
            unique_contracts=self.unique_contracts,
            failed_transactions=self.failed_transactions,
            successful_transactions=self.successful_transactions,
            gas_spent=self.gas_spent,
            tokens_held=self.tokens_held,
            nft_count=self.nft_count,
            days_since_first_tx=self.days_since_first_tx,
            days_since_last_tx=self.days_since_last_tx,
            defi_protocols=frozenset(self.defi_protocols),
            lending_history=LendingHistory(
                borrowed=self.lending_history.borrowed,
                repaid=self.lending_history.repaid,
                defaults=self.lending_history.defaults,
            ),
        )


class CreditFactorsSchema(BaseModel):
    """Human-readable factors behind a score."""
    positive: list[str]
    negative: list[str]


class CreditScoreResponse(BaseModel):
    """Response body for POST /v1/credit-score."""
    evaluation_id: Optional[str] = None
    wallet_address: str
    score: int = Field(..., ge=300, le=850)
    risk_level: str
    available_credit: float = Field(..., ge=0)
    max_credit_limit: int = Field(..., ge=0)
    balance_source: str = Field(..., description="'estimate' or 'ledger'")
    factors: CreditFactorsSchema
    recommendations: list[str]

    @classmethod
    def from_result(
        cls,
        wallet_address: str,
        result: CreditScoreResult,
        balance_source: str,
        evaluation_id: Optional[str] = None,
    ) -> "CreditScoreResponse":
        return cls(
            evaluation_id=evaluation_id,
            wallet_address=wallet_address,
            balance_source=balance_source,
            **result.to_dict(),
        )


class SpendCheckRequest(BaseModel):
    """Request body for POST /v1/spend-check."""
    wallet_address: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, description="Proposed spend amount")


class SpendCheckResponse(BaseModel):
    """Response body for POST /v1/spend-check."""
    wallet_address: str
    amount: float
    approved: bool
    available_credit: float
    detail: str


class EvaluationHistoryItem(BaseModel):
    """Single item in evaluation history."""
    evaluation_id: str
    wallet_address: str
    score: int
    risk_level: str
    max_credit_limit: int
    available_credit: float
    balance_source: str
    created_at: datetime


class EvaluationHistoryResponse(BaseModel):
    """Response body for GET /v1/credit-score/history."""
    wallet_address: str
    evaluations: list[EvaluationHistoryItem]
