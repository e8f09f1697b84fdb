"""Credit score service: scoring, persistence and spend checks."""
import time
import uuid
from dataclasses import asdict
from typing import Optional

from sqlalchemy.orm import Session

from wallet_credit.config import settings
from wallet_credit.logging import TimedOperation, get_logger
from wallet_credit.models import CreditScoreEvaluation
from wallet_credit.schemas import (
    CreditScoreResponse,
    EvaluationHistoryItem,
    EvaluationHistoryResponse,
    SpendCheckRequest,
    SpendCheckResponse,
    WalletActivityRequest,
)
from wallet_credit.scoring import WalletActivitySnapshot, check_spend, evaluate
from wallet_credit.services.ledger_client import LedgerClient
from wallet_credit import metrics

logger = get_logger(__name__)


class WalletNotEvaluatedError(Exception):
    """Raised when a spend check targets a wallet that was never scored."""
    def __init__(self, wallet_address: str):
        self.wallet_address = wallet_address
        super().__init__(f"No credit evaluation found for wallet {wallet_address}")


class CreditScoreService:
    """
    Service around the credit scoring engine.

    This service orchestrates:
    1. Optionally fetching the outstanding balance from the ledger
    2. Scoring the wallet snapshot
    3. Persisting the evaluation
    4. Checking proposed spends against the latest available credit
    """

    def __init__(self, db: Session, ledger_client: Optional[LedgerClient] = None):
        """
        Initialize the credit score service.

        Args:
            db: SQLAlchemy database session
            ledger_client: Ledger API client (defaults to new instance)
        """
        self.db = db
        self.ledger_client = ledger_client or LedgerClient()

    async def score_wallet(self, request: WalletActivityRequest) -> CreditScoreResponse:
        """
        Score a wallet snapshot and record the evaluation.

        Args:
            request: Snapshot submitted by the feature-extraction collaborator

        Returns:
            CreditScoreResponse with score, tier, limits, factors and recommendations

        Raises:
            LedgerApiError: If the ledger balance was requested and the ledger failed
        """
        snapshot = request.to_snapshot()
        use_ledger = settings.use_ledger_balance if request.use_ledger_balance is None else request.use_ledger_balance

        outstanding_balance = None
        if use_ledger:
            outstanding_balance = await self.ledger_client.get_outstanding_balance(snapshot.address)
        balance_source = "ledger" if outstanding_balance is not None else "estimate"

        start_time = time.perf_counter()
        result = evaluate(snapshot, outstanding_balance=outstanding_balance)
        scoring_seconds = time.perf_counter() - start_time

        metrics.record_evaluation(
            risk_level=result.risk_level.value,
            score=result.score,
            max_credit_limit=result.max_credit_limit,
            balance_source=balance_source,
            latency_seconds=scoring_seconds,
        )

        result_data = result.to_dict()
        evaluation = CreditScoreEvaluation(
            id=uuid.uuid4(),
            wallet_address=snapshot.address,
            score=result.score,
            risk_level=result.risk_level.value,
            max_credit_limit=result.max_credit_limit,
            available_credit=result.available_credit,
            balance_source=balance_source,
            factors=result_data["factors"],
            recommendations=result_data["recommendations"],
            snapshot=_snapshot_to_json(snapshot),
        )
        with TimedOperation("evaluation_persist", logger, wallet_address=snapshot.address):
            self.db.add(evaluation)
            self.db.commit()

        return CreditScoreResponse.from_result(
            wallet_address=snapshot.address,
            result=result,
            balance_source=balance_source,
            evaluation_id=str(evaluation.id),
        )

    def check_spend(self, request: SpendCheckRequest) -> SpendCheckResponse:
        """
        Compare a proposed spend against the wallet's latest available credit.

        Raises:
            WalletNotEvaluatedError: If the wallet has no recorded evaluation
        """
        latest = (
            self.db.query(CreditScoreEvaluation)
            .filter(CreditScoreEvaluation.wallet_address == request.wallet_address)
            .order_by(CreditScoreEvaluation.created_at.desc())
            .first()
        )
        if latest is None:
            raise WalletNotEvaluatedError(request.wallet_address)

        approved, detail = check_spend(latest.available_credit, request.amount)
        metrics.record_spend_check(approved)

        logger.info(
            "spend_checked",
            wallet_address=request.wallet_address,
            amount=request.amount,
            available_credit=latest.available_credit,
            outcome="approved" if approved else "declined",
        )

        return SpendCheckResponse(
            wallet_address=request.wallet_address,
            amount=request.amount,
            approved=approved,
            available_credit=latest.available_credit,
            detail=detail,
        )

    def get_evaluation_history(self, wallet_address: str) -> EvaluationHistoryResponse:
        """
        Get evaluation history for a wallet, most recent first.

        Args:
            wallet_address: The wallet address

        Returns:
            EvaluationHistoryResponse with list of past evaluations
        """
        evaluations = (
            self.db.query(CreditScoreEvaluation)
            .filter(CreditScoreEvaluation.wallet_address == wallet_address)
            .order_by(CreditScoreEvaluation.created_at.desc())
            .all()
        )

        items = [
            EvaluationHistoryItem(
                evaluation_id=str(e.id),
                wallet_address=e.wallet_address,
                score=e.score,
                risk_level=e.risk_level,
                max_credit_limit=e.max_credit_limit,
                available_credit=e.available_credit,
                balance_source=e.balance_source,
                created_at=e.created_at,
            )
            for e in evaluations
        ]

        return EvaluationHistoryResponse(wallet_address=wallet_address, evaluations=items)


def _snapshot_to_json(snapshot: WalletActivitySnapshot) -> dict:
    """JSON-safe copy of a snapshot for the evaluation record."""
    data = asdict(snapshot)
    data["defi_protocols"] = sorted(snapshot.defi_protocols)
    return data
