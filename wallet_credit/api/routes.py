"""API route handlers for the wallet credit scoring service."""
import time

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from wallet_credit.database import get_db
from wallet_credit.logging import get_logger, log_evaluation, set_request_context
from wallet_credit.schemas import (
    CreditScoreResponse,
    EvaluationHistoryResponse,
    SpendCheckRequest,
    SpendCheckResponse,
    WalletActivityRequest,
)
from wallet_credit.services.credit_score import CreditScoreService, WalletNotEvaluatedError
from wallet_credit.services.ledger_client import LedgerApiError

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["credit"])


@router.post("/credit-score", response_model=CreditScoreResponse)
async def score_wallet(
    request_body: WalletActivityRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Score a wallet activity snapshot.

    This endpoint:
    1. Optionally fetches the wallet's outstanding balance from the ledger
    2. Computes the credit score, risk tier and credit line
    3. Explains the score with positive/negative factors and recommendations
    4. Records the evaluation for later spend checks
    """
    start_time = time.perf_counter()
    request_id = getattr(request.state, "request_id", "unknown")

    set_request_context(request_id, wallet_address=request_body.wallet_address)

    logger.info(
        "evaluation_requested",
        wallet_address=request_body.wallet_address,
        total_transactions=request_body.total_transactions,
    )

    service = CreditScoreService(db)

    try:
        response = await service.score_wallet(request_body)
    except LedgerApiError as e:
        logger.error(
            "evaluation_failed",
            wallet_address=request_body.wallet_address,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            error=str(e),
            outcome="error",
        )
        raise

    log_evaluation(
        logger=logger,
        wallet_address=response.wallet_address,
        score=response.score,
        risk_level=response.risk_level,
        max_credit_limit=response.max_credit_limit,
        available_credit=response.available_credit,
        balance_source=response.balance_source,
        duration_ms=(time.perf_counter() - start_time) * 1000,
    )

    return response


@router.get("/credit-score/history", response_model=EvaluationHistoryResponse)
async def get_evaluation_history(
    wallet_address: str,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Get evaluation history for a wallet.

    Returns all past evaluations for the wallet, most recent first.
    """
    start_time = time.perf_counter()
    request_id = getattr(request.state, "request_id", "unknown")
    set_request_context(request_id, wallet_address=wallet_address)

    logger.info("history_fetch_requested", wallet_address=wallet_address)

    history = CreditScoreService(db).get_evaluation_history(wallet_address)

    logger.info(
        "history_fetch_completed",
        wallet_address=wallet_address,
        evaluation_count=len(history.evaluations),
        duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        outcome="success",
    )

    return history


@router.post("/spend-check", response_model=SpendCheckResponse)
async def check_spend(
    request_body: SpendCheckRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Check a proposed spend against the wallet's available credit.

    Uses the most recent evaluation of the wallet. Wallets that were never
    scored get a 404.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    set_request_context(request_id, wallet_address=request_body.wallet_address)

    try:
        return CreditScoreService(db).check_spend(request_body)
    except WalletNotEvaluatedError as e:
        logger.warning(
            "spend_check_wallet_not_evaluated",
            wallet_address=request_body.wallet_address,
            outcome="not_found",
        )
        raise HTTPException(status_code=404, detail=str(e))
