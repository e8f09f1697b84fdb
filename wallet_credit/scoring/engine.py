"""
Credit scoring entry point.

evaluate() runs the full pipeline for one snapshot:

    snapshot -> raw score -> credit limits, recommendations
    raw score -> presented score -> risk tier
    snapshot -> positive / negative factors

and merges the outputs into a CreditScoreResult. Every stage is a pure
function of its arguments, so evaluate() is safe to call concurrently and
returns identical results for identical snapshots.
"""
import math
from typing import Optional

from wallet_credit.scoring.calculator import CreditScoreCalculator
from wallet_credit.scoring.credit_limit import available_credit, classify, max_credit_limit
from wallet_credit.scoring.factors import analyze_factors
from wallet_credit.scoring.recommendations import recommend
from wallet_credit.scoring.snapshot import CreditScoreResult, WalletActivitySnapshot

_calculator = CreditScoreCalculator()


def round_score(raw_score: float) -> int:
    """Round half up to the presented integer score."""
    return int(math.floor(raw_score + 0.5))


def _assemble(
    snapshot: WalletActivitySnapshot,
    outstanding_balance: Optional[float],
) -> CreditScoreResult:
    raw_score = _calculator.compute(snapshot)
    score = round_score(raw_score)
    # Tier follows the presented score; money figures use the raw score.
    return CreditScoreResult(
        score=score,
        risk_level=classify(score),
        available_credit=available_credit(raw_score, snapshot, outstanding_balance),
        max_credit_limit=max_credit_limit(raw_score),
        factors=analyze_factors(snapshot),
        recommendations=recommend(snapshot, raw_score),
    )


# Result for a wallet with no activity at all; built once.
EMPTY_WALLET_RESULT = _assemble(WalletActivitySnapshot(address=""), None)


def evaluate(
    snapshot: WalletActivitySnapshot,
    outstanding_balance: Optional[float] = None,
) -> CreditScoreResult:
    """
    Score a wallet activity snapshot.

    Args:
        snapshot: Wallet activity snapshot from the feature-extraction step
        outstanding_balance: Balance currently owed according to the ledger.
            When None, available credit uses the volume-based estimate.

    Returns:
        CreditScoreResult with score, tier, limits, factors and recommendations
    """
    if outstanding_balance is None and snapshot.is_empty():
        return EMPTY_WALLET_RESULT
    return _assemble(snapshot, outstanding_balance)
