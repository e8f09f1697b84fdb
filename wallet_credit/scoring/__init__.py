"""Credit scoring engine for wallet activity snapshots."""
from wallet_credit.scoring.calculator import CreditScoreCalculator, compute_raw_score, lending_score
from wallet_credit.scoring.credit_limit import available_credit, check_spend, classify, max_credit_limit
from wallet_credit.scoring.engine import EMPTY_WALLET_RESULT, evaluate
from wallet_credit.scoring.factors import analyze_factors
from wallet_credit.scoring.recommendations import recommend
from wallet_credit.scoring.snapshot import (
    CreditFactors,
    CreditScoreResult,
    LendingHistory,
    RiskLevel,
    WalletActivitySnapshot,
)

__all__ = [
    "CreditFactors",
    "CreditScoreCalculator",
    "CreditScoreResult",
    "EMPTY_WALLET_RESULT",
    "LendingHistory",
    "RiskLevel",
    "WalletActivitySnapshot",
    "analyze_factors",
    "available_credit",
    "check_spend",
    "classify",
    "compute_raw_score",
    "evaluate",
    "lending_score",
    "max_credit_limit",
    "recommend",
]
