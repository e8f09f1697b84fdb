"""
Risk Tier and Credit Limit Mapping

Maps credit scores to risk tiers and credit-line figures.

RISK TIERS:
-----------
Tiers are non-overlapping and checked highest first:

- 750+:    excellent
- 700-749: good
- 650-699: fair
- 600-649: poor
- < 600:   very_poor

CREDIT LINE:
------------
The maximum credit limit interpolates linearly between a floor of 1,000
and a ceiling of 50,000 by score / 850. Units are the snapshot's currency
denomination.

Available credit is the maximum limit minus the wallet's current balance.
The authoritative balance comes from the ledger collaborator. When it is
not supplied, a volume-based estimate (10% of total volume, at most
10,000) stands in for it; that estimate is a placeholder, not a ledger
figure.
"""
from typing import Optional

from wallet_credit.logging import get_logger
from wallet_credit.scoring.snapshot import RiskLevel, WalletActivitySnapshot

logger = get_logger(__name__)

CREDIT_LIMIT_FLOOR = 1000
CREDIT_LIMIT_CEILING = 50000
SCORE_SCALE = 850

BALANCE_ESTIMATE_RATE = 0.1
BALANCE_ESTIMATE_CAP = 10000.0

# Score thresholds (inclusive lower bound)
RISK_THRESHOLDS = [
    (750, RiskLevel.EXCELLENT),
    (700, RiskLevel.GOOD),
    (650, RiskLevel.FAIR),
    (600, RiskLevel.POOR),
]


def classify(score: float) -> RiskLevel:
    """
    Map a credit score to its risk tier.

    Example:
        >>> classify(780)
        <RiskLevel.EXCELLENT: 'excellent'>
        >>> classify(599)
        <RiskLevel.VERY_POOR: 'very_poor'>
    """
    for threshold, level in RISK_THRESHOLDS:
        if score >= threshold:
            return level
    return RiskLevel.VERY_POOR


def max_credit_limit(score: float) -> int:
    """
    Maximum credit line for a score, rounded to the nearest unit.

    Example:
        >>> max_credit_limit(850)
        50000
        >>> max_credit_limit(300)
        18294
    """
    multiplier = score / SCORE_SCALE
    limit = CREDIT_LIMIT_FLOOR + (CREDIT_LIMIT_CEILING - CREDIT_LIMIT_FLOOR) * multiplier
    return max(0, int(round(limit)))


def estimate_current_balance(snapshot: WalletActivitySnapshot) -> float:
    """Placeholder balance: 10% of total volume, capped at 10,000."""
    return min(snapshot.total_volume * BALANCE_ESTIMATE_RATE, BALANCE_ESTIMATE_CAP)


def available_credit(
    score: float,
    snapshot: WalletActivitySnapshot,
    outstanding_balance: Optional[float] = None,
) -> float:
    """
    Credit still available to a wallet.

    Args:
        score: Credit score (300-850)
        snapshot: Wallet activity snapshot, used for the balance estimate
        outstanding_balance: Balance owed according to the ledger. When None,
            the volume-based estimate is used instead.

    Returns:
        max(0, max_credit_limit - balance), never above max_credit_limit
    """
    limit = max_credit_limit(score)
    if outstanding_balance is None:
        balance = estimate_current_balance(snapshot)
    else:
        balance = outstanding_balance
    balance = max(0.0, balance)

    available = max(0.0, limit - balance)

    logger.debug(
        "available_credit_computed",
        score=score,
        max_credit_limit=limit,
        balance=balance,
        balance_source="estimate" if outstanding_balance is None else "ledger",
        available_credit=available,
    )
    return round(available, 2)


def check_spend(available: float, amount: float) -> tuple[bool, str]:
    """
    Compare a proposed spend against the available credit.

    Returns:
        Tuple of (approved, detail)

    Example:
        >>> check_spend(5000, 1200)
        (True, 'Spend approved')
        >>> check_spend(500, 1200)
        (False, 'Insufficient credit. Available: $500.00')
    """
    if amount <= available:
        return True, "Spend approved"
    return False, f"Insufficient credit. Available: ${available:,.2f}"
