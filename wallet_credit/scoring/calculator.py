"""
Raw Credit Score Calculator

This module turns a wallet activity snapshot into a numeric credit score on
the familiar 300-850 scale. The score feeds the risk tier, the credit line
and the recommendations shown to the wallet owner.

METHODOLOGY:
------------
The score starts at a base of 300. Seven sub-scores are computed from the
snapshot, each capped at its own ceiling, then scaled by a fixed weight and
added to the base. Two penalties are applied afterwards and the total is
clamped to [300, 850].

Two layers of bounding keep the score stable:
- Per-factor caps stop one extreme dimension (e.g. enormous volume) from
  dominating the total.
- The global clamp keeps malformed or adversarial snapshots inside the scale.

Every ratio uses max(1, denominator), so empty wallets score without any
arithmetic fault.
"""
from dataclasses import dataclass

from wallet_credit.logging import get_logger
from wallet_credit.scoring.snapshot import LendingHistory, WalletActivitySnapshot

logger = get_logger(__name__)

BASE_SCORE = 300.0
MIN_SCORE = 300.0
MAX_SCORE = 850.0

# Sub-score weights (sum to 1.0)
WEIGHTS = {
    "volume": 0.25,
    "frequency": 0.20,
    "account_age": 0.15,
    "success_rate": 0.15,
    "defi": 0.10,
    "lending": 0.10,
    "gas_efficiency": 0.05,
}

# Sub-score caps (applied before weighting)
VOLUME_CAP = 150.0
FREQUENCY_CAP = 100.0
ACCOUNT_AGE_CAP = 100.0
DEFI_CAP = 50.0
LENDING_CAP = 100.0
GAS_EFFICIENCY_CAP = 50.0

NEUTRAL_LENDING_SCORE = 50.0
DEFAULT_PENALTY = 50.0
HIGH_FAILURE_PENALTY = 100.0


@dataclass(frozen=True)
class SubScores:
    """Capped, unweighted sub-scores for one snapshot."""
    volume: float
    frequency: float
    account_age: float
    success_rate: float
    defi: float
    lending: float
    gas_efficiency: float

    def weighted_total(self) -> float:
        return sum(getattr(self, name) * weight for name, weight in WEIGHTS.items())


def lending_score(history: LendingHistory) -> float:
    """
    Score lending behavior (0-100 points).

    A wallet that never borrowed gets the neutral 50: no reward and no
    penalty. Otherwise repayment adds up to 50 points and each default,
    relative to the borrowed amount, takes points away.
    """
    if history.borrowed == 0:
        return NEUTRAL_LENDING_SCORE

    repayment_rate = history.repaid / max(1, history.borrowed)
    default_rate = history.defaults / max(1, history.borrowed)

    score = NEUTRAL_LENDING_SCORE + repayment_rate * 50 - default_rate * 100
    return max(0.0, min(LENDING_CAP, score))


class CreditScoreCalculator:
    """
    Calculates raw credit scores from wallet activity snapshots.

    SUB-SCORES:
    -----------
    | Sub-score      | Formula                                      | Cap | Weight |
    |----------------|----------------------------------------------|-----|--------|
    | Volume         | total_volume / 10000 * 150                   | 150 | 0.25   |
    | Frequency      | total_transactions / days_since_first_tx * 10| 100 | 0.20   |
    | Account age    | days_since_first_tx * 0.5                    | 100 | 0.15   |
    | Success rate   | successful / total * 100                     | 100 | 0.15   |
    | DeFi           | distinct protocols * 10                      | 50  | 0.10   |
    | Lending        | lending_score()                              | 100 | 0.10   |
    | Gas efficiency | total_volume / gas_spent / 100               | 50  | 0.05   |

    PENALTIES (applied in order after the weighted sum):
    ----------------------------------------------------
    - 50 points per lending default, uncapped
    - 100 points when failed transactions exceed 30% of successful ones

    A wallet with no recorded transactions has no history to score and stays
    at the base score.
    """

    def compute(self, snapshot: WalletActivitySnapshot) -> float:
        """
        Compute the raw credit score for a snapshot.

        Args:
            snapshot: Wallet activity snapshot

        Returns:
            Score in [300, 850], still in floating point
        """
        if snapshot.total_transactions <= 0:
            logger.debug("credit_score_no_history", wallet_address=snapshot.address)
            return BASE_SCORE

        sub_scores = self.sub_scores(snapshot)
        score = BASE_SCORE + sub_scores.weighted_total()

        default_penalty = self._default_penalty(snapshot.lending_history.defaults)
        failure_penalty = HIGH_FAILURE_PENALTY if snapshot.has_high_failure_rate else 0.0
        score -= default_penalty
        score -= failure_penalty

        score = max(MIN_SCORE, min(MAX_SCORE, score))

        logger.debug(
            "credit_score_computed",
            wallet_address=snapshot.address,
            score=round(score, 2),
            volume_score=sub_scores.volume,
            frequency_score=sub_scores.frequency,
            account_age_score=sub_scores.account_age,
            success_score=sub_scores.success_rate,
            defi_score=sub_scores.defi,
            lending_score=sub_scores.lending,
            gas_score=sub_scores.gas_efficiency,
            default_penalty=default_penalty,
            failure_penalty=failure_penalty,
        )

        return score

    def sub_scores(self, snapshot: WalletActivitySnapshot) -> SubScores:
        """Compute every capped sub-score for a snapshot."""
        return SubScores(
            volume=self._score_volume(snapshot.total_volume),
            frequency=self._score_frequency(
                snapshot.total_transactions, snapshot.days_since_first_tx
            ),
            account_age=self._score_account_age(snapshot.days_since_first_tx),
            success_rate=snapshot.success_rate * 100,
            defi=self._score_defi(snapshot.protocol_count),
            lending=lending_score(snapshot.lending_history),
            gas_efficiency=self._score_gas_efficiency(
                snapshot.total_volume, snapshot.gas_spent
            ),
        )

    def _score_volume(self, total_volume: float) -> float:
        """Volume score (0-150 points), saturating at 10,000 of volume."""
        return min(VOLUME_CAP, total_volume / 10000 * 150)

    def _score_frequency(self, total_transactions: int, days_since_first_tx: float) -> float:
        """Frequency score (0-100 points): 10 points per daily transaction."""
        tx_per_day = total_transactions / max(1, days_since_first_tx)
        return min(FREQUENCY_CAP, tx_per_day * 10)

    def _score_account_age(self, days_since_first_tx: float) -> float:
        # Full marks after 200 days
        return min(ACCOUNT_AGE_CAP, days_since_first_tx * 0.5)

    def _score_defi(self, protocol_count: int) -> float:
        return min(DEFI_CAP, protocol_count * 10)

    def _score_gas_efficiency(self, total_volume: float, gas_spent: float) -> float:
        """Gas efficiency score (0-50 points): volume moved per unit of gas."""
        efficiency = total_volume / max(1, gas_spent)
        return min(GAS_EFFICIENCY_CAP, efficiency / 100)

    def _default_penalty(self, defaults: int) -> float:
        if defaults > 0:
            return defaults * DEFAULT_PENALTY
        return 0.0


def compute_raw_score(snapshot: WalletActivitySnapshot) -> float:
    """Compute the raw credit score with a default calculator."""
    return CreditScoreCalculator().compute(snapshot)
