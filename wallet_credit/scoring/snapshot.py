"""
Data model for wallet credit scoring.

A WalletActivitySnapshot summarizes a wallet's historical on-chain behavior.
It is assembled by the feature-extraction collaborator and handed to the
engine once per scoring request. A CreditScoreResult is built fresh for
every evaluation and never mutated afterwards.
"""
from dataclasses import dataclass, field
from enum import Enum


class RiskLevel(str, Enum):
    """Five-level risk tier derived from the final score."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    VERY_POOR = "very_poor"


@dataclass(frozen=True)
class LendingHistory:
    """Cumulative lending activity of a wallet."""
    borrowed: float = 0.0
    repaid: float = 0.0
    defaults: int = 0


@dataclass(frozen=True)
class WalletActivitySnapshot:
    """
    Structured summary of a wallet's historical activity.

    Counters are expected to be non-negative but are not validated here;
    the scoring stages guard every division and cap every sub-score, so
    malformed values still produce a well-defined result.

    Attributes:
        address: Wallet address, treated as an opaque key
        total_volume: Cumulative volume in the snapshot's currency denomination
        gas_spent: Cumulative gas/fees spent, same denomination as volume
        days_since_first_tx: Days elapsed since the first observed transaction
        days_since_last_tx: Days elapsed since the most recent transaction
        defi_protocols: Distinct DeFi protocol names the wallet interacted with
    """
    address: str
    total_transactions: int = 0
    total_volume: float = 0.0
    avg_transaction_size: float = 0.0
    unique_contracts: int = 0
    failed_transactions: int = 0
    successful_transactions: int = 0
    gas_spent: float = 0.0
    tokens_held: int = 0
    nft_count: int = 0
    days_since_first_tx: float = 0.0
    days_since_last_tx: float = 0.0
    defi_protocols: frozenset[str] = field(default_factory=frozenset)
    lending_history: LendingHistory = field(default_factory=LendingHistory)

    def __post_init__(self):
        # Accept any iterable of names; keep the set semantics.
        if not isinstance(self.defi_protocols, frozenset):
            object.__setattr__(self, "defi_protocols", frozenset(self.defi_protocols))

    @property
    def protocol_count(self) -> int:
        return len(self.defi_protocols)

    @property
    def success_rate(self) -> float:
        """Successful transactions over total transactions (0 when empty)."""
        return self.successful_transactions / max(1, self.total_transactions)

    @property
    def has_high_failure_rate(self) -> bool:
        """More failures than 30% of the successful transaction count."""
        return self.failed_transactions > self.successful_transactions * 0.3

    def is_empty(self) -> bool:
        """True when the snapshot carries no activity at all."""
        return self == WalletActivitySnapshot(address=self.address)


@dataclass(frozen=True)
class CreditFactors:
    """Human-readable explanations, in the order the checks produced them."""
    positive: tuple[str, ...] = ()
    negative: tuple[str, ...] = ()


@dataclass(frozen=True)
class CreditScoreResult:
    """Outcome of a single credit score evaluation."""
    score: int  # 300-850
    risk_level: RiskLevel
    available_credit: float
    max_credit_limit: int
    factors: CreditFactors
    recommendations: tuple[str, ...]

    def to_dict(self) -> dict:
        """Plain-data view used for persistence and API responses."""
        return {
            "score": self.score,
            "risk_level": self.risk_level.value,
            "available_credit": self.available_credit,
            "max_credit_limit": self.max_credit_limit,
            "factors": {
                "positive": list(self.factors.positive),
                "negative": list(self.factors.negative),
            },
            "recommendations": list(self.recommendations),
        }
