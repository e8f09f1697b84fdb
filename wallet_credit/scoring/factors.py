"""
Credit factor analysis.

Explains a wallet's standing in plain language. The checks read raw
snapshot fields and use their own thresholds, independent of the computed
score, so a wallet can show negative factors alongside a good tier (or the
reverse).
"""
from wallet_credit.scoring.snapshot import CreditFactors, WalletActivitySnapshot

HIGH_VOLUME_THRESHOLD = 10000
LONG_HISTORY_DAYS = 365
EXCELLENT_SUCCESS_RATE = 0.9
ACTIVE_DEFI_PROTOCOLS = 2
INACTIVE_DAYS = 30
LOW_VOLUME_THRESHOLD = 1000


def analyze_factors(snapshot: WalletActivitySnapshot) -> CreditFactors:
    """
    Derive positive and negative factors from a snapshot.

    Every check runs; none short-circuits another. Messages appear in the
    order the checks are listed below.
    """
    lending = snapshot.lending_history
    positive = []
    negative = []

    if snapshot.total_volume > HIGH_VOLUME_THRESHOLD:
        positive.append("High transaction volume")
    if snapshot.days_since_first_tx > LONG_HISTORY_DAYS:
        positive.append("Long account history")
    if snapshot.success_rate > EXCELLENT_SUCCESS_RATE:
        positive.append("Excellent transaction success rate")
    if snapshot.protocol_count > ACTIVE_DEFI_PROTOCOLS:
        positive.append("Active DeFi user")
    if lending.repaid > lending.borrowed:
        positive.append("Good lending repayment history")

    if lending.defaults > 0:
        negative.append(f"{lending.defaults} lending default(s)")
    if snapshot.has_high_failure_rate:
        negative.append("High transaction failure rate")
    if snapshot.days_since_last_tx > INACTIVE_DAYS:
        negative.append("Inactive account (30+ days)")
    if snapshot.total_volume < LOW_VOLUME_THRESHOLD:
        negative.append("Low transaction volume")

    return CreditFactors(positive=tuple(positive), negative=tuple(negative))
