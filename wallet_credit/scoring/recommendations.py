"""Improvement suggestions for a scored wallet."""
from wallet_credit.scoring.snapshot import WalletActivitySnapshot

LOW_SCORE_THRESHOLD = 600
TARGET_VOLUME = 5000
REGULAR_ACTIVITY_DAYS = 7

BUILD_HISTORY = "Build transaction history with regular activity"
IMPROVE_SUCCESS_RATE = "Improve transaction success rate"
INCREASE_VOLUME = "Increase transaction volume to improve credit score"
STAY_ACTIVE = "Maintain regular wallet activity"
USE_DEFI = "Engage with DeFi protocols to demonstrate financial literacy"
AVOID_DEFAULTS = "Avoid future lending defaults to improve credit score"


def recommend(snapshot: WalletActivitySnapshot, score: float) -> tuple[str, ...]:
    """
    Suggest actions that would improve the wallet's score.

    Each rule is evaluated independently and appended in a fixed order.
    An empty tuple is a valid answer for well-qualified wallets.
    """
    recommendations = []

    if score < LOW_SCORE_THRESHOLD:
        recommendations.append(BUILD_HISTORY)
        recommendations.append(IMPROVE_SUCCESS_RATE)

    if snapshot.total_volume < TARGET_VOLUME:
        recommendations.append(INCREASE_VOLUME)

    if snapshot.days_since_last_tx > REGULAR_ACTIVITY_DAYS:
        recommendations.append(STAY_ACTIVE)

    if snapshot.protocol_count == 0:
        recommendations.append(USE_DEFI)

    if snapshot.lending_history.defaults > 0:
        recommendations.append(AVOID_DEFAULTS)

    return tuple(recommendations)
