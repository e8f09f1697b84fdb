"""
Prometheus Metrics for the Wallet Credit Scoring Service.

This module defines all metrics exposed at the /metrics endpoint.
Metrics are categorized into:

1. Business Impact Metrics - For Product/Risk teams
   - Score distribution, risk tiers, credit lines, spend checks

2. Technical Metrics - For Engineering/SRE teams
   - Latencies, ledger errors, HTTP traffic
"""
from typing import Optional

from prometheus_client import Counter, Histogram, Info

# =============================================================================
# SERVICE INFO
# =============================================================================

SERVICE_INFO = Info(
    "wallet_credit_service",
    "Service information"
)
SERVICE_INFO.info({
    "version": "0.1.0",
    "service": "wallet-credit-service",
})

# =============================================================================
# BUSINESS IMPACT METRICS
# =============================================================================

# Counter: Evaluations by risk tier
EVALUATION_TOTAL = Counter(
    "wallet_credit_evaluation_total",
    "Total credit score evaluations",
    ["risk_level", "balance_source"]
)

# Histogram: Score distribution
SCORE_DISTRIBUTION = Histogram(
    "wallet_credit_score",
    "Distribution of credit scores",
    buckets=[300, 400, 500, 600, 650, 700, 750, 800, 850]
)

# Histogram: Max credit limit distribution
MAX_CREDIT_LIMIT = Histogram(
    "wallet_credit_max_credit_limit",
    "Distribution of maximum credit limits",
    buckets=[5000, 10000, 20000, 30000, 40000, 50000]
)

# Counter: Spend checks by outcome
SPEND_CHECK_TOTAL = Counter(
    "wallet_credit_spend_check_total",
    "Spend checks against available credit",
    ["outcome"]  # approved, declined
)

# =============================================================================
# TECHNICAL METRICS
# =============================================================================

SCORING_LATENCY = Histogram(
    "wallet_credit_scoring_latency_seconds",
    "Time to evaluate a wallet snapshot",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1]
)

LEDGER_FETCH_LATENCY = Histogram(
    "wallet_credit_ledger_fetch_latency_seconds",
    "Time to fetch outstanding balance from the ledger",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

LEDGER_FETCH_FAILURES = Counter(
    "ledger_fetch_failures_total",
    "Total ledger fetch failures",
    ["error_type"]  # timeout, connection_error, http_error
)

LEDGER_FETCH_SUCCESS = Counter(
    "wallet_credit_ledger_fetch_success_total",
    "Total successful ledger fetches"
)

# =============================================================================
# HTTP METRICS (Standard)
# =============================================================================

HTTP_REQUESTS = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

HTTP_REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
)

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def record_evaluation(
    risk_level: str,
    score: int,
    max_credit_limit: int,
    balance_source: str,
    latency_seconds: float,
) -> None:
    """
    Record all metrics for a single evaluation.

    Args:
        risk_level: Risk tier of the result (e.g., "excellent", "very_poor")
        score: Final integer score
        max_credit_limit: Maximum credit limit assigned
        balance_source: "estimate" or "ledger"
        latency_seconds: Time taken to score the snapshot
    """
    EVALUATION_TOTAL.labels(risk_level=risk_level, balance_source=balance_source).inc()
    SCORE_DISTRIBUTION.observe(score)
    MAX_CREDIT_LIMIT.observe(max_credit_limit)
    SCORING_LATENCY.observe(latency_seconds)


def record_spend_check(approved: bool) -> None:
    """Record the outcome of a spend check."""
    outcome = "approved" if approved else "declined"
    SPEND_CHECK_TOTAL.labels(outcome=outcome).inc()


def record_ledger_fetch(success: bool, latency_seconds: float, error_type: Optional[str] = None) -> None:
    """Record ledger fetch metrics."""
    LEDGER_FETCH_LATENCY.observe(latency_seconds)

    if success:
        LEDGER_FETCH_SUCCESS.inc()
    else:
        LEDGER_FETCH_FAILURES.labels(error_type=error_type or "unknown").inc()


def record_http_request(method: str, endpoint: str, status: int, latency_seconds: Optional[float] = None) -> None:
    """Record a served HTTP request."""
    HTTP_REQUESTS.labels(method=method, endpoint=endpoint, status=status).inc()
    if latency_seconds is not None:
        HTTP_REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(latency_seconds)
