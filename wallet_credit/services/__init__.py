"""Service layer for the wallet credit scoring service."""
from wallet_credit.services.credit_score import CreditScoreService, WalletNotEvaluatedError
from wallet_credit.services.ledger_client import LedgerApiError, LedgerClient

__all__ = ["CreditScoreService", "LedgerApiError", "LedgerClient", "WalletNotEvaluatedError"]
