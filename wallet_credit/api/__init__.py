"""HTTP API for the wallet credit scoring service."""
from wallet_credit.api.routes import router

__all__ = ["router"]
