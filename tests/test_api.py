"""API endpoint tests for the wallet credit scoring service."""
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from wallet_credit.scoring.recommendations import BUILD_HISTORY, IMPROVE_SUCCESS_RATE
from wallet_credit.services.ledger_client import LedgerApiError


def healthy_wallet_payload(**overrides) -> dict:
    """Request body matching the healthy snapshot used across the tests."""
    payload = {
        "wallet_address": "0xabc0000000000000000000000000000000000001",
        "total_transactions": 200,
        "total_volume": 20000,
        "avg_transaction_size": 100,
        "unique_contracts": 12,
        "failed_transactions": 4,
        "successful_transactions": 196,
        "gas_spent": 40,
        "tokens_held": 6,
        "nft_count": 2,
        "days_since_first_tx": 400,
        "days_since_last_tx": 2,
        "defi_protocols": ["Uniswap", "Aave", "Curve"],
        "lending_history": {"borrowed": 0, "repaid": 0, "defaults": 0},
    }
    payload.update(overrides)
    return payload


class TestHealthEndpoint:
    """Test the health check endpoint."""

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "service" in data


class TestMetricsEndpoint:
    """Test the Prometheus metrics endpoint."""

    def test_metrics_endpoint(self, client):
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "wallet_credit_evaluation_total" in response.text
        assert "http_requests_total" in response.text


class TestCreditScoreEndpoint:
    """Test POST /v1/credit-score."""

    def test_scores_healthy_wallet(self, client, mock_db):
        response = client.post("/v1/credit-score", json=healthy_wallet_payload())

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 376
        assert data["risk_level"] == "very_poor"
        assert data["max_credit_limit"] == 22701
        assert data["available_credit"] == 20701
        assert data["balance_source"] == "estimate"
        assert data["evaluation_id"]
        assert data["factors"]["positive"] == [
            "High transaction volume",
            "Long account history",
            "Excellent transaction success rate",
            "Active DeFi user",
        ]
        assert data["factors"]["negative"] == []
        assert data["recommendations"] == [BUILD_HISTORY, IMPROVE_SUCCESS_RATE]

    def test_evaluation_is_persisted(self, client, mock_db):
        client.post("/v1/credit-score", json=healthy_wallet_payload())

        mock_db.add.assert_called_once()
        mock_db.commit.assert_called_once()
        record = mock_db.add.call_args[0][0]
        assert record.wallet_address == "0xabc0000000000000000000000000000000000001"
        assert record.score == 376
        assert record.balance_source == "estimate"
        assert record.snapshot["defi_protocols"] == ["Aave", "Curve", "Uniswap"]

    def test_request_id_is_echoed(self, client):
        response = client.post(
            "/v1/credit-score",
            json=healthy_wallet_payload(),
            headers={"X-Request-ID": "req-123"},
        )
        assert response.headers["X-Request-ID"] == "req-123"

    def test_empty_wallet(self, client):
        response = client.post("/v1/credit-score", json={"wallet_address": "0xnew"})

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 300
        assert data["risk_level"] == "very_poor"
        assert data["factors"]["negative"] == ["Low transaction volume"]

    def test_duplicate_protocols_counted_once(self, client):
        response = client.post(
            "/v1/credit-score",
            json=healthy_wallet_payload(defi_protocols=["Aave", "Aave", "Curve"]),
        )
        assert "Active DeFi user" not in response.json()["factors"]["positive"]

    def test_missing_wallet_address(self, client):
        payload = healthy_wallet_payload()
        del payload["wallet_address"]
        response = client.post("/v1/credit-score", json=payload)
        assert response.status_code == 422

    def test_negative_counter_rejected(self, client):
        response = client.post(
            "/v1/credit-score", json=healthy_wallet_payload(total_transactions=-1)
        )
        assert response.status_code == 422

    @patch("wallet_credit.services.credit_score.LedgerClient")
    def test_ledger_balance_used_when_requested(self, mock_ledger_class, client):
        mock_ledger = AsyncMock()
        mock_ledger.get_outstanding_balance.return_value = 1500.0
        mock_ledger_class.return_value = mock_ledger

        response = client.post(
            "/v1/credit-score", json=healthy_wallet_payload(use_ledger_balance=True)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["balance_source"] == "ledger"
        assert data["available_credit"] == 21201
        mock_ledger.get_outstanding_balance.assert_awaited_once_with(
            "0xabc0000000000000000000000000000000000001"
        )

    @patch("wallet_credit.services.credit_score.LedgerClient")
    def test_ledger_not_called_by_default(self, mock_ledger_class, client):
        mock_ledger = AsyncMock()
        mock_ledger_class.return_value = mock_ledger

        client.post("/v1/credit-score", json=healthy_wallet_payload())

        mock_ledger.get_outstanding_balance.assert_not_awaited()

    @patch("wallet_credit.services.credit_score.LedgerClient")
    def test_ledger_failure_returns_502(self, mock_ledger_class, client, mock_db):
        mock_ledger = AsyncMock()
        mock_ledger.get_outstanding_balance.side_effect = LedgerApiError(503, "ledger down")
        mock_ledger_class.return_value = mock_ledger

        response = client.post(
            "/v1/credit-score", json=healthy_wallet_payload(use_ledger_balance=True)
        )

        assert response.status_code == 502
        assert "ledger down" in response.json()["detail"]
        mock_db.add.assert_not_called()


class TestHistoryEndpoint:
    """Test GET /v1/credit-score/history."""

    def test_history_returns_evaluations(self, client, mock_db):
        record = SimpleNamespace(
            id="6f1c1f0e-0000-4000-8000-000000000001",
            wallet_address="0xabc",
            score=376,
            risk_level="very_poor",
            max_credit_limit=22701,
            available_credit=20701.0,
            balance_source="estimate",
            created_at=datetime(2026, 10, 1, tzinfo=timezone.utc),
        )
        mock_db.query.return_value.filter.return_value.order_by.return_value.all.return_value = [record]

        response = client.get("/v1/credit-score/history?wallet_address=0xabc")

        assert response.status_code == 200
        data = response.json()
        assert data["wallet_address"] == "0xabc"
        assert len(data["evaluations"]) == 1
        assert data["evaluations"][0]["score"] == 376

    def test_history_empty(self, client, mock_db):
        mock_db.query.return_value.filter.return_value.order_by.return_value.all.return_value = []

        response = client.get("/v1/credit-score/history?wallet_address=0xnone")

        assert response.status_code == 200
        assert response.json()["evaluations"] == []

    def test_history_missing_wallet_address(self, client):
        response = client.get("/v1/credit-score/history")
        assert response.status_code == 422


class TestSpendCheckEndpoint:
    """Test POST /v1/spend-check."""

    def _latest(self, mock_db, available_credit):
        latest = SimpleNamespace(available_credit=available_credit) if available_credit is not None else None
        mock_db.query.return_value.filter.return_value.order_by.return_value.first.return_value = latest

    def test_spend_within_available_credit(self, client, mock_db):
        self._latest(mock_db, 2000.0)

        response = client.post("/v1/spend-check", json={"wallet_address": "0xabc", "amount": 1500})

        assert response.status_code == 200
        data = response.json()
        assert data["approved"] is True
        assert data["available_credit"] == 2000.0

    def test_spend_over_available_credit(self, client, mock_db):
        self._latest(mock_db, 2000.0)

        response = client.post("/v1/spend-check", json={"wallet_address": "0xabc", "amount": 2500})

        data = response.json()
        assert data["approved"] is False
        assert data["detail"] == "Insufficient credit. Available: $2,000.00"

    def test_wallet_never_scored(self, client, mock_db):
        self._latest(mock_db, None)

        response = client.post("/v1/spend-check", json={"wallet_address": "0xnew", "amount": 10})

        assert response.status_code == 404

    def test_non_positive_amount_rejected(self, client):
        response = client.post("/v1/spend-check", json={"wallet_address": "0xabc", "amount": 0})
        assert response.status_code == 422
