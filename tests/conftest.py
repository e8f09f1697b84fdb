"""Shared fixtures and snapshot builders for the wallet credit tests."""
import random
from typing import Callable
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from wallet_credit.database import get_db
from wallet_credit.main import app
from wallet_credit.scoring import LendingHistory, WalletActivitySnapshot

DEFI_PROTOCOLS = [
    "Uniswap", "Aave", "Compound", "Curve", "SushiSwap",
    "Yearn Finance", "MakerDAO", "Balancer", "1inch", "Synthetix",
]


# =============================================================================
# SNAPSHOT BUILDERS
# =============================================================================

def build_snapshot(
    address: str = "0xabc0000000000000000000000000000000000001",
    borrowed: float = 0,
    repaid: float = 0,
    defaults: int = 0,
    **overrides,
) -> WalletActivitySnapshot:
    """
    Build a healthy, active wallet snapshot with optional overrides.

    Lending fields are passed flat (borrowed/repaid/defaults) and folded
    into the nested LendingHistory.
    """
    fields = {
        "total_transactions": 200,
        "total_volume": 20000.0,
        "avg_transaction_size": 100.0,
        "unique_contracts": 12,
        "failed_transactions": 4,
        "successful_transactions": 196,
        "gas_spent": 40.0,
        "tokens_held": 6,
        "nft_count": 2,
        "days_since_first_tx": 400.0,
        "days_since_last_tx": 2.0,
        "defi_protocols": frozenset({"Uniswap", "Aave", "Curve"}),
    }
    fields.update(overrides)
    return WalletActivitySnapshot(
        address=address,
        lending_history=LendingHistory(borrowed=borrowed, repaid=repaid, defaults=defaults),
        **fields,
    )


def random_snapshot(rng: random.Random) -> WalletActivitySnapshot:
    """Build a plausible wallet snapshot from a seeded generator."""
    total = rng.randint(0, 1000)
    failed = rng.randint(0, 40)
    return WalletActivitySnapshot(
        address=f"0x{rng.getrandbits(160):040x}",
        total_transactions=total,
        total_volume=float(rng.randint(0, 150000)),
        avg_transaction_size=float(rng.randint(0, 550)),
        unique_contracts=rng.randint(0, 55),
        failed_transactions=failed,
        successful_transactions=max(0, total - failed) if rng.random() < 0.8 else rng.randint(0, total + 1),
        gas_spent=float(rng.randint(0, 20)),
        tokens_held=rng.randint(0, 20),
        nft_count=rng.randint(0, 10),
        days_since_first_tx=float(rng.randint(0, 1100)),
        days_since_last_tx=float(rng.randint(0, 60)),
        defi_protocols=frozenset(rng.sample(DEFI_PROTOCOLS, rng.randint(0, 5))),
        lending_history=LendingHistory(
            borrowed=float(rng.choice([0, rng.randint(1, 5000)])),
            repaid=float(rng.randint(0, 5000)),
            defaults=rng.randint(0, 3),
        ),
    )


@pytest.fixture
def make_snapshot() -> Callable[..., WalletActivitySnapshot]:
    return build_snapshot


@pytest.fixture
def random_snapshots() -> list[WalletActivitySnapshot]:
    """Two hundred reproducible random snapshots."""
    rng = random.Random(20241018)
    return [random_snapshot(rng) for _ in range(200)]


# =============================================================================
# API FIXTURES
# =============================================================================

@pytest.fixture
def mock_db():
    """Mock database session; no Postgres needed."""
    db = MagicMock()
    db.add = MagicMock()
    db.commit = MagicMock()
    db.query = MagicMock()
    return db


@pytest.fixture
def client(mock_db):
    """Test client with the database dependency replaced by a mock session."""
    app.dependency_overrides[get_db] = lambda: mock_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
