"""
Pytest configuration and fixtures for token SDK tests.
"""

import pytest

from token_sdk import TokenContract
from token_sdk.server import create_app

# All-digit addresses are their own EIP-55 checksum form
DEPLOYER = "0x1000000000000000000000000000000000000001"
ALICE = "0x2000000000000000000000000000000000000002"
BOB = "0x3000000000000000000000000000000000000003"
CAROL = "0x4000000000000000000000000000000000000004"

INITIAL_SUPPLY = 1_000_000 * 10 ** 18


@pytest.fixture
def token():
    """Fresh AdwaitToken ledger deployed by DEPLOYER."""
    return TokenContract("AdwaitToken", "ADW", INITIAL_SUPPLY, DEPLOYER)


@pytest.fixture
def funded_token(token):
    """Ledger where ALICE holds 100 base units."""
    token.transfer(DEPLOYER, ALICE, 100)
    return token


@pytest.fixture
def app(token):
    app = create_app(token)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def http(app):
    """Flask test client."""
    return app.test_client()
