"""
Tests for addresses, amounts, roles and notifications.
"""

import pytest

from token_sdk.errors import InvalidAddress, InvalidAmount, InvalidRole, TokenError
from token_sdk.token_types import (
    DEFAULT_ADMIN_ROLE,
    MAX_UINT256,
    MINTER_ROLE,
    ZERO_ADDRESS,
    EventType,
    TokenConfig,
    TokenEvent,
    check_amount,
    format_units,
    role_id,
    role_name,
    to_address,
)

from conftest import ALICE, DEPLOYER


class TestAddresses:

    def test_lowercase_is_checksummed(self):
        addr = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"
        assert to_address(addr) == "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

    def test_checksummed_passes_through(self):
        assert to_address(ALICE) == ALICE
        assert to_address(ZERO_ADDRESS) == ZERO_ADDRESS

    @pytest.mark.parametrize("value", ["", "0x123", "not-an-address", None, 42,
                                       "0xF39fd6e51aad88F6F4ce6aB8827279cffFb92266"])
    def test_invalid_addresses(self, value):
        with pytest.raises(InvalidAddress):
            to_address(value)

    def test_bad_checksum_rejected(self):
        # one letter flipped from the valid EIP-55 form
        with pytest.raises(InvalidAddress):
            to_address("0xf39Fd6e51aad88F6F4ce6aB8827279cffFB92266")

    def test_single_case_hex_accepted(self):
        expected = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
        assert to_address("0xF39FD6E51AAD88F6F4CE6AB8827279CFFFB92266") == expected

    def test_invalid_address_is_value_error(self):
        with pytest.raises(ValueError):
            to_address("nope")


class TestAmounts:

    def test_bounds(self):
        assert check_amount(0) == 0
        assert check_amount(MAX_UINT256) == MAX_UINT256

    @pytest.mark.parametrize("value", [-1, MAX_UINT256 + 1, 1.5, "10", True, None])
    def test_rejected(self, value):
        with pytest.raises(InvalidAmount):
            check_amount(value)

    def test_format_units(self):
        assert format_units(1_500_000_000_000_000_000) == "1.5"
        assert format_units(10 ** 18, 18, "ADW") == "1 ADW"
        assert format_units(5, 2) == "0.05"
        assert format_units(0) == "0"


class TestRoles:

    def test_well_known_ids(self):
        assert DEFAULT_ADMIN_ROLE == "0x" + "0" * 64
        assert MINTER_ROLE == "0x9f2df0fed2c77648de5860a4cc508cd0818c85b8b8a1ab4ceeef8d981c8956a6"

    def test_resolve_by_name(self):
        assert role_id("MINTER_ROLE") == MINTER_ROLE
        assert role_id("DEFAULT_ADMIN_ROLE") == DEFAULT_ADMIN_ROLE

    def test_resolve_hex_is_lowercased(self):
        assert role_id(MINTER_ROLE.upper().replace("0X", "0x")) == MINTER_ROLE

    def test_custom_role_passes(self):
        custom = "0x" + "ab" * 32
        assert role_id(custom) == custom
        assert role_name(custom) == custom

    @pytest.mark.parametrize("value", ["PAUSER", "0x1234", "0x" + "zz" * 32, None])
    def test_invalid(self, value):
        with pytest.raises(InvalidRole):
            role_id(value)

    def test_role_name(self):
        assert role_name(MINTER_ROLE) == "MINTER_ROLE"


class TestTokenEvent:

    def test_dict_roundtrip(self):
        event = TokenEvent(EventType.TRANSFER, {"from": ALICE, "to": DEPLOYER, "value": 5}, seq=3)
        data = event.to_dict()
        assert data["event"] == "Transfer"
        assert TokenEvent.from_dict(data) == event


class TestTokenConfig:

    def test_initial_supply_units(self):
        config = TokenConfig("AdwaitToken", "ADW", 1_000_000, DEPLOYER.lower())
        assert config.initial_supply_units() == 1_000_000 * 10 ** 18
        assert config.deployer == DEPLOYER

    @pytest.mark.parametrize("kwargs", [
        {"name": ""},
        {"symbol": ""},
        {"decimals": -1},
        {"decimals": 78},
        {"initial_supply": -5},
        {"port": 0},
        {"deployer": "0x12"},
    ])
    def test_invalid(self, kwargs):
        params = dict(name="T", symbol="T", initial_supply=1, deployer=DEPLOYER)
        params.update(kwargs)
        with pytest.raises(ValueError):
            TokenConfig(**params)

    def test_supply_must_fit_uint256(self):
        with pytest.raises(TokenError):
            TokenConfig("T", "T", 10 ** 60, DEPLOYER, decimals=18)
