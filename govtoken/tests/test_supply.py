import pytest

from govtoken import config
from govtoken.errors import InsufficientAllowance, InsufficientBalance, Overflow, Unauthorized
from govtoken.events import MinterUpdated, Transfer

from conftest import ALICE, BOB, GOV, MINTER


def test_set_minter_requires_governance(token, events):
    with pytest.raises(Unauthorized):
        token.set_minter(ALICE, ALICE, True)
    assert not token.is_minter(ALICE)
    assert events == []


def test_set_minter_grant_revoke_and_redundant(token, events):
    token.set_minter(GOV, MINTER, True)
    token.set_minter(GOV, MINTER, True)
    assert token.is_minter(MINTER)
    assert token.minters.minters() == [MINTER]
    token.set_minter(GOV, MINTER, False)
    assert not token.is_minter(MINTER)
    assert token.minters.minters() == []
    assert events == [
        MinterUpdated(user=MINTER, allowed=True),
        MinterUpdated(user=MINTER, allowed=True),
        MinterUpdated(user=MINTER, allowed=False),
    ]


def test_governance_is_not_implicitly_a_minter(token):
    with pytest.raises(Unauthorized):
        token.mint(GOV, GOV, 1)


def test_mint_credits_exact_amount(token, events):
    token.set_minter(GOV, MINTER, True)
    token.mint(MINTER, ALICE, 42)
    assert token.balance_of(ALICE) == 42
    assert token.total_supply == 42
    assert events[-1] == Transfer(sender=None, recipient=ALICE, amount=42)


def test_revoked_minter_cannot_mint(token):
    token.set_minter(GOV, MINTER, True)
    token.mint(MINTER, ALICE, 1)
    token.set_minter(GOV, MINTER, False)
    with pytest.raises(Unauthorized):
        token.mint(MINTER, ALICE, 1)
    assert token.balance_of(ALICE) == 1


def test_mint_zero_is_noop_but_checked(token):
    with pytest.raises(Unauthorized):
        token.mint(ALICE, ALICE, 0)
    token.set_minter(GOV, MINTER, True)
    token.mint(MINTER, ALICE, 0)
    assert token.balance_of(ALICE) == 0
    assert token.total_supply == 0


def test_mint_past_uint256_overflows(token):
    token.set_minter(GOV, MINTER, True)
    token.mint(MINTER, ALICE, config.MAX_UINT256)
    with pytest.raises(Overflow):
        token.mint(MINTER, BOB, 1)
    assert token.balance_of(BOB) == 0
    assert token.total_supply == config.MAX_UINT256


def test_burn_own_balance(minted, events):
    with pytest.raises(InsufficientBalance):
        minted.burn(MINTER, 101)
    assert minted.balance_of(MINTER) == 100
    minted.burn(MINTER, 100)
    assert minted.balance_of(MINTER) == 0
    assert minted.total_supply == 50
    assert events == [Transfer(sender=MINTER, recipient=None, amount=100)]


def test_burn_from_consumes_allowance(minted):
    minted.approve(ALICE, MINTER, 30)
    minted.burn_from(MINTER, ALICE, 20)
    assert minted.balance_of(ALICE) == 30
    assert minted.allowance(ALICE, MINTER) == 10
    assert minted.total_supply == 130


def test_burn_from_without_allowance_fails(minted):
    with pytest.raises(InsufficientAllowance):
        minted.burn_from(MINTER, ALICE, 1)
    minted.approve(ALICE, MINTER, 5)
    with pytest.raises(InsufficientAllowance):
        minted.burn_from(MINTER, ALICE, 6)
    assert minted.balance_of(ALICE) == 50
    assert minted.allowance(ALICE, MINTER) == 5


def test_burn_from_insufficient_balance_keeps_allowance(minted):
    minted.approve(ALICE, MINTER, 80)
    with pytest.raises(InsufficientBalance):
        minted.burn_from(MINTER, ALICE, 60)
    assert minted.allowance(ALICE, MINTER) == 80
    assert minted.balance_of(ALICE) == 50


def test_allowance_for_other_spender_does_not_help(minted):
    minted.set_minter(GOV, BOB, True)
    minted.approve(ALICE, BOB, 50)
    with pytest.raises(InsufficientAllowance):
        minted.burn_from(MINTER, ALICE, 10)


@pytest.mark.parametrize("caller", [ALICE, BOB, GOV])
def test_non_minter_always_unauthorized(minted, caller):
    minted.approve(ALICE, caller, 50)
    with pytest.raises(Unauthorized):
        minted.mint(caller, caller, 1)
    with pytest.raises(Unauthorized):
        minted.burn(caller, 0)
    with pytest.raises(Unauthorized):
        minted.burn_from(caller, ALICE, 1)
    assert minted.total_supply == 150
