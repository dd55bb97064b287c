import pytest

from globalfee.ante.fee_utils import (
    combined_fee_requirement,
    contain_zero_coins,
    denoms_subset_of_including_zero,
    find,
    get_tx_priority,
    is_any_gte_including_zero,
)
from globalfee.coins import Coin, sort_coins
from globalfee.errors import InvalidCoinsError


def s(*coins):
    return sort_coins(coins)


# --- contain_zero_coins -------------------------------------------------

_zp = Coin("photon", 0)
_zs = Coin("stake", 0)
_p1 = Coin("photon", 1)
_s2 = Coin("stake", 2)
_q3 = Coin("quark", 3)


@pytest.mark.parametrize(
    "coins, expected",
    [
        ([], True),
        ([_p1, _s2], False),
        ([_p1, _zs], True),
        ([_zp, _zs, _q3], True),
        ([_zp, _zs], True),
    ],
)
def test_contain_zero_coins(coins, expected):
    assert contain_zero_coins(coins) is expected


# --- combined_fee_requirement -------------------------------------------

_p1_high = Coin("photon", 10)
_s2_high = Coin("stake", 20)
_new1 = Coin("Newphoton", 1)
_new2 = Coin("Newstake", 1)
_zq = Coin("quark", 0)

_c_empty = []
_c_non_empty = s(_p1, _s2)
_c_non_empty_high = s(_p1_high, _s2_high)
_c_non_empty_one_high = s(_p1_high, _s2)
_c_new_denom = s(_new1, _new2)
_c_new_old = s(_p1, _new1)
_c_new_old_high = s(_p1_high, _new1)
_c_contain_zero = s(_p1, _zs)
_c_contain_zero_new = s(_p1, _zq)
_c_all_zero = s(_zp, _zs)


@pytest.mark.parametrize(
    "global_fees, min_fees, expected",
    [
        pytest.param(_c_empty, _c_empty, _c_empty, id="both-empty"),
        pytest.param(_c_empty, _c_non_empty, _c_empty, id="global-empty"),
        pytest.param(_c_non_empty, _c_non_empty, _c_non_empty, id="equal"),
        pytest.param(_c_non_empty, _c_non_empty_high, _c_non_empty_high, id="all-higher"),
        pytest.param(_c_non_empty, _c_non_empty_one_high, _c_non_empty_one_high, id="one-higher"),
        pytest.param(_c_non_empty, _c_new_denom, _c_non_empty, id="no-overlap"),
        pytest.param(_c_non_empty, _c_new_old, _c_non_empty, id="partial-overlap-lower"),
        pytest.param(_c_non_empty, _c_new_old_high, [_p1_high, _s2], id="partial-overlap-higher"),
        pytest.param(_c_contain_zero, _c_non_empty, [_p1, _s2], id="global-zero-min-nonzero"),
        pytest.param(_c_contain_zero, _c_contain_zero, _c_contain_zero, id="zero-overlap"),
        pytest.param(_c_contain_zero, _c_contain_zero_new, _c_contain_zero, id="zero-no-overlap"),
        pytest.param(_c_all_zero, _c_all_zero, _c_all_zero, id="all-zero"),
        pytest.param(_c_all_zero, _c_contain_zero_new, [_p1, _zs], id="all-zero-overlap-nonzero"),
        pytest.param(_c_all_zero, _c_contain_zero, _c_contain_zero, id="all-zero-one-nonzero"),
    ],
)
def test_combined_fee_requirement(global_fees, min_fees, expected):
    assert combined_fee_requirement(global_fees, min_fees) == expected


def test_combined_fee_requirement_result_is_sorted():
    result = combined_fee_requirement(s(Coin("aaa", 1), Coin("zzz", 1)), [Coin("zzz", 5)])
    assert [c.denom for c in result] == ["aaa", "zzz"]
    assert result[1].amount == 5


# --- denoms_subset_of_including_zero ------------------------------------

_zq3 = Coin("quark", 0)
_q3b = Coin("quark", 3)
_np1 = Coin("newphoton", 1)
_ns2 = Coin("newstake", 2)
_nq3 = Coin("newquark", 3)
_np1_zero = Coin("newphoton", 0)

_d_all_zero = s(_zp, _zs, _zq3)
_d_all_zero_short = s(_zp, _zs)
_d_contain_zero = s(_zp, _zs, _q3b)
_d_contain_zero_new = s(_zp, _zs, _np1_zero)
_d_coins = s(_p1, _s2, _q3b)
_d_short = s(_p1, _s2)
_d_all_new = s(_np1, _ns2, _nq3)
_d_old_new = s(_p1, _s2, _np1)


@pytest.mark.parametrize(
    "superset, subset_candidate, expected",
    [
        pytest.param([], [], True, id="empty-of-empty"),
        pytest.param([], _d_coins, False, id="nonempty-of-empty"),
        pytest.param(_d_all_zero, [], True, id="empty-of-all-zero"),
        pytest.param(_d_contain_zero, [], True, id="empty-of-contain-zero"),
        pytest.param(_d_coins, _d_all_new, False, id="no-overlap"),
        pytest.param(_d_coins, _d_old_new, False, id="partial-overlap"),
        pytest.param(_d_coins, _d_short, True, id="nonzero-subset"),
        pytest.param(_d_all_zero, _d_short, True, id="superset-all-zero"),
        pytest.param(_d_contain_zero, _d_short, True, id="superset-contains-zero"),
        pytest.param(_d_contain_zero, _d_contain_zero, True, id="same-zero-sets"),
        pytest.param(_d_contain_zero, _d_contain_zero_new, False, id="zero-sets-not-overlapping"),
        pytest.param(_d_all_zero, _d_all_zero_short, True, id="all-zero-same-denoms"),
    ],
)
def test_denoms_subset_of_including_zero(superset, subset_candidate, expected):
    assert denoms_subset_of_including_zero(subset_candidate, superset) is expected


def test_denoms_subset_invalid_denom_raises():
    with pytest.raises(InvalidCoinsError):
        denoms_subset_of_including_zero([Coin("x1", 1)], [Coin("photon", 1)])


# --- is_any_gte_including_zero ------------------------------------------

_g1 = Coin("photon", 10)
_g1_low = Coin("photon", 1)
_g1_high = Coin("photon", 100)
_g2 = Coin("stake", 20)
_g2_low = Coin("stake", 2)
_g2_high = Coin("stake", 200)
_g3 = Coin("quark", 30)
_gn1 = Coin("newphoton", 10)
_gn2 = Coin("newstake", 20)
_gn3 = Coin("newquark", 30)

_g_all_zero = s(_zp, _zs, _zq3)
_g_all_new_all_zero = s(Coin("newphoton", 10), Coin("newstake", 20), Coin("newquark", 30))
_g_all_zero_short = s(_zp, _zs)
_g_contain_zero = s(_zp, _zs, _g3)
_g_coins = s(_g1, _g2, _g3)
_g_high_high = [_g1_high, _g2_high]
_g_high_low = s(_g1_high, _g2_low)
_g_low_low = s(_g1_low, _g2_low)
_g_all_new = s(_gn1, _gn2, _gn3)
_g_old_new = s(_g1, _gn1, _gn2)
_g_old_low_new = s(_g1_low, _gn1, _gn2)


@pytest.mark.parametrize(
    "c1, c2, expected",
    [
        pytest.param(_g_all_zero, _g_all_zero, True, id="zero-gte-zero"),
        pytest.param(_g_all_zero, _g_all_zero_short, True, id="zero-short-gte-zero"),
        pytest.param(_g_all_zero_short, _g_all_zero, True, id="zero-gte-zero-short"),
        pytest.param(_g_all_zero, _g_all_new_all_zero, False, id="different-denoms"),
        pytest.param([], [], True, id="empty-empty"),
        pytest.param(_g_all_zero, [], True, id="empty-gte-zero"),
        pytest.param(_g_contain_zero, [], True, id="empty-gte-contain-zero"),
        pytest.param([], _g_all_zero, False, id="zero-not-gte-empty"),
        pytest.param(_g_coins, [], False, id="empty-not-gte-nonzero"),
        pytest.param([], _g_coins, False, id="nonzero-not-gte-empty"),
        pytest.param(_g_all_zero, _g_coins, True, id="nonzero-gte-zero"),
        pytest.param(_g_contain_zero, _g_coins, True, id="nonzero-gte-contain-zero"),
        pytest.param(_g_coins, _g_high_low, True, id="one-higher-one-lower"),
        pytest.param(_g_coins, _g_low_low, False, id="all-lower"),
        pytest.param(_g_coins, _g_high_high, True, id="all-higher"),
        pytest.param(_g_coins, _g_all_new, False, id="no-overlap"),
        pytest.param(_g_coins, _g_old_new, True, id="partial-overlap-gte"),
        pytest.param(_g_coins, _g_old_low_new, False, id="partial-overlap-lower"),
    ],
)
def test_is_any_gte_including_zero(c1, c2, expected):
    assert is_any_gte_including_zero(c2, c1) is expected


# --- find ---------------------------------------------------------------


def test_find_in_empty_returns_none():
    assert find([], "photon") is None


def test_find_single_match_and_miss():
    assert find([Coin("photon", 4)], "photon") == Coin("photon", 4)
    assert find([Coin("photon", 4)], "stake") is None


@pytest.mark.parametrize("denom", ["aaa", "bbb", "ccc", "ddd", "eee"])
def test_find_each_denom_in_sorted_set(denom):
    coins = s(*(Coin(d, i + 1) for i, d in enumerate(["aaa", "bbb", "ccc", "ddd", "eee"])))
    found = find(coins, denom)
    assert found is not None
    assert found.denom == denom


def test_find_missing_denom_in_sorted_set():
    coins = s(Coin("aaa", 1), Coin("ccc", 2), Coin("eee", 3))
    assert find(coins, "bbb") is None
    assert find(coins, "zzz") is None


# --- get_tx_priority ----------------------------------------------------


def test_get_tx_priority_empty_is_zero():
    assert get_tx_priority([]) == 0


def test_get_tx_priority_takes_smallest_amount():
    assert get_tx_priority([Coin("photon", 5), Coin("stake", 3), Coin("uatom", 9)]) == 3


def test_get_tx_priority_caps_large_amounts():
    assert get_tx_priority([Coin("photon", 2**64)]) == 2**63 - 1
    assert get_tx_priority([Coin("photon", 2**64), Coin("stake", 7)]) == 7


def test_get_tx_priority_skips_leading_zero():
    assert get_tx_priority([Coin("photon", 0), Coin("stake", 8)]) == 8