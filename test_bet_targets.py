"""
TEST: Bet Target Selection
Checks every strategy's choice of side for a given round.
"""

import pytest

from engine.strategy_rules import StrategyId, BetTarget, get_bet_target

B, P = BetTarget.BANKER, BetTarget.PLAYER

def test_fixed_side_strategies():
    for round_num in range(1, 11):
        assert get_bet_target(StrategyId.BANKER_ONLY, round_num, P) == B
        assert get_bet_target(StrategyId.PLAYER_ONLY, round_num, B) == P
    print("✓ Banker only / Player only never switch sides")

def test_alternate_starts_on_banker():
    targets = [get_bet_target(StrategyId.ALTERNATE, n, None) for n in range(1, 7)]
    print(f"Alternate rounds 1-6: {[t.name for t in targets]}")
    assert targets == [B, P, B, P, B, P]

def test_ppbb_blocks_of_two():
    targets = [get_bet_target(StrategyId.PPBB, n, None) for n in range(1, 9)]
    print(f"PPBB rounds 1-8: {[t.name for t in targets]}")
    assert targets == [P, P, B, B, P, P, B, B]

def test_follow_winner_cold_start_and_follow():
    assert get_bet_target(StrategyId.FOLLOW_WINNER, 1, None) == B, "First hand should default to BANKER"
    assert get_bet_target(StrategyId.FOLLOW_WINNER, 5, P) == P, "Should follow last winner (PLAYER)"
    assert get_bet_target(StrategyId.FOLLOW_WINNER, 6, B) == B, "Should follow last winner (BANKER)"

def test_unknown_strategy_rejected():
    with pytest.raises(ValueError):
        get_bet_target('martingale-plus', 1, None)

if __name__ == '__main__':
    print("\n" + "="*70)
    print("BET TARGET SELECTION TEST SUITE")
    print("="*70)
    test_fixed_side_strategies()
    test_alternate_starts_on_banker()
    test_ppbb_blocks_of_two()
    test_follow_winner_cold_start_and_follow()
    test_unknown_strategy_rejected()
    print("\n✓ ALL TESTS PASSED")
