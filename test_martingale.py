"""
TEST: Martingale Progression
Scripted outcomes drive the simulation so every bet, balance and action
tag can be checked by hand. Seeded runs cover the invariants over long sessions.
"""

import math
import random

from engine.baccarat_rules import play_round, MartingaleSessionState, MartingaleStrategist, SimulationWorker
from engine.strategy_rules import MartingaleOverrides, StrategyId, BetTarget, GameResult, PlayMode

# Rolls landing well inside each outcome band
ROLL = {GameResult.BANKER: 0.10, GameResult.PLAYER: 0.50, GameResult.TIE: 0.95}

class ScriptedRng:
    """Stands in for the random module: replays a fixed list of rolls."""
    def __init__(self, outcomes):
        self.rolls = [ROLL[o] for o in outcomes]

    def random(self):
        return self.rolls.pop(0)

def run(outcomes, **kwargs):
    overrides = MartingaleOverrides(**kwargs)
    return SimulationWorker.run_simulation(overrides, rng=ScriptedRng(outcomes))

def test_outcome_sampler_bands():
    class Fixed:
        def __init__(self, v): self.v = v
        def random(self): return self.v

    assert play_round(Fixed(0.0)) == GameResult.BANKER
    assert play_round(Fixed(0.4585)) == GameResult.BANKER
    assert play_round(Fixed(0.4587)) == GameResult.PLAYER
    assert play_round(Fixed(0.9047)) == GameResult.PLAYER
    assert play_round(Fixed(0.9049)) == GameResult.TIE
    assert play_round(Fixed(0.9999)) == GameResult.TIE

def test_outcome_sampler_frequencies():
    rng = random.Random(7)
    n = 20000
    draws = [play_round(rng) for _ in range(n)]
    banker = draws.count(GameResult.BANKER) / n
    tie = draws.count(GameResult.TIE) / n
    print(f"Banker {banker:.4f} | Tie {tie:.4f}")
    assert abs(banker - 0.4586) < 0.02
    assert abs(tie - 0.0952) < 0.01

def test_banker_wins_pay_commission():
    result = run([GameResult.BANKER] * 3, rounds=3, strategy=StrategyId.BANKER_ONLY)
    balances = [h.balance_after for h in result.history]
    print(f"Balances: {balances}")
    assert balances == [100950, 101900, 102850]
    assert [h.bet for h in result.history] == [1000, 1000, 1000]
    assert result.history[0].action == 'Win +950'
    assert result.summary.wins == 3 and result.summary.profit == 2850

def test_player_wins_pay_even_money():
    result = run([GameResult.PLAYER] * 2, rounds=2, strategy=StrategyId.PLAYER_ONLY)
    assert [h.delta for h in result.history] == [1000, 1000]
    assert result.summary.final_balance == 102000

def test_three_loss_reset():
    result = run([GameResult.BANKER] * 5, rounds=5, strategy=StrategyId.PLAYER_ONLY)
    bets = [h.bet for h in result.history]
    actions = [h.action for h in result.history]
    print(f"Bets: {bets}")
    for a in actions: print(f"  {a}")

    assert bets == [1000, 2000, 4000, 1000, 2000], "Progression should reset after 3 losses"
    assert actions[0] == 'Loss -1,000 (next 2,000)'
    assert actions[1] == 'Loss -2,000 (next 4,000)'
    assert actions[2] == 'Loss -4,000 (3-loss reset)'
    assert result.history[-1].balance_after == 90000
    assert result.summary.losses == 5

def test_tie_leaves_progression_alone():
    result = run([GameResult.BANKER, GameResult.TIE, GameResult.BANKER], rounds=3, strategy=StrategyId.PLAYER_ONLY)
    h = result.history
    assert [r.bet for r in h] == [1000, 2000, 2000]
    assert h[1].balance_before == h[1].balance_after == 99000
    assert h[1].action == 'Tie (push)'
    assert h[2].action == 'Loss -2,000 (next 4,000)', "Tie must not count toward the loss streak"
    assert result.summary.ties == 1 and result.summary.losses == 2

def test_follow_winner_ignores_ties():
    result = run([GameResult.PLAYER, GameResult.TIE, GameResult.BANKER], rounds=3, strategy=StrategyId.FOLLOW_WINNER)
    targets = [h.bet_target for h in result.history]
    print(f"Targets: {[t.name for t in targets]}")
    assert targets == [BetTarget.BANKER, BetTarget.PLAYER, BetTarget.PLAYER]

def test_zero_balance_plays_out_the_streak():
    result = run([GameResult.BANKER] * 10, rounds=10, initial_balance=2500, strategy=StrategyId.PLAYER_ONLY)
    bets = [h.bet for h in result.history]
    print(f"Bets: {bets}")
    assert bets == [1000, 1500, 0], "Doubling is capped by the balance, even at zero"
    assert result.history[1].action == 'Loss -1,500 (next 0)'
    assert result.history[-1].action == 'Loss -0 (3-loss reset)'
    assert result.summary.total_rounds == 3
    assert result.summary.final_balance == 0
    assert result.summary.profit == -2500

def test_zero_stake_win_resets_then_stops():
    result = run([GameResult.BANKER, GameResult.BANKER, GameResult.PLAYER] + [GameResult.BANKER] * 5,
                 rounds=10, initial_balance=2500, strategy=StrategyId.PLAYER_ONLY)
    h = result.history
    assert [r.bet for r in h] == [1000, 1500, 0]
    assert h[-1].action == 'Win +0'
    assert result.summary.wins == 1 and result.summary.final_balance == 0

def test_stops_when_next_bet_not_covered():
    result = run([GameResult.BANKER] * 10, rounds=10, initial_balance=7500, strategy=StrategyId.PLAYER_ONLY)
    assert result.summary.total_rounds == 3
    assert result.summary.final_balance == 500
    assert result.history[-1].action == 'Loss -4,000 (3-loss reset)'

def test_decision_stops_on_round_limit():
    overrides = MartingaleOverrides(rounds=1)
    state = MartingaleSessionState.fresh(overrides)
    decision = MartingaleStrategist.get_next_decision(state, overrides)
    assert decision['mode'] == PlayMode.PLAYING and decision['bet_amount'] == 1000

    payout, action = MartingaleStrategist.update_state_after_hand(state, overrides, BetTarget.BANKER, GameResult.BANKER, 1000)
    assert payout == 950 and action == 'Win +950'
    decision = MartingaleStrategist.get_next_decision(state, overrides)
    assert decision['mode'] == PlayMode.STOPPED
    assert decision['reason'] == 'ROUNDS COMPLETE'

def test_seeded_runs_hold_invariants():
    for strategy in StrategyId:
        for seed in range(5):
            overrides = MartingaleOverrides(rounds=500, strategy=strategy)
            result = SimulationWorker.run_simulation(overrides, rng=random.Random(seed))
            history = result.history
            summary = result.summary

            assert summary.total_rounds == len(history) <= 500

            assert [h.round for h in history] == list(range(1, len(history) + 1))
            assert summary.wins + summary.losses + summary.ties == summary.total_rounds

            losses_in_row = 0
            expected_bet = overrides.min_bet
            for prev, h in zip([None] + list(history), history):
                assert h.bet <= h.balance_before
                assert h.bet == min(expected_bet, h.balance_before)
                if prev is not None:
                    assert h.balance_before == prev.balance_after

                if h.result == GameResult.TIE:
                    assert h.balance_after == h.balance_before
                elif h.result.value == h.bet_target.value:
                    payout = math.floor(h.bet * (1 - overrides.banker_commission)) if h.bet_target == BetTarget.BANKER else h.bet
                    assert h.balance_after == h.balance_before + payout
                    losses_in_row = 0
                    expected_bet = overrides.min_bet
                else:
                    assert h.balance_after == h.balance_before - h.bet
                    losses_in_row += 1
                    if losses_in_row == overrides.loss_streak_cap:
                        losses_in_row = 0
                        expected_bet = overrides.min_bet
                    else:
                        expected_bet = min(expected_bet * 2, h.balance_after)

            if summary.total_rounds < 500:
                assert summary.final_balance < expected_bet

            if strategy == StrategyId.FOLLOW_WINNER:
                for prev, h in zip(history, history[1:]):
                    if prev.result == GameResult.TIE:
                        assert h.bet_target == prev.bet_target
                    else:
                        assert h.bet_target.value == prev.result.value
    print("✓ Invariants hold for every strategy")

def test_runs_are_independent():
    overrides = MartingaleOverrides(rounds=3)
    first = SimulationWorker.run_simulation(overrides, rng=ScriptedRng([GameResult.PLAYER] * 3))
    second = SimulationWorker.run_simulation(overrides, rng=ScriptedRng([GameResult.BANKER] * 3))
    assert first.history[0].balance_before == second.history[0].balance_before == overrides.initial_balance
    assert len(second.history) == 3

if __name__ == '__main__':
    print("\n" + "="*70)
    print("MARTINGALE PROGRESSION TEST SUITE")
    print("="*70)
    test_outcome_sampler_bands()
    test_outcome_sampler_frequencies()
    test_banker_wins_pay_commission()
    test_player_wins_pay_even_money()
    test_three_loss_reset()
    test_tie_leaves_progression_alone()
    test_follow_winner_ignores_ties()
    test_zero_balance_plays_out_the_streak()
    test_zero_stake_win_resets_then_stops()
    test_stops_when_next_bet_not_covered()
    test_decision_stops_on_round_limit()
    test_seeded_runs_hold_invariants()
    test_runs_are_independent()
    print("\n✓ ALL TESTS PASSED")
