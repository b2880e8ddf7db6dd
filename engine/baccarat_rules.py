import math
import random
from dataclasses import dataclass
from typing import Tuple

from engine.strategy_rules import (
    MartingaleOverrides, PlayMode, GameResult, BetTarget, get_bet_target
)
from engine.ledger import RoundRecord, RoundLedger, SimulationSummary

# Cumulative outcome thresholds (percent)
BANKER_WIN_PCT = 45.86
PLAYER_WIN_CUM_PCT = 90.48   # banker + player 44.62

def play_round(rng=random) -> GameResult:
    """Samples one baccarat outcome: banker 45.86%, player 44.62%, tie 9.52%."""
    roll = rng.random() * 100
    if roll < BANKER_WIN_PCT: return GameResult.BANKER
    if roll < PLAYER_WIN_CUM_PCT: return GameResult.PLAYER
    return GameResult.TIE

@dataclass
class MartingaleSessionState:
    balance: int
    current_bet: int
    consecutive_losses: int = 0
    last_winner: BetTarget = None
    rounds_played: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    mode: PlayMode = PlayMode.PLAYING

    @classmethod
    def fresh(cls, overrides: MartingaleOverrides):
        return cls(balance=overrides.initial_balance, current_bet=overrides.min_bet)

class MartingaleStrategist:
    @staticmethod
    def get_next_decision(state: MartingaleSessionState, overrides: MartingaleOverrides):
        round_num = state.rounds_played + 1

        # 1. ROUND LIMIT
        if state.rounds_played >= overrides.rounds:
            return {'mode': PlayMode.STOPPED, 'bet_amount': 0, 'reason': 'ROUNDS COMPLETE', 'bet_target': None}

        # 2. BANKROLL CHECK
        if state.balance < state.current_bet:
            return {'mode': PlayMode.STOPPED, 'bet_amount': 0, 'reason': 'BANKROLL EXHAUSTED', 'bet_target': None}

        target = get_bet_target(overrides.strategy, round_num, state.last_winner)
        bet = min(state.current_bet, state.balance)
        return {'mode': PlayMode.PLAYING, 'bet_amount': bet, 'reason': 'ACTION', 'bet_target': target}

    @staticmethod
    def update_state_after_hand(state: MartingaleSessionState, overrides: MartingaleOverrides,
                                target: BetTarget, result: GameResult, stake: int) -> Tuple[int, str]:
        """
        Applies one settled round to the bankroll and progression.
        Returns (balance change, action tag).
        """
        state.rounds_played += 1

        # Tie = push, progression untouched
        if result == GameResult.TIE:
            state.ties += 1
            return 0, 'Tie (push)'

        state.last_winner = BetTarget(result.value)

        if result.value == target.value:
            if target == BetTarget.BANKER:
                payout = math.floor(stake * (1 - overrides.banker_commission))
            else:
                payout = stake
            state.balance += payout
            state.wins += 1
            state.consecutive_losses = 0
            state.current_bet = overrides.min_bet
            return payout, f'Win +{payout:,}'

        state.balance -= stake
        state.losses += 1
        state.consecutive_losses += 1

        if state.consecutive_losses >= overrides.loss_streak_cap:
            state.current_bet = overrides.min_bet
            state.consecutive_losses = 0
            return -stake, f'Loss -{stake:,} ({overrides.loss_streak_cap}-loss reset)'

        state.current_bet = min(state.current_bet * 2, state.balance)
        return -stake, f'Loss -{stake:,} (next {state.current_bet:,})'

@dataclass(frozen=True)
class SimulationRun:
    history: Tuple[RoundRecord, ...]
    summary: SimulationSummary

class SimulationWorker:
    @staticmethod
    def run_simulation(overrides: MartingaleOverrides, rng=random) -> SimulationRun:
        state = MartingaleSessionState.fresh(overrides)
        ledger = RoundLedger()

        while state.mode != PlayMode.STOPPED:
            decision = MartingaleStrategist.get_next_decision(state, overrides)
            if decision['mode'] == PlayMode.STOPPED:
                state.mode = PlayMode.STOPPED
                break

            target = decision['bet_target']
            stake = decision['bet_amount']
            balance_before = state.balance

            result = play_round(rng)
            _, action = MartingaleStrategist.update_state_after_hand(state, overrides, target, result, stake)

            ledger.append(RoundRecord(
                round=state.rounds_played, bet=stake, bet_target=target, result=result,
                balance_before=balance_before, balance_after=state.balance, action=action
            ))

        return SimulationRun(history=ledger.records, summary=ledger.summarize(overrides.initial_balance))
