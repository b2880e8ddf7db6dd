from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from engine.bankroll import INITIAL_BALANCE, MIN_BET, BANKER_COMMISSION, MAX_CONSECUTIVE_LOSSES, DEFAULT_ROUNDS

class PlayMode(Enum):
    PLAYING = auto()
    STOPPED = auto()

class GameResult(Enum):
    BANKER = 'banker'
    PLAYER = 'player'
    TIE = 'tie'

class BetTarget(Enum):
    BANKER = 'banker'
    PLAYER = 'player'

class StrategyId(Enum):
    BANKER_ONLY = 'bankerOnly'
    PLAYER_ONLY = 'playerOnly'
    FOLLOW_WINNER = 'followWinner'
    ALTERNATE = 'alternate'
    PPBB = 'ppbb'

STRATEGY_LABELS = {
    StrategyId.BANKER_ONLY: 'Banker Only',
    StrategyId.PLAYER_ONLY: 'Player Only',
    StrategyId.FOLLOW_WINNER: 'Follow Last Winner',
    StrategyId.ALTERNATE: 'Alternate Banker / Player',
    StrategyId.PPBB: 'PP → BB (two each)',
}

RESULT_LABELS = {
    GameResult.BANKER: 'Banker',
    GameResult.PLAYER: 'Player',
    GameResult.TIE: 'Tie',
}

TARGET_LABELS = {
    BetTarget.BANKER: 'Banker',
    BetTarget.PLAYER: 'Player',
}

@dataclass
class MartingaleOverrides:
    # --- BANKROLL ---
    initial_balance: int = INITIAL_BALANCE
    min_bet: int = MIN_BET

    # --- HOUSE RULES ---
    banker_commission: float = BANKER_COMMISSION

    # --- PROGRESSION ---
    loss_streak_cap: int = MAX_CONSECUTIVE_LOSSES

    # --- RUN ---
    rounds: int = DEFAULT_ROUNDS
    strategy: StrategyId = StrategyId.BANKER_ONLY

# --- BET TARGET SELECTION ---

def _banker_only(round_num, last_winner):
    return BetTarget.BANKER

def _player_only(round_num, last_winner):
    return BetTarget.PLAYER

def _follow_winner(round_num, last_winner):
    # Cold start backs the banker
    return last_winner if last_winner is not None else BetTarget.BANKER

def _alternate(round_num, last_winner):
    return BetTarget.PLAYER if round_num % 2 == 0 else BetTarget.BANKER

def _ppbb(round_num, last_winner):
    block = ((round_num - 1) // 2) % 2
    return BetTarget.PLAYER if block == 0 else BetTarget.BANKER

STRATEGY_SELECTORS = {
    StrategyId.BANKER_ONLY: _banker_only,
    StrategyId.PLAYER_ONLY: _player_only,
    StrategyId.FOLLOW_WINNER: _follow_winner,
    StrategyId.ALTERNATE: _alternate,
    StrategyId.PPBB: _ppbb,
}

def get_bet_target(strategy: StrategyId, round_num: int, last_winner: Optional[BetTarget] = None) -> BetTarget:
    """Picks the side to back for a 1-indexed round."""
    selector = STRATEGY_SELECTORS.get(strategy)
    if selector is None:
        raise ValueError(f"Unknown strategy: {strategy!r}")
    return selector(round_num, last_winner)
