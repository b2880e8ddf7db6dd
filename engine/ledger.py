from dataclasses import dataclass
from typing import List, Tuple

from engine.strategy_rules import BetTarget, GameResult

@dataclass(frozen=True)
class RoundRecord:
    """
    One completed baccarat round. Ties are recorded too.
    """
    round: int
    bet: int
    bet_target: BetTarget
    result: GameResult
    balance_before: int
    balance_after: int
    action: str

    @property
    def delta(self) -> int:
        """Balance change produced by this round"""
        return self.balance_after - self.balance_before

@dataclass(frozen=True)
class SimulationSummary:
    initial_balance: int
    final_balance: int
    total_rounds: int
    wins: int
    losses: int
    ties: int

    @property
    def profit(self) -> int:
        return self.final_balance - self.initial_balance

class RoundLedger:
    """
    Ordered, append-only round history for a single simulation run.
    """
    def __init__(self):
        self._records: List[RoundRecord] = []

    def __len__(self):
        return len(self._records)

    @property
    def records(self) -> Tuple[RoundRecord, ...]:
        return tuple(self._records)

    def append(self, record: RoundRecord):
        last_round = self._records[-1].round if self._records else 0
        if record.round <= last_round:
            raise ValueError(f"Round {record.round} recorded after round {last_round}")
        self._records.append(record)

    def summarize(self, initial_balance: int) -> SimulationSummary:
        wins = losses = ties = 0
        for r in self._records:
            if r.result == GameResult.TIE: ties += 1
            elif r.result.value == r.bet_target.value: wins += 1
            else: losses += 1

        final_balance = self._records[-1].balance_after if self._records else initial_balance
        return SimulationSummary(
            initial_balance=initial_balance, final_balance=final_balance,
            total_rounds=len(self._records), wins=wins, losses=losses, ties=ties
        )
