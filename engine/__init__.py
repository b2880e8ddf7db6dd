from .strategy_rules import MartingaleOverrides, StrategyId, GameResult, BetTarget, PlayMode, get_bet_target
from .baccarat_rules import play_round, MartingaleSessionState, MartingaleStrategist, SimulationWorker, SimulationRun
from .ledger import RoundRecord, RoundLedger, SimulationSummary
from .cards import Card, create_deck, shuffle_deck, deal_hands
from .poker_rules import HandRank, HandCategory, GamePhase, TableSession, evaluate_hand, dealer_qualifies, settle_hand
