import random
from dataclasses import dataclass, replace
from enum import Enum, IntEnum, auto
from typing import Optional, Sequence, Tuple

from engine.cards import Card, HAND_SIZE, create_deck, shuffle_deck, deal_hands
from engine.bankroll import STARTING_CHIPS, MIN_ANTE, coerce_chips, coerce_ante, can_cover

QUEEN = 12
ACE_LOW_STRAIGHT = [14, 3, 2]

class HandCategory(IntEnum):
    HIGH_CARD = 0
    ONE_PAIR = 1
    FLUSH = 2
    STRAIGHT = 3
    THREE_OF_A_KIND = 4
    STRAIGHT_FLUSH = 5

    @property
    def display_name(self) -> str:
        return self.name.replace('_', ' ').title()

# Ante bonus multipliers paid on a winning hand
ANTE_BONUS = {
    HandCategory.STRAIGHT_FLUSH: 5,
    HandCategory.THREE_OF_A_KIND: 4,
    HandCategory.STRAIGHT: 1,
}

class GamePhase(Enum):
    BETTING = auto()
    DEALT = auto()
    RESULT = auto()

class HandOutcome(Enum):
    WIN = 'win'
    LOSE = 'lose'
    TIE = 'tie'
    NO_QUALIFY = 'no_qualify'
    FOLD = 'fold'

@dataclass(frozen=True, order=True)
class HandRank:
    category: HandCategory
    value: int

    @property
    def name(self) -> str:
        return self.category.display_name

# --- HAND EVALUATION ---

def evaluate_hand(cards: Sequence[Card]) -> HandRank:
    if len(cards) != HAND_SIZE:
        raise ValueError(f"A hand needs exactly {HAND_SIZE} cards, got {len(cards)}")

    ranks = sorted((c.value for c in cards), reverse=True)
    suits = [c.suit for c in cards]
    is_flush = all(s == suits[0] for s in suits)
    is_straight = ranks[0] - ranks[1] == 1 and ranks[1] - ranks[2] == 1
    is_ace_low_straight = ranks == ACE_LOW_STRAIGHT

    # A-2-3 keeps the ace (14) as its value, same as the table it models
    if is_flush and (is_straight or is_ace_low_straight):
        return HandRank(HandCategory.STRAIGHT_FLUSH, ranks[0])
    if ranks[0] == ranks[1] == ranks[2]:
        return HandRank(HandCategory.THREE_OF_A_KIND, ranks[0])
    if is_straight or is_ace_low_straight:
        return HandRank(HandCategory.STRAIGHT, ranks[0])
    if is_flush:
        return HandRank(HandCategory.FLUSH, ranks[0] * 1000 + ranks[1] * 10 + ranks[2])
    if ranks[0] == ranks[1] or ranks[1] == ranks[2]:
        pair = ranks[1]  # sorted, so the middle card is always part of the pair
        kicker = ranks[2] if ranks[0] == pair else ranks[0]
        return HandRank(HandCategory.ONE_PAIR, pair * 100 + kicker)
    return HandRank(HandCategory.HIGH_CARD, ranks[0] * 1000 + ranks[1] * 10 + ranks[2])

def dealer_qualifies(cards: Sequence[Card]) -> bool:
    """Dealer plays with any made hand or Queen-high."""
    if evaluate_hand(cards).category > HandCategory.HIGH_CARD:
        return True
    return max(c.value for c in cards) >= QUEEN

def ante_bonus(category: HandCategory, ante: int) -> int:
    return ante * ANTE_BONUS.get(category, 0)

# --- SETTLEMENT ---

@dataclass(frozen=True)
class HandResult:
    """
    Settlement of one hand.
    net: bankroll change over the whole hand (ante + play-bet included).
    returned: amount credited back at settlement, stakes included.
    """
    outcome: HandOutcome
    net: int
    returned: int
    bonus: int
    player_rank: HandRank
    dealer_rank: HandRank
    dealer_qualified: bool

def settle_hand(player_cards: Sequence[Card], dealer_cards: Sequence[Card], ante: int) -> HandResult:
    """Resolves ante + equal play-bet against the dealer."""
    player = evaluate_hand(player_cards)
    dealer = evaluate_hand(dealer_cards)
    qualified = dealer_qualifies(dealer_cards)
    staked = ante * 2

    if not qualified:
        # Ante paid 1:1, play-bet pushed
        return HandResult(HandOutcome.NO_QUALIFY, ante, staked + ante, 0, player, dealer, False)

    if player > dealer:
        bonus = ante_bonus(player.category, ante)
        return HandResult(HandOutcome.WIN, staked + bonus, staked * 2 + bonus, bonus, player, dealer, True)

    if player == dealer:
        return HandResult(HandOutcome.TIE, 0, staked, 0, player, dealer, True)

    return HandResult(HandOutcome.LOSE, -staked, 0, 0, player, dealer, True)

def fold_hand(player_cards: Sequence[Card], dealer_cards: Sequence[Card], ante: int) -> HandResult:
    """Ante forfeited. Hands are ranked for display only."""
    return HandResult(
        HandOutcome.FOLD, -ante, 0, 0,
        evaluate_hand(player_cards), evaluate_hand(dealer_cards), dealer_qualifies(dealer_cards)
    )

def describe_result(result: HandResult) -> str:
    p, d = result.player_rank.name, result.dealer_rank.name
    if result.outcome == HandOutcome.FOLD:
        return f"Folded. Lost the €{-result.net:,} ante."
    if result.outcome == HandOutcome.NO_QUALIFY:
        return f"Dealer does not qualify. Ante pays (+€{result.net:,})"
    if result.outcome == HandOutcome.WIN:
        extra = ' incl. bonus' if result.bonus > 0 else ''
        return f"Win! {p} vs {d} (+€{result.net:,}{extra})"
    if result.outcome == HandOutcome.TIE:
        return f"Push. Bets returned ({p})"
    return f"Dealer wins... {p} vs {d} (-€{-result.net:,})"

# --- TABLE SESSION ---

@dataclass(frozen=True)
class TableSession:
    chips: int = STARTING_CHIPS
    ante: int = MIN_ANTE
    phase: GamePhase = GamePhase.BETTING
    player_cards: Tuple[Card, ...] = ()
    dealer_cards: Tuple[Card, ...] = ()
    message: str = 'Set your ante and deal'
    last_result: Optional[HandResult] = None
    hands_played: int = 0

    @property
    def dealer_visible(self) -> bool:
        return self.phase == GamePhase.RESULT

def new_session(chips=STARTING_CHIPS, ante=MIN_ANTE) -> TableSession:
    chips = coerce_chips(chips)
    return TableSession(chips=chips, ante=coerce_ante(ante, chips))

def set_chips(session: TableSession, raw) -> TableSession:
    """Bankroll is only editable between hands."""
    if session.phase != GamePhase.BETTING:
        return session
    chips = coerce_chips(raw)
    return replace(session, chips=chips, ante=coerce_ante(session.ante, chips))

def set_ante(session: TableSession, raw) -> TableSession:
    if session.phase != GamePhase.BETTING:
        return session
    return replace(session, ante=coerce_ante(raw, session.chips))

def deal(session: TableSession, rng=random) -> TableSession:
    if session.phase != GamePhase.BETTING:
        return session
    if not can_cover(session.ante, session.chips):
        return replace(session, message='Not enough chips')

    player, dealer = deal_hands(shuffle_deck(create_deck(), rng))
    return replace(
        session,
        chips=session.chips - session.ante,
        phase=GamePhase.DEALT,
        player_cards=tuple(player),
        dealer_cards=tuple(dealer),
        message='Play or fold?',
    )

def fold(session: TableSession) -> TableSession:
    if session.phase != GamePhase.DEALT:
        return session
    result = fold_hand(session.player_cards, session.dealer_cards, session.ante)
    return replace(
        session, phase=GamePhase.RESULT, last_result=result,
        message=describe_result(result), hands_played=session.hands_played + 1
    )

def play(session: TableSession) -> TableSession:
    if session.phase != GamePhase.DEALT:
        return session
    if not can_cover(session.ante, session.chips):
        return replace(session, message='Not enough chips')

    result = settle_hand(session.player_cards, session.dealer_cards, session.ante)
    return replace(
        session,
        chips=session.chips - session.ante + result.returned,
        phase=GamePhase.RESULT,
        last_result=result,
        message=describe_result(result),
        hands_played=session.hands_played + 1,
    )

def next_hand(session: TableSession) -> TableSession:
    if session.phase != GamePhase.RESULT:
        return session
    return replace(
        session, phase=GamePhase.BETTING, player_cards=(), dealer_cards=(),
        ante=coerce_ante(session.ante, session.chips), message='Start the next hand'
    )
