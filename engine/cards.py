import random
from dataclasses import dataclass
from typing import List, Tuple

SUITS = ['♠', '♥', '♦', '♣']
RANKS = ['2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K', 'A']
RANK_VALUES = {rank: i + 2 for i, rank in enumerate(RANKS)}  # '2' -> 2 ... 'A' -> 14
RED_SUITS = {'♥', '♦'}

HAND_SIZE = 3

@dataclass(frozen=True)
class Card:
    suit: str
    rank: str

    def __post_init__(self):
        if self.suit not in SUITS: raise ValueError(f"Invalid suit: {self.suit!r}")
        if self.rank not in RANK_VALUES: raise ValueError(f"Invalid rank: {self.rank!r}")

    @property
    def value(self) -> int:
        return RANK_VALUES[self.rank]

    @property
    def is_red(self) -> bool:
        return self.suit in RED_SUITS

    @property
    def label(self) -> str:
        return f"{self.rank}{self.suit}"

    def __str__(self):
        return self.label

def parse_card(text: str) -> Card:
    """'Q♥' -> Card('♥', 'Q')"""
    return Card(suit=text[-1], rank=text[:-1])

def create_deck() -> List[Card]:
    """Fresh 52-card deck in fixed suit-major order."""
    return [Card(suit, rank) for suit in SUITS for rank in RANKS]

def shuffle_deck(deck: List[Card], rng=random) -> List[Card]:
    """
    Fisher-Yates from the end. Returns a new list; the input is left as is.
    """
    shuffled = list(deck)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled

def deal_hands(deck: List[Card]) -> Tuple[List[Card], List[Card]]:
    """Player takes the first three cards, dealer the next three."""
    if len(deck) < HAND_SIZE * 2:
        raise ValueError(f"Need {HAND_SIZE * 2} cards to deal, got {len(deck)}")
    return list(deck[:HAND_SIZE]), list(deck[HAND_SIZE:HAND_SIZE * 2])
