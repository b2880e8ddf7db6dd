# ==========================================
# ⚙️ GLOBAL TABLE CONFIGURATION
# ==========================================

# 1. Baccarat Reference Values
INITIAL_BALANCE = 100000        # Starting bankroll per simulation
MIN_BET = 1000                  # Martingale base stake
BANKER_COMMISSION = 0.05        # 5% on banker wins
MAX_CONSECUTIVE_LOSSES = 3      # Progression resets after this many losses
DEFAULT_ROUNDS = 100
MAX_ROUNDS = 1000

# 2. Three Card Poker Reference Values
STARTING_CHIPS = 100000
MIN_ANTE = 1000

def coerce_int(raw, default: int, minimum: int = None, maximum: int = None) -> int:
    """
    Turns raw form input into a safe integer.
    Non-numeric input falls back to the default, then the result is clamped.
    """
    try:
        value = int(float(raw))
    except (TypeError, ValueError, OverflowError):
        value = default

    if maximum is not None and value > maximum: value = maximum
    if minimum is not None and value < minimum: value = minimum
    return value

def coerce_rounds(raw) -> int:
    """Requested round count: 1..MAX_ROUNDS, garbage becomes 1."""
    return coerce_int(raw, 1, minimum=1, maximum=MAX_ROUNDS)

def coerce_chips(raw) -> int:
    """Table bankroll: never below the minimum ante."""
    return coerce_int(raw, MIN_ANTE, minimum=MIN_ANTE)

def coerce_ante(raw, chips: int) -> int:
    """
    Ante: at least MIN_ANTE, at most the chips on the table.
    A short stack keeps the minimum so the deal is refused rather than resized.
    """
    ceiling = chips if chips >= MIN_ANTE else None
    return coerce_int(raw, MIN_ANTE, minimum=MIN_ANTE, maximum=ceiling)

def can_cover(stake: int, bankroll: int) -> bool:
    """
    Checks whether the bankroll can post the stake.
    """
    return stake <= bankroll
