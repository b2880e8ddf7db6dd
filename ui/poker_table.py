from nicegui import ui
import traceback

from engine.cards import Card
from engine.bankroll import MIN_ANTE
from engine.poker_rules import (
    GamePhase, HandOutcome, new_session, set_chips, set_ante, deal, fold, play, next_hand
)

# Seconds the revealed hand stays on the felt
FOLD_PAUSE = 3.0
PLAY_PAUSE = 4.0

OUTCOME_COLORS = {
    HandOutcome.WIN: 'text-green-400',
    HandOutcome.NO_QUALIFY: 'text-green-400',
    HandOutcome.TIE: 'text-yellow-400',
    HandOutcome.LOSE: 'text-red-400',
    HandOutcome.FOLD: 'text-red-400',
}

def render_card(card: Card, hidden: bool = False):
    if hidden:
        with ui.card().classes('w-24 h-36 bg-blue-600 border-2 border-blue-700 items-center justify-center'):
            ui.label('🂠').classes('text-white text-4xl')
        return
    color = 'text-red-600' if card.is_red else 'text-gray-900'
    with ui.card().classes(f'w-24 h-36 bg-white border-2 border-gray-300 p-2 justify-between {color}'):
        ui.label(card.rank).classes('text-2xl font-bold')
        ui.label(card.suit).classes('text-3xl self-center')
        ui.label(card.label).classes('text-xs self-end rotate-180')

def show_poker_table():
    table = {'session': new_session()}

    def update(new_state):
        table['session'] = new_state
        felt.refresh()

    def on_chips_change(field):
        update(set_chips(table['session'], field.value))

    def on_ante_change(field):
        update(set_ante(table['session'], field.value))

    def schedule_next_hand(delay):
        # Timers live outside the felt so a refresh does not delete them
        with timer_anchor:
            ui.timer(delay, lambda: update(next_hand(table['session'])), once=True)

    def on_deal():
        try:
            update(deal(table['session']))
        except Exception as e:
            print(traceback.format_exc())
            ui.notify(f"Error: {str(e)}", type='negative')

    def on_fold():
        update(fold(table['session']))
        schedule_next_hand(FOLD_PAUSE)

    def on_play():
        update(play(table['session']))
        if table['session'].phase == GamePhase.RESULT:
            schedule_next_hand(PLAY_PAUSE)
        else:
            ui.notify(table['session'].message, type='warning')

    @ui.refreshable
    def felt():
        s = table['session']
        with ui.card().classes('w-full bg-green-700 p-6 gap-4 shadow-xl'):
            with ui.row().classes('w-full items-center justify-between text-white text-xl'):
                with ui.row().classes('items-center gap-4'):
                    ui.label('Chips:').classes('font-bold')
                    chips_input = ui.number(value=s.chips, min=MIN_ANTE, step=1000, format='%d').props('dark outlined dense').classes('w-40')
                    chips_input.on('blur', lambda e: on_chips_change(chips_input))
                    if s.phase != GamePhase.BETTING: chips_input.disable()
                ui.label(f"Ante: €{s.ante:,}")

            ui.label(s.message).classes('w-full text-center text-white text-lg font-semibold')

            ui.label('Dealer').classes('text-white text-xl')
            with ui.row().classes('w-full justify-center gap-4'):
                if s.dealer_cards:
                    for card in s.dealer_cards: render_card(card, hidden=not s.dealer_visible)
                else:
                    ui.label('Waiting...').classes('text-white text-lg')

            ui.label('You').classes('text-white text-xl')
            with ui.row().classes('w-full justify-center gap-4'):
                if s.player_cards:
                    for card in s.player_cards: render_card(card)
                else:
                    ui.label('Waiting...').classes('text-white text-lg')

            if s.phase == GamePhase.RESULT and s.last_result is not None:
                r = s.last_result
                sign = '+' if r.net >= 0 else ''
                with ui.row().classes('w-full justify-center gap-6'):
                    ui.label(f"You: {r.player_rank.name}").classes('text-white')
                    ui.label(f"Dealer: {r.dealer_rank.name}{'' if r.dealer_qualified else ' (no qualify)'}").classes('text-white')
                    ui.label(f"{sign}€{r.net:,}").classes(f'text-2xl font-bold {OUTCOME_COLORS[r.outcome]}')

            if s.phase == GamePhase.BETTING:
                with ui.row().classes('w-full items-center justify-center gap-4'):
                    ui.label('Ante:').classes('text-white font-semibold')
                    ante_input = ui.number(value=s.ante, min=MIN_ANTE, max=max(s.chips, MIN_ANTE), step=1000, format='%d').props('dark outlined dense').classes('w-32')
                    ante_input.on('blur', lambda e: on_ante_change(ante_input))
                    ui.button('DEAL', on_click=on_deal).props('color=yellow text-color=black size=lg')
            elif s.phase == GamePhase.DEALT:
                with ui.row().classes('w-full justify-center gap-4'):
                    ui.button('FOLD', on_click=on_fold).props('color=red size=lg')
                    ui.button('PLAY (x2 BET)', on_click=on_play).props('color=green size=lg')

            ui.label(f"Hands played: {s.hands_played}").classes('text-xs text-green-200')

    # --- MAIN UI ---
    with ui.column().classes('w-full max-w-4xl mx-auto gap-6 p-4'):
        ui.label('THREE CARD POKER').classes('text-2xl font-light text-slate-300')
        felt()
        timer_anchor = ui.element('div')

        with ui.card().classes('w-full bg-slate-900 p-6'):
            ui.label('RULES').classes('font-bold text-yellow-300')
            for line in [
                f"Chips can be changed between hands (min €{MIN_ANTE:,})",
                f"Post an ante (min €{MIN_ANTE:,}) and deal",
                "Look at your cards, then fold or play",
                "Playing requires a second bet equal to the ante",
                "Dealer qualifies with Queen-high or better",
                "Straight Flush > Three Of A Kind > Straight > Flush > One Pair > High Card",
                "Ante bonus on a win: Straight Flush 5x, Trips 4x, Straight 1x",
            ]:
                ui.label(f"• {line}").classes('text-sm text-slate-400')
