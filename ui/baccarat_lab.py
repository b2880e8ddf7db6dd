from nicegui import ui
import plotly.graph_objects as go
import asyncio
import traceback
import numpy as np
import json

from engine.strategy_rules import MartingaleOverrides, StrategyId, STRATEGY_LABELS, RESULT_LABELS, BetTarget
from engine.baccarat_rules import SimulationWorker
from engine.bankroll import INITIAL_BALANCE, MIN_BET, BANKER_COMMISSION, MAX_CONSECUTIVE_LOSSES, DEFAULT_ROUNDS, MAX_ROUNDS, coerce_rounds
from utils.export import history_to_csv, history_to_tsv, export_filename, summary_csv

def target_short(target: BetTarget) -> str:
    return 'B' if target == BetTarget.BANKER else 'P'

def show_baccarat_lab():
    running = False
    last_run = None
    last_overrides = None

    async def run_sim():
        nonlocal running, last_run, last_overrides
        if running: return
        try:
            running = True; btn_sim.disable()
            label_stats.set_text("Dealing...")

            rounds = coerce_rounds(input_rounds.value)
            input_rounds.value = rounds
            overrides = MartingaleOverrides(rounds=rounds, strategy=StrategyId(radio_strategy.value))

            run = await asyncio.to_thread(SimulationWorker.run_simulation, overrides)
            last_run, last_overrides = run, overrides

            render_summary(run.summary)
            render_chart(run.history, overrides)
            render_history(run.history)

            if run.summary.total_rounds < rounds:
                label_stats.set_text(f"Bankroll exhausted after {run.summary.total_rounds} of {rounds} rounds")
            else:
                label_stats.set_text("Simulation Complete")

        except Exception as e:
            print(traceback.format_exc())
            ui.notify(f"Error: {str(e)}", type='negative', close_button=True)
        finally:
            running = False; btn_sim.enable()

    def render_summary(summary):
        with summary_container:
            summary_container.clear()
            bal_col = 'text-green-400' if summary.final_balance >= summary.initial_balance else 'text-red-400'
            pnl_col = 'text-green-400' if summary.profit >= 0 else 'text-red-400'
            sign = '+' if summary.profit >= 0 else ''
            with ui.grid(columns=3).classes('w-full gap-4'):
                for title, value, color in [
                    ('FINAL BALANCE', f"€{summary.final_balance:,}", bal_col),
                    ('NET P&L', f"{sign}€{summary.profit:,}", pnl_col),
                    ('ROUNDS', f"{summary.total_rounds}", 'text-white'),
                    ('WINS', f"{summary.wins}", 'text-green-400'),
                    ('LOSSES', f"{summary.losses}", 'text-red-400'),
                    ('TIES', f"{summary.ties}", 'text-yellow-400'),
                ]:
                    with ui.card().classes('bg-slate-800 p-3'):
                        ui.label(title).classes('text-[10px] text-slate-500 font-bold tracking-widest')
                        ui.label(value).classes(f'text-2xl font-bold {color}')

    def render_chart(history, overrides):
        with chart_container:
            chart_container.clear()
            if not history: return
            rounds = [0] + [h.round for h in history]
            balance = np.array([overrides.initial_balance] + [h.balance_after for h in history])
            peak = np.maximum.accumulate(balance)
            max_drawdown = int(np.max(peak - balance))

            fig = go.Figure()
            fig.add_trace(go.Scatter(x=rounds, y=peak, mode='lines', name='Peak', line=dict(color='rgba(148, 163, 184, 0.6)', width=1, dash='dot')))
            fig.add_trace(go.Scatter(x=rounds, y=balance, mode='lines', name='Balance', line=dict(color='#facc15', width=2)))
            fig.add_hline(y=overrides.initial_balance, line_dash="dash", line_color="white", annotation_text="Start")
            fig.add_hline(y=overrides.min_bet, line_dash="dash", line_color="red", annotation_text="Min Bet")
            fig.update_layout(title=f'Bankroll Trajectory (Max Drawdown €{max_drawdown:,})', paper_bgcolor='rgba(0,0,0,0)', plot_bgcolor='rgba(0,0,0,0)', font=dict(color='#94a3b8'), margin=dict(l=20, r=20, t=40, b=20), xaxis=dict(title='Round', gridcolor='#334155'), yaxis=dict(title='Balance (€)', gridcolor='#334155'), showlegend=True, legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1))
            ui.plotly(fig).classes('w-full h-96')

    def render_history(history):
        with history_container:
            history_container.clear()
            if not history: return

            with ui.row().classes('w-full items-center justify-between'):
                ui.label('ROUND HISTORY').classes('font-bold text-yellow-300')
                with ui.row().classes('gap-2'):
                    ui.button('COPY', on_click=copy_history).props('icon=content_copy color=grey')
                    ui.button('COPY SUMMARY', on_click=copy_summary).props('icon=summarize color=grey')
                    ui.button('CSV', on_click=download_csv).props('icon=download color=green')

            rows = [{
                'round': h.round,
                'target': target_short(h.bet_target),
                'bet': f"€{h.bet:,}",
                'result': RESULT_LABELS[h.result],
                'balance': f"€{h.balance_after:,}",
                'action': h.action,
            } for h in history]
            ui.aggrid({
                'columnDefs': [
                    {'headerName': '#', 'field': 'round', 'width': 60},
                    {'headerName': 'Bet On', 'field': 'target', 'width': 70},
                    {'headerName': 'Bet', 'field': 'bet', 'width': 100},
                    {'headerName': 'Result', 'field': 'result', 'width': 90},
                    {'headerName': 'Balance', 'field': 'balance', 'width': 110},
                    {'headerName': 'Action', 'field': 'action', 'flex': 1},
                ],
                'rowData': rows,
            }).classes('h-80 w-full theme-balham-dark')

    def copy_history():
        if last_run is None or not last_run.history: return
        ui.run_javascript(f'navigator.clipboard.writeText({json.dumps(history_to_tsv(last_run.history))})')
        ui.notify('History copied to clipboard!', type='positive')

    def copy_summary():
        if last_run is None: return
        ui.run_javascript(f'navigator.clipboard.writeText({json.dumps(summary_csv(last_run.summary))})')
        ui.notify('Summary copied to clipboard!', type='positive')

    def download_csv():
        if last_run is None or not last_run.history: return
        ui.download(history_to_csv(last_run.history).encode('utf-8'), export_filename(last_overrides.strategy, last_overrides.rounds))

    # --- MAIN UI ---
    with ui.column().classes('w-full max-w-4xl mx-auto gap-6 p-4'):
        ui.label('BACCARAT LAB: MARTINGALE').classes('text-2xl font-light text-slate-300')

        with ui.card().classes('w-full bg-slate-900 p-6 gap-4'):
            ui.label('TABLE RULES').classes('font-bold text-yellow-300')
            ui.label(f"Start €{INITIAL_BALANCE:,} | Min bet €{MIN_BET:,} | Banker commission {BANKER_COMMISSION:.0%}").classes('text-sm text-slate-400')
            ui.label(f"Win → back to €{MIN_BET:,} | Loss → double | {MAX_CONSECUTIVE_LOSSES} losses in a row → reset").classes('text-sm text-slate-400')

            ui.separator().classes('bg-slate-700')

            ui.label('BET STRATEGY').classes('font-bold text-purple-400')
            radio_strategy = ui.radio({s.value: STRATEGY_LABELS[s] for s in StrategyId}, value=StrategyId.BANKER_ONLY.value).props('dark color=yellow')

            ui.separator().classes('bg-slate-700')

            with ui.row().classes('w-full items-center justify-between'):
                input_rounds = ui.number('Rounds', value=DEFAULT_ROUNDS, min=1, max=MAX_ROUNDS, step=1, format='%d').props('dark outlined').classes('w-40')
                btn_sim = ui.button('RUN SIM', on_click=run_sim).props('icon=play_arrow color=yellow text-color=black size=lg')

        label_stats = ui.label('Ready...').classes('text-sm text-slate-500')
        summary_container = ui.column().classes('w-full')
        chart_container = ui.card().classes('w-full bg-slate-900 p-4')
        history_container = ui.column().classes('w-full gap-2')
