import csv
import io
from typing import Iterable, List

import pandas as pd

from engine.ledger import RoundRecord
from engine.strategy_rules import StrategyId, RESULT_LABELS, TARGET_LABELS

# --- CONFIGURATION ---
BOM = '\ufeff'
HISTORY_HEADERS = [
    'Round', 'Bet On', 'Bet', 'Result',
    'Balance Before', 'Balance After', 'P&L', 'Action'
]

_TARGET_BY_LABEL = {label: target for target, label in TARGET_LABELS.items()}
_RESULT_BY_LABEL = {label: result for result, label in RESULT_LABELS.items()}

def history_rows(history: Iterable[RoundRecord]) -> List[list]:
    """One row per round, in HISTORY_HEADERS order."""
    return [
        [
            h.round, TARGET_LABELS[h.bet_target], h.bet, RESULT_LABELS[h.result],
            h.balance_before, h.balance_after, h.delta, h.action
        ]
        for h in history
    ]

def _render(history, delimiter: str) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=delimiter, lineterminator='\n')
    writer.writerow(HISTORY_HEADERS)
    writer.writerows(history_rows(history))
    return buf.getvalue()

def history_to_csv(history: Iterable[RoundRecord]) -> str:
    # BOM so spreadsheet apps detect UTF-8
    return BOM + _render(history, ',')

def history_to_tsv(history: Iterable[RoundRecord]) -> str:
    return _render(history, '\t')

def export_filename(strategy: StrategyId, rounds: int) -> str:
    return f"baccarat_{strategy.value}_{rounds}games.csv"

def parse_history(text: str) -> List[RoundRecord]:
    """
    Reads a CSV or TSV export back into round records.
    The delimiter is picked from the header line.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]
    if not text.strip():
        return []

    header = text.split('\n', 1)[0]
    sep = '\t' if '\t' in header else ','
    df = pd.read_csv(io.StringIO(text), sep=sep, dtype=str, keep_default_na=False)

    missing = [c for c in HISTORY_HEADERS if c not in df.columns]
    if missing:
        raise ValueError(f"History export is missing columns: {missing}")

    numeric_cols = ['Round', 'Bet', 'Balance Before', 'Balance After', 'P&L']
    for col in numeric_cols:
        df[col] = pd.to_numeric(df[col], errors='raise').astype(int)

    records = []
    for row in df.to_dict('records'):
        records.append(RoundRecord(
            round=int(row['Round']),
            bet=int(row['Bet']),
            bet_target=_TARGET_BY_LABEL[row['Bet On']],
            result=_RESULT_BY_LABEL[row['Result']],
            balance_before=int(row['Balance Before']),
            balance_after=int(row['Balance After']),
            action=row['Action'],
        ))
    return records

def summary_csv(summary) -> str:
    """Metric,Value block for the clipboard."""
    return (
        "Metric,Value\n"
        f"Initial_Balance,{summary.initial_balance}\n"
        f"Final_Balance,{summary.final_balance}\n"
        f"Profit,{summary.profit}\n"
        f"Rounds,{summary.total_rounds}\n"
        f"Wins,{summary.wins}\n"
        f"Losses,{summary.losses}\n"
        f"Ties,{summary.ties}"
    )
