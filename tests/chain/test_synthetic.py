from datetime import date

import pandas as pd
import pytest

from optsim.chain import (
    INSTRUMENTS,
    ChainRow,
    chain_frame,
    generate_option_chain,
    get_instrument,
    market_summary,
    put_call_ratio,
    synthetic_premium,
)
from optsim.models import OptionQuote

TODAY = date(2025, 10, 1)


def test_instrument_registry():
    assert set(INSTRUMENTS) == {"NIFTY", "BANKNIFTY", "RELIANCE", "TCS"}
    nifty = get_instrument("nifty")
    assert nifty.lot_size == 50
    assert nifty.strike_interval == 50
    assert get_instrument("BANKNIFTY").strike_interval == 100
    assert get_instrument("UNKNOWN") is None


def test_unknown_symbol_yields_empty_chain():
    assert generate_option_chain("XYZ") == []
    assert market_summary("XYZ") is None


def test_chain_covers_all_expiries_and_strikes():
    rows = generate_option_chain("NIFTY", today=TODAY, seed=1)
    assert len(rows) == 3 * 15
    strikes = sorted({row.strike for row in rows})
    assert strikes[0] == 21700
    assert strikes[-1] == 22400
    assert strikes[7] == 22050
    assert {row.expiry for row in rows} == set(INSTRUMENTS["NIFTY"].expiries)


def test_chain_single_expiry():
    rows = generate_option_chain("BANKNIFTY", "04-Nov-2025", today=TODAY, seed=1)
    assert len(rows) == 15
    assert {row.expiry for row in rows} == {"04-Nov-2025"}
    assert rows[1].strike - rows[0].strike == 100


def test_chain_is_reproducible_with_seed():
    first = generate_option_chain("TCS", today=TODAY, seed=42)
    second = generate_option_chain("TCS", today=TODAY, seed=42)
    assert first == second


def test_chain_row_invariants():
    for row in generate_option_chain("RELIANCE", today=TODAY, seed=3):
        assert row.call_ltp >= 0.05 and row.put_ltp >= 0.05
        assert row.call_bid <= row.call_ltp <= row.call_ask
        assert row.put_bid <= row.put_ltp <= row.put_ask
        assert row.call_oi >= 20000 and row.put_oi >= 22000
        if row.strike < 2850:
            assert row.call_change >= 5
            assert row.put_change <= -2
        if row.strike > 2850:
            assert row.put_change >= 5
            assert row.call_iv > row.put_iv


def test_synthetic_premium():
    assert synthetic_premium(100, 90, True, 20, 0) == 10.0
    assert synthetic_premium(100, 110, True, 20, 0) == 0.05
    assert synthetic_premium(100, 110, False, 20, 0) == 10.0
    atm = synthetic_premium(22045, 22050, True, 18, 27)
    assert atm > synthetic_premium(22045, 22400, True, 18, 27)


def test_expired_chain_has_only_intrinsic_value():
    rows = generate_option_chain("NIFTY", "28-Oct-2025", today=date(2026, 1, 1), seed=5)
    deep_otm = next(row for row in rows if row.strike == 22400)
    assert deep_otm.call_ltp == 0.05
    assert deep_otm.put_ltp == pytest.approx(22400 - 22045)


def test_to_quote():
    row = generate_option_chain("NIFTY", "28-Oct-2025", today=TODAY, seed=2)[0]
    quote = row.to_quote()
    assert quote == OptionQuote(
        strike=row.strike,
        expiry="28-Oct-2025",
        call_premium=row.call_ltp,
        put_premium=row.put_ltp,
    )


def test_chain_frame():
    rows = generate_option_chain("NIFTY", "28-Oct-2025", today=TODAY, seed=2)
    frame = chain_frame(rows)
    assert isinstance(frame, pd.DataFrame)
    assert len(frame) == 15
    assert list(frame.columns)[:3] == ["strike", "expiry", "call_oi"]
    assert frame["put_oi"].sum() == sum(row.put_oi for row in rows)
    assert chain_frame([]).empty


def _row(call_oi, put_oi):
    return ChainRow(
        strike=100, expiry="28-Oct-2025", call_oi=call_oi, call_volume=0, call_ltp=1,
        call_change=0, call_iv=16, call_bid=1, call_ask=1, put_ltp=1, put_change=0,
        put_volume=0, put_oi=put_oi, put_iv=16, put_bid=1, put_ask=1,
    )


def test_put_call_ratio():
    assert put_call_ratio([_row(100, 150), _row(200, 100)]) == 0.83
    assert put_call_ratio([_row(0, 10)]) == 0.0
    assert put_call_ratio([]) == 0.0


def test_market_summary_is_consistent():
    summary = market_summary("NIFTY", today=TODAY, seed=11)
    assert summary.instrument.symbol == "NIFTY"
    assert summary.pcr == pytest.approx(summary.total_put_oi / summary.total_call_oi, abs=0.005)
    expected = "Bullish" if summary.pcr > 1.2 else "Bearish" if summary.pcr < 0.8 else "Neutral"
    assert summary.sentiment == expected
