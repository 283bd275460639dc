"""Shared fixtures for planner tests."""

import logging

import pytest

from nestegg.portfolio.models import Holding, PortfolioSnapshot
from nestegg.utils.logging import RunContextFilter


@pytest.fixture(autouse=True)
def reset_planner_logging():
    """Undo handler/level changes made by setup_logging between tests."""
    yield
    logger = logging.getLogger("nestegg")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    RunContextFilter.clear_context()


@pytest.fixture
def balanced_holdings():
    """Two holdings sitting exactly on a 50/50 target."""
    return [
        Holding(symbol="AAA", quote=10.0, number_of_shares=50, target_allocation=50.0),
        Holding(symbol="BBB", quote=10.0, number_of_shares=50, target_allocation=50.0),
    ]


@pytest.fixture
def underweight_holdings():
    """
    One overweight holding carrying all the value and two empty targets.

    Portfolio value is 1000: AAA wants 50 shares (cost 500), BBB wants
    50 shares (cost 250), CCC is over target.
    """
    return [
        Holding(symbol="AAA", quote=10.0, number_of_shares=0, target_allocation=50.0),
        Holding(symbol="BBB", quote=5.0, number_of_shares=0, target_allocation=25.0),
        Holding(symbol="CCC", quote=100.0, number_of_shares=10, target_allocation=0.0),
    ]


@pytest.fixture
def snapshot(underweight_holdings):
    """Snapshot built on the underweight holdings."""
    return PortfolioSnapshot(
        holdings=tuple(underweight_holdings),
        annual_expenses=40000.0,
        target_retirement_age=65,
        current_age=30,
        target_growth_rate=7.0,
        usd_to_cad_exchange_rate=1.3,
        expected_contribution=1000.0,
    )


@pytest.fixture
def snapshot_document():
    """Raw input document as it appears in data.json."""
    return {
        "stocks": [
            {
                "symbol": "XEQT",
                "quote": 25,
                "number_of_shares": 40,
                "target_allocation": 50,
                "is_usd": False,
            },
            {
                "symbol": "VTI",
                "quote": 200.0,
                "number_of_shares": 5,
                "target_allocation": 50.0,
                "is_usd": True,
            },
        ],
        "annual_expenses": 40000,
        "target_retirement_age": 65,
        "current_age": 30,
        "target_growth_rate": 7,
        "usd_to_cad_exchange_rate": 1.25,
        "expected_contribution": 1000,
    }
