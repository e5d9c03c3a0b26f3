"""
Spdr Query Builder - pytest Configuration and Fixtures

Provides shared test fixtures for:
- Pre-built parameter objects of every kind
- Empty and populated builders
- Log capture for the non-propagating package logger
"""

import logging
import sys
from datetime import date
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path.absolute()))

from spdr import (  # noqa: E402
    DateOperator,
    OrderOperator,
    RangeOperator,
    SpdrDate,
    SpdrExists,
    SpdrOrder,
    SpdrPageIdx,
    SpdrPageSize,
    SpdrQueryBuilder,
    SpdrRange,
    SpdrSearch,
)
from spdr.utils.logger import logger as spdr_logger  # noqa: E402


# ============================================================================
# Parameter Fixtures
# ============================================================================

@pytest.fixture
def filter_params():
    """
    One filter param of each kind.

    Returns:
        List of params in the order their tokens appear below:
        exists[image]=true, tag=red, price[gte]=10, createdAt[before]=2021-05-03
    """
    return [
        SpdrExists('image', True),
        SpdrSearch('tag', ['red']),
        SpdrRange('price', RangeOperator.GTE, 10),
        SpdrDate('createdAt', DateOperator.BEFORE, date(2021, 5, 3)),
    ]


@pytest.fixture
def sort_params():
    """order[name]=asc, order[createdAt]=desc"""
    return [
        SpdrOrder('name', OrderOperator.ASC),
        SpdrOrder('createdAt', OrderOperator.DESC),
    ]


@pytest.fixture
def pagination_params():
    """page=2, itemsPerPage=30"""
    return [SpdrPageIdx(2), SpdrPageSize(30)]


# ============================================================================
# Builder Fixtures
# ============================================================================

@pytest.fixture
def builder():
    """Empty builder with the default '&' operand."""
    return SpdrQueryBuilder('&')


@pytest.fixture
def populated_builder():
    """
    Builder holding one param in each category.

    Query: exists[image]=true&order[name]=asc&page=2
    """
    return (
        SpdrQueryBuilder('&')
        .exists('image')
        .order('name', OrderOperator.ASC)
        .page_index(2)
    )


# ============================================================================
# Logging Fixtures
# ============================================================================

@pytest.fixture
def spdr_caplog(caplog):
    """
    caplog wired directly to the package logger.

    The package logger does not propagate to root, so caplog's root
    handler would miss its records.
    """
    spdr_logger.addHandler(caplog.handler)
    previous_level = spdr_logger.level
    spdr_logger.setLevel(logging.DEBUG)
    caplog.handler.setLevel(logging.DEBUG)
    try:
        yield caplog
    finally:
        spdr_logger.removeHandler(caplog.handler)
        spdr_logger.setLevel(previous_level)
