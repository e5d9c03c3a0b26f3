"""
Spdr Query Builder
==================

Builds API-Platform style filter, sort and pagination query strings.

Modules:
- params.py: One value object per parameter kind, each rendering its token
- query_builder.py: SpdrQueryBuilder, which joins tokens into a query string
- utils/: Configuration and structured logging
"""

from .params import (
    Operator,
    OrderOperator,
    RangeOperator,
    DateOperator,
    PageOperator,
    SpdrParam,
    SpdrExists,
    SpdrSearch,
    SpdrRange,
    SpdrDate,
    SpdrOrder,
    SpdrPagination,
    SpdrPageIdx,
    SpdrPageSize,
)
from .query_builder import SpdrQueryBuilder, SpdrParamType

__version__ = "1.0.0"

__all__ = [
    "Operator",
    "OrderOperator",
    "RangeOperator",
    "DateOperator",
    "PageOperator",
    "SpdrParam",
    "SpdrExists",
    "SpdrSearch",
    "SpdrRange",
    "SpdrDate",
    "SpdrOrder",
    "SpdrPagination",
    "SpdrPageIdx",
    "SpdrPageSize",
    "SpdrQueryBuilder",
    "SpdrParamType",
]
