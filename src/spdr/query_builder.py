"""
Spdr Query Builder - Query Builder
==================================

Accumulates parameters into three categories and serialises them into
one query string.

Usage:
    from spdr import SpdrQueryBuilder, RangeOperator, OrderOperator

    builder = (
        SpdrQueryBuilder()
        .exists('image')
        .range('price', RangeOperator.BETWEEN, 10, 20)
        .order('name', OrderOperator.ASC)
        .page_index(2)
    )
    builder.query
    # 'exists[image]=true&price[between]=10..20&order[name]=asc&page=2'

Categories are always serialised in the same order: filters, then sort,
then pagination. Within a category params keep their insertion order.

History:
    Every clear() pushes the query string it is about to discard onto
    history. History is never trimmed, so long-lived builders that clear
    often should call clear_history() themselves.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, List, Optional, Sequence, Union

from .params import (
    AnyOperator,
    Number,
    OrderOperator,
    PageOperator,
    SpdrDate,
    SpdrExists,
    SpdrOrder,
    SpdrPageIdx,
    SpdrPageSize,
    SpdrPagination,
    SpdrParam,
    SpdrRange,
    SpdrSearch,
)
from .utils.config import config
from .utils.logger import log_history_cleared, log_params_removed, log_query_cleared


class SpdrParamType(enum.Enum):
    """Parameter categories held by the builder"""
    PARAM = "param"
    SORT = "sort"
    PAGINATION = "pagination"


def _param_field(param: Any, name: str) -> Any:
    """
    Read `name` from a param object or a plain mapping.

    Mappings may carry the token under 'query' or '_query'.
    Missing fields come back as None.
    """
    if isinstance(param, Mapping):
        if name == 'query':
            return param.get('query', param.get('_query'))
        return param.get(name)
    return getattr(param, name, None)


def _category_name(param_type: Any) -> Optional[str]:
    """Category label for logging, None when every category is affected."""
    if isinstance(param_type, SpdrParamType):
        return param_type.value
    return None


class SpdrQueryBuilder:
    """
    Fluent builder for API-Platform filter, sort and pagination query strings.

    Every mutating method returns the builder. The query string is rebuilt
    from scratch after each change.

    Attributes:
        operand: Delimiter placed between tokens
        params: Filter params (exists, search, range, date)
        sort_params: Order params
        pagination_params: Pagination flag, page index and page size params
        query: Current query string
        history: Query strings captured before each clear(), oldest first
    """

    def __init__(self, operand: Optional[str] = None):
        self._operand = operand if operand is not None else config.get_operand()
        self._query = ''
        self._history: List[str] = []

        self._params: List[SpdrParam] = []
        self._sort_params: List[SpdrParam] = []
        self._pagination_params: List[SpdrParam] = []

    def set_operand(self, value: str) -> SpdrQueryBuilder:
        """
        Use a new delimiter for future rebuilds.

        Tokens that were already rendered, such as multi-value search
        tokens, keep the operand they were built with.
        """
        self._operand = value
        self._build_query()
        return self

    def clear_history(self) -> SpdrQueryBuilder:
        dropped = len(self._history)
        self._history = []
        log_history_cleared(dropped)
        return self

    # =========================================================================
    # FILTERS
    # =========================================================================

    def search(self, property: str, values: Sequence[str],
               operand: Optional[str] = None) -> SpdrQueryBuilder:
        """Add an exact-match search. Several values are joined with the builder's operand by default."""
        self._add_param(SpdrSearch(property, values, operand if operand is not None else self._operand))
        return self

    def exists(self, property: str, value: bool = True) -> SpdrQueryBuilder:
        self._add_param(SpdrExists(property, value))
        return self

    def range(self, property: str, operator: AnyOperator, value: Number,
              second_value: Optional[Number] = None) -> SpdrQueryBuilder:
        """Add a numeric comparison. second_value is only rendered for the between operator."""
        self._add_param(SpdrRange(property, operator, value, second_value))
        return self

    def date(self, property: str, operator: AnyOperator,
             value: Union[date, datetime]) -> SpdrQueryBuilder:
        self._add_param(SpdrDate(property, operator, value))
        return self

    # =========================================================================
    # SORT
    # =========================================================================

    def order(self, property: str, direction: Union[OrderOperator, str]) -> SpdrQueryBuilder:
        self._add_sort_param(SpdrOrder(property, direction))
        return self

    # =========================================================================
    # PAGINATION
    # =========================================================================

    def enable_pagination(self, value: bool = True,
                          property: Union[PageOperator, str] = PageOperator.PAGINATION) -> SpdrQueryBuilder:
        self._add_pagination_param(SpdrPagination(value, property))
        return self

    def page_index(self, value: int,
                   property: Union[PageOperator, str] = PageOperator.PAGE) -> SpdrQueryBuilder:
        self._add_pagination_param(SpdrPageIdx(value, property))
        return self

    def page_size(self, value: int,
                  property: Union[PageOperator, str] = PageOperator.ITEMS_PER_PAGE) -> SpdrQueryBuilder:
        self._add_pagination_param(SpdrPageSize(value, property))
        return self

    # =========================================================================
    # CLEAR / REMOVE
    # =========================================================================

    def clear(self, param_type: Optional[SpdrParamType] = None) -> SpdrQueryBuilder:
        """
        Empty one category, or all of them when no type is passed.

        The query string as it was before the clear is appended to history.

        Args:
            param_type: Category to clear. None, or any value that is not
                a SpdrParamType member (e.g. the string "sort"), clears all

        Returns:
            The builder
        """
        previous_query = self.query

        if param_type is SpdrParamType.PARAM:
            self._params = []
        elif param_type is SpdrParamType.SORT:
            self._sort_params = []
        elif param_type is SpdrParamType.PAGINATION:
            self._pagination_params = []
        else:
            self._params = []
            self._sort_params = []
            self._pagination_params = []

        self._history.append(previous_query)
        self._build_query()

        log_query_cleared(
            _category_name(param_type),
            previous_query,
            len(self._history),
        )
        return self

    def remove(self, property: str, param_type: Optional[SpdrParamType] = None) -> SpdrQueryBuilder:
        """
        Remove every param matching `property`.

        Only the given category is searched when param_type is passed,
        otherwise all three are. History is left untouched.

        Args:
            property: Property name to match
            param_type: Category to remove from. None, or any value that is not
                a SpdrParamType member, searches all three

        Returns:
            The builder
        """
        def keep(params: List[SpdrParam]) -> List[SpdrParam]:
            return [param for param in params if _param_field(param, 'property') != property]

        before = self._param_count()

        if param_type is SpdrParamType.PARAM:
            self._params = keep(self._params)
        elif param_type is SpdrParamType.SORT:
            self._sort_params = keep(self._sort_params)
        elif param_type is SpdrParamType.PAGINATION:
            self._pagination_params = keep(self._pagination_params)
        else:
            self._params = keep(self._params)
            self._sort_params = keep(self._sort_params)
            self._pagination_params = keep(self._pagination_params)

        self._build_query()

        log_params_removed(
            property,
            _category_name(param_type),
            before - self._param_count(),
        )
        return self

    def url(self, base_url: str) -> str:
        """
        Append the query string to a URL.

        Returns:
            "<base_url>?<query>", or base_url unchanged if the query is empty
        """
        query = self.query
        if not query:
            return base_url
        return f"{base_url}?{query}"

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _add_param(self, param: SpdrParam):
        self._params.append(param)
        self._build_query()

    def _add_sort_param(self, param: SpdrParam):
        self._sort_params.append(param)
        self._build_query()

    def _add_pagination_param(self, param: SpdrParam):
        self._pagination_params.append(param)
        self._build_query()

    def _param_count(self) -> int:
        return len(self._params) + len(self._sort_params) + len(self._pagination_params)

    def _append(self, param: Any):
        self._query += f"{self._operand}{_param_field(param, 'query')}"

    def _build_query(self):
        self._query = ''
        for param in [*self._params, *self._sort_params, *self._pagination_params]:
            self._append(param)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def operand(self) -> str:
        return self._operand

    @property
    def query(self) -> str:
        """
        Current query string, without a leading delimiter.

        Empty if the builder holds no params.
        """
        return self._query[len(self._operand):]

    @property
    def history(self) -> List[str]:
        return list(self._history)

    @property
    def previous_query(self) -> Optional[str]:
        """Most recent history entry, or None if nothing was cleared yet."""
        if not self._history:
            return None
        return self._history[-1]

    @property
    def params(self) -> List[SpdrParam]:
        return list(self._params)

    @params.setter
    def params(self, value: Sequence[SpdrParam]):
        self._params = list(value)
        self._build_query()

    @property
    def sort_params(self) -> List[SpdrParam]:
        return list(self._sort_params)

    @sort_params.setter
    def sort_params(self, value: Sequence[SpdrParam]):
        self._sort_params = list(value)
        self._build_query()

    @property
    def pagination_params(self) -> List[SpdrParam]:
        return list(self._pagination_params)

    @pagination_params.setter
    def pagination_params(self, value: Sequence[SpdrParam]):
        self._pagination_params = list(value)
        self._build_query()

    def __str__(self) -> str:
        return self.query

    def __repr__(self) -> str:
        return f"SpdrQueryBuilder(operand={self._operand!r}, query={self.query!r})"
