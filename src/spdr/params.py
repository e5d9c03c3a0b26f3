"""
Spdr Query Builder - Query Parameters
=====================================

Value objects that each render one API-Platform search filter token.

Every parameter knows its property name, operator and value, and renders
its query-string token once, in the constructor:

    SpdrExists('image', True).query                      -> exists[image]=true
    SpdrSearch('tag', ['a', 'b']).query                  -> tag[]=a&tag[]=b
    SpdrRange('price', RangeOperator.BETWEEN, 10, 20).query -> price[between]=10..20
    SpdrDate('createdAt', DateOperator.AFTER, date(2021, 5, 3)).query
                                                         -> createdAt[after]=2021-05-03
    SpdrOrder('name', OrderOperator.DESC).query          -> order[name]=desc
    SpdrPageIdx(2).query                                 -> page=2

No escaping is performed. Property names and values must already be
URL-safe, or the caller escapes the final string.

How to Add a Parameter:
1. Subclass SpdrParam
2. Call super().__init__(property, operator, value)
3. Implement _render() returning the token
"""

import enum
import math
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import Any, Optional, Sequence, Union

from .utils.config import DEFAULT_OPERAND


class Operator(str, enum.Enum):
    """Base operators"""
    EXISTS = "exists"
    EQUALS = "="
    SORT = "order"


class OrderOperator(str, enum.Enum):
    """Sort directions"""
    ASC = "asc"
    DESC = "desc"


class RangeOperator(str, enum.Enum):
    """Range and comparison operators"""
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"
    BETWEEN = "between"


class DateOperator(str, enum.Enum):
    """Date comparison operators"""
    AFTER = "after"
    BEFORE = "before"
    STRICTLY_AFTER = "strictly_after"
    STRICTLY_BEFORE = "strictly_before"


class PageOperator(str, enum.Enum):
    """Pagination property names"""
    PAGINATION = "pagination"
    PAGE = "page"
    ITEMS_PER_PAGE = "itemsPerPage"


AnyOperator = Union[Operator, OrderOperator, RangeOperator, DateOperator, PageOperator, str]
Number = Union[int, float]

# Integral floats at or above this magnitude print in exponent form in JavaScript
JS_EXPONENT_THRESHOLD = 1e21


def format_operator(operator: AnyOperator) -> str:
    """Return the raw string of an enum member, or a plain string unchanged."""
    if isinstance(operator, enum.Enum):
        return str(operator.value)
    return str(operator)


def format_value(value: Any) -> str:
    """
    Render a scalar the way the API expects it in a query string.

    Booleans become 'true'/'false'. Floats follow JavaScript's
    Number#toString(): integral values below 1e21 drop their fractional
    part (10.0 -> '10'), larger ones keep exponent form (1e21 -> '1e+21')
    and non-finite values become 'Infinity', '-Infinity' or 'NaN'.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        if value.is_integer() and abs(value) < JS_EXPONENT_THRESHOLD:
            return str(int(value))
    if isinstance(value, enum.Enum):
        return format_operator(value)
    return str(value)


def format_date(value: Union[date, datetime]) -> str:
    """
    Format a date as YYYY-MM-DD using its UTC calendar date.

    Aware datetimes are converted to UTC first, naive datetimes are
    taken as UTC, plain dates are used as-is.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    return value.isoformat()


class SpdrParam(ABC):
    """
    Base class for all query parameters.

    Attributes:
        property: API field name being filtered, sorted or paged
        operator: Operator from one of the enums above (or a raw string)
        value: Operand the token was rendered from
        query: Rendered token, fixed at construction
    """

    def __init__(self, property: str, operator: AnyOperator, value: Any):
        self._property = property
        self._operator = operator
        self._value = value
        self._query = self._render()

    @abstractmethod
    def _render(self) -> str:
        """Build the token for this parameter."""

    @property
    def operator(self) -> AnyOperator:
        return self._operator

    @property
    def value(self) -> Any:
        return self._value

    @property
    def query(self) -> str:
        return self._query

    # Keep below the other properties: this name shadows the builtin in the class body.
    @property
    def property(self) -> str:
        return self._property

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._query!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, SpdrParam):
            return NotImplemented
        return type(self) is type(other) and self._query == other._query

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._query))


class SpdrExists(SpdrParam):
    """exists[<property>]=<true|false>"""

    def __init__(self, property: str, value: bool):
        super().__init__(property, Operator.EXISTS, value)

    def _render(self) -> str:
        return f"{format_operator(self.operator)}[{self.property}]={format_value(self.value)}"


class SpdrSearch(SpdrParam):
    """
    Exact-match search on one or more values.

    A single value renders as <property>=<value>. Several values render as
    <property>[]=<value> sub-tokens joined with `operand`, so the operand
    should match the one used by the builder this param ends up in.

    The default operand is DEFAULT_OPERAND, not SPDR_QUERY_OPERAND. Pass the
    builder's operand explicitly when building params outside the builder.
    """

    def __init__(self, property: str, values: Sequence[str], operand: str = DEFAULT_OPERAND):
        self._operand = operand
        super().__init__(property, Operator.EQUALS, list(values))

    @property
    def operand(self) -> str:
        return self._operand

    def _render(self) -> str:
        equals = format_operator(self.operator)
        if len(self.value) == 1:
            return f"{self.property}{equals}{format_value(self.value[0])}"

        return self._operand.join(
            f"{self.property}[]{equals}{format_value(value)}" for value in self.value
        )


class SpdrRange(SpdrParam):
    """
    Numeric comparison on a property.

    `second_value` is only used with the between operator, which then
    renders <value>..<second_value>. Any number, 0 included, counts as
    present; None means absent.
    """

    def __init__(self, property: str, operator: AnyOperator, value: Number,
                 second_value: Optional[Number] = None):
        self._second_value = second_value
        super().__init__(property, operator, value)

    @property
    def second_value(self) -> Optional[Number]:
        return self._second_value

    def _render(self) -> str:
        operator = format_operator(self.operator)
        token = f"{self.property}[{operator}]={format_value(self.value)}"
        if self._second_value is not None and operator == RangeOperator.BETWEEN.value:
            token += f"..{format_value(self._second_value)}"
        return token


class SpdrDate(SpdrParam):
    """Date comparison, formatted YYYY-MM-DD. Subclass and override _render for other formats."""

    def __init__(self, property: str, operator: AnyOperator, value: Union[date, datetime]):
        super().__init__(property, operator, value)

    def _render(self) -> str:
        return f"{self.property}[{format_operator(self.operator)}]={format_date(self.value)}"


class SpdrOrder(SpdrParam):
    """order[<property>]=<asc|desc>"""

    def __init__(self, property: str, direction: Union[OrderOperator, str]):
        super().__init__(property, Operator.SORT, direction)

    @property
    def direction(self) -> Union[OrderOperator, str]:
        return self.value

    def _render(self) -> str:
        return f"{format_operator(self.operator)}[{self.property}]={format_value(self.value)}"


class _SpdrPageParam(SpdrParam):
    """<property>=<value> for the pagination params."""

    def __init__(self, value: Any, property: Union[PageOperator, str]):
        super().__init__(format_operator(property), Operator.EQUALS, value)

    def _render(self) -> str:
        return f"{self.property}{format_operator(self.operator)}{format_value(self.value)}"


class SpdrPagination(_SpdrPageParam):
    """Turns server-side pagination on or off."""

    def __init__(self, value: bool = True, property: Union[PageOperator, str] = PageOperator.PAGINATION):
        super().__init__(value, property)


class SpdrPageIdx(_SpdrPageParam):
    """Page number to fetch."""

    def __init__(self, value: int, property: Union[PageOperator, str] = PageOperator.PAGE):
        super().__init__(value, property)


class SpdrPageSize(_SpdrPageParam):
    """Number of items per page."""

    def __init__(self, value: int, property: Union[PageOperator, str] = PageOperator.ITEMS_PER_PAGE):
        super().__init__(value, property)
