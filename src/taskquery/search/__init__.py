"""Search query tokenizing, parsing and evaluation."""

from ..exceptions import SearchError
from .cache import QueryCache
from .dates import DatePrecision, DateRange, ExactDate, RelativeDate, parse_date_value
from .evaluator import SearchEvaluator
from .parser import PrattParser, parse_query, parse_tokens
from .query import Search
from .tokenizer import SearchTokenizer, tokenize

__all__ = [
    "DatePrecision",
    "DateRange",
    "ExactDate",
    "PrattParser",
    "QueryCache",
    "RelativeDate",
    "Search",
    "SearchError",
    "SearchEvaluator",
    "SearchTokenizer",
    "parse_date_value",
    "parse_query",
    "parse_tokens",
    "tokenize",
]
