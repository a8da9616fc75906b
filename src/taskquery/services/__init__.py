"""Service layer for business logic."""

from .config_service import ConfigService
from .filter_service import FilterService
from .suggestion_service import SuggestionService

__all__ = [
    "ConfigService",
    "FilterService",
    "SuggestionService",
]
