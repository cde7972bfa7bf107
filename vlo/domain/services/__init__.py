"""
Domain services package.

Services hold the shared, long-lived domain objects: the language code
resolver, the facet converter binding and the facet value listing.

Services depend only on domain value objects and port protocols (never on
concrete implementations).
"""

from .language_code_resolver import LanguageCodeResolver
from .field_value_converter_provider import (
    FieldValueConverterProvider,
    build_availability_converter,
)
from .facet_values_service import FacetValuesService

__all__ = [
    "LanguageCodeResolver",
    "FieldValueConverterProvider",
    "build_availability_converter",
    "FacetValuesService",
]
