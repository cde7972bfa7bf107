"""
Domain layer - facet schema, field value conversion and search selection.

This layer contains the value objects, the conversion logic and the
ports (interfaces) that the infrastructure layer must implement.

It has NO dependencies on external frameworks, HTTP clients or file formats.
"""

from .facet_schema import FacetSchema
from .value_objects import (
    Conversion,
    FacetConfiguration,
    FieldValueDescriptor,
    QueryFacetsSelection,
)

__all__ = [
    "FacetSchema",
    # Value Objects
    "Conversion",
    "FacetConfiguration",
    "FieldValueDescriptor",
    "QueryFacetsSelection",
]
