"""
Facet value listing for the current search selection.

Asks the search executor for facet value counts and turns the raw
stored values into display values, in facet schema order.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..facet_schema import FacetSchema
from ..ports import SearchExecutor
from ..value_objects import QueryFacetsSelection
from .field_value_converter_provider import FieldValueConverterProvider


@dataclass(frozen=True)
class FacetValueCount:
    """A facet value as stored and as displayed, with its document count."""

    value: str
    display_value: str
    count: int
    selected: bool = False


@dataclass(frozen=True)
class FacetValues:
    """All counted values of one facet."""

    name: str
    display_label: str
    values: List[FacetValueCount]


class FacetValuesService:
    """
    Builds the facet value lists shown next to search results.

    Usage:
        service = FacetValuesService(schema, converter_provider, executor)
        for facet in service.get_facet_values(selection, locale="en"):
            ...
    """

    def __init__(
        self,
        schema: FacetSchema,
        converter_provider: FieldValueConverterProvider,
        search_executor: SearchExecutor,
    ) -> None:
        self._schema = schema
        self._converter_provider = converter_provider
        self._search_executor = search_executor

    def get_facet_values(
        self,
        selection: QueryFacetsSelection,
        locale: Optional[str] = None,
        facets: Optional[List[str]] = None,
    ) -> List[FacetValues]:
        """
        Count and convert facet values for a selection.

        Args:
            selection: Current query and facet constraints
            locale: Optional locale for display values
            facets: Facets to include; defaults to every facet in the schema

        Returns:
            One FacetValues per facet, in schema order, values sorted by
            descending count then display value

        Raises:
            ValueError: If a requested facet is not in the schema
        """
        names = self._schema.names() if facets is None else list(facets)
        unknown = [name for name in names if name not in self._schema]
        if unknown:
            raise ValueError(f"Unknown facets: {', '.join(unknown)}")

        counts = self._search_executor.count_facet_values(selection, names)

        result = []
        for facet in self._schema:
            if facet.name not in names:
                continue

            selected = selection.get_selection_values(facet.name)
            values = [
                FacetValueCount(
                    value=raw,
                    display_value=self._converter_provider.convert(facet.name, raw, locale),
                    count=count,
                    selected=raw in selected,
                )
                for raw, count in counts.get(facet.name, {}).items()
            ]
            values.sort(key=lambda v: (-v.count, v.display_value))
            result.append(FacetValues(facet.name, facet.display_label, values))

        return result
