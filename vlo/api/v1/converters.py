"""
Converters between domain objects and API schemas / bookmark parameters.

Bookmark parameters follow the form used in search page URLs:
    ?q=<free text>&fq=<facet>:<value>&fq=<facet>:<value>...
A facet value may itself contain ':'; only the first ':' separates the
facet name from the value.
"""

from typing import Iterable, List, Optional, Tuple

from vlo.domain.facet_schema import FacetSchema
from vlo.domain.services.facet_values_service import FacetValues
from vlo.domain.value_objects import FacetConfiguration, QueryFacetsSelection
from vlo.api.v1 import schemas as api

QUERY_PARAM = "q"
FILTER_QUERY_PARAM = "fq"
FILTER_SEPARATOR = ":"


def params_to_selection(
    query: Optional[str],
    filter_queries: Iterable[str],
) -> QueryFacetsSelection:
    """
    Build a selection from bookmark parameters.

    Args:
        query: Value of the 'q' parameter; blank counts as no query
        filter_queries: Values of the 'fq' parameters ("facet:value")

    Returns:
        The selection described by the parameters

    Raises:
        ValueError: If a filter query has no facet name
    """
    selection = {}
    for filter_query in filter_queries:
        facet, separator, value = filter_query.partition(FILTER_SEPARATOR)
        if not separator or not facet:
            raise ValueError(f"Filter query must have the form 'facet:value', got '{filter_query}'")
        selection.setdefault(facet, set()).add(value)

    return QueryFacetsSelection(query=query, selection=selection)


def selection_to_params(selection: QueryFacetsSelection) -> List[Tuple[str, str]]:
    """
    Bookmark parameters for a selection, in a stable order.

    Facets and values are sorted so equal selections give equal URLs.
    """
    params = []
    if selection.query is not None:
        params.append((QUERY_PARAM, selection.query))
    for facet in sorted(selection.facets):
        for value in sorted(selection.get_selection_values(facet)):
            params.append((FILTER_QUERY_PARAM, f"{facet}{FILTER_SEPARATOR}{value}"))
    return params


def domain_selection_to_api(selection: QueryFacetsSelection) -> api.Selection:
    return api.Selection(
        query=selection.query,
        selection={
            facet: sorted(selection.get_selection_values(facet))
            for facet in sorted(selection.facets)
        },
        params=selection_to_params(selection),
    )


def domain_facet_to_api(facet: FacetConfiguration, has_converter: bool = False) -> api.Facet:
    return api.Facet(
        name=facet.name,
        source_fields=list(facet.source_fields),
        display_label=facet.display_label,
        multivalued=facet.multivalued,
        has_converter=has_converter,
    )


def domain_schema_to_api(schema: FacetSchema, bound_facets: Iterable[str]) -> List[api.Facet]:
    """Convert the facet schema, flagging facets that have a value converter."""
    bound = set(bound_facets)
    return [domain_facet_to_api(facet, facet.name in bound) for facet in schema]


def domain_facet_values_to_api(facet_values: FacetValues) -> api.FacetValues:
    return api.FacetValues(
        name=facet_values.name,
        display_label=facet_values.display_label,
        values=[
            api.FacetValueCount(
                value=v.value,
                display_value=v.display_value,
                count=v.count,
                selected=v.selected,
            )
            for v in facet_values.values
        ],
    )
