"""
API endpoints for facets, field value conversion and search selections.

This module defines the FastAPI routes. It handles HTTP concerns and
delegates to domain services.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from vlo.domain.facet_schema import FacetSchema
from vlo.domain.services import (
    FacetValuesService,
    FieldValueConverterProvider,
    LanguageCodeResolver,
)
from vlo.api.v1 import schemas as api
from vlo.api.v1.converters import (
    domain_facet_values_to_api,
    domain_schema_to_api,
    domain_selection_to_api,
    params_to_selection,
)
from vlo.api.v1.dependencies import (
    get_converter_provider,
    get_facet_schema,
    get_facet_values_service,
    get_language_code_resolver,
)

router = APIRouter()


@router.get("/facets", response_model=List[api.Facet])
def list_facets(
    schema: FacetSchema = Depends(get_facet_schema),
    provider: FieldValueConverterProvider = Depends(get_converter_provider),
) -> List[api.Facet]:
    """List the configured facets in display order."""
    return domain_schema_to_api(schema, provider.bound_facets())


@router.get("/convert", response_model=api.ConvertedValue)
def convert_value(
    facet: str,
    value: str,
    locale: Optional[str] = None,
    provider: FieldValueConverterProvider = Depends(get_converter_provider),
) -> api.ConvertedValue:
    """
    Convert a raw facet value into its display value.

    Unknown facets and unconvertible values come back unchanged.
    """
    try:
        display_value = provider.convert(facet, value, locale)
    except RuntimeError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )
    return api.ConvertedValue(facet=facet, value=value, display_value=display_value)


@router.get("/selection", response_model=api.Selection)
def read_selection(
    q: Optional[str] = None,
    fq: List[str] = Query(default=[]),
) -> api.Selection:
    """
    Read a query/facet selection from bookmark parameters.

    Returns the selection together with its canonical parameters, so the
    same state can be linked again.
    """
    try:
        selection = params_to_selection(q, fq)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return domain_selection_to_api(selection)


@router.get("/facet-values", response_model=List[api.FacetValues])
def facet_values(
    q: Optional[str] = None,
    fq: List[str] = Query(default=[]),
    facet: List[str] = Query(default=[]),
    locale: Optional[str] = None,
    service: FacetValuesService = Depends(get_facet_values_service),
) -> List[api.FacetValues]:
    """Counted, display-ready facet values for a selection."""
    try:
        selection = params_to_selection(q, fq)
        results = service.get_facet_values(selection, locale, facet or None)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except RuntimeError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )
    return [domain_facet_values_to_api(r) for r in results]


@router.get("/health")
def health_check(
    resolver: LanguageCodeResolver = Depends(get_language_code_resolver),
) -> dict:
    """
    Report which language code tables are loaded.

    Tables are loaded at startup with eager initialization, otherwise on
    first use; 'overall' is True once all of them are available.
    """
    tables = resolver.get_status()
    overall = all(tables.values())
    return {
        "status": "ok" if overall else "warming_up",
        "code_tables": tables,
        "overall": overall,
    }
