"""
API models for the facet and field value endpoints.
"""

from pydantic import BaseModel, Field


class Facet(BaseModel):
    """
    API representation of a facet configuration.
    """
    name: str = Field(description="Unique facet name")
    source_fields: list[str] = Field(description="Index fields the facet is built from")
    display_label: str = Field(description="Human readable facet label")
    multivalued: bool = Field(default=False, description="Whether a record can have several values")
    has_converter: bool = Field(default=False, description="Whether values are converted for display")


class ConvertedValue(BaseModel):
    """
    Display value of a raw facet value.
    """
    facet: str
    value: str = Field(description="Raw value as stored")
    display_value: str = Field(description="Value to show; the raw value when no conversion applies")


class Selection(BaseModel):
    """
    A query and facet selection, as read from bookmark parameters.
    """
    query: str | None = Field(default=None, description="Free text query")
    selection: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Facet name -> selected values (sorted)",
    )
    params: list[tuple[str, str]] = Field(
        default_factory=list,
        description="Canonical bookmark parameters for this selection",
    )


class FacetValueCount(BaseModel):
    value: str
    display_value: str
    count: int = Field(ge=0)
    selected: bool = False


class FacetValues(BaseModel):
    """
    Counted values of a facet for the current selection.
    """
    name: str
    display_label: str
    values: list[FacetValueCount] = Field(default_factory=list)
