"""
Value objects for the domain layer.

Value objects are immutable objects that represent descriptive aspects
of the domain with no conceptual identity.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class FacetConfiguration:
    """
    Definition of a single search facet.

    A facet is a named dimension of search refinement derived from one or
    more metadata fields.
    """

    name: str
    """Unique facet name (e.g., 'languageCode', 'availability')"""

    source_fields: Tuple[str, ...] = ()
    """Index fields the facet values are taken from"""

    display_label: Optional[str] = None
    """Human readable label; defaults to the facet name"""

    multivalued: bool = False
    """Whether a record can carry several values for this facet"""

    def __post_init__(self) -> None:
        """Validate facet definition."""
        if not self.name or not self.name.strip():
            raise ValueError("Facet name cannot be empty")

        # Accept any iterable of field names, store as tuple
        fields = tuple(self.source_fields) if self.source_fields else (self.name,)
        if any(not f or not f.strip() for f in fields):
            raise ValueError(f"Facet '{self.name}' has an empty source field")
        object.__setattr__(self, "source_fields", fields)

        if self.display_label is None:
            object.__setattr__(self, "display_label", self.name)


@dataclass(frozen=True)
class FieldValueDescriptor:
    """
    Configured mapping of a raw stored value to its display value.

    Used for facets with a closed vocabulary, such as availability states.
    """

    value: str
    """Raw value as stored in the index"""

    display_value: str
    """Value shown to the user"""

    def __post_init__(self) -> None:
        if self.value is None:
            raise ValueError("Descriptor value cannot be None")
        if self.display_value is None:
            raise ValueError(f"Descriptor for '{self.value}' has no display value")

    @staticmethod
    def to_map(descriptors: Iterable["FieldValueDescriptor"]) -> Mapping[str, "FieldValueDescriptor"]:
        """Index descriptors by raw value. Later descriptors replace earlier ones."""
        return MappingProxyType({d.value: d for d in descriptors})


@dataclass(frozen=True)
class Conversion:
    """
    Outcome of a field value conversion.

    Distinguishes "the converter has no opinion" from "the converter
    resolved the value", including resolving to an empty string.
    """

    value: Optional[str] = None
    """The converted value, only meaningful when resolved is True"""

    resolved: bool = False
    """False means the converter has no opinion on the input"""

    @classmethod
    def of(cls, value: str) -> "Conversion":
        return cls(value=value, resolved=True)

    @classmethod
    def no_opinion(cls) -> "Conversion":
        return _NO_OPINION

    @classmethod
    def of_optional(cls, value: Optional[str]) -> "Conversion":
        """Wrap a lookup result where None means "not found"."""
        return cls.no_opinion() if value is None else cls.of(value)

    def or_else(self, fallback: str) -> str:
        """Return the converted value, or fallback when there is no opinion."""
        return self.value if self.resolved else fallback


_NO_OPINION = Conversion()


@dataclass(frozen=True)
class QueryFacetsSelection:
    """
    A user's current search state: free text query plus facet constraints.

    Immutable and hashable. Selected values per facet are stored as
    frozensets, so duplicates and ordering carry no meaning. Two selections
    with the same query and the same facet values are equal.

    The default instance (no query, no facet values) means "no constraints".
    """

    query: Optional[str] = None
    """The textual query, None when there is no query (blank queries become None)"""

    selection: Mapping[str, frozenset] = field(default_factory=dict)
    """Facet name -> selected values"""

    def __post_init__(self) -> None:
        # A blank query carries no constraint
        if self.query is not None and not self.query.strip():
            object.__setattr__(self, "query", None)

        normalized = {}
        for facet, values in dict(self.selection).items():
            if not facet:
                raise ValueError("Facet name in selection cannot be empty")
            if isinstance(values, str):
                raise ValueError(
                    f"Values for facet '{facet}' must be a collection of strings, got a string"
                )
            value_set = frozenset(values or ())
            if value_set:
                normalized[facet] = value_set
        object.__setattr__(self, "selection", MappingProxyType(normalized))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryFacetsSelection):
            return NotImplemented
        return self.query == other.query and dict(self.selection) == dict(other.selection)

    def __hash__(self) -> int:
        return hash((self.query, frozenset(self.selection.items())))

    @property
    def facets(self) -> frozenset:
        """Names of the facets present in the current selection."""
        return frozenset(self.selection.keys())

    def get_selection_values(self, facet: str) -> frozenset:
        """Selected values for a facet; empty when the facet has no selection."""
        return self.selection.get(facet, frozenset())

    def is_empty(self) -> bool:
        """Check if neither a query nor any facet value is set."""
        return self.query is None and not self.selection

    def with_query(self, query: Optional[str]) -> "QueryFacetsSelection":
        """Copy of this selection with a different query."""
        return QueryFacetsSelection(query=query, selection=self.selection)

    def with_selection_values(self, facet: str, values: Iterable[str]) -> "QueryFacetsSelection":
        """Copy of this selection with the values of one facet replaced."""
        selection = dict(self.selection)
        selection[facet] = values
        return QueryFacetsSelection(query=self.query, selection=selection)

    def without_facet(self, facet: str) -> "QueryFacetsSelection":
        """Copy of this selection without any values for the given facet."""
        selection = {k: v for k, v in self.selection.items() if k != facet}
        return QueryFacetsSelection(query=self.query, selection=selection)
