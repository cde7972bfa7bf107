"""
Facet schema: the ordered registry of facet definitions.

The schema is built once at startup from the facet configuration and is
read-only afterwards. Facet names are unique; registering the same name
twice is rejected.
"""

from types import MappingProxyType
from typing import Iterable, Iterator, List, Optional

from .value_objects import FacetConfiguration

# Well-known facet names with a dedicated value converter
FIELD_LANGUAGE_CODE = "languageCode"
FIELD_DESCRIPTION = "description"
FIELD_AVAILABILITY = "availability"

# Language facet values are tagged as "code:<iso code>" or "name:<language name>"
LANGUAGE_CODE_PATTERN = r"(code|name):(.*)"

# Language prefix on descriptions, either "{code:eng}" or "eng:" before the text
DESCRIPTION_LANGUAGE_PATTERN = r"^(?:\{code:[a-zA-Z]{2,3}\}|[a-z]{3}:)\s*"


class FacetSchema:
    """
    Ordered, uniquely named collection of facet configurations.

    Iteration follows configuration order. Lookup by name is a dict lookup.

    Usage:
        schema = FacetSchema([
            FacetConfiguration(name="languageCode", display_label="Language"),
            FacetConfiguration(name="availability"),
        ])
        schema.get("languageCode").display_label  # "Language"
    """

    def __init__(self, facets: Iterable[FacetConfiguration] = ()) -> None:
        """
        Build the schema.

        Args:
            facets: Facet configurations in display order

        Raises:
            ValueError: If two facets share the same name
        """
        ordered: List[FacetConfiguration] = []
        by_name = {}
        for facet in facets:
            if facet.name in by_name:
                raise ValueError(f"Duplicate facet name in schema: '{facet.name}'")
            by_name[facet.name] = facet
            ordered.append(facet)

        self._facets = tuple(ordered)
        self._by_name = MappingProxyType(by_name)

    def get(self, name: str) -> Optional[FacetConfiguration]:
        """Facet configuration by name, None if the schema has no such facet."""
        return self._by_name.get(name)

    def names(self) -> List[str]:
        """Facet names in configuration order."""
        return [facet.name for facet in self._facets]

    def display_label(self, name: str) -> str:
        """Display label of a facet, or the name itself for unknown facets."""
        facet = self._by_name.get(name)
        return facet.display_label if facet is not None else name

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[FacetConfiguration]:
        return iter(self._facets)

    def __len__(self) -> int:
        return len(self._facets)

    def __repr__(self) -> str:
        return f"FacetSchema({self.names()!r})"
