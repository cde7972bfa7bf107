"""
Port interfaces (protocols) for the domain layer.

Ports define the contracts between the domain and infrastructure layers.
They are implemented by adapters in the infrastructure layer, allowing
the domain to remain independent of technical details.
"""

from typing import Any, Dict, List, Optional, Protocol

from .value_objects import Conversion, QueryFacetsSelection


class CodeTableSource(Protocol):
    """
    Port for fetching language code reference tables.

    Implementations fetch and parse an external resource (a CMDI component
    specification or a SIL code list) and return a plain dict. They are
    called at most once per table by the LanguageCodeResolver.

    Implementations should raise on any fetch or parse failure rather than
    return a partial or empty table.
    """

    def fetch_component_items(self, url: str) -> Dict[str, str]:
        """
        Fetch the items of a CMDI component vocabulary.

        Args:
            url: Location of the component specification document

        Returns:
            Mapping of item value (upper case code) -> item label

        Raises:
            RuntimeError: If the document cannot be fetched or parsed
        """
        ...

    def fetch_reverse_component_items(self, url: str) -> Dict[str, str]:
        """
        Fetch the items of a CMDI component vocabulary, label first.

        Args:
            url: Location of the component specification document

        Returns:
            Mapping of item label (upper case) -> item value

        Raises:
            RuntimeError: If the document cannot be fetched or parsed
        """
        ...

    def fetch_code_pairs(self, url: str) -> Dict[str, str]:
        """
        Fetch a list of code pairs, one per //lang node.

        Args:
            url: Location of the code list document

        Returns:
            Mapping of source code (first child) -> target code (last child)

        Raises:
            RuntimeError: If the document cannot be fetched or parsed
        """
        ...


class FieldValueConverter(Protocol):
    """
    Forward-only conversion of a stored field value into a display value.

    There is deliberately no inverse operation: display values are lossy
    projections of the stored metadata.
    """

    def convert(self, value: str, locale: Optional[str] = None) -> Conversion:
        """
        Convert a raw field value.

        Args:
            value: Raw value as stored in the index
            locale: Optional locale of the requesting user (e.g., 'en', 'nl_NL')

        Returns:
            A resolved Conversion, or Conversion.no_opinion() when this
            converter does not apply to the value
        """
        ...


class SearchExecutor(Protocol):
    """
    Port for the search engine that executes faceted queries.

    The engine itself is not part of this project; only the parameter
    object handed to it is.
    """

    def search(
        self,
        selection: QueryFacetsSelection,
        offset: int = 0,
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        """
        Execute a query built from the given selection.

        Args:
            selection: Free text query and facet constraints
            offset: Index of the first document to return
            limit: Maximum number of documents to return

        Returns:
            Matching documents as field -> value dicts
        """
        ...

    def count_facet_values(
        self,
        selection: QueryFacetsSelection,
        facets: List[str],
    ) -> Dict[str, Dict[str, int]]:
        """
        Count facet values for documents matching the selection.

        Args:
            selection: Free text query and facet constraints
            facets: Facet names to count values for

        Returns:
            Facet name -> (raw value -> document count)
        """
        ...
