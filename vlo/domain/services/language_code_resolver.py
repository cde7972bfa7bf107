"""
Language code resolution across code standards.

The LanguageCodeResolver owns the language code reference tables. Each
table is fetched once from its external source through a CodeTableSource
and kept for the lifetime of the resolver. A resolver is meant to be
created once per process and injected where it is needed.

Tables are built lazily on first use, or all at once through warm_up().
Concurrent first accesses are serialized per table, so exactly one build
becomes the live table.
"""

import logging
import threading
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from ..errors import CodeTableLoadError
from ..ports import CodeTableSource

logger = logging.getLogger(__name__)

# ISO 639-2/B codes that differ from their ISO 639-3 equivalent
ISO639_2B_TO_ISO639_3: Mapping[str, str] = MappingProxyType({
    "ALB": "SQI",
    "ARM": "HYE",
    "BAQ": "EUS",
    "BUR": "MYA",
    "CZE": "CES",
    "CHI": "ZHO",
    "DUT": "NLD",
    "FRE": "FRA",
    "GEO": "KAT",
    "GER": "DEU",
    "GRE": "ELL",
    "ICE": "ISL",
    "MAC": "MKD",
    "MAO": "MRI",
    "MAY": "MSA",
    "PER": "FAS",
    "RUM": "RON",
    "SLO": "SLK",
    "TIB": "BOD",
    "WEL": "CYM",
})

TWO_LETTER_CODES = "two_letter_codes"
THREE_LETTER_CODES = "three_letter_codes"
SIL_TO_ISO639 = "sil_to_iso639"
LANGUAGE_NAME_TO_ISO639 = "language_name_to_iso639"
ISO639_TO_LANGUAGE_NAME = "iso639_to_language_name"


class _LazyTable:
    """A code table built at most once, on first access."""

    def __init__(self, name: str, source_url: str, builder: Callable[[str], Dict[str, str]]) -> None:
        self.name = name
        self.source_url = source_url
        self._builder = builder
        self._lock = threading.Lock()
        self._table: Optional[Mapping[str, str]] = None

    @property
    def is_built(self) -> bool:
        return self._table is not None

    def get(self) -> Mapping[str, str]:
        table = self._table
        if table is not None:
            return table

        with self._lock:
            if self._table is None:
                self._table = self._build()
            return self._table

    def _build(self) -> Mapping[str, str]:
        logger.debug(f"Creating code table '{self.name}' from {self.source_url}")
        try:
            entries = self._builder(self.source_url)
        except Exception as e:
            raise CodeTableLoadError(self.name, self.source_url, str(e)) from e

        if entries is None:
            raise CodeTableLoadError(self.name, self.source_url, "source returned no table")

        logger.info(f"Built code table '{self.name}' with {len(entries)} entries")
        return MappingProxyType(dict(entries))


class LanguageCodeResolver:
    """
    Resolves language codes from several standards to ISO 639-3 and names.

    Code families:
    - ISO 639-3 (three letters, canonical)
    - ISO 639-2/B (legacy bibliographic codes, see ISO639_2B_TO_ISO639_3)
    - SIL codes
    - two and three letter codes from the CMDI component registry

    All codes are compared case-insensitively; they are upper-cased before
    lookup.

    Usage:
        resolver = LanguageCodeResolver(
            source=ComponentRegistryClient(),
            two_letter_codes_url=settings.language_2_letter_url,
            three_letter_codes_url=settings.language_3_letter_url,
            sil_to_iso639_url=settings.sil_to_iso_url,
        )
        resolver.resolve_name("nld")  # "Dutch"
    """

    def __init__(
        self,
        source: CodeTableSource,
        two_letter_codes_url: str,
        three_letter_codes_url: str,
        sil_to_iso639_url: str,
    ) -> None:
        """
        Initialize the resolver. No table is fetched until it is needed.

        Args:
            source: Adapter fetching and parsing the code table documents
            two_letter_codes_url: Component with two letter language codes
            three_letter_codes_url: Component with ISO 639-3 codes and names
            sil_to_iso639_url: Document with SIL to ISO 639-3 code pairs
        """
        self._tables = {
            TWO_LETTER_CODES: _LazyTable(
                TWO_LETTER_CODES, two_letter_codes_url, source.fetch_component_items
            ),
            THREE_LETTER_CODES: _LazyTable(
                THREE_LETTER_CODES, three_letter_codes_url, source.fetch_component_items
            ),
            SIL_TO_ISO639: _LazyTable(
                SIL_TO_ISO639, sil_to_iso639_url, source.fetch_code_pairs
            ),
            LANGUAGE_NAME_TO_ISO639: _LazyTable(
                LANGUAGE_NAME_TO_ISO639, three_letter_codes_url, source.fetch_reverse_component_items
            ),
            ISO639_TO_LANGUAGE_NAME: _LazyTable(
                ISO639_TO_LANGUAGE_NAME, three_letter_codes_url, source.fetch_component_items
            ),
        }

    # =========================================================================
    # Code tables
    # =========================================================================

    def get_two_letter_code_map(self) -> Mapping[str, str]:
        """Two letter code -> language name."""
        return self._tables[TWO_LETTER_CODES].get()

    def get_three_letter_code_map(self) -> Mapping[str, str]:
        """Three letter code -> language name."""
        return self._tables[THREE_LETTER_CODES].get()

    def get_sil_to_iso639_map(self) -> Mapping[str, str]:
        """SIL code -> ISO 639-3 code."""
        return self._tables[SIL_TO_ISO639].get()

    def get_language_name_to_iso639_map(self) -> Mapping[str, str]:
        """Upper case language name -> ISO 639-3 code."""
        return self._tables[LANGUAGE_NAME_TO_ISO639].get()

    def get_iso639_to_language_name_map(self) -> Mapping[str, str]:
        """ISO 639-3 code -> language name."""
        return self._tables[ISO639_TO_LANGUAGE_NAME].get()

    @staticmethod
    def get_iso639_2b_to_iso639_3_map() -> Mapping[str, str]:
        """
        ISO 639-2/B code -> ISO 639-3 code.

        ISO 639-3 codes should be preferred in metadata; support for
        ISO 639-2/B may be dropped in the future.
        """
        return ISO639_2B_TO_ISO639_3

    # =========================================================================
    # Lookups
    # =========================================================================

    def resolve_name(self, code: str) -> str:
        """
        Get the language name for an ISO 639-3 code.

        Args:
            code: Language code, any case

        Returns:
            The language name, or the code itself (unchanged) if it is unknown

        Raises:
            CodeTableLoadError: If the name table cannot be built
        """
        name = self.get_iso639_to_language_name_map().get(code.upper())
        return code if name is None else name

    @staticmethod
    def resolve_legacy_code(code: str) -> str:
        """
        Translate an ISO 639-2/B code into its ISO 639-3 equivalent.

        Args:
            code: Language code, any case

        Returns:
            The ISO 639-3 code (upper case), or the input unchanged when it
            is not one of the diverging ISO 639-2/B codes
        """
        return ISO639_2B_TO_ISO639_3.get(code.upper(), code)

    def to_iso639_3(self, code: str) -> Optional[str]:
        """
        Normalize a language code of any supported family to ISO 639-3.

        Tries, in order: ISO 639-3 itself, the ISO 639-2/B legacy table,
        two letter codes (through the language name) and SIL codes.

        Args:
            code: Language code, any case

        Returns:
            Upper case ISO 639-3 code, or None if no family knows the code
        """
        if not code or not code.strip():
            return None
        normalized = code.strip().upper()

        if len(normalized) == 3:
            if normalized in self.get_three_letter_code_map():
                return normalized
            if normalized in ISO639_2B_TO_ISO639_3:
                return ISO639_2B_TO_ISO639_3[normalized]

        if len(normalized) == 2:
            name = self.get_two_letter_code_map().get(normalized)
            if name is not None:
                iso_code = self.get_language_name_to_iso639_map().get(name.upper())
                if iso_code is not None:
                    return iso_code.upper()

        sil_match = self.get_sil_to_iso639_map().get(normalized)
        if sil_match is not None:
            return sil_match.upper()

        return None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def warm_up(self) -> None:
        """
        Build all code tables now.

        Call this at process startup to take table construction out of the
        request path.

        Raises:
            CodeTableLoadError: If any table cannot be built
        """
        for table in self._tables.values():
            table.get()
        logger.info("Language code tables ready")

    def get_status(self) -> Dict[str, bool]:
        """Which code tables have been built so far."""
        return {name: table.is_built for name, table in self._tables.items()}
