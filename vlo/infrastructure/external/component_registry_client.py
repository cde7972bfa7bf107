"""
CMDI component registry client implementing the CodeTableSource port.

Fetches XML documents over HTTP(S) and turns them into code tables:
- component specifications: every <item> of a vocabulary becomes
  value -> AppInfo label (e.g. NLD -> Dutch)
- code pair lists: every <lang> node becomes first child -> last child
  (e.g. SIL code -> ISO 639-3 code)

The constructor accepts an optional `session` so tests can inject a fake
session that returns canned documents instead of making network calls.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, Iterator, Optional

import requests

from vlo.domain.ports import CodeTableSource

logger = logging.getLogger(__name__)


def _local_name(tag: Any) -> str:
    """Element tag without its namespace."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _iter_elements(root: ET.Element, name: str) -> Iterator[ET.Element]:
    """All descendants (and root) with the given local name, namespaced or not."""
    for element in root.iter():
        if _local_name(element.tag) == name:
            yield element


class ComponentRegistryClient(CodeTableSource):
    """
    HTTP client for code tables published as XML.

    Usage:
        # Production
        client = ComponentRegistryClient(timeout=30)
        codes = client.fetch_component_items(url)

        # Testing (with fake session)
        client = ComponentRegistryClient(session=fake_session)
    """

    ITEM_TAG = "item"
    LABEL_ATTRIBUTE = "AppInfo"
    CODE_PAIR_TAG = "lang"

    def __init__(
        self,
        session: Optional[Any] = None,
        timeout: float = 30,
    ) -> None:
        """
        Initialize the client.

        Args:
            session: Optional HTTP session for dependency injection.
                    If None, creates a new requests.Session().
            timeout: Request timeout in seconds
        """
        if session is None:
            session = requests.Session()
            session.headers.update({
                "User-Agent": "VLO-FacetValues/1.0",
                "Accept": "application/xml, text/xml",
            })
        self._session = session
        self._timeout = timeout

    def fetch_component_items(self, url: str) -> Dict[str, str]:
        """
        Fetch a component vocabulary as upper case code -> label.

        Raises:
            RuntimeError: If the document cannot be fetched or parsed
        """
        table = {}
        for code, label in self._iter_items(url):
            table[code.upper()] = label
        logger.debug(f"Parsed {len(table)} component items from {url}")
        return table

    def fetch_reverse_component_items(self, url: str) -> Dict[str, str]:
        """
        Fetch a component vocabulary as upper case label -> upper case code.

        Raises:
            RuntimeError: If the document cannot be fetched or parsed
        """
        table = {}
        for code, label in self._iter_items(url):
            table[label.upper()] = code.upper()
        logger.debug(f"Parsed {len(table)} reverse component items from {url}")
        return table

    def fetch_code_pairs(self, url: str) -> Dict[str, str]:
        """
        Fetch //lang code pairs as upper case source code -> target code.

        Raises:
            RuntimeError: If the document cannot be fetched or parsed
        """
        root = self._fetch_xml(url)

        table = {}
        for node in _iter_elements(root, self.CODE_PAIR_TAG):
            children = list(node)
            if not children:
                raise RuntimeError(f"<{self.CODE_PAIR_TAG}> node without code children in {url}")
            source_code = (children[0].text or "").strip()
            target_code = (children[-1].text or "").strip()
            if source_code and target_code:
                table[source_code.upper()] = target_code

        logger.debug(f"Parsed {len(table)} code pairs from {url}")
        return table

    # =========================================================================
    # Private helper methods
    # =========================================================================

    def _iter_items(self, url: str) -> Iterator[tuple]:
        """Yield (code, label) for every labelled vocabulary item."""
        root = self._fetch_xml(url)
        for item in _iter_elements(root, self.ITEM_TAG):
            code = (item.text or "").strip()
            label = item.get(self.LABEL_ATTRIBUTE)
            if not code or label is None:
                logger.debug(f"Skipping vocabulary item without code or label in {url}")
                continue
            yield code, label.strip()

    def _fetch_xml(self, url: str) -> ET.Element:
        """
        GET and parse an XML document.

        Raises:
            RuntimeError: If the request fails or the body is not well-formed XML
        """
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
        except Exception as e:
            raise RuntimeError(f"Request for {url} failed: {e}") from e

        try:
            return ET.fromstring(response.content)
        except ET.ParseError as e:
            raise RuntimeError(f"Malformed XML document at {url}: {e}") from e
