"""
Loader for the JSON facet configuration.

Expected document:

    {
      "facets": [
        {"name": "languageCode", "sourceFields": ["languageCode"],
         "displayLabel": "Language", "multivalued": true},
        ...
      ],
      "availabilityValues": [
        {"value": "PUB", "displayValue": "Public"},
        ...
      ]
    }

Facet order in the document is the facet order of the schema.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

from vlo.domain.facet_schema import FacetSchema
from vlo.domain.value_objects import FacetConfiguration, FieldValueDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FacetConfigurationDocument:
    """Parsed facet configuration."""

    schema: FacetSchema
    availability_values: Tuple[FieldValueDescriptor, ...]


def _parse_facet(entry: Dict[str, Any]) -> FacetConfiguration:
    if not isinstance(entry, dict):
        raise ValueError(f"Facet entry must be an object, got {type(entry).__name__}")
    if "name" not in entry:
        raise ValueError(f"Facet entry without name: {entry}")

    source_fields = entry.get("sourceFields", entry.get("sourceField", ()))
    if isinstance(source_fields, str):
        source_fields = (source_fields,)

    return FacetConfiguration(
        name=entry["name"],
        source_fields=tuple(source_fields),
        display_label=entry.get("displayLabel"),
        multivalued=bool(entry.get("multivalued", False)),
    )


def _parse_descriptor(entry: Dict[str, Any]) -> FieldValueDescriptor:
    if not isinstance(entry, dict) or "value" not in entry:
        raise ValueError(f"Field value descriptor without value: {entry}")
    return FieldValueDescriptor(
        value=entry["value"],
        display_value=entry.get("displayValue", entry["value"]),
    )


def parse_facet_config(data: Dict[str, Any]) -> FacetConfigurationDocument:
    """
    Build the facet schema and availability descriptors from a parsed document.

    Raises:
        ValueError: If the document is malformed or a facet name is repeated
    """
    if not isinstance(data, dict):
        raise ValueError("Facet configuration must be a JSON object")

    facets: List[FacetConfiguration] = [_parse_facet(e) for e in data.get("facets", [])]
    descriptors = tuple(_parse_descriptor(e) for e in data.get("availabilityValues", []))

    return FacetConfigurationDocument(
        schema=FacetSchema(facets),
        availability_values=descriptors,
    )


def load_facet_config(path: Path) -> FacetConfigurationDocument:
    """
    Read the facet configuration file.

    Args:
        path: Location of the JSON configuration

    Returns:
        FacetConfigurationDocument with schema and availability descriptors

    Raises:
        RuntimeError: If the file cannot be read or is not valid JSON
        ValueError: If the configuration content is invalid
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise RuntimeError(f"Cannot read facet configuration {path}: {e}") from e

    document = parse_facet_config(data)
    logger.info(
        f"Loaded {len(document.schema)} facets and "
        f"{len(document.availability_values)} availability values from {path}"
    )
    return document
