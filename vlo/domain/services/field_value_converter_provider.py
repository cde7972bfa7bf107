"""
Binding of facets to their field value converters.

The provider holds a static facet name -> converter table, built once at
construction. Facets without a converter are shown as their raw values.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ..converters import (
    DescriptionConverter,
    DescriptorMapConverter,
    FallbackChainConverter,
    LanguageCodeConverter,
    LanguageNameResolver,
    PropertiesConverter,
    display_value,
)
from ..facet_schema import FIELD_AVAILABILITY, FIELD_DESCRIPTION, FIELD_LANGUAGE_CODE
from ..ports import FieldValueConverter
from ..value_objects import FieldValueDescriptor

logger = logging.getLogger(__name__)

PropertiesLoader = Callable[[Path], Dict[str, str]]


def build_availability_converter(
    descriptors: Iterable[FieldValueDescriptor],
    properties_paths: Sequence[Path],
    load_properties: PropertiesLoader,
) -> FieldValueConverter:
    """
    Build the availability converter: configured descriptors first, with
    a fallback to the first loadable properties resource.

    A missing or unreadable properties resource is logged and the
    descriptor converter is returned on its own.

    Args:
        descriptors: Availability value descriptors from the facet configuration
        properties_paths: Candidate locations of the properties resource
        load_properties: Loader for key=value files (path -> dict)

    Returns:
        The availability converter
    """
    descriptor_converter = DescriptorMapConverter(FieldValueDescriptor.to_map(descriptors))

    for path in properties_paths:
        if not path.is_file():
            logger.debug(f"No availability properties at {path}")
            continue
        try:
            properties = load_properties(path)
        except (OSError, ValueError) as e:
            logger.error(f"Properties for availability values could not be loaded from {path}: {e}")
            continue

        logger.info(f"Loaded {len(properties)} availability fallback values from {path}")
        return FallbackChainConverter([descriptor_converter, PropertiesConverter(properties)])

    logger.warning(
        f"No availability properties found, using {len(descriptor_converter)} configured descriptors only"
    )
    return descriptor_converter


class FieldValueConverterProvider:
    """
    Provides the converter for a facet and converts facet values for display.

    Bindings:
    - languageCode -> LanguageCodeConverter
    - description -> DescriptionConverter
    - availability -> descriptors with properties fallback

    Usage:
        provider = FieldValueConverterProvider(
            resolver=language_code_resolver,
            availability_converter=build_availability_converter(
                descriptors, paths, load_properties
            ),
        )
        provider.convert("languageCode", "code:nld")  # "Dutch"
        provider.convert("collection", "Some Collection")  # unchanged
    """

    def __init__(
        self,
        resolver: LanguageNameResolver,
        availability_converter: FieldValueConverter,
        description_converter: Optional[FieldValueConverter] = None,
    ) -> None:
        """
        Initialize the provider with its converters.

        Args:
            resolver: Language code resolver for the language facet
            availability_converter: Converter for availability values
            description_converter: Optional replacement for the default
                    description prefix stripper
        """
        self._converters: Mapping[str, FieldValueConverter] = MappingProxyType({
            FIELD_LANGUAGE_CODE: LanguageCodeConverter(resolver),
            FIELD_DESCRIPTION: description_converter or DescriptionConverter(),
            FIELD_AVAILABILITY: availability_converter,
        })

    def get_converter(self, facet_name: str) -> Optional[FieldValueConverter]:
        """
        Get the converter bound to a facet.

        Returns:
            The converter, or None if the facet values are shown as stored
        """
        return self._converters.get(facet_name)

    def bound_facets(self) -> List[str]:
        """Names of the facets that have a converter."""
        return list(self._converters.keys())

    def convert(self, facet_name: str, raw_value: str, locale: Optional[str] = None) -> str:
        """
        Convert a raw facet value to its display value.

        Always returns a string: the raw value if no converter applies.
        """
        return display_value(self.get_converter(facet_name), raw_value, locale)

    def convert_values(
        self,
        facet_name: str,
        raw_values: Iterable[str],
        locale: Optional[str] = None,
    ) -> List[str]:
        """Convert several raw values of the same facet, keeping their order."""
        converter = self.get_converter(facet_name)
        return [display_value(converter, value, locale) for value in raw_values]
