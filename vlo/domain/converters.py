"""
Field value converters.

Each converter turns a raw stored field value into a display value, or
declines with Conversion.no_opinion(). Callers go through display_value(),
which substitutes the raw value when no converter has an opinion, so the
final consumer never sees a missing value.
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional, Protocol, Sequence, Union

from .facet_schema import DESCRIPTION_LANGUAGE_PATTERN, LANGUAGE_CODE_PATTERN
from .ports import FieldValueConverter
from .value_objects import Conversion, FieldValueDescriptor


class LanguageNameResolver(Protocol):
    """The part of LanguageCodeResolver the language converter depends on."""

    def resolve_name(self, code: str) -> str:
        ...


def display_value(
    converter: Optional[FieldValueConverter],
    value: str,
    locale: Optional[str] = None,
) -> str:
    """
    Apply a converter and fall back to the raw value.

    Args:
        converter: Converter to apply, None for plain passthrough
        value: Raw field value
        locale: Optional locale of the requesting user

    Returns:
        The converted value, or the raw value if the converter has no opinion
    """
    if converter is None:
        return value
    return converter.convert(value, locale).or_else(value)


def _compile(pattern: Union[str, re.Pattern], flags: int = 0) -> re.Pattern:
    if isinstance(pattern, str):
        return re.compile(pattern, flags)
    return pattern


class LanguageCodeConverter:
    """
    Converts tagged language values into language names.

    Values follow the pattern "code:<code>" or "name:<name>":
    - "code:nld" -> resolved through the language code resolver ("Dutch")
    - "name:Klingon" -> "Klingon"
    - anything else -> no opinion
    """

    def __init__(
        self,
        resolver: LanguageNameResolver,
        pattern: Union[str, re.Pattern] = LANGUAGE_CODE_PATTERN,
    ) -> None:
        self._resolver = resolver
        self._pattern = _compile(pattern, re.DOTALL)

    def convert(self, value: str, locale: Optional[str] = None) -> Conversion:
        match = self._pattern.fullmatch(value)
        if match is None or len(match.groups()) != 2:
            return Conversion.no_opinion()

        kind, tagged_value = match.group(1), match.group(2)
        if kind == "code":
            return Conversion.of(self._resolver.resolve_name(tagged_value.upper()))
        if kind == "name":
            return Conversion.of(tagged_value)
        return Conversion.no_opinion()


class DescriptionConverter:
    """
    Strips a leading language code prefix from description values.

    "{code:eng}Some text" and "eng: Some text" both become "Some text".
    The language tag is dropped; it is not used to pick a localized variant.
    """

    def __init__(self, pattern: Union[str, re.Pattern] = DESCRIPTION_LANGUAGE_PATTERN) -> None:
        self._pattern = _compile(pattern)

    def convert(self, value: str, locale: Optional[str] = None) -> Conversion:
        return Conversion.of(self._pattern.sub("", value, count=1))


class DescriptorMapConverter:
    """Looks up display values in configured field value descriptors."""

    def __init__(self, descriptors: Mapping[str, FieldValueDescriptor]) -> None:
        self._descriptors = MappingProxyType(dict(descriptors))

    def convert(self, value: str, locale: Optional[str] = None) -> Conversion:
        descriptor = self._descriptors.get(value)
        if descriptor is None:
            return Conversion.no_opinion()
        return Conversion.of(descriptor.display_value)

    def __len__(self) -> int:
        return len(self._descriptors)


class PropertiesConverter:
    """Looks up display values in a key=value table."""

    def __init__(self, properties: Mapping[str, str]) -> None:
        self._properties = MappingProxyType(dict(properties))

    def convert(self, value: str, locale: Optional[str] = None) -> Conversion:
        return Conversion.of_optional(self._properties.get(value))

    def __len__(self) -> int:
        return len(self._properties)


class FallbackChainConverter:
    """
    Tries converters in order and returns the first resolved conversion.

    Returns no opinion when none of the converters resolves the value.
    """

    def __init__(self, converters: Sequence[FieldValueConverter]) -> None:
        if not converters:
            raise ValueError("FallbackChainConverter needs at least one converter")
        self._converters = tuple(converters)

    @property
    def converters(self) -> tuple:
        return self._converters

    def convert(self, value: str, locale: Optional[str] = None) -> Conversion:
        for converter in self._converters:
            conversion = converter.convert(value, locale)
            if conversion.resolved:
                return conversion
        return Conversion.no_opinion()
