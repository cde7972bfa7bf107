"""
Tests for the field value converters.

Uses a FakeResolver with a fixed name table instead of the registry.
"""

import pytest

from vlo.domain.converters import (
    DescriptionConverter,
    DescriptorMapConverter,
    FallbackChainConverter,
    LanguageCodeConverter,
    PropertiesConverter,
    display_value,
)
from vlo.domain.value_objects import Conversion, FieldValueDescriptor


class FakeResolver:
    """Resolves names from a fixed ISO 639-3 table, like LanguageCodeResolver."""

    def __init__(self, names=None):
        self._names = names if names is not None else {"ENG": "English", "NLD": "Dutch"}
        self.calls = []

    def resolve_name(self, code: str) -> str:
        self.calls.append(code)
        return self._names.get(code.upper(), code)


class TestLanguageCodeConverter:
    """Tests for tagged language code/name values."""

    def test_code_value_is_resolved(self):
        converter = LanguageCodeConverter(FakeResolver({"ENG": "English"}))

        assert display_value(converter, "code:eng") == "English"

    def test_code_is_upper_cased_before_lookup(self):
        resolver = FakeResolver()
        converter = LanguageCodeConverter(resolver)

        converter.convert("code:nld")

        assert resolver.calls == ["NLD"]

    def test_unknown_code_falls_back_to_code(self):
        converter = LanguageCodeConverter(FakeResolver())

        assert converter.convert("code:xyz") == Conversion.of("XYZ")

    def test_name_value_passes_through(self):
        converter = LanguageCodeConverter(FakeResolver())

        assert display_value(converter, "name:Klingon") == "Klingon"

    def test_name_value_may_contain_colons(self):
        converter = LanguageCodeConverter(FakeResolver())

        assert display_value(converter, "name:Dutch: Flemish") == "Dutch: Flemish"

    @pytest.mark.parametrize("value", ["eng", "English", "iso:eng", "Code:eng", ""])
    def test_untagged_value_has_no_opinion(self, value):
        converter = LanguageCodeConverter(FakeResolver())

        assert converter.convert(value).resolved is False
        assert display_value(converter, value) == value


class TestDescriptionConverter:
    """Tests for stripping language prefixes from descriptions."""

    def test_strips_plain_language_prefix(self):
        converter = DescriptionConverter()

        assert display_value(converter, "eng: Example description text") == "Example description text"

    def test_strips_braced_language_prefix(self):
        converter = DescriptionConverter()

        assert display_value(converter, "{code:nld}Een beschrijving") == "Een beschrijving"

    def test_description_without_prefix_unchanged(self):
        converter = DescriptionConverter()

        assert display_value(converter, "A corpus of spoken Dutch") == "A corpus of spoken Dutch"

    def test_only_leading_prefix_is_stripped(self):
        converter = DescriptionConverter()

        assert display_value(converter, "eng: see also: deu: notes") == "see also: deu: notes"

    def test_custom_pattern(self):
        converter = DescriptionConverter(r"^\[[a-z]{2}\]\s*")

        assert display_value(converter, "[en] Text") == "Text"
        assert display_value(converter, "eng: Text") == "eng: Text"

    def test_description_that_is_only_a_prefix_becomes_empty(self):
        """An empty result is a definite conversion, not a fallback."""
        converter = DescriptionConverter()

        assert display_value(converter, "{code:eng}") == ""


class TestAvailabilityChain:
    """Tests for descriptor map with properties fallback."""

    def _chain(self, descriptors, properties):
        return FallbackChainConverter([
            DescriptorMapConverter(FieldValueDescriptor.to_map(descriptors)),
            PropertiesConverter(properties),
        ])

    def test_descriptor_value_is_used(self):
        chain = self._chain([FieldValueDescriptor("restricted", "Restricted Access")], {})

        assert display_value(chain, "restricted") == "Restricted Access"

    def test_properties_fallback_is_used(self):
        chain = self._chain([], {"legacy": "Legacy Label"})

        assert display_value(chain, "legacy") == "Legacy Label"

    def test_descriptor_wins_over_properties(self):
        chain = self._chain(
            [FieldValueDescriptor("PUB", "Public (configured)")],
            {"PUB": "Public (properties)"},
        )

        assert display_value(chain, "PUB") == "Public (configured)"

    def test_unknown_value_falls_back_to_raw(self):
        chain = self._chain([FieldValueDescriptor("PUB", "Public")], {"legacy": "Legacy Label"})

        assert chain.convert("something else") == Conversion.no_opinion()
        assert display_value(chain, "something else") == "something else"

    def test_empty_display_value_is_kept(self):
        chain = self._chain([], {"hidden": ""})

        assert display_value(chain, "hidden") == ""

    def test_chain_needs_converters(self):
        with pytest.raises(ValueError, match="at least one converter"):
            FallbackChainConverter([])


class TestDisplayValue:
    """Tests for the passthrough contract."""

    def test_no_converter_passes_raw_value(self):
        assert display_value(None, "raw") == "raw"

    def test_converters_have_no_inverse(self):
        """Converters are forward only."""
        for converter in (
            LanguageCodeConverter(FakeResolver()),
            DescriptionConverter(),
            DescriptorMapConverter({}),
            PropertiesConverter({}),
        ):
            assert not hasattr(converter, "convert_to_object")
            assert not hasattr(converter, "invert")
