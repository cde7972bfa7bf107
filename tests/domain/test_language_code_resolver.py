"""
Tests for LanguageCodeResolver.

Uses a FakeCodeTableSource serving canned tables per URL, and counting
how often each table is fetched.
"""

import threading
import time
from collections import Counter

import pytest

from vlo.domain.errors import CodeTableLoadError
from vlo.domain.services.language_code_resolver import (
    ISO639_2B_TO_ISO639_3,
    LanguageCodeResolver,
)

TWO_LETTER_URL = "http://registry.test/two"
THREE_LETTER_URL = "http://registry.test/three"
SIL_URL = "http://registry.test/sil"


class FakeCodeTableSource:
    """Fake CodeTableSource returning fixed tables."""

    def __init__(self, fail_urls=(), delay: float = 0.0):
        self.items = {
            TWO_LETTER_URL: {"EN": "English", "NL": "Dutch", "DE": "German"},
            THREE_LETTER_URL: {"ENG": "English", "NLD": "Dutch", "DEU": "German", "ZHO": "Chinese"},
        }
        self.code_pairs = {SIL_URL: {"ENG-SIL": "eng", "XKL": "tlh"}}
        self.fail_urls = set(fail_urls)
        self.delay = delay
        self.calls = Counter()
        self._lock = threading.Lock()

    def _record(self, kind, url):
        with self._lock:
            self.calls[(kind, url)] += 1
        if self.delay:
            time.sleep(self.delay)
        if url in self.fail_urls:
            raise RuntimeError(f"Request for {url} failed: connection refused")

    def fetch_component_items(self, url):
        self._record("items", url)
        return dict(self.items[url])

    def fetch_reverse_component_items(self, url):
        self._record("reverse", url)
        return {label.upper(): code for code, label in self.items[url].items()}

    def fetch_code_pairs(self, url):
        self._record("pairs", url)
        return dict(self.code_pairs[url])


def _resolver(source=None):
    return LanguageCodeResolver(
        source=source or FakeCodeTableSource(),
        two_letter_codes_url=TWO_LETTER_URL,
        three_letter_codes_url=THREE_LETTER_URL,
        sil_to_iso639_url=SIL_URL,
    )


class TestResolveName:
    """Tests for resolve_name totality."""

    def test_known_code_resolves_to_name(self):
        assert _resolver().resolve_name("NLD") == "Dutch"

    def test_lookup_is_case_insensitive(self):
        assert _resolver().resolve_name("nld") == "Dutch"

    @pytest.mark.parametrize("code", ["xyz", "XYZ", "", "not a code", "ger"])
    def test_unknown_code_returned_unchanged(self, code):
        assert _resolver().resolve_name(code) == code


class TestLegacyCodes:
    """Tests for the fixed ISO 639-2/B table."""

    def test_table_has_twenty_entries(self):
        assert len(ISO639_2B_TO_ISO639_3) == 20

    @pytest.mark.parametrize("code,expected", [
        ("GER", "DEU"),
        ("ger", "DEU"),
        ("Fre", "FRA"),
        ("CHI", "ZHO"),
        ("wel", "CYM"),
    ])
    def test_legacy_code_maps_to_iso639_3(self, code, expected):
        assert LanguageCodeResolver.resolve_legacy_code(code) == expected

    def test_other_codes_map_to_themselves(self):
        assert LanguageCodeResolver.resolve_legacy_code("nld") == "nld"
        assert LanguageCodeResolver.resolve_legacy_code("DEU") == "DEU"

    def test_legacy_lookup_needs_no_tables(self):
        source = FakeCodeTableSource()
        resolver = _resolver(source)

        resolver.resolve_legacy_code("ger")

        assert sum(source.calls.values()) == 0

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            ISO639_2B_TO_ISO639_3["XXX"] = "YYY"

    def test_legacy_map_accessor(self):
        source = FakeCodeTableSource()
        resolver = _resolver(source)

        mapping = LanguageCodeResolver.get_iso639_2b_to_iso639_3_map()

        assert mapping is ISO639_2B_TO_ISO639_3
        assert resolver.get_iso639_2b_to_iso639_3_map()["GER"] == "DEU"
        assert sum(source.calls.values()) == 0


class TestCodeTables:
    """Tests for lazy building and caching of the five tables."""

    def test_no_table_built_on_construction(self):
        source = FakeCodeTableSource()
        resolver = _resolver(source)

        assert sum(source.calls.values()) == 0
        assert not any(resolver.get_status().values())

    def test_table_fetched_once(self):
        source = FakeCodeTableSource()
        resolver = _resolver(source)

        first = resolver.get_iso639_to_language_name_map()
        second = resolver.get_iso639_to_language_name_map()
        resolver.resolve_name("ENG")

        assert first is second
        assert source.calls[("items", THREE_LETTER_URL)] == 1

    def test_each_table_has_its_own_source(self):
        resolver = _resolver()

        assert resolver.get_two_letter_code_map()["NL"] == "Dutch"
        assert resolver.get_three_letter_code_map()["DEU"] == "German"
        assert resolver.get_sil_to_iso639_map()["XKL"] == "tlh"
        assert resolver.get_language_name_to_iso639_map()["DUTCH"] == "NLD"
        assert resolver.get_iso639_to_language_name_map()["ZHO"] == "Chinese"

    def test_tables_are_read_only(self):
        table = _resolver().get_three_letter_code_map()

        with pytest.raises(TypeError):
            table["XYZ"] = "Unknown"

    def test_warm_up_builds_all_tables(self):
        source = FakeCodeTableSource()
        resolver = _resolver(source)

        resolver.warm_up()

        assert all(resolver.get_status().values())
        assert len(resolver.get_status()) == 5

    def test_concurrent_first_access_builds_once(self):
        """Threads racing on the first access share a single build."""
        source = FakeCodeTableSource(delay=0.05)
        resolver = _resolver(source)
        results = []
        results_lock = threading.Lock()

        def lookup():
            table = resolver.get_iso639_to_language_name_map()
            with results_lock:
                results.append(table)

        threads = [threading.Thread(target=lookup) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert source.calls[("items", THREE_LETTER_URL)] == 1
        assert len(results) == 8
        assert all(table is results[0] for table in results)


class TestLoadFailures:
    """Tests for fatal table build failures."""

    def test_failed_fetch_raises_code_table_load_error(self):
        resolver = _resolver(FakeCodeTableSource(fail_urls={THREE_LETTER_URL}))

        with pytest.raises(CodeTableLoadError, match="iso639_to_language_name") as exc_info:
            resolver.resolve_name("ENG")

        assert exc_info.value.source == THREE_LETTER_URL
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_failure_is_not_cached_as_empty_table(self):
        source = FakeCodeTableSource(fail_urls={THREE_LETTER_URL})
        resolver = _resolver(source)

        for _ in range(2):
            with pytest.raises(CodeTableLoadError):
                resolver.get_iso639_to_language_name_map()

        assert resolver.get_status()["iso639_to_language_name"] is False

    def test_failing_table_does_not_affect_others(self):
        resolver = _resolver(FakeCodeTableSource(fail_urls={SIL_URL}))

        assert resolver.resolve_name("eng") == "English"
        with pytest.raises(CodeTableLoadError):
            resolver.get_sil_to_iso639_map()

    def test_warm_up_fails_on_any_table(self):
        resolver = _resolver(FakeCodeTableSource(fail_urls={TWO_LETTER_URL}))

        with pytest.raises(CodeTableLoadError, match="two_letter_codes"):
            resolver.warm_up()


class TestToIso639_3:
    """Tests for normalizing codes of any family."""

    def test_iso639_3_code(self):
        assert _resolver().to_iso639_3("nld") == "NLD"

    def test_legacy_code(self):
        assert _resolver().to_iso639_3("ger") == "DEU"

    def test_two_letter_code_through_name(self):
        assert _resolver().to_iso639_3("nl") == "NLD"

    def test_sil_code(self):
        assert _resolver().to_iso639_3("xkl") == "TLH"

    @pytest.mark.parametrize("code", ["", "  ", "qqq", "zz"])
    def test_unknown_code_gives_none(self, code):
        assert _resolver().to_iso639_3(code) is None
