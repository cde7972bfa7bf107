"""
FastAPI dependencies for dependency injection.

This module provides singleton instances of the settings, facet schema,
language code resolver and converter provider for use with FastAPI's
Depends() system. init_dependencies() creates them all at startup.
"""

import logging
import threading
from typing import Optional

from fastapi import HTTPException, status

from vlo.config import Settings
from vlo.domain.facet_schema import FacetSchema
from vlo.domain.ports import SearchExecutor
from vlo.domain.services import (
    FacetValuesService,
    FieldValueConverterProvider,
    LanguageCodeResolver,
    build_availability_converter,
)
from vlo.infrastructure.config.facet_config_loader import (
    FacetConfigurationDocument,
    load_facet_config,
)
from vlo.infrastructure.config.properties_loader import load_properties
from vlo.infrastructure.external.component_registry_client import ComponentRegistryClient

logger = logging.getLogger(__name__)

# Module-level singletons, created under _lock
_lock = threading.RLock()
_settings: Optional[Settings] = None
_facet_config: Optional[FacetConfigurationDocument] = None
_language_code_resolver: Optional[LanguageCodeResolver] = None
_converter_provider: Optional[FieldValueConverterProvider] = None
_search_executor: Optional[SearchExecutor] = None


def get_settings() -> Settings:
    """Provide the application settings, read from the environment once."""
    global _settings
    with _lock:
        if _settings is None:
            _settings = Settings.from_env()
        return _settings


def get_facet_config() -> FacetConfigurationDocument:
    """Provide the facet configuration document."""
    global _facet_config
    with _lock:
        if _facet_config is None:
            _facet_config = load_facet_config(get_settings().facet_config_path)
        return _facet_config


def get_facet_schema() -> FacetSchema:
    """Provide the facet schema."""
    return get_facet_config().schema


def get_language_code_resolver() -> LanguageCodeResolver:
    """Provide the singleton language code resolver."""
    global _language_code_resolver
    with _lock:
        if _language_code_resolver is None:
            settings = get_settings()
            _language_code_resolver = LanguageCodeResolver(
                source=ComponentRegistryClient(timeout=settings.http_timeout),
                two_letter_codes_url=settings.language_2_letter_url,
                three_letter_codes_url=settings.language_3_letter_url,
                sil_to_iso639_url=settings.sil_to_iso_url,
            )
        return _language_code_resolver


def get_converter_provider() -> FieldValueConverterProvider:
    """Provide the field value converter provider with all converters wired."""
    global _converter_provider
    with _lock:
        if _converter_provider is None:
            availability_converter = build_availability_converter(
                get_facet_config().availability_values,
                get_settings().availability_properties,
                load_properties,
            )
            _converter_provider = FieldValueConverterProvider(
                resolver=get_language_code_resolver(),
                availability_converter=availability_converter,
            )
        return _converter_provider


def set_search_executor(executor: Optional[SearchExecutor]) -> None:
    """Register the search engine adapter used for facet value counts."""
    global _search_executor
    with _lock:
        _search_executor = executor


def get_facet_values_service() -> FacetValuesService:
    """Provide the facet values service; requires a registered search executor."""
    with _lock:
        executor = _search_executor
    if executor is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="No search executor configured",
        )
    return FacetValuesService(get_facet_schema(), get_converter_provider(), executor)


def init_dependencies() -> None:
    """
    Create all singletons and, if configured, build the language code tables.

    Raises:
        CodeTableLoadError: If eager initialization cannot build a code table
        RuntimeError: If the facet configuration cannot be read
        ValueError: If the facet configuration is invalid
    """
    settings = get_settings()
    get_facet_config()
    get_converter_provider()
    if settings.eager_init:
        get_language_code_resolver().warm_up()
    logger.info(f"Dependencies initialized (eager_init={settings.eager_init})")


def reset_dependencies() -> None:
    """
    Reset all singletons. Useful for testing.

    This allows tests to inject mock dependencies by resetting
    the module state between test cases.
    """
    global _settings, _facet_config, _language_code_resolver
    global _converter_provider, _search_executor

    with _lock:
        _settings = None
        _facet_config = None
        _language_code_resolver = None
        _converter_provider = None
        _search_executor = None
