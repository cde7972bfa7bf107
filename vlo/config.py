"""
Application settings and logging setup.

Settings come from environment variables, with defaults pointing at the
public CLARIN registries and at the resources bundled with the package.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

RESOURCES_DIR = Path(__file__).parent / "resources"

COMPONENT_REGISTRY_URL = "https://catalog.clarin.eu/ds/ComponentRegistry/rest/registry/components"
DEFAULT_LANGUAGE_2_LETTER_URL = f"{COMPONENT_REGISTRY_URL}/clarin.eu:cr1:c_1271859438110/xml"
DEFAULT_LANGUAGE_3_LETTER_URL = f"{COMPONENT_REGISTRY_URL}/clarin.eu:cr1:c_1271859438109/xml"
DEFAULT_SIL_TO_ISO_URL = "https://infra.clarin.eu/CMDI/1.x/xslt/sil_to_iso6393.xml"

DEFAULT_FACET_CONFIG = RESOURCES_DIR / "facet_config.json"
DEFAULT_AVAILABILITY_PROPERTIES = (
    Path("availabilityValues.properties"),
    RESOURCES_DIR / "availabilityValues.properties",
)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_paths(key: str, default: Tuple[Path, ...]) -> Tuple[Path, ...]:
    value = os.getenv(key)
    if not value:
        return default
    return tuple(Path(p) for p in value.split(os.pathsep) if p)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration of the application."""

    facet_config_path: Path = DEFAULT_FACET_CONFIG
    """JSON facet configuration (facets and availability values)"""

    language_2_letter_url: str = DEFAULT_LANGUAGE_2_LETTER_URL
    """Component with two letter language codes"""

    language_3_letter_url: str = DEFAULT_LANGUAGE_3_LETTER_URL
    """Component with ISO 639-3 language codes and names"""

    sil_to_iso_url: str = DEFAULT_SIL_TO_ISO_URL
    """Document mapping SIL codes to ISO 639-3"""

    availability_properties: Tuple[Path, ...] = field(default=DEFAULT_AVAILABILITY_PROPERTIES)
    """Candidate locations of the availability fallback table, first existing wins"""

    http_timeout: float = 30.0
    """Timeout in seconds for code table requests"""

    eager_init: bool = True
    """Build all language code tables at startup instead of on first use"""

    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.http_timeout <= 0:
            raise ValueError(f"http_timeout must be positive, got {self.http_timeout}")

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Read settings from the environment.

        Variables: VLO_FACET_CONFIG, VLO_LANGUAGE_2_LETTER_URL,
        VLO_LANGUAGE_3_LETTER_URL, VLO_SIL_TO_ISO_URL,
        VLO_AVAILABILITY_PROPERTIES (os.pathsep separated), VLO_HTTP_TIMEOUT,
        VLO_EAGER_INIT, VLO_LOG_LEVEL.

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        timeout = os.getenv("VLO_HTTP_TIMEOUT", "30")
        try:
            http_timeout = float(timeout)
        except ValueError as e:
            raise ValueError(f"VLO_HTTP_TIMEOUT must be a number, got '{timeout}'") from e

        return cls(
            facet_config_path=Path(os.getenv("VLO_FACET_CONFIG", str(DEFAULT_FACET_CONFIG))),
            language_2_letter_url=os.getenv("VLO_LANGUAGE_2_LETTER_URL", DEFAULT_LANGUAGE_2_LETTER_URL),
            language_3_letter_url=os.getenv("VLO_LANGUAGE_3_LETTER_URL", DEFAULT_LANGUAGE_3_LETTER_URL),
            sil_to_iso_url=os.getenv("VLO_SIL_TO_ISO_URL", DEFAULT_SIL_TO_ISO_URL),
            availability_properties=_env_paths(
                "VLO_AVAILABILITY_PROPERTIES", DEFAULT_AVAILABILITY_PROPERTIES
            ),
            http_timeout=http_timeout,
            eager_init=_env_bool("VLO_EAGER_INIT", True),
            log_level=os.getenv("VLO_LOG_LEVEL", "INFO").upper(),
        )


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the application process."""
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
