"""
Species profile catalog.

Profiles are stored as a JSON list of records using the field names of
the device-side schema (commonName, thetaWp, EMax, ...). Each record is
validated with pydantic and converted to an immutable PlantProfile.

Lookup by common name is exact after trimming and lowercasing; search is
a plain substring match for autocomplete. A missing species is reported
as None so callers choose their own fallback.
"""

import logging
from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from bloompot.config import PlantProfile

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "plant_profiles.json"


class ProfileCatalogError(Exception):
    """Raised when a profile catalog cannot be read or validated."""


#
# Schemata
#


class PlantProfileSchema(BaseModel):
    """One species record as stored in the catalog file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    common_name: str = Field(alias="commonName", min_length=1)
    scientific_name: str = Field(alias="scientificName", default="")
    category: str = Field(default="")
    light_preference: float = Field(
        alias="lightPreference", default=0.0, ge=0, description="Ideal light (lux)"
    )
    water_preference: str = Field(alias="waterPreference", default="")

    theta_wp: float = Field(alias="thetaWp", ge=0, le=1, description="Wilting point")
    theta_crit: float = Field(alias="thetaCrit", ge=0, le=1, description="Critical point")
    theta_fc: float = Field(alias="thetaFc", ge=0, le=1, description="Field capacity")
    w_min: float = Field(alias="WMin", ge=0, le=1, description="Sensor threshold")
    l_min: float = Field(alias="LMin", ge=0, description="Minimum light (lux)")

    k_w: float = Field(alias="kW", ge=0)
    k_rw: float = Field(alias="kRW", ge=0)
    p: float = Field(gt=0)
    k_t: float = Field(alias="kT", ge=0)
    k_rt: float = Field(alias="kRT", ge=0)
    k_l: float = Field(alias="kL", ge=0)
    k_rl: float = Field(alias="kRL", ge=0)

    alpha_evap: float = Field(alias="alphaEvap", ge=0, le=1)
    e_max: float = Field(alias="EMax", ge=0, description="Max ET per hour")
    n_retention: float = Field(alias="nRetention", ge=0)

    c_t: float = Field(alias="cT")
    c_h: float = Field(alias="cH")

    s_max: float = Field(alias="SMax", gt=0)

    k_sat: float = Field(alias="kSat", ge=0)
    tau_sat: float = Field(alias="tauSat", ge=0, description="Hours")

    q: float = Field(alias="Q", ge=0, description="Pump delivery per hour")
    w_init: float = Field(alias="WInit", ge=0, le=1)
    r_init: float = Field(alias="RInit", ge=0)

    def to_profile(self) -> PlantProfile:
        """Convert to the engine's immutable profile type."""
        return PlantProfile(**self.model_dump())


_catalog_adapter = TypeAdapter(list[PlantProfileSchema])


def load_profiles(path: str | Path | None = None) -> tuple[PlantProfile, ...]:
    """
    Load and validate a profile catalog file.

    Args:
        path: JSON file to read (defaults to the bundled catalog)

    Returns:
        Profiles in file order

    Raises:
        ProfileCatalogError: If the file is unreadable or any record invalid
    """
    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    try:
        raw = catalog_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProfileCatalogError(f"Cannot read catalog {catalog_path}: {exc}") from exc

    try:
        records = _catalog_adapter.validate_json(raw)
        profiles = tuple(record.to_profile() for record in records)
    except (ValidationError, ValueError) as exc:
        logger.warning("Rejected profile catalog %s: %s", catalog_path, exc)
        raise ProfileCatalogError(f"Invalid catalog {catalog_path}: {exc}") from exc

    logger.info("Loaded %d plant profiles from %s", len(profiles), catalog_path)
    return profiles


def _normalize(name: str) -> str:
    return name.strip().lower()


class ProfileCatalog:
    """Read-only collection of species profiles."""

    def __init__(self, profiles: tuple[PlantProfile, ...] | list[PlantProfile]):
        self._profiles = tuple(profiles)

    @classmethod
    def from_file(cls, path: str | Path | None = None) -> "ProfileCatalog":
        return cls(load_profiles(path))

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[PlantProfile]:
        return iter(self._profiles)

    def names(self) -> list[str]:
        return [profile.common_name for profile in self._profiles]

    def default(self) -> PlantProfile:
        """First profile in the catalog."""
        if not self._profiles:
            raise ProfileCatalogError("Catalog is empty")
        return self._profiles[0]

    def find_by_common_name(self, name: str) -> PlantProfile | None:
        """Exact, case-insensitive lookup after trimming whitespace."""
        wanted = _normalize(name)
        for profile in self._profiles:
            if _normalize(profile.common_name) == wanted:
                return profile
        logger.debug("No plant profile named %r", name)
        return None

    def search(self, query: str) -> list[PlantProfile]:
        """Substring search over common names. Empty query returns all."""
        wanted = _normalize(query)
        if not wanted:
            return list(self._profiles)
        return [p for p in self._profiles if wanted in p.common_name.lower()]


@lru_cache(maxsize=1)
def default_catalog() -> ProfileCatalog:
    """The bundled catalog, loaded once."""
    return ProfileCatalog.from_file()


def find_plant_profile_by_common_name(name: str) -> PlantProfile | None:
    return default_catalog().find_by_common_name(name)


def search_plant_profiles(query: str) -> list[PlantProfile]:
    return default_catalog().search(query)
