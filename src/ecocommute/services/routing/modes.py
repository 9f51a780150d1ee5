"""Transport mode policy table and provider profile resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from ...models.domain import TransportMode
from .errors import NoValidModesError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ModeProfile:
    """Provider routing profile paired with the internal mode tag."""

    profile: str
    mode: TransportMode


@dataclass(frozen=True, slots=True)
class ModePolicy:
    profile: str
    emission_factor_kg_per_km: float
    display_name: str
    weather_dependent: bool


def _freeze(policies: Mapping[TransportMode, ModePolicy]) -> Mapping[TransportMode, ModePolicy]:
    return MappingProxyType(dict(policies))


@dataclass(frozen=True)
class ModeTable:
    """Immutable per-mode policy constants: profiles, emission factors and labels.

    Driving is the emission baseline. Transit has no native profile at the
    provider and is routed on the driving profile with its own factor applied.
    """

    policies: Mapping[TransportMode, ModePolicy] = field(
        default_factory=lambda: _freeze(
            {
                TransportMode.WALKING: ModePolicy("walking", 0.0, "Walking", True),
                TransportMode.CYCLING: ModePolicy("cycling", 0.0, "Cycling", True),
                TransportMode.DRIVING: ModePolicy("driving-traffic", 0.21, "Driving", False),
                TransportMode.TRANSIT: ModePolicy("driving", 0.04, "Public Transit", False),
            }
        )
    )
    baseline: TransportMode = TransportMode.DRIVING

    def __post_init__(self) -> None:
        if not isinstance(self.policies, MappingProxyType):
            object.__setattr__(self, "policies", _freeze(self.policies))
        if self.baseline not in self.policies:
            raise ValueError(f"Baseline mode '{self.baseline.value}' is missing from the mode table.")

    def policy(self, mode: TransportMode) -> ModePolicy:
        return self.policies[mode]

    def emission_factor(self, mode: TransportMode) -> float:
        return self.policies[mode].emission_factor_kg_per_km

    @property
    def baseline_factor(self) -> float:
        return self.emission_factor(self.baseline)

    def display_name(self, mode: TransportMode) -> str:
        return self.policies[mode].display_name

    def weather_suitability(self, mode: TransportMode) -> str:
        return "weather_dependent" if self.policies[mode].weather_dependent else "weather_independent"


DEFAULT_MODE_TABLE = ModeTable()


def resolve_modes(identifiers: Iterable[str], table: ModeTable = DEFAULT_MODE_TABLE) -> list[ModeProfile]:
    """Resolve requested mode identifiers into provider profiles.

    Identifiers are matched case-insensitively; unknown ones are dropped and
    repeats collapse onto their first occurrence.
    """
    resolved: list[ModeProfile] = []
    seen: set[TransportMode] = set()
    for identifier in identifiers:
        mode = TransportMode.parse(identifier)
        if mode is None or mode not in table.policies:
            logger.debug(f"Ignoring unrecognized transport mode {identifier!r}")
            continue
        if mode in seen:
            continue
        seen.add(mode)
        resolved.append(ModeProfile(profile=table.policy(mode).profile, mode=mode))

    if not resolved:
        raise NoValidModesError("No valid transport modes selected.")
    return resolved
