"""
sitio_tracker/domain/sitio.py

Typed sitio community profile.

Every attribute of :class:`Sitio` is optional so the same type describes a
partial record coming out of an import row and a fully populated record
loaded from storage. Sections are immutable values; list-valued fields are
tuples and are only grown through the ``with_*`` helpers, which keep each
section's own invariants (ordered, de-duplicated entries).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, ClassVar, Union

ScalarValue = Union[int, float, bool, str]

SCALAR = "scalar"
STRING_LIST = "string_list"
TAGGED_LIST = "tagged_list"


def _string_list() -> Any:
    return field(default=(), metadata={"kind": STRING_LIST})


def _tagged_list(entry_type: type, key: str, amount: str) -> Any:
    return field(
        default=(),
        metadata={"kind": TAGGED_LIST, "entry_type": entry_type, "key": key, "amount": amount},
    )


class SectionMixin:
    """
    Copy-on-write mutation helpers shared by every record section.
    """

    def assign(self, name: str, value: Any) -> Any:
        return replace(self, **{name: value})

    def with_list_item(self, name: str, value: str) -> Any:
        current: tuple[str, ...] = getattr(self, name)
        if value in current:
            return self
        return replace(self, **{name: (*current, value)})

    def with_tagged_entry(self, name: str, tag: str) -> Any:
        meta = _field_metadata(type(self), name)
        current: tuple[Any, ...] = getattr(self, name)
        key = meta["key"]
        if any(getattr(entry, key) == tag for entry in current):
            return self
        entry = meta["entry_type"](**{key: tag, meta["amount"]: 0})
        return replace(self, **{name: (*current, entry)})


def _field_metadata(cls: type, name: str) -> dict[str, Any]:
    for item in fields(cls):
        if item.name == name:
            return dict(item.metadata)
    raise KeyError(f"{cls.__name__} has no field {name!r}")


# ---------------------------------------------------------------------------
# Tagged list entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Employment:
    type: str
    count: int = 0


@dataclass(frozen=True)
class IncomeBracket:
    bracket: str
    households: int = 0


@dataclass(frozen=True)
class HousingCount:
    type: str
    count: int = 0


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Coordinates(SectionMixin):
    lat: ScalarValue | None = None
    lng: ScalarValue | None = None


@dataclass(frozen=True)
class Coding(SectionMixin):
    number: ScalarValue | None = None
    code: ScalarValue | None = None


@dataclass(frozen=True)
class Demographics(SectionMixin):
    male: ScalarValue = 0
    female: ScalarValue = 0
    total: ScalarValue = 0
    age_0_14: ScalarValue = 0
    age_15_64: ScalarValue = 0
    age_65_above: ScalarValue = 0


@dataclass(frozen=True)
class SocialServices(SectionMixin):
    registered_voters: ScalarValue = 0
    philhealth_beneficiaries: ScalarValue = 0
    fourps_beneficiaries: ScalarValue = 0


@dataclass(frozen=True)
class EconomicCondition(SectionMixin):
    employments: tuple[Employment, ...] = _tagged_list(Employment, "type", "count")
    income_brackets: tuple[IncomeBracket, ...] = _tagged_list(IncomeBracket, "bracket", "households")


@dataclass(frozen=True)
class Agriculture(SectionMixin):
    farmers_count: ScalarValue = 0
    farmer_associations: ScalarValue = 0
    farm_area_hectares: ScalarValue = 0
    top_crops: tuple[str, ...] = _string_list()


@dataclass(frozen=True)
class WaterSanitation(SectionMixin):
    water_systems_count: ScalarValue = 0
    households_without_toilet: ScalarValue = 0
    toilet_facility_types: tuple[str, ...] = _string_list()
    waste_segregation_practice: ScalarValue | None = None


@dataclass(frozen=True)
class LivestockPoultry(SectionMixin):
    pigs: ScalarValue = 0
    cows: ScalarValue = 0
    carabaos: ScalarValue = 0
    horses: ScalarValue = 0
    goats: ScalarValue = 0
    chickens: ScalarValue = 0
    ducks: ScalarValue = 0
    others: tuple[str, ...] = _string_list()


@dataclass(frozen=True)
class FoodSecurity(SectionMixin):
    households_with_backyard_garden: ScalarValue = 0
    common_garden_commodities: tuple[str, ...] = _string_list()


@dataclass(frozen=True)
class Housing(SectionMixin):
    quality_types: tuple[HousingCount, ...] = _tagged_list(HousingCount, "type", "count")
    ownership_types: tuple[HousingCount, ...] = _tagged_list(HousingCount, "type", "count")


@dataclass(frozen=True)
class DomesticAnimals(SectionMixin):
    total_count: ScalarValue = 0
    dogs: ScalarValue = 0
    cats: ScalarValue = 0
    dogs_vaccinated: ScalarValue = 0
    cats_vaccinated: ScalarValue = 0


@dataclass(frozen=True)
class CommunityEmpowerment(SectionMixin):
    sectoral_organizations: ScalarValue = 0
    info_dissemination_methods: tuple[str, ...] = _string_list()
    transportation_methods: tuple[str, ...] = _string_list()


@dataclass(frozen=True)
class Utilities(SectionMixin):
    households_with_electricity: ScalarValue = 0
    alternative_electricity_sources: tuple[str, ...] = _string_list()


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Sitio(SectionMixin):
    """
    One sitio community profile. ``None`` marks an absent field or section.
    """

    SECTION_TYPES: ClassVar[dict[str, type]] = {
        "coordinates": Coordinates,
        "coding": Coding,
        "demographics": Demographics,
        "social_services": SocialServices,
        "economic_condition": EconomicCondition,
        "agriculture": Agriculture,
        "water_sanitation": WaterSanitation,
        "livestock_poultry": LivestockPoultry,
        "food_security": FoodSecurity,
        "housing": Housing,
        "domestic_animals": DomesticAnimals,
        "community_empowerment": CommunityEmpowerment,
        "utilities": Utilities,
    }

    id: int | None = None
    name: ScalarValue | None = None
    municipality: ScalarValue | None = None
    barangay: ScalarValue | None = None
    province: ScalarValue | None = None
    population: ScalarValue | None = None
    households: ScalarValue | None = None
    need_score: ScalarValue | None = None
    coordinates: Coordinates | None = None
    coding: Coding | None = None
    demographics: Demographics | None = None
    social_services: SocialServices | None = None
    economic_condition: EconomicCondition | None = None
    agriculture: Agriculture | None = None
    water_sanitation: WaterSanitation | None = None
    livestock_poultry: LivestockPoultry | None = None
    food_security: FoodSecurity | None = None
    housing: Housing | None = None
    domestic_animals: DomesticAnimals | None = None
    community_empowerment: CommunityEmpowerment | None = None
    utilities: Utilities | None = None
    ethnicities: tuple[str, ...] | None = field(default=None, metadata={"kind": STRING_LIST})
    religions: tuple[str, ...] | None = field(default=None, metadata={"kind": STRING_LIST})

    def with_list_item(self, name: str, value: str) -> Sitio:
        if getattr(self, name) is None:
            return replace(self, **{name: (value,)})
        return super().with_list_item(name, value)

    def section(self, name: str) -> Any:
        """
        Return section *name*, creating its zero-value shape when absent.
        """

        current = getattr(self, name)
        if current is None:
            return self.SECTION_TYPES[name]()
        return current


def create_default_sitio() -> Sitio:
    """
    Build the zero-value record every import row is overlaid onto.
    """

    return Sitio(
        coordinates=Coordinates(),
        coding=Coding(),
        demographics=Demographics(),
        social_services=SocialServices(),
        economic_condition=EconomicCondition(),
        agriculture=Agriculture(),
        water_sanitation=WaterSanitation(),
        livestock_poultry=LivestockPoultry(),
        food_security=FoodSecurity(),
        housing=Housing(),
        domestic_animals=DomesticAnimals(),
        community_empowerment=CommunityEmpowerment(),
        utilities=Utilities(),
    )
