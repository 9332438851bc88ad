"""
sitio_tracker/mappers/field_catalog.py

Static catalog of spreadsheet columns understood by the sitio importer, and
the closed table of canonical field paths they resolve to.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from sitio_tracker.domain.sitio import SCALAR, Sitio


@dataclass(frozen=True)
class FieldDefinition:
    """
    One expected source column.
    """

    field: str
    label: str
    csv_header: str
    required: bool = False


# Order matters: the first definition whose label matches wins fuzzy lookups.
SITIO_FIELD_DEFINITIONS: tuple[FieldDefinition, ...] = (
    # Core identification
    FieldDefinition("municipality", "Municipality", "CODING - MUNICIPALITY", required=True),
    FieldDefinition("barangay", "Barangay", "BARANGAY", required=True),
    FieldDefinition("name", "Sitio/Purok", "SITIO", required=True),
    FieldDefinition("coding.number", "Record Number", "NO."),
    FieldDefinition("coding.code", "Coding", "CODING"),
    FieldDefinition("province", "Province", "PROVINCE"),
    FieldDefinition("households", "Number of Households", "No. of Households"),
    FieldDefinition("coordinates.lat", "Latitude", "LATITUDE"),
    FieldDefinition("coordinates.lng", "Longitude", "LONGITUDE"),
    FieldDefinition("need_score", "Need Score", "NEED SCORE"),
    # Demographics
    FieldDefinition("demographics.male", "Male Population", "POPULATION - Male"),
    FieldDefinition("demographics.female", "Female Population", "POPULATION - Female"),
    FieldDefinition("population", "Total Population", "POPULATION - TOTAL"),
    FieldDefinition("demographics.age_0_14", "Age 0-14", "AGE RANGE - 0-14 years old"),
    FieldDefinition("demographics.age_15_64", "Age 15-64", "AGE RANGE - 15-64 years old"),
    FieldDefinition("demographics.age_65_above", "Age 65+", "AGE RANGE - 65 years old and above"),
    # Social services
    FieldDefinition("social_services.registered_voters", "Registered Voters", "No. of Registered Voters"),
    FieldDefinition(
        "social_services.philhealth_beneficiaries",
        "Philhealth Members",
        "No. of Philhealth Members/Beneficiaries",
    ),
    FieldDefinition("social_services.fourps_beneficiaries", "4Ps Beneficiaries", "No. of 4P's Beneficiaries"),
    # Economic condition
    FieldDefinition("economic_condition.employments", "Top Employment 1", "Top 3 Employment - 1st"),
    FieldDefinition("economic_condition.employments", "Top Employment 2", "Top 3 Employment - 2nd"),
    FieldDefinition("economic_condition.employments", "Top Employment 3", "Top 3 Employment - 3rd"),
    FieldDefinition("economic_condition.income_brackets", "Top Income Bracket 1", "Top 3 Income Bracket - 1st"),
    FieldDefinition("economic_condition.income_brackets", "Top Income Bracket 2", "Top 3 Income Bracket - 2nd"),
    FieldDefinition("economic_condition.income_brackets", "Top Income Bracket 3", "Top 3 Income Bracket - 3rd"),
    # Agriculture
    FieldDefinition("agriculture.farmers_count", "Number of Farmers", "No. of Farmers"),
    FieldDefinition("agriculture.farmer_associations", "Farmer Associations", "No. of Farmer Association"),
    FieldDefinition("agriculture.farm_area_hectares", "Farm Area (ha)", "No. of Farm Area (has.)"),
    FieldDefinition("agriculture.top_crops", "Top Crop 1", "Top 5 Crops/Commodities Planted/Produced - 1st"),
    FieldDefinition("agriculture.top_crops", "Top Crop 2", "Top 5 Crops/Commodities Planted/Produced - 2nd"),
    FieldDefinition("agriculture.top_crops", "Top Crop 3", "Top 5 Crops/Commodities Planted/Produced - 3rd"),
    FieldDefinition("agriculture.top_crops", "Top Crop 4", "Top 5 Crops/Commodities Planted/Produced - 4th"),
    FieldDefinition("agriculture.top_crops", "Top Crop 5", "Top 5 Crops/Commodities Planted/Produced - 5th"),
    # Water and sanitation
    FieldDefinition("water_sanitation.water_systems_count", "Water Systems", "No. of Water Systems"),
    FieldDefinition(
        "water_sanitation.households_without_toilet",
        "HH Without Toilet",
        "No. of HH without Toilet Facility",
    ),
    FieldDefinition("water_sanitation.toilet_facility_types", "Toilet Facility Type", "Type of Toilet Facility"),
    FieldDefinition("water_sanitation.waste_segregation_practice", "Waste Segregation", "Waste Segregation"),
    # Livestock and poultry
    FieldDefinition("livestock_poultry.pigs", "Pigs", "Pigs"),
    FieldDefinition("livestock_poultry.cows", "Cows", "Cows"),
    FieldDefinition("livestock_poultry.carabaos", "Carabaos", "Carabao"),
    FieldDefinition("livestock_poultry.horses", "Horses", "Horse"),
    FieldDefinition("livestock_poultry.goats", "Goats", "Goat"),
    FieldDefinition("livestock_poultry.chickens", "Chickens", "Chicken"),
    FieldDefinition("livestock_poultry.ducks", "Ducks", "Duck"),
    FieldDefinition("livestock_poultry.others", "Other Livestock/Poultry", "Others (Livestock/Poultry)"),
    # Food security
    FieldDefinition(
        "food_security.households_with_backyard_garden",
        "HH with Backyard Garden",
        "No. of HH with Backyard Garden",
    ),
    FieldDefinition(
        "food_security.common_garden_commodities",
        "Garden Commodity 1",
        "Top 3 Common Garden Commodities - 1st",
    ),
    FieldDefinition(
        "food_security.common_garden_commodities",
        "Garden Commodity 2",
        "Top 3 Common Garden Commodities - 2nd",
    ),
    FieldDefinition(
        "food_security.common_garden_commodities",
        "Garden Commodity 3",
        "Top 3 Common Garden Commodities - 3rd",
    ),
    # Housing
    FieldDefinition("housing.quality_types", "Housing Quality", "Housing - Quality of Housing"),
    FieldDefinition("housing.ownership_types", "Housing Ownership", "Housing - Ownership"),
    # Domestic animals
    FieldDefinition("domestic_animals.dogs", "Dogs", "Dogs"),
    FieldDefinition("domestic_animals.cats", "Cats", "Cats"),
    FieldDefinition("domestic_animals.dogs_vaccinated", "Dogs Vaccinated", "No. of Vaccinated (Dogs)"),
    FieldDefinition("domestic_animals.cats_vaccinated", "Cats Vaccinated", "No. of Vaccinated (Cats)"),
    # Community empowerment
    FieldDefinition(
        "community_empowerment.sectoral_organizations",
        "Sectoral Organizations",
        "No. of Sectoral Organization",
    ),
    FieldDefinition(
        "community_empowerment.info_dissemination_methods",
        "Info Dissemination",
        "Information Dissemination",
    ),
    FieldDefinition("community_empowerment.transportation_methods", "Transportation", "Mode of Transportation"),
    # Utilities
    FieldDefinition(
        "utilities.households_with_electricity",
        "HH with Electricity",
        "No. of HH with access to Electricity",
    ),
    FieldDefinition(
        "utilities.alternative_electricity_sources",
        "Alternative Power",
        "Alternative Source of Electricity",
    ),
    # Culture
    FieldDefinition("ethnicities", "Ethnicity", "Ethnicity"),
    FieldDefinition("religions", "Religion", "Religion"),
)

REQUIRED_FIELDS: tuple[str, ...] = tuple(
    definition.field for definition in SITIO_FIELD_DEFINITIONS if definition.required
)


def get_field_definition(path: str) -> FieldDefinition | None:
    """
    Return the first catalog definition for canonical *path*.
    """

    for definition in SITIO_FIELD_DEFINITIONS:
        if definition.field == path:
            return definition
    return None


# ---------------------------------------------------------------------------
# Canonical path table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldSlot:
    """
    Where a canonical path lives inside :class:`Sitio` and how values land there.
    """

    path: str
    section: str | None
    attribute: str
    kind: str


def _build_field_slots() -> dict[str, FieldSlot]:
    slots: dict[str, FieldSlot] = {}
    for record_field in fields(Sitio):
        if record_field.name == "id":
            continue
        section_type = Sitio.SECTION_TYPES.get(record_field.name)
        if section_type is None:
            slots[record_field.name] = FieldSlot(
                path=record_field.name,
                section=None,
                attribute=record_field.name,
                kind=record_field.metadata.get("kind", SCALAR),
            )
            continue
        for section_field in fields(section_type):
            path = f"{record_field.name}.{section_field.name}"
            slots[path] = FieldSlot(
                path=path,
                section=record_field.name,
                attribute=section_field.name,
                kind=section_field.metadata.get("kind", SCALAR),
            )
    return slots


FIELD_SLOTS: dict[str, FieldSlot] = _build_field_slots()
