"""
Bone Strength Scoring

Derives a bone strength score from a profile's genotype calls. Each subscore starts from
its maximum and loses one point per risk allele observed at the relevant locations:

    cortical_strength = 4 - T(rs9525638) - C(rs2707466)
    forearm_density   = 4 - G(rs2908004) - C(rs2707466)
    fracture_risk     = 6 - C(rs7776725) - G(rs2908004) - C(rs2707466)

The total is the sum of the three subscores, at most 14, and maps to a category:

    total < 5   weak
    total < 8   average
    total < 11  high
    otherwise   superhuman

Allele counting is a plain character tally. Genotype strings of unexpected length or
content never raise; characters other than the counted allele contribute nothing.
"""

from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, computed_field

from bonestrength.model.genotype import GenotypeRecord
from bonestrength.model.profile import NameRecord

MAX_CORTICAL_STRENGTH = 4
MAX_FOREARM_DENSITY = 4
MAX_FRACTURE_RISK = 6

CATEGORIES: Tuple[Tuple[int, str], ...] = (
    (5, "weak"),
    (8, "average"),
    (11, "high"),
)
"""Exclusive upper bounds of each category, checked in order."""

TOP_CATEGORY = "superhuman"


def count_occurrences(genotype: str, allele: str) -> int:
    return genotype.count(allele)


def category_for(total: int) -> str:
    for upper_bound, label in CATEGORIES:
        if total < upper_bound:
            return label
    return TOP_CATEGORY


class BoneStrength(BaseModel):
    """Bone strength subscores of one profile. The total and category are derived."""

    cortical_strength: int
    forearm_density: int
    fracture_risk: int

    @computed_field  # type: ignore[misc]
    @property
    def total(self) -> int:
        return self.cortical_strength + self.forearm_density + self.fracture_risk

    @computed_field  # type: ignore[misc]
    @property
    def category(self) -> str:
        return category_for(self.total)


class ProfileResult(BaseModel):
    """A profile's genotype joined with its name and scores, as rendered on the result page."""

    profile_id: str
    name: Optional[NameRecord] = None
    genotype: GenotypeRecord
    bone_strength: BoneStrength

    @property
    def display_name(self) -> str:
        if self.name is None:
            return ""
        return f"{self.name.first_name} {self.name.last_name}".strip()


def score(genotype: GenotypeRecord) -> BoneStrength:
    """Compute the bone strength of a single profile."""
    pleiotropic_c = count_occurrences(genotype.pleiotropic, "C")
    forearm_g = count_occurrences(genotype.forearm_bmd, "G")

    return BoneStrength(
        cortical_strength=MAX_CORTICAL_STRENGTH
        - count_occurrences(genotype.cortical_thickness, "T")
        - pleiotropic_c,
        forearm_density=MAX_FOREARM_DENSITY - forearm_g - pleiotropic_c,
        fracture_risk=MAX_FRACTURE_RISK
        - count_occurrences(genotype.fracture_risk, "C")
        - forearm_g
        - pleiotropic_c,
    )


def score_profiles(
    genotypes: Iterable[GenotypeRecord], names: Iterable[NameRecord]
) -> List[ProfileResult]:
    """
    Score every genotyped profile and join it with its name by profile id.

    Profiles without a matching name record are kept with no name. Names without a
    genotype record are ignored.
    """
    names_by_profile = {name.profile_id: name for name in names}
    return [
        ProfileResult(
            profile_id=genotype.profile_id,
            name=names_by_profile.get(genotype.profile_id),
            genotype=genotype,
            bone_strength=score(genotype),
        )
        for genotype in genotypes
    ]
