"""Genotype locations and per-profile genotype calls.

Four SNPs are requested from the provider. Each genotype is a string of allele calls,
normally two characters such as ``"AG"``; no-calls and unexpected values are kept as-is.
"""

from typing import Final, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

CORTICAL_THICKNESS_SNP: Final = "rs9525638"
"""Cortical thickness association marker."""

FOREARM_BMD_SNP: Final = "rs2908004"
"""Forearm bone mineral density marker, also associated with fracture risk."""

PLEIOTROPIC_SNP: Final = "rs2707466"
"""Marker associated with cortical thickness, forearm density and fracture risk."""

FRACTURE_RISK_SNP: Final = "rs7776725"
"""Forearm fracture risk marker."""

GENOTYPE_LOCATIONS: Final[Tuple[str, ...]] = (
    CORTICAL_THICKNESS_SNP,
    FOREARM_BMD_SNP,
    PLEIOTROPIC_SNP,
    FRACTURE_RISK_SNP,
)


class GenotypeRecord(BaseModel):
    """Genotype calls of one profile for the scored locations.

    Locations missing from the provider response are treated as empty genotypes.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    profile_id: str = Field(alias="id")
    cortical_thickness: str = Field(default="", alias=CORTICAL_THICKNESS_SNP)
    forearm_bmd: str = Field(default="", alias=FOREARM_BMD_SNP)
    pleiotropic: str = Field(default="", alias=PLEIOTROPIC_SNP)
    fracture_risk: str = Field(default="", alias=FRACTURE_RISK_SNP)

    @field_validator(
        "cortical_thickness", "forearm_bmd", "pleiotropic", "fracture_risk", mode="before"
    )
    @classmethod
    def coerce_genotype(cls, v: Optional[object]) -> str:
        if v is None:
            return ""
        return str(v)
