"""Account and profile records returned by the provider."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ProfileSummary(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    genotyped: bool = False


class UserRecord(BaseModel):
    """The authenticated account and the profiles it can access."""

    model_config = ConfigDict(extra="ignore")

    id: str
    profiles: List[ProfileSummary] = []


class NameRecord(BaseModel):
    """First and last name of one profile."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    profile_id: str = Field(alias="id")
    first_name: str = ""
    last_name: str = ""


class NamesResponse(BaseModel):
    """Names of the account holder and of every profile in the account."""

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    first_name: str = ""
    last_name: str = ""
    profiles: List[NameRecord] = []

