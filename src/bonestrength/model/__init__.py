"""
Data Models

This package defines the data models exchanged with the genetic data provider and the
values derived from them. All models are Pydantic models; nothing here is persisted
outside the browser session.

Key Models:
- token.py: Token endpoint response for the authorization code exchange
- genotype.py: Genotype locations and per-profile genotype calls
- profile.py: Account, name records and the joined per-profile result
- health.py: Health monitoring gauge

The data models follow these relationships:
- UserRecord: The account, listing its profiles
- NameRecord: One profile's first and last name, joined to genotypes by profile id
- GenotypeRecord: One profile's calls for the fixed set of genotype locations
- BoneStrength: Scores derived from a GenotypeRecord, computed per request
"""
