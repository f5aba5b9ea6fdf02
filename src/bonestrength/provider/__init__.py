"""
Genetic Data Provider Integration

This package talks to the genetic data provider on behalf of the signed-in user.

Key Components:
- oauth.py: Consent screen parameters and the authorization code exchange
- api.py: Bearer-authenticated data requests for the account, names and genotypes

Every function here raises one of the exceptions in bonestrength.errors on failure;
the request handlers decide how each kind is shown to the user.
"""
