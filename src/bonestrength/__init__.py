"""
Bone Strength

A web application that asks a user to authorize access to their genetic data account
with OAuth 2.0, fetches the account's profiles, names and genotypes from the provider's
API, and shows a bone strength score derived from four genotype locations.

Key Components:
- app: Web application layer with request handlers and server configuration
- provider: OAuth authorization code exchange and the provider's data API
- model: Pydantic models for provider responses
- scoring: Genotype to bone strength derivation

Request Flow:
1. A browser without an access token sees a link to the provider's consent screen
2. The provider redirects back to /receive_code/ with an authorization code
3. The code is exchanged for an access token, which is kept in an encrypted cookie
4. The home page fetches the account data with the token and renders the scores
5. If the provider refuses the token, it is cleared and the consent flow restarts
"""
