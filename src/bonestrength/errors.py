"""
Provider Error Kinds

Every failure of a call to the genetic data provider is raised as one of the exceptions
below. Request handlers catch them and turn each kind into a user-visible response; none
of them is allowed to escape a handler.

- ProviderDeniedConsent: the user declined consent, the callback carries ``error``
- MalformedCallback: the callback carries neither ``code`` nor ``error``
- ProviderRejected: the token endpoint answered with a non-200 status
- TokenDecodeFailed: the token endpoint answered 200 with an unusable body
- TokenExpiredOrInvalid: a data request made with a stored token answered non-200
- UpstreamUnavailable: the provider could not be reached or returned an unusable body
"""

from typing import Optional


class BoneStrengthError(Exception):
    """Base class for all handled provider errors."""


class ProviderDeniedConsent(BoneStrengthError):
    def __init__(self, error: str, description: str = "") -> None:
        super().__init__(f"{error}: {description}")
        self.error = error
        self.description = description


class MalformedCallback(BoneStrengthError):
    def __init__(self) -> None:
        super().__init__("Callback is missing both code and error parameters")


class ProviderRejected(BoneStrengthError):
    def __init__(self, status: int) -> None:
        super().__init__(f"Token endpoint rejected the authorization code with status {status}")
        self.status = status


class TokenDecodeFailed(BoneStrengthError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Token endpoint response could not be decoded: {reason}")


class TokenExpiredOrInvalid(BoneStrengthError):
    def __init__(self, status: int, url: str) -> None:
        super().__init__(f"Provider refused the access token with status {status} for {url}")
        self.status = status
        self.url = url


class UpstreamUnavailable(BoneStrengthError):
    def __init__(self, url: str, reason: Optional[str] = None) -> None:
        message = f"Provider request to {url} failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url
