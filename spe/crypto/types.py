"""Type definitions for client assertion headers and claims."""

from pydantic import BaseModel, ConfigDict

ASSERTION_ALGORITHM = "RS256"
ASSERTION_TYPE = "JWT"


class AssertionHeader(BaseModel):
    """JOSE header of a certificate-signed client assertion."""

    model_config = ConfigDict(frozen=True)

    alg: str = ASSERTION_ALGORITHM
    typ: str = ASSERTION_TYPE
    x5t: str


class AssertionClaims(BaseModel):
    """Self-issued claim set presented to the token endpoint."""

    model_config = ConfigDict(frozen=True)

    aud: str
    iss: str
    sub: str
    jti: str
    nbf: int
    exp: int
