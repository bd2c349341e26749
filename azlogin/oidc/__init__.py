"""GitHub Actions OIDC token retrieval.

The runner exposes an ID-token endpoint to jobs granted the
``id-token: write`` permission through two environment variables:

* ``ACTIONS_ID_TOKEN_REQUEST_URL``: endpoint, already carrying a query string
* ``ACTIONS_ID_TOKEN_REQUEST_TOKEN``: bearer token authorising the request

The returned JWT is handed to ``az login --federated-token`` unchanged.
Its claims are decoded only to log where the token came from; the
signature is not checked here (Microsoft Entra ID does that).
"""

from __future__ import annotations

import base64
import json
import logging
import os
from urllib.parse import quote

import requests

from azlogin.errors import TokenRetrievalFailure

logger = logging.getLogger(__name__)

DEFAULT_AUDIENCE = "api://AzureADTokenExchange"

_REQUEST_URL_VAR = "ACTIONS_ID_TOKEN_REQUEST_URL"
_REQUEST_TOKEN_VAR = "ACTIONS_ID_TOKEN_REQUEST_TOKEN"

_DEFAULT_TIMEOUT = 30

_PERMISSION_HINT = (
    "Please make sure to give write permissions to id-token in the workflow."
)


def fetch_id_token(audience: str = DEFAULT_AUDIENCE, timeout: int = _DEFAULT_TIMEOUT) -> str:
    """Request an OIDC ID token for *audience* from the Actions runtime.

    Raises:
        TokenRetrievalFailure: if the runtime variables are missing, the
            request fails, or the response carries no token.
    """
    request_url = os.environ.get(_REQUEST_URL_VAR)
    request_token = os.environ.get(_REQUEST_TOKEN_VAR)
    if not request_url or not request_token:
        raise TokenRetrievalFailure(
            f"Unable to get {_REQUEST_URL_VAR} or {_REQUEST_TOKEN_VAR} env variable. "
            + _PERMISSION_HINT
        )

    if audience:
        request_url = f"{request_url}&audience={quote(audience, safe='')}"

    logger.debug("Requesting federated token for audience %s", audience)
    try:
        resp = requests.get(
            request_url,
            headers={
                "Authorization": f"bearer {request_token}",
                "Accept": "application/json; api-version=2.0",
            },
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise TokenRetrievalFailure(
            f"Failed to fetch federated token from GitHub: {exc}. {_PERMISSION_HINT}"
        ) from exc

    if resp.status_code != 200:
        raise TokenRetrievalFailure(
            f"Failed to fetch federated token from GitHub (HTTP {resp.status_code}). {_PERMISSION_HINT}"
        )

    try:
        token = resp.json().get("value")
    except ValueError:
        token = None
    if not token:
        raise TokenRetrievalFailure(
            f"Failed to fetch federated token from GitHub: response had no token value. {_PERMISSION_HINT}"
        )
    return token


def decode_claims(token: str) -> dict:
    """Decode the payload segment of a JWT without verifying it.

    Returns an empty dict when the token is not a decodable JWT.
    """
    parts = token.split(".")
    if len(parts) < 2:
        return {}
    payload = parts[1]
    payload += "=" * (-len(payload) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(payload.encode("ascii")))
    except (ValueError, UnicodeError):
        return {}
    return claims if isinstance(claims, dict) else {}


def log_token_claims(token: str) -> None:
    """Log the issuer, subject and audience a federated token was minted for."""
    claims = decode_claims(token)
    if not claims:
        logger.debug("Federated token payload could not be decoded; skipping claim log.")
        return
    logger.info(
        "Federated token details:\n issuer - %s\n subject claim - %s\n audience - %s",
        claims.get("iss", ""),
        claims.get("sub", ""),
        claims.get("aud", ""),
    )
