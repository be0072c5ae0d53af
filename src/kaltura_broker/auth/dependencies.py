"""FastAPI dependencies for broker authentication."""

import logging
import secrets
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from kaltura_broker.config import Settings, get_settings

logger = logging.getLogger(__name__)

SUPPORTED_API_MAJOR_VERSION = 2

# HTTP Basic authentication scheme
basic_scheme = HTTPBasic(auto_error=False)


async def require_broker_credentials(
    credentials: Annotated[HTTPBasicCredentials | None, Depends(basic_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> str:
    """Check the request carries the broker's basic-auth credentials.

    Args:
        credentials: HTTP Basic credentials from the Authorization header.
        settings: Application settings holding the expected credentials.

    Returns:
        The authenticated username.

    Raises:
        HTTPException: If credentials are missing or do not match.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    if not settings.broker_user or not settings.broker_pass:
        logger.error("Rejected broker request: BROKER_USER or BROKER_PASS is not configured")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Broker credentials are not configured",
            headers={"WWW-Authenticate": "Basic"},
        )

    user_ok = secrets.compare_digest(
        credentials.username.encode("utf-8"), settings.broker_user.encode("utf-8")
    )
    pass_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"), settings.broker_pass.encode("utf-8")
    )
    if not (user_ok and pass_ok):
        logger.warning("Rejected broker request with invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username


async def check_api_version(
    x_broker_api_version: Annotated[str | None, Header()] = None,
) -> None:
    """Reject requests declaring an unsupported broker API major version.

    Raises:
        HTTPException: 412 if the declared major version is not supported.
    """
    if x_broker_api_version is None:
        return
    major = x_broker_api_version.split(".", 1)[0].strip()
    if major != str(SUPPORTED_API_MAJOR_VERSION):
        raise HTTPException(
            status_code=status.HTTP_412_PRECONDITION_FAILED,
            detail=f"Unsupported broker API version: {x_broker_api_version}",
        )


BrokerUser = Annotated[str, Depends(require_broker_credentials)]
