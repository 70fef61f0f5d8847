"""Operator authentication for the control surface.

One policy for every route under the home page: when auth is enabled, HTTP
Basic credentials must match the configured operator account.
"""

import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from queueboard_api.config import Settings
from queueboard_api.dependencies import get_settings

_basic = HTTPBasic(auto_error=False, realm="queueboard")


def require_operator(
    credentials: HTTPBasicCredentials | None = Depends(_basic),
    app_settings: Settings = Depends(get_settings),
) -> None:
    """Reject the request unless auth is disabled or the credentials match."""
    if not app_settings.auth_enabled:
        return

    if credentials is not None:
        user_ok = secrets.compare_digest(
            credentials.username.encode("utf-8"), app_settings.auth_username.encode("utf-8")
        )
        password_ok = secrets.compare_digest(
            credentials.password.encode("utf-8"), app_settings.auth_password.encode("utf-8")
        )
        if user_ok and password_ok:
            return

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or missing credentials",
        headers={"WWW-Authenticate": 'Basic realm="queueboard"'},
    )
