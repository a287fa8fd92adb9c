import secrets
import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from gallery.settings import settings

log = logging.getLogger(__name__)

security = HTTPBasic()

def require_basic_auth(credentials: HTTPBasicCredentials = Depends(security)) -> str:
    """Lets the request through only with the configured username and password."""
    username_ok = secrets.compare_digest(
        credentials.username.encode("utf8"),
        settings.basic_auth_username.encode("utf8"),
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode("utf8"),
        settings.basic_auth_password.get_secret_value().encode("utf8"),
    )
    if not (username_ok and password_ok):
        log.info("Rejected credentials for user %r", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
