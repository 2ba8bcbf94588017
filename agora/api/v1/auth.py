import secrets

from fastapi import HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from agora.config import get_settings

bearer_scheme = HTTPBearer()


def require_api_token(
    credentials: HTTPAuthorizationCredentials = Security(bearer_scheme),
) -> str:
    """Bearer token check for the JSON API; the API is closed while API_TOKEN is unset."""
    settings = get_settings()
    if not settings.API_TOKEN:
        raise HTTPException(
            status_code=503,
            detail="Article API disabled. Set API_TOKEN in .env to enable it.",
        )
    if not secrets.compare_digest(credentials.credentials, settings.API_TOKEN):
        raise HTTPException(status_code=401, detail="Invalid API token")
    return credentials.credentials
