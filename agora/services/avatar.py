import hashlib

from agora.config import get_settings

AVATAR_SIZE = 140


def get_avatar_url(email: str, size: int = AVATAR_SIZE) -> str:
    settings = get_settings()
    digest = hashlib.md5(email.strip().lower().encode()).hexdigest()
    return f"{settings.AVATAR_BASE_URL}/{digest}?s={size}&d=identicon"
