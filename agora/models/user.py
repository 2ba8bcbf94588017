from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from agora.database import Base

USER_STATUS_VALID = "valid"
USER_STATUS_INVALID = "invalid"
USER_STATUS_NOT_VERIFIED = "unverified"

ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"

# Reserved identity used for anonymous comments
DEFAULT_COMMENTER_NAME = "Default Commenter"
DEFAULT_COMMENTER_EMAIL = "default_commenter@agora.local"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(256), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), default="")
    url: Mapped[str] = mapped_column(String(512), default="")
    intro: Mapped[str] = mapped_column(Text, default="")
    city: Mapped[str] = mapped_column(String(128), default="")
    role: Mapped[str] = mapped_column(String(32), default=ROLE_MEMBER)  # member, admin
    status: Mapped[str] = mapped_column(
        String(32), default=USER_STATUS_VALID
    )  # valid, invalid, unverified
    # Epoch millis
    update_time: Mapped[int] = mapped_column(BigInteger, default=0)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "url": self.url,
            "intro": self.intro,
            "role": self.role,
            "status": self.status,
            "update_time": self.update_time,
        }
