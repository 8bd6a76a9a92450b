from sqlalchemy import Column, String
from app.models.base import Base, TimestampMixin
from app.core.enums import UserRole


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    username = Column(String(64), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    first_name = Column(String(255))
    last_name = Column(String(255))
    profile_image_url = Column(String(500))
    role = Column(String(20), nullable=False, default=UserRole.USER.value)
