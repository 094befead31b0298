# File: app/models/user.py
from sqlalchemy import Column, String, Boolean, Enum, DateTime
from app.models.base import BaseModel
import enum

class UserRole(enum.Enum):
    ORGANIZER = "organizer"
    PARTICIPANT = "participant"

class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(Enum(UserRole, values_callable=lambda obj: [e.value for e in obj]), nullable=False, default=UserRole.PARTICIPANT)
    is_active = Column(Boolean, default=True)
    last_login = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_organizer(self) -> bool:
        return self.role == UserRole.ORGANIZER
