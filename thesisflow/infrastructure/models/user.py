"""SQLAlchemy model for the user directory table."""

from sqlalchemy import Column, Integer, String

from thesisflow.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a system user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    role = Column(String(20), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="active")


__all__ = ["UserModel"]
