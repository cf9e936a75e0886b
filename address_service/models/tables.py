"""SQLAlchemy table definitions."""

from sqlalchemy import Column, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class AddressRow(Base):
    __tablename__ = "addresses"

    id = Column(String(255), primary_key=True)
    street = Column(String(255), nullable=False)
    city = Column(String(255), nullable=True)
    country = Column(String(255), nullable=False)
