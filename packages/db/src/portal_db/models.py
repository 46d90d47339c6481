# This project was developed with assistance from AI tools.
"""
M&A portal -- domain models

Users authenticate against the ``users`` table; companies live in
``societa``. Buyers own at most one company through ``users.societa_id``.
"""

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)

from .database import Base
from .enums import UserRole


class Societa(Base):
    """Company record listed on the portal."""

    __tablename__ = "societa"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(100), unique=True, nullable=False)
    fatturato = Column(Numeric(15, 2, asdecimal=False), nullable=False)
    ebitda = Column(Numeric(15, 2, asdecimal=False), nullable=False)
    regione = Column(String(50), nullable=False, index=True)
    codice_ateco = Column(String(10), nullable=False)
    settore = Column(String(100), nullable=False)
    descrizione = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Societa(id={self.id}, nome='{self.nome}')>"


class User(Base):
    """Portal account. Created out-of-band, read-only for the API."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    societa_id = Column(Integer, ForeignKey("societa.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
