# This project was developed with assistance from AI tools.
"""Demo data seeding service.

Users are never created through the HTTP API; this seeder is the
out-of-band path for local environments. It inserts a handful of companies,
one admin and one buyer per owned company, with bcrypt-hashed passwords.

Simulated for demonstration purposes -- not real financial data.
"""

import logging

from portal_db import Societa, User
from portal_db.enums import UserRole
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.security import hash_password

logger = logging.getLogger(__name__)

DEMO_COMPANIES: list[dict] = [
    {
        "nome": "Alfa Software S.r.l.",
        "fatturato": 12_500_000.0,
        "ebitda": 2_100_000.0,
        "regione": "Lombardia",
        "codice_ateco": "62.01.00",
        "settore": "Software e consulenza informatica",
        "descrizione": "Sviluppo di gestionali per PMI manifatturiere.",
    },
    {
        "nome": "Beta Meccanica S.p.A.",
        "fatturato": 48_000_000.0,
        "ebitda": 6_400_000.0,
        "regione": "Emilia-Romagna",
        "codice_ateco": "28.41.00",
        "settore": "Macchine utensili",
        "descrizione": None,
    },
    {
        "nome": "Gamma Alimentare S.r.l.",
        "fatturato": 7_300_000.0,
        "ebitda": 650_000.0,
        "regione": "Campania",
        "codice_ateco": "10.73.00",
        "settore": "Produzione di paste alimentari",
        "descrizione": "Pastificio artigianale con distribuzione nella GDO.",
    },
]

# (username, password, role, index into DEMO_COMPANIES or None)
DEMO_USERS: list[tuple[str, str, UserRole, int | None]] = [
    ("admin", "admin123", UserRole.ADMIN, None),
    ("buyer_alfa", "buyer123", UserRole.BUYER, 0),
    ("buyer_beta", "buyer123", UserRole.BUYER, 1),
    ("buyer_gamma", "buyer123", UserRole.BUYER, 2),
]


async def get_seed_status(session: AsyncSession) -> dict:
    """Report how many demo users and demo companies are present."""
    usernames = [u[0] for u in DEMO_USERS]
    names = [c["nome"] for c in DEMO_COMPANIES]
    users = await session.execute(
        select(func.count()).select_from(User).where(User.username.in_(usernames))
    )
    companies = await session.execute(
        select(func.count()).select_from(Societa).where(Societa.nome.in_(names))
    )
    user_count = users.scalar() or 0
    company_count = companies.scalar() or 0
    return {
        "seeded": user_count == len(DEMO_USERS) and company_count == len(DEMO_COMPANIES),
        "users": user_count,
        "companies": company_count,
    }


async def _clear_demo_data(session: AsyncSession) -> None:
    usernames = [u[0] for u in DEMO_USERS]
    names = [c["nome"] for c in DEMO_COMPANIES]
    await session.execute(delete(User).where(User.username.in_(usernames)))
    await session.execute(delete(Societa).where(Societa.nome.in_(names)))
    await session.flush()


async def seed_demo_data(session: AsyncSession, force: bool = False) -> dict:
    """Insert demo companies and users. Pass force=True to clear and re-seed."""
    status = await get_seed_status(session)
    if status["seeded"] and not force:
        return {"status": "already_seeded", **status}

    # leftovers from a partial seed would collide on the unique names
    if force or status["users"] or status["companies"]:
        await _clear_demo_data(session)

    companies = [Societa(**data) for data in DEMO_COMPANIES]
    session.add_all(companies)
    await session.flush()

    for username, password, role, company_index in DEMO_USERS:
        owned = companies[company_index].id if company_index is not None else None
        session.add(
            User(
                username=username,
                password=hash_password(password),
                role=role,
                societa_id=owned,
            )
        )
    await session.commit()

    logger.info("Seeded %d companies and %d users", len(companies), len(DEMO_USERS))
    return {
        "status": "seeded",
        "companies": len(companies),
        "users": [u[0] for u in DEMO_USERS],
    }
