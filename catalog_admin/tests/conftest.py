"""
Test fixtures - in-memory SQLite database + HTTP clients bound to the app
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from catalog_admin.client.api import CatalogClient
from catalog_admin.database import Base, get_db
from catalog_admin.main import app
from catalog_admin.models.category import Category
from catalog_admin.models.product import Product
from catalog_admin.utils.db_compat import enable_sqlite_foreign_keys


@pytest_asyncio.fixture()
async def db_session():
    """Create a fresh in-memory SQLite database for each test"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture()
async def seed_data(db_session):
    """Insert baseline test data: 2 categories"""
    tech = Category(name="Tech")
    books = Category(name="Books")

    db_session.add_all([tech, books])
    await db_session.commit()
    await db_session.refresh(tech)
    await db_session.refresh(books)

    return {"tech": tech, "books": books}


@pytest_asyncio.fixture()
async def make_product(db_session, seed_data):
    """Factory: insert a product straight into the database"""

    async def _make(name="Widget", price=10, category=None, tags=None, **extra):
        product = Product(
            name=name,
            price=price,
            category_id=(category or seed_data["tech"]).id,
            tags=tags if tags is not None else ["promo"],
            **extra,
        )
        db_session.add(product)
        await db_session.commit()
        await db_session.refresh(product)
        return product

    return _make


@pytest_asyncio.fixture()
async def client(db_session, seed_data):
    """httpx AsyncClient bound to the FastAPI app"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def catalog_client(client):
    """CatalogClient talking to the app in-process"""
    catalog = CatalogClient(base_url="http://test/api", transport=ASGITransport(app=app))
    yield catalog
    await catalog.aclose()
