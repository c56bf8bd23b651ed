"""
Database compatibility helpers for SQLite and PostgreSQL.
"""
import re

from sqlalchemy import and_, event, false, func, literal_column

_WORD_RE = re.compile(r"\w+")
_CONFIG_RE = re.compile(r"^[a-z_]+$")

# Largest value an INTEGER / BIGINT column or bound parameter can hold
MAX_INTEGER = 2**63 - 1


def enable_sqlite_foreign_keys(engine) -> None:
    """Switch on foreign key enforcement for every new SQLite connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def in_integer_range(value: int) -> bool:
    return -MAX_INTEGER - 1 <= value <= MAX_INTEGER


def search_tokens(term: str) -> list[str]:
    """Split a search string into words, dropping punctuation."""
    return _WORD_RE.findall(term.lower())


def regconfig(config: str):
    """Text search configuration as an inline SQL literal (e.g. 'simple'::regconfig)."""
    if not _CONFIG_RE.match(config):
        raise ValueError(f"Invalid text search configuration: {config!r}")
    return literal_column(f"'{config}'::regconfig")


def text_search_vector(column, config: str = "simple"):
    """to_tsvector over a column; matches the expression of the GIN index."""
    return func.to_tsvector(regconfig(config), column)


def full_text_match(column, term: str, dialect: str, config: str = "simple"):
    """Filter: column matches every word of the search term."""
    if dialect == "postgresql":
        query = func.plainto_tsquery(regconfig(config), term)
        return text_search_vector(column, config).op("@@")(query)

    tokens = search_tokens(term)
    if not tokens:
        return false()
    return and_(*[func.lower(column).contains(t, autoescape=True) for t in tokens])


def full_text_rank(column, term: str, dialect: str, config: str = "simple"):
    """Relevance of the column for the search term, or None where the engine has no ranking."""
    if dialect != "postgresql":
        return None
    query = func.plainto_tsquery(regconfig(config), term)
    return func.ts_rank(text_search_vector(column, config), query)
