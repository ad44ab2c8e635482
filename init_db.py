"""
Create every table straight from the models.

Handy for local SQLite databases; use ``alembic upgrade head`` elsewhere.
"""
from sqlalchemy import inspect
from app.database import Base, engine
import app.models  # noqa: F401  registers the tables on Base.metadata


def init_db():
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)

    tables = inspect(engine).get_table_names()
    print(f"Tables: {', '.join(sorted(tables))}")


if __name__ == "__main__":
    init_db()
