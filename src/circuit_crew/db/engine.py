"""Database engine setup and initialization."""

from pathlib import Path

import aiosqlite

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"
DB_FILENAME = "circuit_crew.db"


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DB_FILENAME


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # One table of JSON documents, grouped by owner and collection
        await db.execute("""
            CREATE TABLE IF NOT EXISTS documents (
                owner_id TEXT NOT NULL,
                collection TEXT NOT NULL,
                doc_id TEXT NOT NULL,
                data TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (owner_id, collection, doc_id)
            )
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_documents_collection
            ON documents(owner_id, collection)
        """)

        await db.commit()
