"""Database engine setup and initialization."""

from pathlib import Path

import aiosqlite

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "bodylog.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Default body measurements, keyed by the identity provider's user id
        await db.execute("""
            CREATE TABLE IF NOT EXISTS users_profile (
                id TEXT PRIMARY KEY,
                weight REAL,
                height REAL,
                weight_unit TEXT NOT NULL DEFAULT 'KG',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # One weight per user per calendar date
        await db.execute("""
            CREATE TABLE IF NOT EXISTS weight_logs (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                date_logged TEXT NOT NULL,
                weight REAL NOT NULL,
                weight_unit TEXT NOT NULL DEFAULT 'KG',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (user_id, date_logged)
            )
        """)

        # Calculator results, append-only
        await db.execute("""
            CREATE TABLE IF NOT EXISTS calculator_sessions (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                category TEXT NOT NULL,
                date TEXT NOT NULL,
                inputs TEXT NOT NULL DEFAULT '{}',
                result REAL NOT NULL,
                result_unit TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_weight_logs_user
            ON weight_logs(user_id, date_logged DESC)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_calculator_sessions_user_category
            ON calculator_sessions(user_id, category, date)
        """)

        await db.commit()
