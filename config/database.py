"""
Database configuration for the Task service.

The service stores everything in a single SQLite file. Its location comes
from TASKS_DB_PATH and falls back to db/todo.db under the project root.
"""
import os
from pathlib import Path


def get_database_config(base_dir: Path) -> dict:
    """
    Returns the Django DATABASES['default'] entry.

    The parent directory of the database file is created if missing so the
    first migrate can create the tasks table.
    """
    db_path = Path(os.getenv('TASKS_DB_PATH') or base_dir / 'db' / 'todo.db')
    db_path.parent.mkdir(parents=True, exist_ok=True)

    return {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': db_path,
        'OPTIONS': {
            # Seconds to wait on a locked database before raising
            'timeout': int(os.getenv('TASKS_DB_TIMEOUT', '20')),
        },
    }
