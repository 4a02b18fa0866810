# init_db.py

from my_todo.db.session import Base, create_session_factory
from my_todo.config import settings
import my_todo.db.models  # noqa: F401  registers tasks, labels, task_labels


def init():
    if not settings.DATABASE_URL:
        raise SystemExit("DATABASE_URL is not set")

    print("Connecting to database...")
    session_factory = create_session_factory(settings.DATABASE_URL)

    print("Creating tables (if not exist)...")
    Base.metadata.create_all(bind=session_factory.kw["bind"])

    print("Done.")


if __name__ == "__main__":
    init()
