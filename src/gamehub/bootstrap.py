from sqlalchemy.orm import sessionmaker

from gamehub.adapters import database
from gamehub.config import InvalidConfig, get_db_uri


def bootstrap(
    start_orm: bool = True,
    session_factory: sessionmaker | None = None,
    database_url: str = "",
) -> sessionmaker:
    """Acquire the process-wide database handle.

    Called once at startup. Without a database URL, or if the database cannot
    be reached, this raises and the process should not start.
    """
    if start_orm:
        database.start_mappers()

    if session_factory is None:
        database_url = database_url or get_db_uri()
        if not database_url:
            raise InvalidConfig("DATABASE_URL must be set")
        engine = database.create_db_engine(database_url)
        database.check_connection(engine)
        session_factory = database.create_session_factory(engine=engine)

    return session_factory
