from sqlmodel import Session, create_engine
from core.config import settings


def build_engine(database_url: str, echo: bool = False):
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,
        connect_args={
            "connect_timeout": 10,
            "options": "-c timezone=utc"
        }
    )


engine = build_engine(settings.database_url, echo=settings.debug)


def session_factory() -> Session:
    """Open a standalone session, for work that runs outside a request."""
    return Session(engine)


def get_session():

    with Session(engine) as session:
        yield session
