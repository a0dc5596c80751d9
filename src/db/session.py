from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


def get_async_engine(db_url, pool_size: int = 5) -> AsyncEngine:
    """
    Creates the asynchronous SQLAlchemy engine shared by every request.

    The pool is bounded; each gateway call checks one connection out and
    returns it when its `async with` block exits.
    """
    options = {"pool_pre_ping": True, "echo": False}
    if not str(db_url).startswith("sqlite"):
        options.update(
            pool_size=pool_size,
            max_overflow=0,
            pool_recycle=1800, # 30 minutes
        )
    return create_async_engine(db_url, **options)
