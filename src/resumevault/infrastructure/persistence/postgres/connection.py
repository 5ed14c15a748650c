"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool

POOL_NAME = "resumevault"


def create_pool(
    database_url: str,
    *,
    min_size: int = 2,
    max_size: int = 10,
    timeout: float = 10.0,
) -> AsyncConnectionPool:
    """Create the pool shared by every Unit of Work, unopened.

    PoolLifespanMiddleware opens it on ASGI startup. Connections are checked
    before being handed out. Waiting longer than ``timeout`` for a free
    connection raises PoolTimeout.
    """
    return AsyncConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        name=POOL_NAME,
        check=AsyncConnectionPool.check_connection,
        open=False,
    )
