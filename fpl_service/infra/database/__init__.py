"""Database access via the psycopg 3 native connection pool."""

from fpl_service.infra.database.psycopg_pool import (
    QueryExecutor,
    close_pool,
    configure_connection,
    get_db_pool,
    get_query_executor,
    init_pool,
)

__all__ = [
    "QueryExecutor",
    "close_pool",
    "configure_connection",
    "get_db_pool",
    "get_query_executor",
    "init_pool",
]
