"""PostgreSQL persistence (psycopg 3, async)."""
