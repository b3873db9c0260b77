from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import psycopg

from vidhost.errors import UpstreamError


@dataclass(frozen=True)
class Database:
    """Handle to the Postgres database.

    Created once at startup from configuration and passed to each request
    through `app.state`. Holds no open connection between requests.
    """

    url: str

    @property
    def sqlalchemy_url(self) -> str:
        """The database URL formatted for SQLAlchemy (used by Alembic).

        Converts postgresql:// to postgresql+psycopg:// so psycopg3 is used
        instead of psycopg2.
        """
        if self.url.startswith("postgresql://"):
            return self.url.replace("postgresql://", "postgresql+psycopg://", 1)
        return self.url

    @contextmanager
    def connection(self) -> Iterator[psycopg.Connection]:
        """Get a database connection context manager.

        Explicitly closes the connection to ensure proper cleanup in serverless environments.

        Raises:
            UpstreamError: If the database cannot be reached.
        """
        try:
            conn = psycopg.connect(self.url)
        except psycopg.Error as e:
            raise UpstreamError(
                f"Database connection failed: exception_type={type(e).__name__}"
            ) from e
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def cursor(self) -> Iterator[psycopg.Cursor]:
        """Get a database cursor context manager.

        Commits the transaction on successful completion, rolls back on
        exception. Driver errors are re-raised as `UpstreamError`.
        """
        with self.connection() as conn:
            with conn.cursor() as cursor:
                try:
                    yield cursor
                    conn.commit()
                except psycopg.Error as e:
                    conn.rollback()
                    raise UpstreamError(
                        f"Database error: exception_type={type(e).__name__}, error={e}"
                    ) from e
                except Exception:
                    conn.rollback()
                    raise
