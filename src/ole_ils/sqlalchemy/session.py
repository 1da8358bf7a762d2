from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.pool import Pool

from ole_ils.sqlalchemy.model.base import OLE_SCHEMA, Base
from ole_ils.util.log import LoggerMixin

DEBUG = False


class SessionManager(LoggerMixin):
    @classmethod
    def engine(
        cls,
        url: str | URL,
        database: str,
        poolclass: type[Pool] | None = None,
    ) -> Engine:
        """An engine that reads the OLE tables from `database`."""
        cls.logger().info(
            "Connecting to OLE database %s",
            url.render_as_string(hide_password=True)
            if isinstance(url, URL)
            else database,
        )
        kwargs = {} if poolclass is None else {"poolclass": poolclass}
        engine = create_engine(
            url,
            echo=DEBUG,
            pool_pre_ping=True,
            **kwargs,
        )
        return engine.execution_options(schema_translate_map={OLE_SCHEMA: database})

    @classmethod
    def initialize_schema(cls, engine: Engine) -> None:
        """Create the OLE patron tables. Only used for local databases,
        the real ones belong to OLE."""
        Base.metadata.create_all(engine)
