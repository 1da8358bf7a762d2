from __future__ import annotations

from sqlalchemy import Column, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from ole_ils.api.ole.data import PatronInfo
from ole_ils.core.config import CannotLoadConfiguration
from ole_ils.service.logging.configuration import LogLevel
from ole_ils.sqlalchemy.model.patron import EntityName, OLEPatron
from ole_ils.util.log import LoggerMixin, log_elapsed_time


class OLEPatronStore(LoggerMixin):
    """Checks patron credentials against the OLE database.

    A patron logs in with their barcode and the value of one column of
    their entity name, compared without regard to case.
    """

    def __init__(self, engine: Engine, login_field: str):
        self.engine = engine
        self.login_column = self.column_for(login_field)

    @staticmethod
    def column_for(login_field: str) -> Column:
        """The krim_entity_nm_t column named `login_field`."""
        columns = EntityName.__table__.columns
        for column in columns:
            if column.name.lower() == login_field.lower():
                return column
        raise CannotLoadConfiguration(
            f"Unknown login field: {login_field}",
            debug_message=f"Known fields are {', '.join(c.name for c in columns)}.",
        )

    @log_elapsed_time(log_level=LogLevel.debug, message_prefix="Patron lookup")
    def authenticate(self, barcode: str, login: str) -> PatronInfo | None:
        """The patron with this barcode and login, or None."""
        query = (
            select(OLEPatron.id, EntityName.first_name, EntityName.last_name)
            .join(EntityName, EntityName.entity_id == OLEPatron.id)
            .where(
                func.lower(self.login_column) == login.lower(),
                func.lower(OLEPatron.barcode) == barcode.lower(),
            )
        )
        with Session(self.engine) as session:
            row = session.execute(query).first()

        # A row whose patron ID is empty is not a usable patron.
        if row is None or not row.id:
            self.log.info(f"No patron matches barcode {barcode}")
            return None

        return PatronInfo(
            id=row.id,
            firstname=row.first_name,
            lastname=row.last_name,
            cat_username=barcode,
            cat_password=login,
        )
