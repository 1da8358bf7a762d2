# OLEPatron, EntityName
from __future__ import annotations

import datetime

from sqlalchemy import Column, Date, ForeignKey, String
from sqlalchemy.orm import Mapped

from ole_ils.sqlalchemy.model.base import OLE_SCHEMA, Base


class OLEPatron(Base):
    """A patron record of the OLE deliver module (ole_ptrn_t)."""

    __tablename__ = "ole_ptrn_t"
    __table_args__ = {"schema": OLE_SCHEMA}

    # The patron's OLE ID. It is also the ID of the patron's Kuali
    # Identity Management entity.
    id: Mapped[str] = Column("OLE_PTRN_ID", String(40), primary_key=True)

    barcode: Mapped[str | None] = Column("BARCODE", String(40))
    borrower_type: Mapped[str | None] = Column("BORR_TYP", String(40))
    active: Mapped[str | None] = Column("ACTV_IND", String(1))
    general_block: Mapped[str | None] = Column("GENERAL_BLOCK", String(1))
    expiration_date: Mapped[datetime.date | None] = Column("EXPIRATION_DATE", Date)


class EntityName(Base):
    """A name of a Kuali Identity Management entity (krim_entity_nm_t).

    Patrons log in with their barcode and one of these columns, the
    family name by default.
    """

    __tablename__ = "krim_entity_nm_t"
    __table_args__ = {"schema": OLE_SCHEMA}

    id: Mapped[str] = Column("ENTITY_NM_ID", String(40), primary_key=True)
    entity_id: Mapped[str] = Column(
        "ENTITY_ID",
        String(40),
        ForeignKey(f"{OLE_SCHEMA}.ole_ptrn_t.OLE_PTRN_ID"),
        nullable=False,
    )
    name_type: Mapped[str | None] = Column("NM_TYP_CD", String(40))
    first_name: Mapped[str | None] = Column("FIRST_NM", String(40))
    middle_name: Mapped[str | None] = Column("MIDDLE_NM", String(40))
    last_name: Mapped[str | None] = Column("LAST_NM", String(80))
    suffix: Mapped[str | None] = Column("SUFFIX_NM", String(20))
    prefix: Mapped[str | None] = Column("PREFIX_NM", String(20))
    title: Mapped[str | None] = Column("TITLE_NM", String(20))
    default: Mapped[str | None] = Column("DFLT_IND", String(1))
    active: Mapped[str | None] = Column("ACTV_IND", String(1))
