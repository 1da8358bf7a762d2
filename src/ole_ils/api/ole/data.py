"""Flat records returned by the OLE driver.

Field names are Python names. The key each field is published under in
the front end's records is given by `record_key` in the field metadata,
when it differs, and `as_record()` renders the published mapping.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from ole_ils.api.ole.constants import DEFAULT_HOLD_TYPE, RENEWABLE_MESSAGE


def record_key(key: str) -> dict[str, str]:
    return {"record_key": key}


class RecordMixin:
    def as_record(self) -> dict[str, Any]:
        """Render this dataclass under the keys the front end expects."""
        record: dict[str, Any] = {}
        for field in dataclasses.fields(self):  # type: ignore[arg-type]
            value = getattr(self, field.name)
            if isinstance(value, RecordMixin):
                value = value.as_record()
            elif isinstance(value, dict):
                value = {
                    k: v.as_record() if isinstance(v, RecordMixin) else v
                    for k, v in value.items()
                }
            record[field.metadata.get("record_key", field.name)] = value
        return record


@dataclasses.dataclass(kw_only=True)
class PatronInfo(RecordMixin):
    """A patron who has logged in against the patron store.

    `cat_username` and `cat_password` are the credentials the patron
    logged in with, kept so the front end can log in again later.
    """

    id: str
    firstname: str | None = None
    lastname: str | None = None
    cat_username: str | None = None
    cat_password: str | None = None
    email: str | None = None
    major: str | None = None
    college: str | None = None


@dataclasses.dataclass(kw_only=True)
class PatronProfile(PatronInfo):
    """A patron, completed by the circulation service's lookupUser call."""

    email: str | None = ""
    address1: str = ""
    address2: str | None = None
    zip: str = ""
    phone: str = ""
    group: str = ""

    @classmethod
    def from_patron(cls, patron: PatronInfo, **changes: Any) -> PatronProfile:
        values = {
            field.name: getattr(patron, field.name)
            for field in dataclasses.fields(PatronInfo)
        }
        # The profile starts blank, whatever the login returned.
        values["email"] = ""
        values.update(changes)
        return cls(**values)


@dataclasses.dataclass(kw_only=True)
class Renewability(RecordMixin):
    renewable: bool = True
    message: str = RENEWABLE_MESSAGE


@dataclasses.dataclass(kw_only=True)
class Transaction(RecordMixin):
    """An item the patron has checked out."""

    id: str
    item_id: str
    duedate: str
    due_time: str = dataclasses.field(default="", metadata=record_key("dueTime"))
    due_status: str = dataclasses.field(
        default="", metadata=record_key("dueStatus")
    )
    volume: str = ""
    publication_year: str = ""
    title: str
    renewable: bool = True
    message: str = RENEWABLE_MESSAGE


@dataclasses.dataclass(kw_only=True)
class Fine(RecordMixin):
    amount: str
    fine: str = ""
    balance: str
    createdate: str = ""
    checkout: str = ""
    duedate: str = ""
    id: str


@dataclasses.dataclass(kw_only=True)
class Hold(RecordMixin):
    """A request the patron has placed on an item."""

    id: str
    item_id: str
    type: str
    location: str = ""
    expire: str
    create: str
    position: str
    available: bool
    reqnum: str
    volume: str = ""
    publication_year: str = ""
    title: str


@dataclasses.dataclass(kw_only=True)
class ItemStatus(RecordMixin):
    status: str
    location: str = ""
    reserve: str = ""
    availability: bool


@dataclasses.dataclass(kw_only=True)
class RecordStatus(ItemStatus):
    """The status of one item of a bibliographic record."""

    callnumber: str
    id: str


@dataclasses.dataclass(kw_only=True)
class Holding(RecordStatus):
    """One item of a bibliographic record, with hold hints for the patron
    looking at it."""

    duedate: str = ""
    return_date: str = dataclasses.field(
        default="", metadata=record_key("returnDate")
    )
    number: str = ""
    requests_placed: str = ""
    barcode: str = ""
    notes: str = ""
    summary: str = ""
    item_id: str = ""
    is_holdable: bool = False
    holdtype: str = DEFAULT_HOLD_TYPE
    add_link: bool = dataclasses.field(default=False, metadata=record_key("addLink"))
    hold_override: str = dataclasses.field(
        default="", metadata=record_key("holdOverride")
    )


@dataclasses.dataclass(kw_only=True)
class HoldRequest(RecordMixin):
    """What the front end sends to place a hold."""

    patron: PatronInfo
    id: str
    barcode: str
    pickup_location: str | None = dataclasses.field(
        default=None, metadata=record_key("pickUpLocation")
    )


@dataclasses.dataclass(kw_only=True)
class HoldResult(RecordMixin):
    success: bool
    sys_message: str = dataclasses.field(metadata=record_key("sysMessage"))


@dataclasses.dataclass(kw_only=True)
class RenewRequest(RecordMixin):
    """What the front end sends to renew items.

    Each entry of `details` is a string built by `get_renew_details`.
    """

    patron: PatronInfo
    details: list[str]


@dataclasses.dataclass(kw_only=True)
class RenewResult(RecordMixin):
    success: bool = False
    new_date: str | bool = False
    item_id: str
    sys_message: str = dataclasses.field(metadata=record_key("sysMessage"))


@dataclasses.dataclass(kw_only=True)
class RenewResponse(RecordMixin):
    """Renewal results keyed by item barcode."""

    details: dict[str, RenewResult] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(kw_only=True)
class PickupLocation(RecordMixin):
    location_id: str = dataclasses.field(metadata=record_key("locationID"))
    location_display: str = dataclasses.field(
        metadata=record_key("locationDisplay")
    )
