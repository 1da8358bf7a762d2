from __future__ import annotations

from enum import StrEnum

from frozendict import frozendict


class CirculationServiceName(StrEnum):
    """Values of the `service` parameter of the OLE circulation service."""

    lookup_user = "lookupUser"
    checked_out_items = "getCheckedOutItems"
    fines = "fine"
    holds = "holds"
    place_request = "placeRequest"
    renew_item = "renewItem"


class OperatorId(StrEnum):
    """Operator IDs the circulation service expects for each call."""

    api = "API"
    # lookupUser and getCheckedOutItems are only answered for this operator.
    dev2 = "dev2"


SERVICE_OPERATORS = frozendict(
    {
        CirculationServiceName.lookup_user: OperatorId.dev2,
        CirculationServiceName.checked_out_items: OperatorId.dev2,
        CirculationServiceName.fines: OperatorId.api,
        CirculationServiceName.holds: OperatorId.api,
        CirculationServiceName.place_request: OperatorId.api,
        CirculationServiceName.renew_item: OperatorId.api,
    }
)

OLE_INSTANCE_NS = "http://ole.kuali.org/standards/ole-instance"
OLE_CIRCULATION_NS = "http://ole.kuali.org/standards/ole-instance-circulation"

DOCSTORE_NAMESPACES = {"ole": OLE_INSTANCE_NS, "circ": OLE_CIRCULATION_NS}

INSTANCE_DETAILS_ACTION = "instanceDetails"

HOLD_REQUEST_TYPE = "Page/Hold Request"
DEFAULT_HOLD_TYPE = "hold"

# Item status that marks an item as unavailable.
LOANED_STATUS = "LOANED"

UNKNOWN_TITLE = "unknown title"
OVERDUE = "overdue"
RENEWABLE_MESSAGE = "renewable"

# The circulation service answers "OK" whether or not a request was placed,
# so success is read from the wording of the message instead.
SUCCESS_MARKER = "succes"
