from __future__ import annotations

from collections.abc import Generator, Iterable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Literal

from lxml import etree
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ole_ils.api.ole.circulation import OLECirculationAPI
from ole_ils.api.ole.data import (
    Fine,
    Hold,
    Holding,
    HoldRequest,
    HoldResult,
    ItemStatus,
    PatronInfo,
    PatronProfile,
    PickupLocation,
    RecordStatus,
    Renewability,
    RenewRequest,
    RenewResponse,
    RenewResult,
    Transaction,
)
from ole_ils.api.ole.docstore import OLEDocstoreAPI
from ole_ils.api.ole.exceptions import ILSException
from ole_ils.api.ole.parser import DocstoreItemParser, DocstoreRecord, MessageParser
from ole_ils.api.ole.patron import OLEPatronStore
from ole_ils.api.ole.settings import OLESettings
from ole_ils.core.exceptions import BaseILSException
from ole_ils.core.selftest import HasSelfTests, SelfTestResult
from ole_ils.sqlalchemy.session import SessionManager
from ole_ils.util.datetime_helpers import local_today
from ole_ils.util.log import LoggerMixin, pluralize

if TYPE_CHECKING:
    from lxml.etree import _Element


class OLEDriver(HasSelfTests, LoggerMixin):
    """The front end's entry point to an OLE installation.

    Patrons are authenticated against the OLE database. Everything else
    goes through the circulation service or the docstore. Whatever goes
    wrong on the way is raised as an ILSException.
    """

    PICKUP_LOCATIONS = (PickupLocation(location_id="1", location_display="Location 1"),)

    def __init__(self, settings: OLESettings | None, engine: Engine | None = None):
        self.settings = settings
        self._engine = engine
        self.init()

    @classmethod
    def from_environment(cls) -> OLEDriver:
        """A driver configured from OLE_* environment variables."""
        return cls(OLESettings())

    def init(self) -> None:
        if self.settings is None:
            raise ILSException("Configuration needs to be set.")

        catalog = self.settings.catalog
        self.check_renewals_up_front = self.settings.renewals.check_up_front
        self.default_pickup_location = self.settings.holds.default_pickup_location
        self.hold_timeout = catalog.hold_timeout

        self.circulation = OLECirculationAPI(
            str(catalog.circulation_service), timeout=catalog.timeout
        )
        self.docstore = OLEDocstoreAPI(
            str(catalog.docstore_service), timeout=catalog.timeout
        )
        with self._wrap_errors("Database setup"):
            engine = self._engine or SessionManager.engine(
                catalog.sqlalchemy_url(), catalog.database
            )
            self.patrons = OLEPatronStore(engine, catalog.login_field)

    def __repr__(self) -> str:
        circulation = self.circulation.url if hasattr(self, "circulation") else None
        return f"<OLEDriver circulation={circulation!r}>"

    @contextmanager
    def _wrap_errors(self, operation: str) -> Iterator[None]:
        """Raise any failure of a backing system as an ILSException."""
        try:
            yield
        except ILSException:
            raise
        except (BaseILSException, etree.LxmlError, SQLAlchemyError) as e:
            self.log.warning(f"{operation} failed: {e}")
            raise ILSException.from_exception(e) from e

    def get_config(self, function: str) -> dict[str, Any] | Literal[False]:
        """The named configuration section, or False if there is none."""
        assert self.settings is not None
        section = self.settings.section(function)
        if section is None:
            return False
        return section

    def patron_login(self, barcode: str, login: str) -> PatronInfo | None:
        with self._wrap_errors("Patron login"):
            return self.patrons.authenticate(barcode, login)

    def get_my_profile(self, patron: PatronInfo) -> PatronProfile:
        with self._wrap_errors("Profile lookup"):
            values = self.circulation.lookup_user(patron.id)
        return PatronProfile.from_patron(patron, **values)

    def get_my_transactions(self, patron: PatronInfo) -> list[Transaction]:
        with self._wrap_errors("Checked out items lookup"):
            transactions = self.circulation.checked_out_items(patron.id)

        if self.check_renewals_up_front:
            for transaction in transactions:
                renewability = self.is_renewable(patron.id, transaction.item_id)
                transaction.renewable = renewability.renewable
                transaction.message = renewability.message
        return transactions

    def get_my_fines(self, patron: PatronInfo) -> list[Fine]:
        with self._wrap_errors("Fines lookup"):
            return self.circulation.fines(patron.id)

    def get_my_holds(self, patron: PatronInfo) -> list[Hold]:
        with self._wrap_errors("Holds lookup"):
            return self.circulation.holds(patron.id, local_today())

    def get_record(self, id: str) -> DocstoreRecord:
        with self._wrap_errors(f"Docstore lookup of {id}"):
            return self.docstore.instance_details(id)

    def get_status(self, id: str) -> list[RecordStatus]:
        """The status of every item of a bibliographic record."""
        record = self.get_record(id)
        with self._wrap_errors(f"Status of {id}"):
            return [record.record_status(item) for item in record.items()]

    def get_statuses(self, ids: Iterable[str]) -> list[list[RecordStatus]]:
        return [self.get_status(id) for id in ids]

    def get_item_status(self, item: _Element) -> ItemStatus:
        return DocstoreItemParser().item_status(item)

    def get_holding(self, id: str, patron: PatronInfo | None = None) -> list[Holding]:
        """The items of a bibliographic record, with hints on which of
        them the patron may place a hold on."""
        record = self.get_record(id)
        with self._wrap_errors(f"Holdings of {id}"):
            return [
                record.holding(item, has_patron=patron is not None)
                for item in record.items()
            ]

    def place_hold(self, hold_details: HoldRequest) -> HoldResult:
        with self._wrap_errors("Placing hold"):
            message = self.circulation.place_request(
                hold_details.patron.id,
                hold_details.barcode,
                timeout=self.hold_timeout,
            )
        success = MessageParser.is_success(message)
        self.log.info(
            f"Hold on {hold_details.barcode} for patron {hold_details.patron.id}: "
            f"{'placed' if success else 'not placed'} ({message})"
        )
        return HoldResult(success=success, sys_message=message)

    def get_pickup_locations(
        self, patron: PatronInfo | None = None, hold_details: Any = None
    ) -> list[PickupLocation]:
        return list(self.PICKUP_LOCATIONS)

    def get_default_pickup_location(
        self, patron: PatronInfo | None = None, hold_details: Any = None
    ) -> str | None:
        return self.default_pickup_location

    def get_renew_details(self, checkout: Transaction) -> str:
        """The string the front end hands back to renew_my_items."""
        return f"{checkout.item_id},{checkout.id}"

    def renew_my_items(self, renew_details: RenewRequest) -> RenewResponse:
        """Ask the circulation service to renew each item.

        The service's answer does not say reliably whether a renewal
        happened, so every result is reported as unsuccessful with the
        service's message attached.
        """
        response = RenewResponse()
        for detail in renew_details.details:
            barcode, _, _ = detail.partition(",")
            with self._wrap_errors(f"Renewing {barcode}"):
                message = self.circulation.renew_item(renew_details.patron.id, barcode)
            response.details[barcode] = RenewResult(
                item_id=barcode, sys_message=message
            )
        self.log.info(
            f"Asked to renew {pluralize(len(response.details), 'item')} "
            f"for patron {renew_details.patron.id}"
        )
        return response

    def is_renewable(self, patron_id: str, item_id: str) -> Renewability:
        return Renewability()

    def is_holdable(self, item: Any) -> bool:
        return True

    def get_purchase_history(self, id: str) -> list[Any]:
        return []

    def _test_patron_login(self, barcode: str, login: str) -> PatronInfo:
        patron = self.patron_login(barcode, login)
        if patron is None:
            raise ILSException("Test patron could not log in.")
        return patron

    def _describe_profile(self, patron: PatronInfo) -> str:
        profile = self.get_my_profile(patron)
        return f"Patron {profile.id}: {profile.firstname} {profile.lastname}"

    def _describe_record(self, bib_id: str) -> list[str]:
        return [
            f"{status.id} {status.callnumber} {status.location}: {status.status}"
            for status in self.get_status(bib_id)
        ]

    def _run_self_tests(self) -> Generator[SelfTestResult, None, None]:
        assert self.settings is not None
        self_test = self.settings.self_test

        if self_test.patron_barcode and self_test.patron_login:
            login = self.run_test(
                "Patron login",
                self._test_patron_login,
                self_test.patron_barcode,
                self_test.patron_login,
            )
            patron = login.result
            if login.success:
                login.result = f"Logged in as patron {patron.id}"
            yield login

            if patron is not None:
                yield self.run_test(
                    "Circulation service lookup", self._describe_profile, patron
                )
            else:
                yield SelfTestResult.failed(
                    "Circulation service lookup", "No patron to look up."
                )

        if self_test.bib_id:
            yield self.run_test(
                "Docstore record lookup", self._describe_record, self_test.bib_id
            )
