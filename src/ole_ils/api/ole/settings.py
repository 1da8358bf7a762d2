from __future__ import annotations

import re
from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    HttpUrl,
    PositiveInt,
    field_validator,
)
from pydantic_settings import SettingsConfigDict
from sqlalchemy.engine import URL, make_url

from ole_ils.service.configuration.service_configuration import (
    ServiceConfiguration,
)


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class CatalogSettings(_Section):
    """Where the OLE database and services live."""

    host: str = "localhost"
    port: PositiveInt = 3306
    database: str = "ole"
    user: str | None = None
    password: str | None = None

    # A full SQLAlchemy URL. When set, it is used instead of the
    # host, port, user and password above.
    database_url: str | None = None

    circulation_service: HttpUrl
    docstore_service: HttpUrl

    # Column of krim_entity_nm_t a patron's login is checked against.
    login_field: str = "LAST_NM"

    # Seconds to wait for the circulation and docstore services.
    timeout: PositiveInt = 20
    hold_timeout: PositiveInt = 30

    @field_validator("login_field")
    @classmethod
    def _only_word_characters(cls, value: str) -> str:
        # The login field names a column, so nothing but word characters
        # may reach the query.
        return re.sub(r"[^\w]", "", value)

    def sqlalchemy_url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            "mysql+pymysql",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )


class RenewalSettings(_Section):
    # Ask whether each checked out item can be renewed when listing
    # them, instead of only when the patron asks for a renewal.
    check_up_front: bool = True


class HoldSettings(_Section):
    default_pickup_location: str | None = None


class SelfTestSettings(_Section):
    """Credentials and records the self tests run against."""

    patron_barcode: str | None = None
    patron_login: str | None = None
    bib_id: str | None = None


class OLESettings(ServiceConfiguration):
    """Driver configuration, read from OLE_* environment variables.

    Sections are nested with a double underscore, for example
    OLE_CATALOG__CIRCULATION_SERVICE or OLE_HOLDS__DEFAULT_PICKUP_LOCATION.
    """

    model_config = SettingsConfigDict(env_prefix="OLE_")

    catalog: CatalogSettings
    renewals: RenewalSettings = RenewalSettings()
    holds: HoldSettings = HoldSettings()
    self_test: SelfTestSettings = SelfTestSettings()

    # Section names as the front end asks for them.
    SECTIONS: ClassVar[dict[str, str]] = {
        "Catalog": "catalog",
        "Renewals": "renewals",
        "Holds": "holds",
    }

    def section(self, name: str) -> dict[str, Any] | None:
        """The named section as a dictionary, or None if there is no
        such section."""
        field_name = self.SECTIONS.get(name)
        if field_name is None:
            return None
        section: BaseModel = getattr(self, field_name)
        return section.model_dump(mode="json")
