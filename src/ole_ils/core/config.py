from ole_ils.core.exceptions import IntegrationException


class CannotLoadConfiguration(IntegrationException):
    """The driver's configuration is missing or invalid, so it cannot
    be initialized.
    """
