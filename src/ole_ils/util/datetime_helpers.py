import datetime

import pytz


def from_timestamp(ts: float) -> datetime.datetime:
    """Return a UTC datetime object from a timestamp.

    :return: datetime object
    """
    return datetime.datetime.fromtimestamp(ts, tz=pytz.UTC)


def utc_now() -> datetime.datetime:
    """Get the current time in UTC.

    :return: datetime object
    """
    return datetime.datetime.now(tz=pytz.UTC)


def local_today() -> datetime.date:
    """Today's date on the server's clock, which is the calendar the
    circulation service reports its hold dates in.
    """
    return datetime.date.today()
