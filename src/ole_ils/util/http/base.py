from __future__ import annotations

import requests

import ole_ils
from ole_ils.util.http.exception import BadResponseException

# Used when the package carries no release version.
DEFAULT_USER_AGENT_VERSION = "x.x.x"


def get_user_agent() -> str:
    version = ole_ils.__version__ or DEFAULT_USER_AGENT_VERSION
    return f"OLE ILS Driver/{version}"


def raise_for_bad_response(url: str, response: requests.Response) -> requests.Response:
    """Raise a BadResponseException for a 5xx response.

    The OLE services report problems such as an unknown patron in the
    body of a 200 response, so every other status is handed back to the
    caller to parse.
    """
    if response.status_code // 100 == 5:
        raise BadResponseException.bad_status_code(url, response)
    return response
