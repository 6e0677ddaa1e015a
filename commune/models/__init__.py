"""Expose commonly used model classes at the package level.

Importing these classes here allows consumers to write concise imports like::

    from commune.models import CommuneRequest, CommuneResponse, HistoryEntry

These names refer to the underlying Pydantic models defined in their
respective modules.
"""

from .commune_request import CommuneRequest  # noqa: F401
from .commune_response import CommuneResponse, ErrorResponse  # noqa: F401
from .chat_message import HistoryEntry  # noqa: F401
from .enums import MessageRole, ValidationFailure  # noqa: F401
