"""Response models for the Passport API."""

from pypassport.models._base import PassportBaseModel
from pypassport.models.responses import AccountIdResponse, Ack, DeleteResponse, ValueResponse

__all__ = [
    "AccountIdResponse",
    "Ack",
    "DeleteResponse",
    "PassportBaseModel",
    "ValueResponse",
]
