"""SQLAlchemy models for StayList.

All models are imported here so that ``Base.metadata`` knows every table
before ``create_all`` runs. If you add a new model, import it in this file.
"""

from staylist.models.photo import PropertyPhoto, RoomPhoto
from staylist.models.property import Property
from staylist.models.room import PropertyRoom
from staylist.models.user import User

__all__ = [
    "Property",
    "PropertyPhoto",
    "PropertyRoom",
    "RoomPhoto",
    "User",
]
