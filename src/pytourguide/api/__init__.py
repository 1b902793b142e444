"""Backend resource services."""

from .applications import ApplicationsService
from .base import BaseService
from .bookings import BookingsService
from .cities import CitiesService
from .guides import GuidesService
from .reviews import ReviewsService
from .trips import TripsService
from .users import UsersService

__all__ = [
    "ApplicationsService",
    "BaseService",
    "BookingsService",
    "CitiesService",
    "GuidesService",
    "ReviewsService",
    "TripsService",
    "UsersService",
]
