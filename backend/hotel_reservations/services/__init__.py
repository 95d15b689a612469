from hotel_reservations.services.availability import AvailabilityChecker
from hotel_reservations.services.client_service import ClientService
from hotel_reservations.services.reservation_service import ReservationService
from hotel_reservations.services.validation import ReservationValidator

__all__ = [
    "AvailabilityChecker",
    "ClientService",
    "ReservationService",
    "ReservationValidator",
]
