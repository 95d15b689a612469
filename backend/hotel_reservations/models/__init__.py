# Ontology Models
from hotel_reservations.models.ontology import (
    Client, Reservation, ReservationState
)

__all__ = [
    'Client', 'Reservation', 'ReservationState'
]
