"""
测试 hotel_reservations.domain.reservation - 预订领域实体与状态机
"""
import pytest
from datetime import date, timedelta

from hotel_reservations.domain.reservation import ReservationEntity
from hotel_reservations.exceptions import IllegalStateError
from hotel_reservations.models.ontology import Client, Reservation, ReservationState

TODAY = date(2026, 3, 10)


def _make_reservation(state=ReservationState.CONFIRMED, start_offset=1, nights=2, **kwargs):
    client = Client(id=1, name="Juan Pérez", email="juan@email.com", phone="+57 300 123 4567")
    return Reservation(
        id=kwargs.pop("id", 10),
        client=client,
        client_id=client.id,
        start_date=TODAY + timedelta(days=start_offset),
        end_date=TODAY + timedelta(days=start_offset + nights),
        room_number=kwargs.pop("room_number", 101),
        state=state,
        **kwargs,
    )


class TestReservationLifecycle:
    """生命周期转换"""

    def test_missing_state_defaults_to_confirmed(self):
        r = _make_reservation(state=None)
        entity = ReservationEntity(r)
        assert entity.state == ReservationState.CONFIRMED
        assert r.state == ReservationState.CONFIRMED

    def test_cancel_confirmed(self):
        entity = ReservationEntity(_make_reservation())
        assert entity.can_cancel() is True
        entity.cancel()
        assert entity.state == ReservationState.CANCELLED
        assert entity.model.state == ReservationState.CANCELLED

    def test_cancel_twice_fails(self):
        entity = ReservationEntity(_make_reservation())
        entity.cancel()
        with pytest.raises(IllegalStateError, match="Only confirmed reservations can be canceled"):
            entity.cancel()

    def test_cancel_cancelled_reservation_fails(self):
        entity = ReservationEntity(_make_reservation(state=ReservationState.CANCELLED))
        assert entity.can_cancel() is False
        with pytest.raises(IllegalStateError):
            entity.cancel()

    @pytest.mark.parametrize("state", [ReservationState.COMPLETED, ReservationState.IN_PROGRESS])
    def test_unused_states_are_terminal(self, state):
        """COMPLETED / IN_PROGRESS 没有出边"""
        entity = ReservationEntity(_make_reservation(state=state))
        assert entity.can_cancel() is False
        assert entity.can_delete() is False
        with pytest.raises(IllegalStateError):
            entity.cancel()
        with pytest.raises(IllegalStateError):
            entity.mark_deleted()

    def test_delete_confirmed_fails(self):
        entity = ReservationEntity(_make_reservation())
        assert entity.can_delete() is False
        with pytest.raises(IllegalStateError, match="Only canceled reservations can be deleted"):
            entity.mark_deleted()
        assert entity.state == ReservationState.CONFIRMED

    def test_delete_after_cancel(self):
        entity = ReservationEntity(_make_reservation())
        entity.cancel()
        assert entity.can_delete() is True
        entity.mark_deleted()

    def test_transitions_record_only_successful_triggers(self):
        entity = ReservationEntity(_make_reservation())
        assert entity.transitions() == []
        with pytest.raises(IllegalStateError):
            entity.mark_deleted()
        entity.cancel()
        entity.mark_deleted()
        assert entity.transitions() == ["cancel", "delete"]

    def test_illegal_state_error_is_value_error(self):
        entity = ReservationEntity(_make_reservation(state=ReservationState.CANCELLED))
        with pytest.raises(ValueError):
            entity.cancel()


class TestReservationClassification:
    """派生分类：active / current / 天数"""

    def test_duration(self):
        assert ReservationEntity(_make_reservation(nights=3)).duration_days() == 3

    def test_zero_night_duration(self):
        assert ReservationEntity(_make_reservation(nights=0)).duration_days() == 0

    def test_duration_without_dates(self):
        r = _make_reservation()
        r.end_date = None
        assert ReservationEntity(r).duration_days() == 0

    def test_future_confirmed_is_active(self):
        entity = ReservationEntity(_make_reservation(start_offset=1))
        assert entity.is_active(TODAY) is True
        assert entity.is_current(TODAY) is False

    def test_started_today_is_current_not_active(self):
        entity = ReservationEntity(_make_reservation(start_offset=0))
        assert entity.is_active(TODAY) is False
        assert entity.is_current(TODAY) is True

    def test_last_day_is_current(self):
        entity = ReservationEntity(_make_reservation(start_offset=-2, nights=2))
        assert entity.is_current(TODAY) is True

    def test_finished_is_neither(self):
        entity = ReservationEntity(_make_reservation(start_offset=-5, nights=2))
        assert entity.is_active(TODAY) is False
        assert entity.is_current(TODAY) is False

    def test_cancelled_is_neither(self):
        entity = ReservationEntity(_make_reservation(start_offset=0, state=ReservationState.CANCELLED))
        assert entity.is_active(TODAY) is False
        assert entity.is_current(TODAY) is False

    def test_to_dict(self):
        entity = ReservationEntity(_make_reservation(observations="VIP"))
        data = entity.to_dict(TODAY)
        assert data["id"] == 10
        assert data["client_id"] == 1
        assert data["client_name"] == "Juan Pérez"
        assert data["room_number"] == 101
        assert data["observations"] == "VIP"
        assert data["state"] == ReservationState.CONFIRMED
        assert data["state_description"] == "Confirmed"
        assert data["duration_days"] == 2
        assert data["is_active"] is True
        assert data["is_current"] is False
