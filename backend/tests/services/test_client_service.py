"""
客户服务测试
"""
import pytest
from datetime import timedelta

from hotel_reservations.exceptions import NotFoundError, ConflictError
from hotel_reservations.models.ontology import Client, Reservation, ReservationState
from hotel_reservations.models.schemas import ClientCreate, ClientUpdate
from hotel_reservations.services.client_service import ClientService


@pytest.fixture
def service(db_session):
    return ClientService(db_session)


class TestClientCrud:

    def test_create(self, service):
        c = service.create_client(ClientCreate(
            name="  Carlos López ", email="carlos.lopez@email.com", phone="+57 302 345 6789"
        ))
        assert c.id is not None
        assert c.name == "Carlos López"
        assert service.count() == 1

    def test_create_duplicate_email(self, service, sample_client):
        with pytest.raises(ConflictError, match="There is already a client with the email: juan.perez@email.com"):
            service.create_client(ClientCreate(
                name="Otro Juan", email="juan.perez@email.com", phone="1234567"
            ))
        assert service.count() == 1

    def test_update(self, service, sample_client):
        updated = service.update_client(sample_client.id, ClientUpdate(phone="+57 311 000 0000"))
        assert updated.phone == "+57 311 000 0000"
        assert updated.name == "Juan Pérez"

    def test_update_keeping_own_email(self, service, sample_client):
        updated = service.update_client(sample_client.id, ClientUpdate(email=sample_client.email))
        assert updated.email == "juan.perez@email.com"

    def test_update_to_taken_email(self, service, sample_client, sample_client_2):
        with pytest.raises(ConflictError, match="There is already another client with the email"):
            service.update_client(sample_client.id, ClientUpdate(email=sample_client_2.email))

    def test_update_missing(self, service):
        with pytest.raises(NotFoundError, match="Client not found with ID: 99"):
            service.update_client(99, ClientUpdate(name="Nadie"))

    def test_get(self, service, sample_client):
        assert service.get_client(sample_client.id) == sample_client
        assert service.get_client(12345) is None
        assert service.get_client_by_email("juan.perez@email.com") == sample_client


class TestClientQueries:

    def test_list_sorted_by_name(self, service, sample_client, sample_client_2):
        assert [c.name for c in service.get_clients()] == ["Juan Pérez", "María García"]

    def test_find_by_name(self, service, sample_client, sample_client_2):
        assert service.find_by_name("García") == [sample_client_2]
        assert len(service.find_by_name("")) == 2
        assert len(service.find_by_name(None)) == 2

    def test_page(self, service, sample_client, sample_client_2):
        assert service.get_clients_page(0, 1) == [sample_client]
        assert service.get_clients_page(1, 1) == [sample_client_2]
        assert service.get_clients_page(0, 0) == []

    def test_email_available(self, service, sample_client):
        assert service.is_email_available("nuevo@email.com") is True
        assert service.is_email_available(sample_client.email) is False
        assert service.is_email_available(sample_client.email, exclude_id=sample_client.id) is True


class TestDeleteClient:
    """删除客户时显式删除其全部预订"""

    def test_delete_without_reservations(self, service, sample_client):
        assert service.delete_client(sample_client.id) == 0
        assert service.count() == 0

    def test_delete_removes_reservations_in_any_state(
        self, service, db_session, make_reservation, sample_client, sample_client_2, tomorrow
    ):
        make_reservation(sample_client, tomorrow, tomorrow + timedelta(days=1), 101)
        make_reservation(sample_client, tomorrow + timedelta(days=5), tomorrow + timedelta(days=6), 102,
                         state=ReservationState.CANCELLED)
        kept = make_reservation(sample_client_2, tomorrow, tomorrow + timedelta(days=1), 103)

        client_id = sample_client.id
        assert service.delete_client(client_id) == 2

        assert db_session.get(Client, client_id) is None
        remaining = db_session.query(Reservation).all()
        assert remaining == [kept]
        assert service.count_reservations(client_id) == 0

    def test_delete_missing(self, service):
        with pytest.raises(NotFoundError):
            service.delete_client(404)
