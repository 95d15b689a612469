"""
客户服务 - 本体操作层
管理 Client 对象：增删改查、邮箱唯一性、删除时显式清理预订
"""
from typing import List, Optional
import logging
from sqlalchemy.orm import Session
from hotel_reservations.exceptions import NotFoundError, ConflictError
from hotel_reservations.models.ontology import Client
from hotel_reservations.models.schemas import ClientCreate, ClientUpdate
from hotel_reservations.repositories import ClientRepository, ReservationRepository

logger = logging.getLogger(__name__)


class ClientService:
    """客户服务"""

    def __init__(self, db: Session):
        self.db = db
        self.clients = ClientRepository(db)
        self.reservations = ReservationRepository(db)

    def _require(self, client_id: int) -> Client:
        client = self.clients.find_by_id(client_id)
        if client is None:
            raise NotFoundError(f"Client not found with ID: {client_id}")
        return client

    def get_client(self, client_id: int) -> Optional[Client]:
        """获取单个客户"""
        return self.clients.find_by_id(client_id)

    def get_client_by_email(self, email: str) -> Optional[Client]:
        return self.clients.find_by_email(email)

    def get_clients(self) -> List[Client]:
        """全部客户，按姓名排序"""
        return self.clients.find_all()

    def find_by_name(self, name: Optional[str]) -> List[Client]:
        """按姓名模糊查询，空关键字返回全部"""
        if name is None or not name.strip():
            return self.clients.find_all()
        return self.clients.find_by_name(name.strip())

    def get_clients_page(self, offset: int, limit: int) -> List[Client]:
        if limit <= 0:
            return []
        return self.clients.find_page(max(0, offset), limit)

    def is_email_available(self, email: str, exclude_id: Optional[int] = None) -> bool:
        return not self.clients.exists_by_email(email, exclude_id)

    def count(self) -> int:
        return self.clients.count()

    def count_reservations(self, client_id: int) -> int:
        return len(self.reservations.find_by_client(client_id))

    def create_client(self, data: ClientCreate) -> Client:
        """创建客户"""
        if self.clients.exists_by_email(data.email):
            raise ConflictError(f"There is already a client with the email: {data.email}")

        client = self.clients.save(Client(**data.model_dump()))
        self.db.commit()
        self.db.refresh(client)
        logger.info(f"Client {client.id} created ({client.email})")
        return client

    def update_client(self, client_id: int, data: ClientUpdate) -> Client:
        """更新客户信息"""
        client = self._require(client_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        email = update_data.get("email")
        if email is not None and self.clients.exists_by_email(email, exclude_id=client_id):
            raise ConflictError(f"There is already another client with the email: {email}")

        for key, value in update_data.items():
            setattr(client, key, value)

        client = self.clients.update(client)
        self.db.commit()
        self.db.refresh(client)
        return client

    def delete_client(self, client_id: int) -> int:
        """
        删除客户及其全部预订

        Returns:
            被一并删除的预订数量
        """
        client = self._require(client_id)
        removed = self.reservations.delete_by_client(client.id)
        # 先删预订再删客户，外键约束下顺序不可颠倒
        self.db.flush()
        self.clients.delete(client)
        self.db.commit()
        logger.info(f"Client {client_id} deleted with {removed} reservation(s)")
        return removed
