"""
客户管理路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from hotel_reservations.config import settings
from hotel_reservations.database import get_db
from hotel_reservations.exceptions import ReservationError, http_status_for
from hotel_reservations.models.schemas import (
    ClientCreate, ClientUpdate, ClientResponse, ClientDetailResponse,
    EmailAvailability, ReservationResponse, MessageResponse
)
from hotel_reservations.services.client_service import ClientService
from hotel_reservations.services.reservation_service import ReservationService

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=List[ClientResponse])
def list_clients(
    search: Optional[str] = None,
    offset: Optional[int] = Query(None, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db)
):
    """获取客户列表：search 按姓名模糊查询，offset/limit 分页"""
    service = ClientService(db)
    if search:
        return service.find_by_name(search)
    if offset is not None or limit is not None:
        page_size = min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
        return service.get_clients_page(offset or 0, page_size)
    return service.get_clients()


@router.get("/count")
def count_clients(db: Session = Depends(get_db)):
    """客户总数"""
    return {"count": ClientService(db).count()}


@router.get("/email-available", response_model=EmailAvailability)
def check_email(email: str, exclude_id: Optional[int] = None, db: Session = Depends(get_db)):
    """邮箱是否可用（更新时传 exclude_id）"""
    service = ClientService(db)
    return EmailAvailability(email=email, available=service.is_email_available(email, exclude_id))


@router.get("/{client_id}", response_model=ClientDetailResponse)
def get_client(client_id: int, db: Session = Depends(get_db)):
    """获取客户详情"""
    service = ClientService(db)
    client = service.get_client(client_id)
    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Client not found with ID: {client_id}"
        )
    detail = ClientDetailResponse.model_validate(client)
    detail.reservation_count = service.count_reservations(client_id)
    return detail


@router.get("/{client_id}/reservations", response_model=List[ReservationResponse])
def get_client_reservations(client_id: int, db: Session = Depends(get_db)):
    """获取客户的全部预订"""
    if not ClientService(db).get_client(client_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Client not found with ID: {client_id}"
        )
    service = ReservationService(db)
    return [ReservationResponse(**service.to_detail(r)) for r in service.find_by_client(client_id)]


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(data: ClientCreate, db: Session = Depends(get_db)):
    """创建客户"""
    try:
        return ClientService(db).create_client(data)
    except ReservationError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.put("/{client_id}", response_model=ClientResponse)
def update_client(client_id: int, data: ClientUpdate, db: Session = Depends(get_db)):
    """更新客户信息"""
    try:
        return ClientService(db).update_client(client_id, data)
    except ReservationError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))


@router.delete("/{client_id}", response_model=MessageResponse)
def delete_client(client_id: int, db: Session = Depends(get_db)):
    """删除客户（连同其预订）"""
    try:
        removed = ClientService(db).delete_client(client_id)
    except ReservationError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))
    return MessageResponse(message=f"Client deleted successfully ({removed} reservation(s) removed)")
