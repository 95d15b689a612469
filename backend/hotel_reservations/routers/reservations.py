"""
预订管理路由
"""
from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from hotel_reservations.database import get_db
from hotel_reservations.exceptions import ReservationError, http_status_for
from hotel_reservations.models.ontology import ReservationState
from hotel_reservations.models.schemas import (
    ReservationCreate, ReservationUpdate, ReservationResponse,
    AvailabilityResponse, ReservationStats, MessageResponse
)
from hotel_reservations.services.reservation_service import ReservationService

router = APIRouter(prefix="/reservations", tags=["Reservations"])


def _to_response(service: ReservationService, reservations) -> List[ReservationResponse]:
    return [ReservationResponse(**service.to_detail(r)) for r in reservations]


@router.get("", response_model=List[ReservationResponse])
def list_reservations(
    state: Optional[ReservationState] = None,
    room_number: Optional[int] = Query(None, ge=1),
    client_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """获取预订列表（按一个条件筛选，优先级：search > client > room > 日期范围 > state）"""
    service = ReservationService(db)
    if search:
        reservations = service.search_reservations(search)
    elif client_id is not None:
        reservations = service.find_by_client(client_id)
    elif room_number is not None:
        reservations = service.find_by_room_number(room_number)
    elif start_date is not None and end_date is not None:
        reservations = service.find_by_date_range(start_date, end_date)
    elif state is not None:
        reservations = service.find_by_state(state)
    else:
        reservations = service.get_reservations()
    return _to_response(service, reservations)


@router.get("/active", response_model=List[ReservationResponse])
def list_active_reservations(db: Session = Depends(get_db)):
    """已确认且未开始的预订"""
    service = ReservationService(db)
    return _to_response(service, service.find_active_reservations())


@router.get("/current", response_model=List[ReservationResponse])
def list_current_reservations(db: Session = Depends(get_db)):
    """已确认且正在进行的预订"""
    service = ReservationService(db)
    return _to_response(service, service.find_current_reservations())


@router.get("/availability", response_model=AvailabilityResponse)
def check_availability(
    room_number: int = Query(..., ge=1),
    start_date: date = Query(...),
    end_date: date = Query(...),
    exclude_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """查询房间在日期范围内是否可用"""
    if start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The start date cannot be after the end date"
        )
    service = ReservationService(db)
    conflicts = service.find_conflicts(room_number, start_date, end_date, exclude_id)
    return AvailabilityResponse(
        room_number=room_number,
        start_date=start_date,
        end_date=end_date,
        exclude_id=exclude_id,
        available=not conflicts,
        conflicting_reservation_ids=[r.id for r in conflicts],
    )


@router.get("/stats", response_model=ReservationStats)
def get_reservation_stats(db: Session = Depends(get_db)):
    """预订统计"""
    return ReservationStats(**ReservationService(db).get_stats())


@router.get("/{reservation_id}", response_model=ReservationResponse)
def get_reservation(reservation_id: int, db: Session = Depends(get_db)):
    """获取预订详情"""
    detail = ReservationService(db).get_reservation_detail(reservation_id)
    if not detail:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Reservation not found with ID: {reservation_id}"
        )
    return ReservationResponse(**detail)


@router.post("", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
def create_reservation(data: ReservationCreate, db: Session = Depends(get_db)):
    """创建预订"""
    service = ReservationService(db)
    try:
        reservation = service.create_reservation(data)
    except ReservationError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))
    return ReservationResponse(**service.to_detail(reservation))


@router.put("/{reservation_id}", response_model=ReservationResponse)
def update_reservation(reservation_id: int, data: ReservationUpdate, db: Session = Depends(get_db)):
    """更新预订"""
    service = ReservationService(db)
    try:
        reservation = service.update_reservation(reservation_id, data)
    except ReservationError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))
    return ReservationResponse(**service.to_detail(reservation))


@router.post("/{reservation_id}/cancel", response_model=ReservationResponse)
def cancel_reservation(reservation_id: int, db: Session = Depends(get_db)):
    """取消预订"""
    service = ReservationService(db)
    try:
        reservation = service.cancel_reservation(reservation_id)
    except ReservationError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))
    return ReservationResponse(**service.to_detail(reservation))


@router.delete("/{reservation_id}", response_model=MessageResponse)
def delete_reservation(reservation_id: int, db: Session = Depends(get_db)):
    """删除预订（仅已取消的）"""
    service = ReservationService(db)
    try:
        service.delete_reservation(reservation_id)
    except ReservationError as e:
        raise HTTPException(status_code=http_status_for(e), detail=str(e))
    return MessageResponse(message="Reservation deleted successfully")
