"""
Pydantic 模式定义
用于 API 请求/响应验证
"""
from datetime import datetime, date
from typing import Optional, List, Dict
from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict
from hotel_reservations.models.ontology import ReservationState

PHONE_PATTERN = r"^[+]?[0-9\s\-()]{7,15}$"


def _strip(value):
    if isinstance(value, str):
        return value.strip()
    return value


def _require_future(value: Optional[date], label: str) -> Optional[date]:
    if value is not None and value <= date.today():
        raise ValueError(f"The {label} must be in the future")
    return value


# ============== 客户 Schemas ==============

class ClientBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(..., max_length=20, pattern=PHONE_PATTERN)

    @field_validator("name", "phone", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20, pattern=PHONE_PATTERN)

    @field_validator("name", "phone", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)


class ClientResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class ClientDetailResponse(ClientResponse):
    """客户详情，包含预订数量"""
    reservation_count: int = 0


class EmailAvailability(BaseModel):
    email: str
    available: bool


# ============== 预订 Schemas ==============

class ReservationCreate(BaseModel):
    client_id: int
    start_date: date
    end_date: date
    room_number: int = Field(..., ge=1)
    observations: Optional[str] = Field(None, max_length=500)

    @field_validator("start_date")
    @classmethod
    def start_in_future(cls, v):
        return _require_future(v, "start date")

    @field_validator("end_date")
    @classmethod
    def end_in_future(cls, v):
        return _require_future(v, "end date")


class ReservationUpdate(BaseModel):
    client_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    room_number: Optional[int] = Field(None, ge=1)
    observations: Optional[str] = Field(None, max_length=500)

    @field_validator("start_date")
    @classmethod
    def start_in_future(cls, v):
        return _require_future(v, "start date")

    @field_validator("end_date")
    @classmethod
    def end_in_future(cls, v):
        return _require_future(v, "end date")


class ReservationResponse(BaseModel):
    id: int
    client_id: int
    client_name: Optional[str] = None
    start_date: date
    end_date: date
    room_number: int
    observations: Optional[str] = None
    state: ReservationState
    state_description: str
    duration_days: int
    is_active: bool
    is_current: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class AvailabilityResponse(BaseModel):
    room_number: int
    start_date: date
    end_date: date
    exclude_id: Optional[int] = None
    available: bool
    conflicting_reservation_ids: List[int] = []


class ReservationStats(BaseModel):
    total: int
    by_state: Dict[str, int]


class MessageResponse(BaseModel):
    message: str
