"""
Pytest 配置和共享 fixtures
"""
import os

# 应用生命周期里的 init_db 使用默认引擎，测试中不落盘
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import date, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from hotel_reservations.database import Base, get_db
from hotel_reservations.models import ontology  # noqa
from hotel_reservations.models.ontology import Client, Reservation, ReservationState
from hotel_reservations.main import app


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== 日期 ==============

@pytest.fixture
def tomorrow():
    return date.today() + timedelta(days=1)


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def sample_client(db_session):
    """创建测试客户"""
    c = Client(name="Juan Pérez", email="juan.perez@email.com", phone="+57 300 123 4567")
    db_session.add(c)
    db_session.commit()
    db_session.refresh(c)
    return c


@pytest.fixture
def sample_client_2(db_session):
    """创建第二个测试客户"""
    c = Client(name="María García", email="maria.garcia@email.com", phone="+57 301 234 5678")
    db_session.add(c)
    db_session.commit()
    db_session.refresh(c)
    return c


@pytest.fixture
def make_reservation(db_session):
    """直接写库创建预订（绕过服务层校验）"""
    def _make(client, start, end, room_number=101, state=ReservationState.CONFIRMED,
              observations=None):
        r = Reservation(
            client=client,
            start_date=start,
            end_date=end,
            room_number=room_number,
            state=state,
            observations=observations,
        )
        db_session.add(r)
        db_session.commit()
        db_session.refresh(r)
        return r
    return _make


@pytest.fixture
def sample_reservation(make_reservation, sample_client, tomorrow):
    """房间 101，明天起住两晚"""
    return make_reservation(sample_client, tomorrow, tomorrow + timedelta(days=2), 101)
