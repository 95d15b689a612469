"""
初始化示例数据
五个客户，每人一条未来的已确认预订；仅在表为空时写入

    python -m hotel_reservations.init_data
"""
from datetime import date, timedelta
from sqlalchemy.orm import Session
from hotel_reservations.models.ontology import Client, Reservation, ReservationState

SAMPLE_CLIENTS = [
    ("Juan Pérez", "juan.perez@email.com", "+57 300 123 4567"),
    ("María García", "maria.garcia@email.com", "+57 301 234 5678"),
    ("Carlos López", "carlos.lopez@email.com", "+57 302 345 6789"),
    ("Ana Martínez", "ana.martinez@email.com", "+57 303 456 7890"),
    ("Luis Rodríguez", "luis.rodriguez@email.com", "+57 304 567 8901"),
]

# (入住偏移天数, 离店偏移天数, 房间号, 备注)
SAMPLE_RESERVATIONS = [
    (1, 3, 101, "Cliente VIP"),
    (5, 7, 205, "Habitación con vista al mar"),
    (10, 12, 302, "Servicio de habitación incluido"),
    (15, 17, 108, "Check-in temprano solicitado"),
    (20, 22, 401, "Suite ejecutiva"),
]


def seed_sample_data(db: Session, today: date = None) -> dict:
    """写入示例客户与预订，返回写入数量"""
    today = today or date.today()
    stats = {"clients": 0, "reservations": 0}

    if db.query(Client).count() > 0:
        return stats

    clients = []
    for name, email, phone in SAMPLE_CLIENTS:
        client = Client(name=name, email=email, phone=phone)
        db.add(client)
        clients.append(client)
    db.flush()
    stats["clients"] = len(clients)

    for client, (start, end, room, notes) in zip(clients, SAMPLE_RESERVATIONS):
        db.add(Reservation(
            client=client,
            start_date=today + timedelta(days=start),
            end_date=today + timedelta(days=end),
            room_number=room,
            observations=notes,
            state=ReservationState.CONFIRMED,
        ))
        stats["reservations"] += 1

    db.commit()
    return stats


if __name__ == "__main__":
    from hotel_reservations.config import settings
    from hotel_reservations.database import SessionLocal, init_db
    from hotel_reservations.logging_config import setup_logging

    setup_logging(settings.LOG_LEVEL)
    init_db()
    session = SessionLocal()
    try:
        print(f"示例数据: {seed_sample_data(session)}")
    finally:
        session.close()
