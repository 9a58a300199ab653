import json, os
from sqlalchemy import create_engine, text

from empresa.db_config import resolve_database_uri

SAMPLE = [
    {"dni": "12345678", "name": "Ana", "surname": "García", "role": "Analista"},
    {"dni": "23456789", "name": "Luis", "surname": "Pérez", "role": "Desarrollador"},
    {"dni": "34567890", "name": "Marta", "surname": "López", "role": "RRHH"},
]


def load_payload(path="employees.json"):
    """Empleados de ./employees.json si existe; sino los de ejemplo."""
    payload = []
    if os.path.isfile(path):
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        if isinstance(payload, dict):
            payload = payload.get("employees", [])
    return payload or SAMPLE


def seed(eng, payload) -> int:
    inserted = 0
    with eng.begin() as cx:
        for e in payload:
            dni = str(e.get("dni") or "").strip()
            if not dni:
                continue
            if cx.execute(text("SELECT 1 FROM employees WHERE dni=:dni"), {"dni": dni}).first():
                continue
            cx.execute(text("""
                INSERT INTO employees(dni,name,surname,role,email)
                VALUES (:dni,:name,:surname,:role,:email)
            """), {
                "dni": dni,
                "name": e.get("name", ""),
                "surname": e.get("surname", ""),
                "role": e.get("role", ""),
                "email": e.get("email", ""),
            })
            inserted += 1
    return inserted


if __name__ == "__main__":
    # misma base que sirve create_app(): DATABASE_URL o EMPRESA_SQLITE_PATH
    eng = create_engine(resolve_database_uri(), pool_pre_ping=True)
    print(f"✔ insertados {seed(eng, load_payload())} empleados")
