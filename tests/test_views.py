import pytest

from sqlalchemy.exc import OperationalError

from empresa import create_app, db, limiter
from empresa.models import Employee


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "RATELIMIT_ENABLED": False,
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _count(app):
    with app.app_context():
        return Employee.query.count()


def test_root_redirects_to_list(client):
    r = client.get("/")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/company")


def test_create_form_renders_empty(client):
    r = client.get("/company/crear")
    assert r.status_code == 200
    assert b'name="dni" value=""' in r.data


def test_create_redirects_with_flash(client):
    r = client.post("/company/crear", data={"dni": "12345678", "name": "Ana"})
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/company")
    page = client.get("/company")
    assert b"Employee created" in page.data
    assert b"flash-mensaje" in page.data
    # el mensaje se consume en el primer render
    assert b"Employee created" not in client.get("/company").data


def test_duplicate_create_goes_back_to_form(app, client):
    client.post("/company/crear", data={"dni": "1", "name": "Ana"})
    r = client.post("/company/crear", data={"dni": "1", "name": "Otra"})
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/company/crear")
    page = client.get(r.headers["Location"])
    assert b"DNI already exists" in page.data
    assert b"flash-error" in page.data
    assert _count(app) == 1


def test_create_without_dni(app, client):
    r = client.post("/company/crear", data={"dni": "  ", "name": "Ana"}, follow_redirects=True)
    assert r.status_code == 200
    assert b"DNI is required" in r.data
    assert _count(app) == 0


def test_edit_form(client):
    client.post("/company/crear", data={"dni": "1", "name": "Ana"})
    r = client.get("/company/editar/1")
    assert r.status_code == 200
    assert b'value="Ana"' in r.data
    assert b"readonly" in r.data

    r = client.get("/company/editar/2")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/company")
    assert b"Employee not found" in client.get("/company").data


def test_update_unknown_dni_redirects_to_edit(app, client):
    r = client.post("/company/guardar", data={"dni": "404", "name": "X"})
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/company/editar/404")
    assert _count(app) == 0
    page = client.get(r.headers["Location"], follow_redirects=True)
    assert b"DNI does not exist" in page.data
    assert b"flash-error" in page.data


def test_search(client):
    client.post("/company/crear", data={"dni": "1", "name": "Ana"})
    client.post("/company/crear", data={"dni": "2", "name": "Luis"})
    r = client.get("/company/buscar?dni=2")
    assert r.status_code == 200
    assert r.data.count(b'class="employee"') == 1
    assert b"Luis" in r.data

    r = client.get("/company/buscar?dni=3")
    assert r.status_code == 302
    assert b"Employee not found" in client.get("/company").data


def test_delete_requires_post(client):
    assert client.get("/company/eliminar/1").status_code == 405


def test_full_lifecycle(app, client):
    client.post("/company/crear", data={"dni": "12345678", "name": "Ana"})
    page = client.get("/company")
    assert page.data.count(b'class="employee"') == 1
    assert b"12345678" in page.data and b"Ana" in page.data

    r = client.post("/company/crear", data={"dni": "12345678", "name": "Ana"}, follow_redirects=True)
    assert b"DNI already exists" in r.data
    assert _count(app) == 1

    r = client.post("/company/guardar", data={"dni": "12345678", "name": "Ana Maria"}, follow_redirects=True)
    assert b"Employee updated" in r.data
    assert b"Ana Maria" in r.data

    r = client.post("/company/eliminar/12345678", follow_redirects=True)
    assert b"Employee deleted" in r.data
    assert r.data.count(b'class="employee"') == 0

    r = client.post("/company/eliminar/12345678", follow_redirects=True)
    assert b"Employee not found" in r.data

    r = client.get("/company/buscar?dni=12345678", follow_redirects=True)
    assert b"Employee not found" in r.data


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json() == {"ok": True, "service": "empresa", "db": True}


def test_dni_with_slash_can_be_edited_and_deleted(client):
    client.post("/company/crear", data={"dni": "12/34", "name": "Ana"})
    page = client.get("/company")
    assert b'href="/company/editar/12/34"' in page.data

    r = client.get("/company/editar/12/34")
    assert r.status_code == 200
    assert b'value="12/34"' in r.data

    r = client.post("/company/guardar", data={"dni": "12/34", "name": "Ana Maria"}, follow_redirects=True)
    assert b"Employee updated" in r.data

    r = client.post("/company/eliminar/12/34", follow_redirects=True)
    assert r.status_code == 200
    assert b"Employee deleted" in r.data


def test_update_unknown_dni_with_slash(client):
    r = client.post("/company/guardar", data={"dni": "99/1", "name": "X"})
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/company/editar/99/1")
    page = client.get(r.headers["Location"], follow_redirects=True)
    assert page.status_code == 200
    assert b"DNI does not exist" in page.data


def test_create_with_dni_too_long(app, client):
    r = client.post("/company/crear", data={"dni": "9" * 33}, follow_redirects=True)
    assert r.status_code == 200
    assert b"dni too long (max 32)" in r.data
    assert _count(app) == 0


def test_database_unavailable_returns_503(client, monkeypatch):
    from empresa.repos import employees_repo

    def broken():
        raise OperationalError("SELECT employees", {}, Exception("unable to open database file"))

    monkeypatch.setattr(employees_repo, "get_all", broken)
    r = client.get("/company")
    assert r.status_code == 503
    assert r.data == b"Database unavailable"


@pytest.fixture
def limited_app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "RATELIMIT_ENABLED": True,
        "EMPRESA_WRITE_LIMIT": "2 per minute",
    })
    with app.app_context():
        db.create_all()
        limiter.reset()
    yield app
    with app.app_context():
        limiter.reset()
        db.drop_all()


def test_write_rate_limit(limited_app):
    client = limited_app.test_client()
    codes = [client.post("/company/crear", data={"dni": str(i)}).status_code for i in range(3)]
    assert codes == [302, 302, 429]
    r = client.post("/company/crear", data={"dni": "x"})
    assert r.data == b"Too Many Requests"
    # lecturas sin límite
    assert client.get("/company").status_code == 200
    assert _count(limited_app) == 2


def test_limit_disabled_after_limited_app(limited_app, app):
    # la app creada después manda sobre el flag global del Limiter
    client = app.test_client()
    codes = [client.post("/company/crear", data={"dni": str(i)}).status_code for i in range(3)]
    assert codes == [302, 302, 302]
