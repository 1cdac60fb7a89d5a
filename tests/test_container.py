from src.station_hr.station_hr.container import build_container
from src.station_hr.station_hr.database.connection import DBConfig


def _db(name: str) -> dict:
    return {"host": "localhost", "port": "3307", "user": "station", "password": "secret", "database": name}


def test_db_config_from_settings():
    config = DBConfig.from_settings({"host": "db", "user": "u", "password": "p", "database": "station"})

    assert config.port == 3306
    assert DBConfig.from_settings(_db("x")).port == 3307


def test_each_container_targets_its_own_database():
    first = build_container(db_config=_db("db_one"))
    second = build_container(db_config=_db("db_two"))

    assert first.employees_repo._conn_factory.database == "db_one"
    assert second.employees_repo._conn_factory.database == "db_two"
    assert second.reconciliation_repo._conn_factory is second.employees_repo._conn_factory
    assert first.employees_repo._conn_factory is not second.employees_repo._conn_factory
