import os
import stat

import pytest
from peewee import SqliteDatabase

from core.domain.errors import DatabaseInitializationError, FaultKind
from infrastructure.peewee.session.db import open_database


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("DATABASE_PATH", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)


class TestOpenDatabase:
    def test_database_path_es_sqlite_embebido(self, tmp_path):
        db_file = tmp_path / "tasks.sqlite3"

        handle = open_database(path=str(db_file))

        assert handle.embedded is True
        assert isinstance(handle.database, SqliteDatabase)
        assert handle.location == str(db_file.resolve())

    def test_database_path_desde_entorno(self, tmp_path, monkeypatch):
        db_file = tmp_path / "env.sqlite3"
        monkeypatch.setenv("DATABASE_PATH", str(db_file))

        handle = open_database()

        assert handle.location == str(db_file.resolve())

    def test_directorio_padre_inexistente(self, tmp_path):
        with pytest.raises(DatabaseInitializationError) as excinfo:
            open_database(path=str(tmp_path / "missing" / "tasks.sqlite3"))

        assert excinfo.value.kind is FaultKind.FILE_NOT_FOUND
        assert excinfo.value.database_path.endswith("tasks.sqlite3")

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0,
        reason="root ignora los permisos de fichero",
    )
    def test_fichero_sin_permisos(self, tmp_path):
        db_file = tmp_path / "locked.sqlite3"
        db_file.write_bytes(b"")
        db_file.chmod(stat.S_IRUSR)
        try:
            with pytest.raises(DatabaseInitializationError) as excinfo:
                open_database(path=str(db_file))
        finally:
            db_file.chmod(stat.S_IRUSR | stat.S_IWUSR)

        assert excinfo.value.kind is FaultKind.PERMISSION_DENIED

    def test_database_url_sqlite(self):
        handle = open_database(url="sqlite:///:memory:")

        assert handle.embedded is True
        assert handle.location == ":memory:"

    def test_busca_database_sqlite3_en_el_directorio_actual(self, tmp_path, monkeypatch):
        (tmp_path / "database.sqlite3").write_bytes(b"")
        monkeypatch.chdir(tmp_path)

        handle = open_database()

        assert handle.embedded is True
        assert handle.location == str((tmp_path / "database.sqlite3").resolve())
