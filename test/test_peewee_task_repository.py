import unittest
from unittest.mock import patch

from peewee import OperationalError, SqliteDatabase

from core.domain.errors import DatabaseOperationError, FaultKind, InvalidTaskError
from core.domain.models.schema import SchemaDescriptor
from core.domain.models.task import Task
from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository
from infrastructure.peewee.session.db import DatabaseHandle


def _memory_handle() -> DatabaseHandle:
    db = SqliteDatabase(":memory:")
    db.connect()
    return DatabaseHandle(database=db, embedded=True, location=":memory:")


class PeeweeTaskRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.handle = _memory_handle()
        self.db = self.handle.database
        self.repo = PeeweeTaskRepository(self.handle)

    def tearDown(self) -> None:
        self.db.close()

    def test_create_and_get(self) -> None:
        created = self.repo.create(Task(id="t-1", text="Tarea", day="Lunes", reminder=True))
        loaded = self.repo.get("t-1")

        self.assertIsNotNone(loaded)
        self.assertEqual(loaded, created)
        self.assertEqual(loaded.reminder, True)

    def test_create_genera_ids_distintos(self) -> None:
        first = self.repo.create(Task(id=None, text="buy milk", day="Monday", reminder=True))
        second = self.repo.create(Task(id=None, text="buy milk", day="Monday", reminder=True))

        self.assertTrue(first.id)
        self.assertTrue(second.id)
        self.assertNotEqual(first.id, second.id)
        self.assertEqual(self.repo.get(first.id).text, "buy milk")

    def test_create_no_modifica_la_tarea_recibida(self) -> None:
        original = Task(id=None, text="sin id")

        created = self.repo.create(original)

        self.assertIsNone(original.id)
        self.assertTrue(created.id)
        self.assertEqual(created.text, "sin id")

    def test_create_rellena_timestamps(self) -> None:
        task = self.repo.create(Task(id=None, text="con fechas"))

        row = self.db.execute_sql(
            'SELECT "createdAt", "updatedAt" FROM tasks WHERE id = ?', [task.id]
        ).fetchone()

        self.assertIsNotNone(row[0])
        self.assertIsNotNone(row[1])

    def test_create_sin_texto_es_entrada_invalida(self) -> None:
        for text in ("", "   ", None):
            with self.assertRaises(InvalidTaskError):
                self.repo.create(Task(id=None, text=text))
        with self.assertRaises(InvalidTaskError):
            self.repo.create(None)

    def test_entrada_invalida_no_toca_la_bdd(self) -> None:
        with self.assertRaises(InvalidTaskError):
            self.repo.create(Task(id=None, text=""))

        self.assertEqual(self.db.get_tables(), [])

    def test_get_inexistente_devuelve_none(self) -> None:
        self.assertIsNone(self.repo.get("missing"))

    def test_update(self) -> None:
        self.repo.create(Task(id="t-1", text="Inicial", day="Lunes"))

        updated = self.repo.update("t-1", Task(id="t-1", text="Nueva", day=None, reminder=True))

        self.assertEqual(updated, Task(id="t-1", text="Nueva", day=None, reminder=True))
        self.assertEqual(self.repo.get("t-1"), updated)

    def test_update_inexistente_devuelve_none(self) -> None:
        self.assertIsNone(self.repo.update("missing", Task(id=None, text="x")))

    def test_remove(self) -> None:
        self.repo.create(Task(id="t-1", text="Eliminar"))

        self.assertTrue(self.repo.remove("t-1"))
        self.assertIsNone(self.repo.get("t-1"))
        self.assertFalse(self.repo.remove("t-1"))

    def test_remove_by_text(self) -> None:
        self.repo.create(Task(id=None, text="dup"))
        self.repo.create(Task(id=None, text="dup"))
        self.repo.create(Task(id=None, text="otra"))

        self.assertEqual(self.repo.remove_by_text("dup"), 2)
        self.assertEqual(self.repo.remove_by_text("dup"), 0)
        self.assertEqual(self.repo.list().total, 1)

    def test_list_paginacion(self) -> None:
        for i in range(7):
            self.repo.create(Task(id=f"t-{i}", text=f"Tarea {i}"))

        page = self.repo.list(page=2, limit=3)

        self.assertEqual(len(page.items), 3)
        self.assertEqual(page.total, 7)
        self.assertEqual(page.page, 2)
        self.assertEqual(page.limit, 3)
        self.assertEqual(page.total_pages, 3)

        last = self.repo.list(page=3, limit=3)
        self.assertEqual(len(last.items), 1)

    def test_list_valores_por_defecto(self) -> None:
        page = self.repo.list(page=0, limit=-5)

        self.assertEqual((page.page, page.limit), (1, 10))
        self.assertEqual(page.items, [])
        self.assertEqual(page.total, 0)
        self.assertEqual(page.total_pages, 0)

    def test_list_busqueda_sin_distinguir_mayusculas(self) -> None:
        self.repo.create(Task(id="a", text="Buy MILK"))
        self.repo.create(Task(id="b", text="buy bread"))
        self.repo.create(Task(id="c", text="walk the dog"))

        page = self.repo.list(limit=1, search="  buy ")

        self.assertEqual(page.total, 2)
        self.assertEqual(page.total_pages, 2)
        self.assertEqual(len(page.items), 1)

        page = self.repo.list(search="milk")
        self.assertEqual([t.id for t in page.items], ["a"])

        self.repo.create(Task(id="d", text="Ñandú"))
        page = self.repo.list(search="Ñandú")
        self.assertEqual([t.id for t in page.items], ["d"])

    def test_list_busqueda_literal(self) -> None:
        self.repo.create(Task(id="a", text="100% done"))
        self.repo.create(Task(id="b", text="1000 done"))

        page = self.repo.list(search="100%")

        self.assertEqual([t.id for t in page.items], ["a"])

    def test_fallo_del_driver_se_clasifica(self) -> None:
        self.repo.create(Task(id="t-1", text="x"))

        with patch.object(
            self.db, "execute_sql", side_effect=OperationalError("database is locked")
        ):
            with self.assertRaises(DatabaseOperationError) as ctx:
                self.repo.list()

        self.assertEqual(ctx.exception.kind, FaultKind.LOCKED)
        self.assertEqual(ctx.exception.operation, "findAll")

    def test_id_duplicado_es_fallo_de_creacion(self) -> None:
        self.repo.create(Task(id="t-1", text="x"))

        with self.assertRaises(DatabaseOperationError) as ctx:
            self.repo.create(Task(id="t-1", text="y"))

        self.assertEqual(ctx.exception.kind, FaultKind.TASK_CREATE_FAILED)
        self.assertEqual(ctx.exception.operation, "create")


class LegacySchemaTests(unittest.TestCase):
    """Tablas creadas previamente por otros backends."""

    def setUp(self) -> None:
        self.handle = _memory_handle()
        self.db = self.handle.database

    def tearDown(self) -> None:
        self.db.close()

    def test_created_at_snake_case(self) -> None:
        self.db.execute_sql(
            "CREATE TABLE tasks (id VARCHAR(64) PRIMARY KEY, text TEXT NOT NULL, "
            "day TEXT, reminder INTEGER DEFAULT 0, created_at TEXT)"
        )
        repo = PeeweeTaskRepository(self.handle)

        self.assertEqual(repo.list().total, 0)
        self.assertEqual(repo.resolver.resolve().created_column, "created_at")
        names = [c.name for c in self.db.get_columns("tasks")]
        self.assertNotIn("createdAt", names)

        for task_id, created in (
            ("old", "2020-01-01 00:00:00"),
            ("new", "2024-01-01 00:00:00"),
            ("mid", "2022-01-01 00:00:00"),
        ):
            self.db.execute_sql(
                "INSERT INTO tasks (id, text, reminder, created_at) VALUES (?, ?, 0, ?)",
                [task_id, task_id, created],
            )

        self.assertEqual([t.id for t in repo.list().items], ["new", "mid", "old"])

    def test_sin_columnas_de_auditoria(self) -> None:
        self.db.execute_sql(
            "CREATE TABLE tasks (id VARCHAR(64) PRIMARY KEY, text TEXT NOT NULL, "
            "day TEXT, reminder INTEGER DEFAULT 0)"
        )
        repo = PeeweeTaskRepository(self.handle)

        task = repo.create(Task(id=None, text="legacy"))

        self.assertEqual(
            repo.resolver.resolve(), SchemaDescriptor("createdAt", "updatedAt")
        )
        row = self.db.execute_sql(
            'SELECT "createdAt", "updatedAt" FROM tasks WHERE id = ?', [task.id]
        ).fetchone()
        self.assertIsNotNone(row[0])
        self.assertIsNotNone(row[1])


    def test_tabla_heredada_con_filas(self) -> None:
        self.db.execute_sql(
            "CREATE TABLE tasks (id VARCHAR(64) PRIMARY KEY, text TEXT NOT NULL, "
            "day TEXT, reminder INTEGER DEFAULT 0)"
        )
        self.db.execute_sql(
            "INSERT INTO tasks (id, text, day, reminder) VALUES (?, ?, ?, ?)",
            ["old", "previa", "Lunes", 1],
        )
        repo = PeeweeTaskRepository(self.handle)

        page = repo.list()

        self.assertEqual(page.total, 1)
        self.assertEqual(page.items, [Task(id="old", text="previa", day="Lunes", reminder=True)])
        self.assertEqual(
            repo.resolver.resolve(), SchemaDescriptor("createdAt", "updatedAt")
        )
        row = self.db.execute_sql(
            'SELECT "createdAt", "updatedAt" FROM tasks WHERE id = ?', ["old"]
        ).fetchone()
        self.assertIsNotNone(row[0])
        self.assertIsNotNone(row[1])


if __name__ == "__main__":
    unittest.main()
