from peewee import SQL, CharField, IntegerField, Model

TABLE_NAME = "tasks"


class TaskModel(Model):
    """
    Esquema mínimo de `tasks` para crearla si no existe.

    Las columnas de auditoría no se declaran aquí: se detectan o se añaden en
    tiempo de ejecución (ver SchemaResolver).
    """

    id = CharField(max_length=64, primary_key=True)
    text = CharField()
    day = CharField(null=True)
    reminder = IntegerField(null=True, default=0, constraints=[SQL("DEFAULT 0")])

    class Meta:
        table_name = TABLE_NAME
