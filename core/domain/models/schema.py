from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SchemaDescriptor:
    """
    Columnas de auditoría realmente presentes en la tabla `tasks`.

    Cada rol guarda el nombre físico descubierto (p. ej. "createdAt" o
    "created_at"), o None si la columna no existe y no pudo añadirse.
    """

    created_column: str | None = None
    updated_column: str | None = None

    @property
    def order_column(self) -> str:
        """Columna de ordenación: creación, luego actualización, luego id."""
        return self.created_column or self.updated_column or "id"
