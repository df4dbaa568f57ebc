"""
INSERT ... ON CONFLICT DO UPDATE portable entre PostgreSQL y SQLite.

Ambos dialectos exponen la misma API (on_conflict_do_update / excluded);
solo cambia el modulo del que se importa `insert`.
"""
from typing import Any, Dict, Sequence

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


def build_upsert(
    session: AsyncSession,
    model,
    row: Dict[str, Any],
    conflict_columns: Sequence[str],
):
    """
    Construye el UPSERT de una fila para el dialecto de la sesion.

    - No actualiza las columnas de la clave natural ni el PK.
    - Fuerza updated_at = now() cuando el modelo tiene esa columna.
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(model).values(**row)
    elif dialect == "sqlite":
        stmt = sqlite.insert(model).values(**row)
    else:
        raise NotImplementedError(f"UPSERT no soportado para el dialecto '{dialect}'")

    skip = set(conflict_columns) | {"id"}
    set_ = {c: stmt.excluded[c] for c in row if c not in skip}
    if "updated_at" in model.__table__.c:
        set_["updated_at"] = func.now()

    return stmt.on_conflict_do_update(index_elements=list(conflict_columns), set_=set_)
