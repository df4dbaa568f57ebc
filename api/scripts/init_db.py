"""
Script para inicializar la base de datos en desarrollo.

Crea las tablas (sin Alembic) y carga las reglas de prioridad por tipo de
carga si la tabla esta vacia.
"""
import asyncio
import sys
from pathlib import Path

from loguru import logger
from sqlalchemy import func, select

_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

from portlink.infrastructure.database.models import PriorityRuleModel
from portlink.infrastructure.database.session import AsyncSessionLocal, close_db, init_db


DEFAULT_PRIORITY_RULES = [
    ("MEDICAL", "EMERGENCY", 0, False, "Medical supplies", "#DC2626"),
    ("PERISHABLE", "EMERGENCY", 30, False, "Perishable food", "#EA580C"),
    ("TIME_SENSITIVE", "ESSENTIAL", 120, False, "Time-sensitive cargo", "#CA8A04"),
    ("STANDARD", "NORMAL", 480, True, "General cargo", "#2563EB"),
    ("BULK", "LOW", 1440, True, "Bulk cargo", "#6B7280"),
]


async def main():
    """Crea las tablas y siembra las reglas de prioridad."""
    logger.info("Inicializando base de datos...")

    try:
        await init_db()
        async with AsyncSessionLocal() as session:
            existing = (await session.execute(select(func.count()).select_from(PriorityRuleModel))).scalar_one()
            if existing:
                logger.info(f"Reglas de prioridad ya cargadas ({existing}), se omite el seed")
            else:
                for cargo_type, level, delay, can_halt, description, color in DEFAULT_PRIORITY_RULES:
                    session.add(PriorityRuleModel(
                        cargo_type=cargo_type,
                        priority_level=level,
                        max_delay_minutes=delay,
                        can_be_halted=can_halt,
                        description=description,
                        color_code=color,
                    ))
                await session.commit()
                logger.info(f"Reglas de prioridad creadas: {len(DEFAULT_PRIORITY_RULES)}")
        logger.success("Base de datos inicializada correctamente")
    except Exception as e:
        logger.error(f"Error al inicializar base de datos: {e}")
        raise
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
