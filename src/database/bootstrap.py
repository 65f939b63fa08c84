"""
Schema bootstrap - creates the employees table and seeds sample rows on first start
"""

import logging
from decimal import Decimal

from database.connection import RecordStore

logger = logging.getLogger(__name__)

CREATE_EMPLOYEES_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS employees (
        id SERIAL PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        salary DECIMAL(10, 2) NOT NULL,
        city VARCHAR(255) NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""

COUNT_EMPLOYEES_SQL = "SELECT COUNT(*) FROM employees"

SEED_EMPLOYEES = [
    ("John Doe", Decimal("50000.00"), "New York"),
    ("Jane Smith", Decimal("60000.00"), "Los Angeles"),
    ("Mike Johnson", Decimal("55000.00"), "Chicago"),
]


def build_seed_insert(rows) -> str:
    """Multi-row INSERT with one positional placeholder triple per row"""
    placeholders = ", ".join(
        f"(${i * 3 + 1}, ${i * 3 + 2}, ${i * 3 + 3})" for i in range(len(rows))
    )
    return f"INSERT INTO employees (name, salary, city) VALUES {placeholders}"


SEED_EMPLOYEES_SQL = build_seed_insert(SEED_EMPLOYEES)


async def bootstrap_database(store: RecordStore) -> bool:
    """
    Ensure the employees table exists and seed it when empty.

    Each step runs only if the previous one succeeded. Failures are logged
    and reported through the return value; nothing is raised, so the API
    still starts in a degraded state.

    Returns:
        True if every step completed, False otherwise
    """
    try:
        await store.execute(CREATE_EMPLOYEES_TABLE_SQL)
        logger.info("Employees table ready")
    except Exception as e:
        logger.error(f"Failed to create employees table: {e}")
        return False

    try:
        count = await store.fetchval(COUNT_EMPLOYEES_SQL)
    except Exception as e:
        logger.error(f"Failed to count employees: {e}")
        return False

    if count:
        logger.info(f"Employees table already has {count} rows - skipping seed")
        return True

    params = [value for row in SEED_EMPLOYEES for value in row]
    try:
        await store.execute(SEED_EMPLOYEES_SQL, *params)
    except Exception as e:
        logger.error(f"Failed to insert sample employees: {e}")
        return False

    logger.info(f"Inserted {len(SEED_EMPLOYEES)} sample employees")
    return True
