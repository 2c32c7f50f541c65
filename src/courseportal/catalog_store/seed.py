"""Reference courses loaded into an empty catalog."""

from __future__ import annotations

import logging
from datetime import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from courseportal.catalog_store.store import CatalogStore

logger = logging.getLogger(__name__)

DEMO_COURSES = [
    {
        "code": "BD101",
        "name": "Base de Datos",
        "credits": 4,
        "capacity": 30,
        "start_time": time(8, 0),
        "end_time": time(10, 0),
    },
    {
        "code": "IO201",
        "name": "Investigación Operativa I",
        "credits": 5,
        "capacity": 25,
        "start_time": time(10, 0),
        "end_time": time(12, 0),
    },
    {
        "code": "PROG101",
        "name": "Programación I",
        "credits": 4,
        "capacity": 35,
        "start_time": time(14, 0),
        "end_time": time(16, 0),
    },
]


def seed_demo_courses(store: CatalogStore) -> bool:
    """Create the reference courses if the catalog has no courses at all.

    Returns:
        True if courses were created, False if the catalog already had data.
    """
    if store.count_courses() > 0:
        logger.info("Catalog already contains courses, skipping seed")
        return False

    for course in DEMO_COURSES:
        store.create_course(**course)
    logger.info("Seeded %d demo courses", len(DEMO_COURSES))
    return True
