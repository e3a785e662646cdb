#!/usr/bin/env python3
"""
Seed the subject catalogue from YAML.

Usage:
    # Standalone:
    python scripts/seed_subjects.py

    # With test database:
    USE_TEST_DATABASE=true python scripts/seed_subjects.py
"""

import os
from pathlib import Path
import sys
from typing import List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
import yaml

# Add the parent directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tutorlink.core.config import settings
from tutorlink.services.subject_service import SubjectService


def load_subjects_yaml() -> List[str]:
    """Load subject names from seed_data/subjects.yaml."""
    subjects_file = Path(__file__).parent / "seed_data" / "subjects.yaml"
    with open(subjects_file, "r") as f:
        data = yaml.safe_load(f) or {}
    return [str(name).strip() for name in data.get("subjects", []) if str(name).strip()]


def seed_subjects(db_url: Optional[str] = None, verbose: bool = True) -> int:
    """
    Insert any subjects missing from the catalogue.

    Returns:
        Number of subjects created
    """
    if db_url is None:
        if os.getenv("USE_TEST_DATABASE") == "true":
            db_url = settings.test_database_url
            if verbose:
                print("Using TEST database")
        else:
            db_url = settings.database_url
            if verbose:
                print("Using PRODUCTION database")

    engine = create_engine(db_url)
    session_factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    names = load_subjects_yaml()

    db = session_factory()
    try:
        created = SubjectService(db).seed_defaults(names)
    finally:
        db.close()
        engine.dispose()

    if verbose:
        print(f"Subjects: {created} created, {len(names) - created} already present")
    return created


if __name__ == "__main__":
    seed_subjects()
