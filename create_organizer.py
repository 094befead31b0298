#!/usr/bin/env python3
"""Create (or reset) an organizer account"""

import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from app import crud
from app.db.database import SessionLocal
from app.models.user import UserRole
from app.schemas.user import UserCreate

def create_organizer(email: str, password: str, full_name: str) -> None:
    db = SessionLocal()

    try:
        existing = crud.user.get_by_email(db, email=email)
        if existing:
            crud.user.update(db, db_obj=existing, obj_in={"password": password, "is_active": True})
            existing.role = UserRole.ORGANIZER
            db.commit()
            print(f'Organizer {email} already existed, password reset')
        else:
            crud.user.create(
                db,
                obj_in=UserCreate(email=email, password=password, full_name=full_name, role=UserRole.ORGANIZER),
            )
            print(f'Organizer created: {email}')
    except Exception as e:
        print(f'Error creating organizer: {e}')
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python create_organizer.py <email> <password> [full name]")
        sys.exit(1)
    create_organizer(sys.argv[1], sys.argv[2], " ".join(sys.argv[3:]) or "Event Organizer")
