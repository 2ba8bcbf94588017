#!/usr/bin/env python3
"""Create a forum account. Usage: python -m scripts.create_user <name> <email> --password ... [--admin]"""
import argparse
import sys
from pathlib import Path

# Ensure project root on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from passlib.hash import bcrypt

from agora.database import SessionLocal, engine, Base
from agora.models.user import ROLE_ADMIN, ROLE_MEMBER, User
from agora.services.times import now_millis


def main():
    parser = argparse.ArgumentParser(description="Create a forum account")
    parser.add_argument("name")
    parser.add_argument("email")
    parser.add_argument("--password", required=True)
    parser.add_argument("--city", default="")
    parser.add_argument("--intro", default="")
    parser.add_argument("--admin", action="store_true")
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    existing = (
        db.query(User)
        .filter((User.name == args.name) | (User.email == args.email))
        .first()
    )
    if existing:
        print(f"User '{existing.name}' <{existing.email}> already exists.")
        db.close()
        return

    role = ROLE_ADMIN if args.admin else ROLE_MEMBER
    user = User(
        name=args.name,
        email=args.email,
        password_hash=bcrypt.hash(args.password),
        city=args.city,
        intro=args.intro,
        role=role,
        update_time=now_millis(),
    )
    db.add(user)
    db.commit()
    print(f"Created {role} account: {args.name} <{args.email}>")
    db.close()


if __name__ == "__main__":
    main()
