# -*- coding: utf-8 -*-
"""
seed_festivals.py: table setup and demo data for the festival directory.

Modes:
- python seed_festivals.py --create    → create MISSING tables (keeps data)
- python seed_festivals.py --reset     → drop all tables and create them again (DATA IS LOST)
- python seed_festivals.py --demo      → create missing tables and insert the demo festivals

--admin-email/--admin-password with --demo also creates an admin account.
Works with SQLite and PostgreSQL.
"""

import argparse
from datetime import date

from extensions import db
from modules.festivals.models import Festival

DEMO_FESTIVALS = [
    {
        "name": "Oktoberfest",
        "location": "München, Bayern",
        "region": "bayern",
        "address": "Theresienwiese, 80336 München",
        "start_date": date(2025, 9, 21),
        "end_date": date(2025, 10, 6),
        "description": "Das weltberühmte Bierfest mit traditioneller Musik, Trachten und bayerischer Kultur.",
        "latitude": 48.1351,
        "longitude": 11.5820,
    },
    {
        "name": "Almabtrieb",
        "location": "Mayrhofen, Tirol",
        "region": "tirol",
        "address": "Ortszentrum, 6290 Mayrhofen",
        "start_date": date(2025, 9, 26),
        "end_date": date(2025, 9, 26),
        "description": "Traditionelles Fest zur Rückkehr der Kühe von den Almen ins Tal mit festlich geschmückten Tieren.",
        "latitude": 47.1639,
        "longitude": 11.8656,
    },
    {
        "name": "Salzburger Festspiele",
        "location": "Salzburg, Österreich",
        "region": "oesterreich",
        "address": "Hofstallgasse 1, 5020 Salzburg",
        "start_date": date(2025, 7, 18),
        "end_date": date(2025, 8, 30),
        "description": "Eines der bedeutendsten Festivals für Oper, Theater und klassische Musik in Europa.",
        "latitude": 47.8095,
        "longitude": 13.0550,
    },
    {
        "name": "Nürnberger Christkindlesmarkt",
        "location": "Nürnberg, Bayern",
        "region": "bayern",
        "address": "Hauptmarkt, 90403 Nürnberg",
        "start_date": date(2025, 11, 28),
        "end_date": date(2025, 12, 24),
        "description": "Einer der ältesten und bekanntesten Weihnachtsmärkte Deutschlands.",
        "latitude": 49.4521,
        "longitude": 11.0767,
    },
    {
        "name": "Wiener Opernball",
        "location": "Wien, Österreich",
        "region": "oesterreich",
        "address": "Opernring 2, 1010 Wien",
        "start_date": date(2025, 2, 20),
        "end_date": date(2025, 2, 20),
        "description": "Gesellschaftliches Großereignis der Wiener Ballsaison in der Wiener Staatsoper.",
        "latitude": 48.2035,
        "longitude": 16.3694,
    },
]


def reset_tables():
    """Drop every table and create them again from the current models."""
    db.drop_all()
    db.create_all()
    db.session.commit()


def create_missing_tables():
    """Create missing tables (no ALTER of existing ones)."""
    db.create_all()
    db.session.commit()


def load_demo_festivals(creator_id=None) -> int:
    """Insert demo festivals that are not there yet (matched by name); returns how many were added."""
    added = 0
    for row in DEMO_FESTIVALS:
        if Festival.query.filter_by(name=row["name"]).first():
            continue
        db.session.add(Festival(created_by=creator_id, **row))
        added += 1
    db.session.commit()
    return added


def main():
    from app import create_app
    from create_user import create_user

    parser = argparse.ArgumentParser(description="Init festival directory tables")
    grp = parser.add_mutually_exclusive_group(required=True)
    grp.add_argument("--create", action="store_true", help="create missing tables (no data loss)")
    grp.add_argument("--reset", action="store_true", help="drop and recreate all tables (data is lost)")
    grp.add_argument("--demo", action="store_true", help="insert the demo festivals")
    parser.add_argument("--admin-username", default="admin")
    parser.add_argument("--admin-email")
    parser.add_argument("--admin-password")

    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        if args.reset:
            print("→ Dropping and creating tables …")
            reset_tables()
            print("✔ Done: tables recreated from scratch.")
        elif args.create:
            print("→ Creating missing tables …")
            create_missing_tables()
            print("✔ Done: missing tables created (existing ones untouched).")
        elif args.demo:
            create_missing_tables()
            creator_id = None
            if args.admin_email and args.admin_password:
                admin = create_user(args.admin_username, args.admin_email, args.admin_password, "admin")
                creator_id = admin.id if admin else None
            added = load_demo_festivals(creator_id)
            print(f"✔ Done: {added} demo festivals added.")


if __name__ == "__main__":
    main()
