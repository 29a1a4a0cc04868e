"""
Seed demo users for the portal.

- Inserts one admin and a few technicians (idempotent by email).
- Existing rows keep their name; their role and code are brought back in line.

Run:
    python -m scripts.seed_demo

Environment overrides:
- SEED_ADMIN_EMAIL   -> email for the admin row (default admin@example.com)
"""
import os

from portal import create_app
from portal.models import db, Technician


def demo_users():
    return [
        {'email': os.environ.get('SEED_ADMIN_EMAIL', 'admin@example.com'),
         'name': 'Office Admin', 'role': 'admin', 'technician_code': None},
        {'email': 'tech.alvarez@example.com', 'name': 'Maria Alvarez', 'role': 'technician', 'technician_code': 'T01'},
        {'email': 'tech.nguyen@example.com', 'name': 'Kevin Nguyen', 'role': 'technician', 'technician_code': 'T02'},
        {'email': 'tech.brooks@example.com', 'name': 'Dana Brooks', 'role': 'technician', 'technician_code': 'T03'},
    ]


def seed(users):
    created = updated = 0
    for u in users:
        email = u['email'].strip().lower()
        row = Technician.query.filter_by(email=email).first()
        if row is None:
            db.session.add(Technician(email=email, name=u['name'], role=u['role'],
                                      technician_code=u['technician_code']))
            created += 1
        elif row.role != u['role'] or row.technician_code != u['technician_code']:
            row.role = u['role']
            row.technician_code = u['technician_code']
            updated += 1
    db.session.commit()
    return created, updated


def main():
    app = create_app()
    with app.app_context():
        created, updated = seed(demo_users())
        print(f'Seed complete: {created} created, {updated} updated')


if __name__ == '__main__':
    main()
