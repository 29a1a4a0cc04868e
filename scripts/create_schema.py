"""
Create the portal tables in the database pointed to by DATABASE_URL.

Run:
    python -m scripts.create_schema
"""
from portal import create_app
from portal.models import db


def main():
    app = create_app()
    with app.app_context():
        print('Database:', db.engine.url.render_as_string(hide_password=True))
        db.create_all()
        print('Tables ensured:', ', '.join(sorted(db.metadata.tables)))


if __name__ == '__main__':
    main()
