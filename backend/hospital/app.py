"""WSGI entry point: ``gunicorn hospital.app:app`` or ``python -m hospital.app``."""

import os

from hospital.core.config import is_production
from hospital.db.session import create_tables
from hospital.main import create_app

app = create_app()

if __name__ == "__main__":
    # Development server; deployed databases get their schema from manage.py
    create_tables()
    app.run(
        host="0.0.0.0",
        port=int(os.getenv("PORT", "5000")),
        debug=not is_production(),
    )
