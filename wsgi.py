"""
WSGI entrypoint. In production, point your server (gunicorn/uwsgi) here:

    gunicorn 'wsgi:app' --bind 127.0.0.1:1234 --threads 4

Signal-triggered dumps are only wired by the `linkdump` console script;
under a WSGI server use GET /dump instead.
"""

from linkdump import create_app

app = create_app()
