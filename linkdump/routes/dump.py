"""
Dump route: trigger a flush over HTTP.

`GET /dump` respects the minimum-links threshold; `GET /dump?force` (any
value, even empty) bypasses it.
"""

from __future__ import annotations
from flask import Blueprint, current_app, request

from linkdump.managers.flush_manager import FlushController
from linkdump.utils import text_response

bp = Blueprint("dump", __name__, url_prefix="/dump")


@bp.route("", methods=["GET"])
def dump():
    flush_ctl: FlushController = current_app.extensions["flush_ctl"]
    force = "force" in request.args

    if flush_ctl.flush(force):
        return text_response("Dump successful, email incoming!\n")
    return text_response("Dump failed, see log for details\n")
