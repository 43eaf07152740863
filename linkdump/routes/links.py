"""
Queue routes: list the queued links (GET /) and submit one (POST /).
"""

from __future__ import annotations
from flask import Blueprint, current_app, request

from linkdump.errors import ValidationError
from linkdump.managers.queue_store import LinkQueue
from linkdump.utils import text_response

bp = Blueprint("links", __name__, url_prefix="/")


@bp.route("/", methods=["GET"])
def list_links():
    """Render the current queue, one numbered link per line."""
    queue: LinkQueue = current_app.extensions["link_queue"]
    lines = [f"{pos}. {link}\n" for pos, link in queue.listing()]
    if not lines:
        return text_response("linkdump queue is empty!\n")
    return text_response("linkdump queue:\n\n" + "".join(lines))


@bp.route("/", methods=["POST"])
def submit_link():
    """
    Queue a link.

    Form body (or query string):
      link=<url>
    """
    queue: LinkQueue = current_app.extensions["link_queue"]
    try:
        position = queue.submit(request.values.get("link", ""))
    except ValidationError as e:
        current_app.logger.info("Rejected link: %s", e.reason)
        return text_response(f"400 Bad Request ({e.reason})\n", 400)

    return text_response(f"Link #{position} pushed to queue!\n")
