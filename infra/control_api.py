"""
HTTP control surface.

Endpoints:
    GET /api/run?interval=<ms>  - start the read workload
    GET /api/stop               - stop the read workload
    GET /api/metrics            - last completed window as JSON
    GET /img/<path>             - static files from the NFS mount
"""

from __future__ import annotations

import json
import logging
import os
import re
import threading

from flask import Blueprint, Flask, Response, current_app, request, send_from_directory

from app.context import LoadTestContext
from domain.errors import AlreadyRunning

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)
img_bp = Blueprint("img", __name__)

CONTEXT_KEY = "LOADTEST_CONTEXT"

_DIGITS = re.compile(r"[0-9]+")


def _ctx() -> LoadTestContext:
    return current_app.config[CONTEXT_KEY]


def _text(body: str, status: int = 200) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def parse_interval_ms(raw: str | None, default_ms: int) -> int:
    """
    Interval from the query string; anything unusable falls back to the
    default (logged, never an error response).
    """
    if raw is None or raw == "":
        return default_ms
    if not _DIGITS.fullmatch(raw):
        logger.warning("invalid interval %r, using default %dms", raw, default_ms)
        return default_ms
    value = int(raw)
    # longest sleep threading can wait on
    if value / 1000.0 > threading.TIMEOUT_MAX:
        logger.warning("interval %r too large, using default %dms", raw, default_ms)
        return default_ms
    return value


@api_bp.route("/run", methods=["GET", "POST"])
def run_workload() -> Response:
    ctx = _ctx()
    interval_ms = parse_interval_ms(request.args.get("interval"), ctx.config.default_interval_ms)
    try:
        ctx.runner.start(interval_ms / 1000.0)
    except AlreadyRunning as e:
        return _text(f"{e}\n", 400)
    return _text("success\n")


@api_bp.route("/stop", methods=["GET", "POST"])
def stop_workload() -> Response:
    _ctx().runner.stop()
    return _text("success\n")


@api_bp.route("/metrics", methods=["GET"])
def get_metrics() -> Response:
    snap = _ctx().store.get_current()
    logger.debug("metrics: %s", snap)
    try:
        body = json.dumps(snap.to_wire(), allow_nan=False)
    except ValueError as e:
        logger.error("failed to encode metrics %s: %s", snap, e)
        return _text(f"Failed to Marshal data: {e}\n", 500)
    return Response(body + "\n", status=200, mimetype="application/json")


@img_bp.route("/img/<path:filename>", methods=["GET"])
def serve_image(filename: str) -> Response:
    # /img/x lives at <nfs_dir>/img/x
    return send_from_directory(os.path.join(_ctx().config.nfs_dir, "img"), filename)


def create_app(ctx: LoadTestContext) -> Flask:
    app = Flask(__name__)
    app.config[CONTEXT_KEY] = ctx
    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(img_bp)
    logger.info("control API ready: target=%s", ctx.config.target_path)
    return app
