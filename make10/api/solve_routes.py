# make10/api/solve_routes.py
from __future__ import annotations
import logging

from flask import Blueprint, current_app, jsonify, request

from .. import limiter
from ..core import (
    InvalidInputError,
    SearchOptions,
    coerce_target,
    parse_digits,
    solve_with_stats,
)

logger = logging.getLogger(__name__)

bp = Blueprint("solver", __name__, url_prefix="/api")


def _solve_limit() -> str:
    return current_app.config.get("RATELIMIT_SOLVE", "30 per minute")


def _request_args() -> dict:
    if request.method != "POST":
        return request.args.to_dict()
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInputError("Request body must be a JSON object.")
    return data


# -----------------------------------------------------------------------------
# API: Solve
# -----------------------------------------------------------------------------
@bp.route("/solve", methods=["GET", "POST"])
@limiter.limit(_solve_limit)
def api_solve():
    cfg = current_app.config
    data = {}

    try:
        data = _request_args()
        values = parse_digits(data.get("digits"), cfg["MIN_DIGITS"], cfg["MAX_DIGITS"])
        target = coerce_target(data.get("target"), cfg.get("TARGETS_ENABLED"), cfg["TARGET"])
    except InvalidInputError as e:
        logger.info("Rejected solve request digits=%r: %s", data.get("digits"), e.reason)
        return jsonify({"ok": False, "reason": e.reason}), 400

    try:
        solutions, stats = solve_with_stats(
            values,
            target,
            strategy=cfg["SOLVER_STRATEGY"],
            options=SearchOptions.from_config(cfg),
            workers=cfg["SOLVER_WORKERS"],
        )
    except Exception:
        logger.exception("solve failed for digits=%s target=%s", values, target)
        return jsonify({"ok": False, "reason": "Solver error"}), 500

    logger.info("Solved %s -> %s: %d solutions in %.3fs",
                "".join(map(str, values)), target, stats.solutions, stats.elapsed)
    return jsonify({
        "ok": True,
        "digits": values,
        "target": target,
        "count": len(solutions),
        "solutions": [s.text for s in solutions],
    }), 200


# -----------------------------------------------------------------------------
# API: Health
# -----------------------------------------------------------------------------
@bp.get("/health")
@limiter.exempt
def api_health():
    return jsonify({"ok": True}), 200
