# make10/__init__.py
from __future__ import annotations
import os
import logging
import click
from flask import Flask

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .config import Config, config_by_name

# --- extensions ---
# in-memory limiter; swap storage_uri for redis in prod
limiter = Limiter(get_remote_address, storage_uri="memory://")


def create_app(config_class=None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)

    # ---------------------------
    # Config
    # ---------------------------
    if config_class is None:
        config_class = config_by_name.get(os.environ.get("MAKE10_ENV", "default"), Config)
    app.config.from_object(config_class)
    app.config.from_pyfile("config.py", silent=True)  # instance/config.py (optional)

    # ---------------------------
    # Logging
    # ---------------------------
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO
    app.logger.setLevel(level)
    for name in ("make10", "make10.core", "make10.api"):
        logging.getLogger(name).setLevel(level)

    # ---------------------------
    # Extensions init
    # ---------------------------
    limiter.init_app(app)

    # ---------------------------
    # Blueprints
    # ---------------------------
    from .api.solve_routes import bp as solver_bp
    app.register_blueprint(solver_bp)

    @app.after_request
    def set_security_headers(resp):
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return resp

    # ---------------------------
    # CLI commands
    # ---------------------------
    @app.cli.command("solve")
    @click.argument("digits")
    @click.option("--target", type=int, default=None, help="Value to reach (default: TARGET).")
    @click.option("--strategy", type=click.Choice(["indexed", "exhaustive"]), default=None)
    @click.option("--workers", type=int, default=None, help="Worker processes for the search.")
    @click.option("--stats", "show_stats", is_flag=True, help="Print search counters after the solutions.")
    def solve_command(digits, target, strategy, workers, show_stats):
        """Print every way to make the target from DIGITS, simplest first."""
        from .core import InvalidInputError, SearchOptions, parse_digits, solve_with_stats

        cfg = app.config
        try:
            values = parse_digits(digits, cfg["MIN_DIGITS"], cfg["MAX_DIGITS"])
        except InvalidInputError as e:
            raise click.UsageError(e.reason)

        solutions, stats = solve_with_stats(
            values,
            cfg["TARGET"] if target is None else target,
            strategy=strategy or cfg["SOLVER_STRATEGY"],
            options=SearchOptions.from_config(cfg),
            workers=cfg["SOLVER_WORKERS"] if workers is None else workers,
        )
        if not solutions:
            click.echo("No solutions.")
        for s in solutions:
            click.echo(s.text)
        if show_stats:
            click.echo(
                f"# {stats.solutions} solutions, {stats.matches} matches, "
                f"{stats.joins} joins, {stats.lookups} lookups, {stats.elapsed:.3f}s [{stats.strategy}]"
            )

    @app.cli.command("check")
    @click.argument("expression")
    @click.argument("digits")
    @click.option("--target", type=int, default=None)
    def check_command(expression, digits, target):
        """Evaluate EXPRESSION exactly and check it against DIGITS and the target."""
        from .core import InvalidInputError, evaluate_text, parse_digits

        cfg = app.config
        goal = cfg["TARGET"] if target is None else target
        try:
            values = parse_digits(digits, cfg["MIN_DIGITS"], cfg["MAX_DIGITS"])
        except InvalidInputError as e:
            raise click.UsageError(e.reason)
        try:
            value = evaluate_text(expression, values)
        except ValueError as e:
            raise click.ClickException(str(e))

        verdict = "hits" if value == goal else "misses"
        click.echo(f"{expression} = {value} ({verdict} {goal})")

    app.logger.info("make10 ready (target=%s, strategy=%s)",
                    app.config["TARGET"], app.config["SOLVER_STRATEGY"])
    return app
