import logging
import os

from dotenv import load_dotenv
from flask import Flask

# Only load from .env when DATABASE_URL is not already defined by the environment
if not os.getenv("DATABASE_URL"):
    load_dotenv()

from hospital.core import config  # noqa: E402

logger = logging.getLogger(__name__)


def _init_sentry(env: str) -> None:
    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        logger.info(
            "Sentry not initialized (SENTRY_DSN not set)",
            extra={"context": {"environment": env}},
        )
        return

    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=sentry_dsn,
        environment=env,
        release=os.getenv("GIT_SHA", "unknown"),
        integrations=[
            FlaskIntegration(),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,  # Patient data must never leave the service
    )
    logger.info(
        "Sentry initialized",
        extra={
            "context": {
                "environment": env,
                "release": os.getenv("GIT_SHA", "unknown"),
                "traces_sample_rate": 0.1,
            }
        },
    )


def create_app() -> Flask:
    env = config.get_environment()
    is_production = config.is_production()

    app = Flask(__name__)
    app.json.sort_keys = False

    # Set TESTING before anything else so test mode is detected even when
    # tests build the app directly
    if config.is_testing():
        app.config["TESTING"] = True

    from hospital.core.logging_config import setup_logging

    setup_logging(
        app=app,
        log_level=config.get_log_level(),
        enable_sql_echo=os.getenv("SQL_ECHO", "0").lower() in ("true", "1", "yes"),
        log_to_file=config.get_log_to_file(),
        use_json_format=is_production,  # JSON logs in production, colored in dev
    )
    config.log_timezone_config()
    logger.info(
        "Application starting",
        extra={
            "context": {
                "environment": env,
                "consulta_duracao_minutos": config.get_consulta_duracao_minutos(),
            }
        },
    )

    _init_sentry(env)

    from hospital.core.limiter_config import limiter

    app.config["RATELIMIT_STORAGE_URI"] = config.get_limiter_storage_uri()
    app.config["RATELIMIT_ENABLED"] = config.get_rate_limit_enabled()
    limiter.init_app(app)
    limiter.enabled = config.get_rate_limit_enabled()
    if not limiter.enabled:
        logger.info(
            "Rate limiting disabled",
            extra={"context": {"test_mode": config.is_testing()}},
        )

    from hospital.core.api_utils import close_db_session
    from hospital.core.error_handlers import register_error_handlers

    register_error_handlers(app)
    app.teardown_appcontext(close_db_session)

    from hospital.core.api_utils import IdConverter

    # Must be in place before any rule using <int:...> is added
    app.url_map.converters["int"] = IdConverter

    from hospital.controllers import ALL_BLUEPRINTS

    for blueprint in ALL_BLUEPRINTS:
        app.register_blueprint(blueprint)

    # Health checks must stay reachable under load
    limiter.exempt(app.view_functions["health.health_check"])

    logger.info(
        "Blueprints registered",
        extra={"context": {"blueprints": [bp.name for bp in ALL_BLUEPRINTS]}},
    )
    return app
