from __future__ import annotations

import atexit
import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .admins.controller import register as register_admins
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .container import build_container
from .core.logging import setup_logging
from .dashboard.controller import register as register_dashboard
from .leave.controller import register as register_leave
from .licenses.controller import register as register_licenses
from .reports.controller import register as register_reports
from .staff.controller import register as register_staff

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(settings=settings)
    app.extensions["pharmacy_ops"] = container

    register_auth(app, container)
    register_dashboard(app, container)
    register_licenses(app, container)
    register_staff(app, container)
    register_leave(app, container)
    register_attendance(app, container)
    register_admins(app, container)
    register_reports(app, container)

    if not app.config["TESTING"]:
        # Tests build many apps; each closes its own sessions.
        atexit.register(container.sessions.close_all)

    logger.info(
        "Application ready",
        extra={"settings": settings_module, "backend": getattr(settings, "BACKEND", "memory")},
    )
    return app
