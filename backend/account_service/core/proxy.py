"""WSGI proxy middleware and CORS wiring."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Trust one proxy hop and apply the CORS policy to API routes.

    Parameters
    ----------
    app: flask.Flask
        Application whose WSGI pipeline is wrapped.

    Notes
    -----
    ``ProxyFix`` is controlled by ``USE_PROXYFIX`` (defaults to ``True``). It
    rewrites ``request.remote_addr`` from ``X-Forwarded-For``, which is the
    client address used by the IP-scoped rate gate. When ``CORS_ORIGINS`` is
    blank or ``"*"`` any origin is allowed but credentials are not.
    """
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
