"""
config.py — Application Settings
=================================
Flask-style config objects.  The app factory loads one of these with
`app.config.from_object(...)`; every attribute in UPPER_CASE becomes a
config key.

    Config              – production defaults
    DevelopmentConfig   – debug on, verbose logging
    TestingConfig       – TESTING flag, small run cache

`Config.from_env()` returns a subclass whose values are overridden by
ALGOVIZ_* environment variables (host, port, debug, log level, run cache
size, node limit).
"""

import os
from typing import Type


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    HOST:            str  = "127.0.0.1"
    PORT:            int  = 5000
    DEBUG:           bool = False
    TESTING:         bool = False
    LOG_LEVEL:       str  = "INFO"
    LOG_FORMAT:      str  = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

    # bounded in-memory store of finished runs (oldest evicted first)
    MAX_RUNS:        int  = 32
    # graphs larger than this are rejected at the API boundary
    MAX_GRAPH_NODES: int  = 500

    JSON_SORT_KEYS:  bool = False

    @classmethod
    def from_env(cls, environ=None) -> Type["Config"]:
        """Return a Config subclass with ALGOVIZ_* overrides applied."""
        env = os.environ if environ is None else environ
        overrides = {}
        if "ALGOVIZ_HOST" in env:
            overrides["HOST"] = env["ALGOVIZ_HOST"]
        if "ALGOVIZ_PORT" in env:
            overrides["PORT"] = int(env["ALGOVIZ_PORT"])
        if "ALGOVIZ_DEBUG" in env:
            overrides["DEBUG"] = _env_bool(env["ALGOVIZ_DEBUG"])
        if "ALGOVIZ_LOG_LEVEL" in env:
            overrides["LOG_LEVEL"] = env["ALGOVIZ_LOG_LEVEL"].upper()
        if "ALGOVIZ_MAX_RUNS" in env:
            overrides["MAX_RUNS"] = int(env["ALGOVIZ_MAX_RUNS"])
        if "ALGOVIZ_MAX_NODES" in env:
            overrides["MAX_GRAPH_NODES"] = int(env["ALGOVIZ_MAX_NODES"])
        return type("EnvConfig", (cls,), overrides)


class DevelopmentConfig(Config):
    DEBUG     = True
    LOG_LEVEL = "DEBUG"


class TestingConfig(Config):
    TESTING  = True
    MAX_RUNS = 4
