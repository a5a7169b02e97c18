# backend/sindbad/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored next to the instance by default
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",  # optional alternative location
        "sqlite:///sindbad.sqlite3",  # default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Branding used on visa cards and share messages
    AGENCY_NAME = os.environ.get("AGENCY_NAME", "السندباد للسياحة")
    AGENCY_PHONES = [
        p.strip()
        for p in os.environ.get(
            "AGENCY_PHONES", "01119452522,01061662279,01055779948"
        ).split(",")
        if p.strip()
    ]

    # Country prefix applied when normalizing local phone numbers (Egypt)
    DEFAULT_COUNTRY_PREFIX = os.environ.get("DEFAULT_COUNTRY_PREFIX", "2")
