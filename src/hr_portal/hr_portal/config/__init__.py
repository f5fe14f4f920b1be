import os


def get_settings_module(package: str) -> str:
    """Settings module for the current ``APP_ENV`` (development by default)."""
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return f"{package}.config.production"

    if env in {"test", "testing"}:
        return f"{package}.config.testing"

    return f"{package}.config.development"
