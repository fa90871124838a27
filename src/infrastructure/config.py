import os
import logging

try:
    import streamlit as st  # type: ignore
    _HAS_STREAMLIT = True
except Exception:
    _HAS_STREAMLIT = False

logger = logging.getLogger(__name__)


def get_secret(name: str, default: str | None = None) -> str | None:
    # Prefer Streamlit secrets if available
    if _HAS_STREAMLIT:
        try:
            if name in st.secrets:
                return str(st.secrets.get(name))
        except Exception as e:
            logger.debug("Streamlit secrets unavailable: %s", e)
    # Fallback to environment variables
    return os.environ.get(name, default)


class Settings:
    @property
    def log_level(self) -> str:
        return (get_secret("LOG_LEVEL", "INFO") or "INFO").upper()

    @property
    def catalog_path(self) -> str | None:
        return get_secret("CF_CATALOG_PATH") or None

    @property
    def app_title(self) -> str:
        return get_secret("CF_APP_TITLE", "Cystic Fibrosis Investigator") or "Cystic Fibrosis Investigator"
