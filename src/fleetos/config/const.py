# src/fleetos/config/const.py
from __future__ import annotations

# Hard defaults; overridden by config.yaml and FLEETOS_* environment variables
API_URL: str = "https://api.fleetos.io"
API_PREFIX: str = "ewa"
API_TIMEOUT: float = 15.0

DEVICE_URLS_BASE: str = "fleetos.io"

WHOAMI_PATH: str = "/user/v1/whoami"
CONFIG_PATH: str = "/config"

CONFIG_FILENAME: str = "config.yaml"
HOME_DIRNAME: str = ".fleetos"
