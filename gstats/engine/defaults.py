"""Well-known paths, fixed header values, and runtime settings.

Settings are resolved once from built-in defaults, then an optional
``.env.gstats`` file, then the process environment (later wins).
"""
from __future__ import annotations

import os
import pathlib
import platform
from dataclasses import dataclass
from typing import Final

from dotenv import dotenv_values

# Canned platform descriptor (PC / Windows 10 / Unknown chipset), base64 JSON.
# Sent verbatim on every remote request; never derived from the real host.
CLIENT_PLATFORM: Final = (
    "ew0KCSJwbGF0Zm9ybVR5cGUiOiAiUEMiLA0KCSJwbGF0Zm9ybU9TIjogIldpbmRvd3MiLA0KCSJwbGF0"
    "Zm9ybU9TVmVyc2lvbiI6ICIxMC4wLjE5MDQyLjEuMjU2LjY0Yml0IiwNCgkicGxhdGZvcm1DaGlwc2V0"
    "IjogIlVua25vd24iDQp9"
)

# Local service always authenticates this user, whatever the lock file says.
LOCAL_USERNAME: Final = "riot"

TARGET_PRODUCT: Final = "valorant"


def localDataDir() -> pathlib.Path:
    """Per-user local application data directory for the current OS."""
    system = platform.system()
    if system == "Windows":
        return pathlib.Path(os.environ.get("LOCALAPPDATA", pathlib.Path.home() / "AppData" / "Local"))

    if system == "Darwin":
        return pathlib.Path.home() / "Library" / "Application Support"

    xdg = os.environ.get("XDG_DATA_HOME")
    return pathlib.Path(xdg) if xdg else pathlib.Path.home() / ".local" / "share"


def defaultLockFilePath() -> pathlib.Path:
    return localDataDir() / "Riot Games" / "Riot Client" / "Config" / "lockfile"


def defaultLogFilePath() -> pathlib.Path:
    return localDataDir() / "VALORANT" / "Saved" / "Logs" / "ShooterGame.log"


GS_DEFAULT: Final = dict(
    GSTATS_LOCKFILE=str(defaultLockFilePath()),
    GSTATS_LOGFILE=str(defaultLogFilePath()),
    GSTATS_PRODUCT_ID=TARGET_PRODUCT,
    GSTATS_CLIENT_PLATFORM=CLIENT_PLATFORM,
    GSTATS_HTTP_TIMEOUT="10",
    GSTATS_SOCKET_TIMEOUT="5",
    GSTATS_FILE_TIMEOUT="5",
    GSTATS_LOG_LEVEL="INFO",
    GSTATS_LOG_DIR=str(pathlib.Path.home() / ".cache" / "gstats" / "logs"),
)


def loadConfig(envfile: str = ".env.gstats") -> dict[str, str]:
    """Merge defaults, the optional dotenv file, and the environment."""
    return {**GS_DEFAULT, **dotenv_values(envfile), **os.environ}  # type: ignore


@dataclass(slots=True, frozen=True)
class Settings:
    """Resolved runtime settings shared by every engine component."""

    lockFile: pathlib.Path
    logFile: pathlib.Path
    productId: str = TARGET_PRODUCT
    clientPlatform: str = CLIENT_PLATFORM

    # seconds
    httpTimeout: float = 10.0
    socketTimeout: float = 5.0
    fileTimeout: float = 5.0

    logLevel: str = "INFO"
    logDir: pathlib.Path | None = None

    @classmethod
    def from_config(cls, config: dict[str, str] | None = None) -> Settings:
        cfg = loadConfig() if config is None else {**GS_DEFAULT, **config}

        return cls(
            lockFile=pathlib.Path(cfg["GSTATS_LOCKFILE"]),
            logFile=pathlib.Path(cfg["GSTATS_LOGFILE"]),
            productId=cfg["GSTATS_PRODUCT_ID"],
            clientPlatform=cfg["GSTATS_CLIENT_PLATFORM"],
            httpTimeout=float(cfg["GSTATS_HTTP_TIMEOUT"]),
            socketTimeout=float(cfg["GSTATS_SOCKET_TIMEOUT"]),
            fileTimeout=float(cfg["GSTATS_FILE_TIMEOUT"]),
            logLevel=cfg["GSTATS_LOG_LEVEL"].upper(),
            logDir=pathlib.Path(cfg["GSTATS_LOG_DIR"]),
        )
