from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


def _env_true(name: str) -> bool:
    v = (os.getenv(name) or "").strip().lower()
    return v in ("1", "true", "yes", "y", "on")


def _env_int(name: str, default: int) -> int:
    v = (os.getenv(name) or "").strip()
    return int(v) if v else default


def _env_path(name: str, default: str, base_dir: Path) -> Path:
    p = Path(os.path.expanduser(os.getenv(name) or default))
    return p if p.is_absolute() else base_dir / p


@dataclass(frozen=True)
class Settings:
    base_url: str
    username: str
    password: str = field(repr=False)
    viewport_width: int = 1440
    viewport_height: int = 900
    headless: bool = True
    channel: Optional[str] = None
    slow_mo_ms: int = 0
    timeout_ms: int = 30000
    nav_timeout_ms: int = 60000
    scenario_dir: Path = Path("scenarios/modules")
    scenario_extensions: Tuple[str, ...] = (".yaml", ".yml")
    error_log_path: Path = Path("artifacts/smoke-errors.json")
    artifact_dir: Path = Path("artifacts")
    login_path: str = "/auth/login"
    # anywhere except the login page itself
    post_login_pattern: str = r"^(?!.*/auth/login).*$"
    auth_timeout_ms: int = 30000
    trace: bool = False


def load_settings(base_dir: str | Path | None = None) -> Settings:
    """
    Load .env, then build Settings from the environment.
    Relative paths are resolved against base_dir (cwd when omitted).
    """
    load_dotenv()
    base = Path(base_dir) if base_dir is not None else Path.cwd()

    is_ci = _env_true("CI")
    headless = _env_true("PW_HEADLESS") if os.getenv("PW_HEADLESS") is not None else is_ci

    exts = os.getenv("SMOKE_SCENARIO_EXT") or ".yaml,.yml"
    extensions = tuple(
        e if e.startswith(".") else f".{e}"
        for e in (x.strip().lower() for x in exts.split(","))
        if e
    )

    return Settings(
        base_url=(os.getenv("SMOKE_BASE_URL") or "").rstrip("/"),
        username=os.getenv("SMOKE_USERNAME") or "",
        password=os.getenv("SMOKE_PASSWORD") or "",
        viewport_width=_env_int("SMOKE_VIEWPORT_WIDTH", 1440),
        viewport_height=_env_int("SMOKE_VIEWPORT_HEIGHT", 900),
        headless=headless,
        channel=os.getenv("PW_CHANNEL") or None,
        slow_mo_ms=_env_int("PW_SLOWMO_MS", 0),
        timeout_ms=_env_int("PW_TIMEOUT_MS", 30000),
        nav_timeout_ms=_env_int("PW_NAV_TIMEOUT_MS", 60000),
        scenario_dir=_env_path("SMOKE_SCENARIO_DIR", "scenarios/modules", base),
        scenario_extensions=extensions,
        error_log_path=_env_path("SMOKE_ERROR_LOG", "artifacts/smoke-errors.json", base),
        artifact_dir=_env_path("ARTIFACT_DIR", "artifacts", base),
        login_path=os.getenv("SMOKE_LOGIN_PATH") or "/auth/login",
        post_login_pattern=os.getenv("SMOKE_POST_LOGIN_PATTERN") or r"^(?!.*/auth/login).*$",
        auth_timeout_ms=_env_int("SMOKE_AUTH_TIMEOUT_MS", 30000),
        trace=_env_true("PW_TRACE"),
    )
