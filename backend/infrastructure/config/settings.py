import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# 统一加载环境变量，确保配置来源一致。
# 注意：本项目以项目根目录的 .env 为主要开发配置来源，优先级应高于外部 shell 环境变量，
# 否则容易出现“明明改了 .env 但运行仍读到旧值”的情况。
load_dotenv(override=True)


def _get_env_int(key: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"环境变量 {key} 需要整数值，但当前为 {raw}") from exc


def _get_env_float(key: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"环境变量 {key} 需要浮点值，但当前为 {raw}") from exc


def _get_env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    return raw.lower() in {"1", "true", "yes", "y", "on"}


# ===== 基础路径设置 =====
#
# NOTE:
# - All backend code lives under `<repo>/backend/`.
# - Persisted JSON stores live under `<repo>/data/` unless DATA_DIR says otherwise.

INFRASTRUCTURE_DIR = Path(__file__).resolve().parent.parent  # backend/infrastructure/
_BACKEND_DIR = INFRASTRUCTURE_DIR.parent  # backend/

# Prefer repo root when the monorepo layout is detected; otherwise fall back to cwd
# (useful for installed runtime packages / container deployments).
if _BACKEND_DIR.name == "backend":
    PROJECT_ROOT = _BACKEND_DIR.parent
else:
    PROJECT_ROOT = Path.cwd()


# ===== 持久化文件路径 =====

DATA_DIR = Path(os.getenv("DATA_DIR", PROJECT_ROOT / "data")).expanduser()
WISHLIST_PATH = Path(os.getenv("WISHLIST_PATH", DATA_DIR / "wishlist.json")).expanduser()
EMAIL_CONFIG_PATH = Path(os.getenv("EMAIL_CONFIG_PATH", DATA_DIR / "email_config.json")).expanduser()


# ===== 管理员口令 =====

# Empty means "not configured": every admin operation is rejected with 500.
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")


# ===== TMDB API 配置 =====

TMDB_BASE_URL = os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3").strip()
TMDB_API_TOKEN = os.getenv("TMDB_API_TOKEN", "").strip()
TMDB_API_KEY = os.getenv("TMDB_API_KEY", "").strip()
TMDB_TIMEOUT_S = _get_env_float("TMDB_TIMEOUT_S", 10.0) or 10.0
TMDB_LANGUAGE = os.getenv("TMDB_LANGUAGE", "zh-CN").strip() or "zh-CN"
TMDB_IMAGE_BASE_URL = (
    os.getenv("TMDB_IMAGE_BASE_URL", "https://image.tmdb.org/t/p/w500").strip()
    or "https://image.tmdb.org/t/p/w500"
)
CATALOG_MAX_RESULTS = _get_env_int("CATALOG_MAX_RESULTS", 10) or 10


# ===== SMTP 通知配置 =====
#
# Account and credential are managed at runtime through /api/email-config;
# only the transport lives in env.

SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com").strip()
SMTP_PORT = _get_env_int("SMTP_PORT", 587) or 587
SMTP_USE_TLS = _get_env_bool("SMTP_USE_TLS", True)
SMTP_USE_SSL = _get_env_bool("SMTP_USE_SSL", False)
SMTP_TIMEOUT_S = _get_env_float("SMTP_TIMEOUT_S", 10.0) or 10.0
