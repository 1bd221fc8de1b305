from __future__ import annotations

# salary_api/config.py
import logging
import os
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# DB 路径解析顺序：
# 1) 环境变量 SALARY_DB_PATH（最高优先级）
# 2) config.yaml 的 test_db_path（当检测到测试环境时）
# 3) config.yaml 的 db_path（生产默认）
# 4) 兜底：项目根 salary.db
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_ROOT_DB = os.path.join(_PROJECT_ROOT, "salary.db")

DEFAULTS: dict[str, Any] = {
    "docs_url": "https://api.dbknews.com/#tag-salary",
    "cors_origins": ["*"],
    "query_timeout_s": 10.0,
    "expose_errors": False,
    "years": None,
    "log_level": "INFO",
}


def config_path() -> str:
    return os.environ.get("SALARY_CONFIG") or os.path.join(_PROJECT_ROOT, "config.yaml")


def _read_config_yaml() -> dict:
    cfg_path = config_path()
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.warning("config_unreadable path=%s err=%s", cfg_path, e)
        return {}
    if not isinstance(cfg, dict):
        logger.warning("config_not_a_mapping path=%s", cfg_path)
        return {}
    return cfg


def _as_bool(v: Any) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes", "on")
    return bool(v)


def _as_str_list(v: Any) -> list[str]:
    if isinstance(v, str):
        return [s.strip() for s in v.split(",") if s.strip()]
    return [str(s).strip() for s in v if str(s).strip()]


def _resolve(path: str) -> str:
    return path if os.path.isabs(path) else os.path.join(_PROJECT_ROOT, path)


def get_settings() -> dict:
    """Typed settings plus the resolved db_path, from a single read of the config file."""
    cfg = _read_config_yaml()

    # 转换为正确类型 & 默认兜底
    years = cfg.get("years", DEFAULTS["years"])
    out = {
        "db_path": get_db_path(cfg),
        "docs_url": str(cfg.get("docs_url") or DEFAULTS["docs_url"]),
        "cors_origins": _as_str_list(cfg.get("cors_origins") or DEFAULTS["cors_origins"]),
        "query_timeout_s": float(cfg.get("query_timeout_s", DEFAULTS["query_timeout_s"]) or 0),
        "expose_errors": _as_bool(cfg.get("expose_errors", DEFAULTS["expose_errors"])),
        "years": _as_str_list(years) if years else None,
        "log_level": str(cfg.get("log_level") or DEFAULTS["log_level"]).upper(),
    }
    return out


def get_db_path(cfg: dict | None = None) -> str:
    env_path = os.environ.get("SALARY_DB_PATH")
    if cfg is None:
        cfg = _read_config_yaml()
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        return env_path
    if is_test and isinstance(cfg_test, str) and cfg_test.strip():
        return _resolve(cfg_test.strip())
    if isinstance(cfg_db, str) and cfg_db.strip():
        return _resolve(cfg_db.strip())
    return _ROOT_DB
