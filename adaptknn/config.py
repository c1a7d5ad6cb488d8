from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import jax

_SUPPORTED_PRECISION = {"float32", "float64"}
_DEFAULT_K = 5
ROOT_LOGGER_NAME = "adaptknn"


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_positive_int(raw: str | None, *, default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid integer value '{raw}'") from exc
    if value <= 0:
        raise ValueError(f"Expected a positive integer, got {value}.")
    return value


def _normalise_precision(value: str | None) -> str:
    if value is None:
        return "float64"
    value = value.strip().lower()
    if value not in _SUPPORTED_PRECISION:
        raise ValueError(f"Unsupported precision '{value}'. Expected one of {_SUPPORTED_PRECISION}.")
    return value


def _infer_precision_from_env() -> str:
    precision = os.getenv("ADAPTKNN_PRECISION")
    if precision:
        return _normalise_precision(precision)
    jax_enable_x64 = os.getenv("JAX_ENABLE_X64")
    if jax_enable_x64 is not None:
        return "float64" if _bool_from_env(jax_enable_x64, default=False) else "float32"
    return "float64"


def _numba_importable() -> bool:
    try:
        import numba  # noqa: F401
    except ImportError:
        return False
    return True


@dataclass(frozen=True)
class RuntimeConfig:
    precision: str
    enable_numba: bool
    log_level: str
    default_k: int

    @property
    def jax_enable_x64(self) -> bool:
        return self.precision == "float64"


def _apply_jax_runtime_flags(config: RuntimeConfig) -> None:
    jax.config.update("jax_enable_x64", config.jax_enable_x64)


def _configure_logging(level: str) -> None:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    precision = _normalise_precision(_infer_precision_from_env())
    enable_numba = _bool_from_env(
        os.getenv("ADAPTKNN_ENABLE_NUMBA"), default=_numba_importable()
    )
    log_level = os.getenv("ADAPTKNN_LOG_LEVEL", "INFO").upper()
    default_k = _parse_positive_int(os.getenv("ADAPTKNN_DEFAULT_K"), default=_DEFAULT_K)

    config = RuntimeConfig(
        precision=precision,
        enable_numba=enable_numba,
        log_level=log_level,
        default_k=default_k,
    )
    _apply_jax_runtime_flags(config)
    _configure_logging(config.log_level)
    return config


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()
