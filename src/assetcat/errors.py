"""Error and warning codes for assetcat."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_ROOT_UNREADABLE = "E_ROOT_UNREADABLE"
E_UNSUPPORTED_EXTENSION = "E_UNSUPPORTED_EXTENSION"
E_BAD_PATH = "E_BAD_PATH"
E_CONFIG = "E_CONFIG"

# Reported conditions; these never propagate as exceptions.
W_DUPLICATE_SYMBOL = "W_DUPLICATE_SYMBOL"
W_EMPTY_SYMBOL = "W_EMPTY_SYMBOL"
W_NAMESPACE_CONFLICT = "W_NAMESPACE_CONFLICT"


@dataclass
class CatalogError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class CatalogReadError(CatalogError):
    pass


class CatalogParseError(CatalogError):
    pass


class ConfigError(CatalogError):
    pass


def read_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> CatalogReadError:
    return CatalogReadError(
        code=E_ROOT_UNREADABLE, message=message, context=context
    )


def parse_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> CatalogParseError:
    return CatalogParseError(code=E_BAD_PATH, message=message, context=context)


def config_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> ConfigError:
    return ConfigError(code=E_CONFIG, message=message, context=context)


__all__ = [
    "CatalogError",
    "CatalogReadError",
    "CatalogParseError",
    "ConfigError",
    "read_error",
    "parse_error",
    "config_error",
    "E_ROOT_UNREADABLE",
    "E_UNSUPPORTED_EXTENSION",
    "E_BAD_PATH",
    "E_CONFIG",
    "W_DUPLICATE_SYMBOL",
    "W_EMPTY_SYMBOL",
    "W_NAMESPACE_CONFLICT",
]
