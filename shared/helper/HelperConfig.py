"""Environment based configuration for the marketplace CMS bridge."""

import logging
import os
from typing import Any


class HelperConfig:
    """
    Reads settings from environment variables and hands out the application logger.

    Keys are case-insensitive. Unset and empty variables are treated the same; when
    such a key has no default a ValueError names the missing variable.
    """

    TRUE_VALUES = ("true", "1", "yes", "on")

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _get_raw(self, key: str, default: Any) -> tuple[str, str | None]:
        key = key.upper()
        raw = (os.getenv(key) or "").strip() or None
        if raw is None and default is None:
            raise ValueError(f"Environment variable '{key}' is not set.")
        return key, raw

    def get_string_val(self, key: str, default: str | None = None) -> str:
        _, raw = self._get_raw(key, default)
        return raw if raw is not None else default

    def get_number_val(self, key: str, default: float | int | None = None) -> float | int:
        """Reads an int, or a float when the value contains a decimal point."""
        key, raw = self._get_raw(key, default)
        if raw is None:
            return default
        try:
            return float(raw) if "." in raw else int(raw)
        except ValueError:
            raise ValueError(f"Environment variable '{key}' is not a valid number: '{raw}'.")

    def get_bool_val(self, key: str, default: bool | None = None) -> bool:
        _, raw = self._get_raw(key, default)
        if raw is None:
            return default
        return raw.lower() in self.TRUE_VALUES

    def get_list_val(self, key: str, default: list | None = None, separator: str = ",", element_type: type = str) -> list:
        """
        Reads a list written as "[elem1,elem2,...]".

        Args:
            key (str): Environment variable name.
            default (list | None): Value used when the variable is not set.
            separator (str): Delimiter between elements.
            element_type (type): Type every element is cast to.

        Raises:
            ValueError: If the value is not wrapped in brackets or an element cannot be cast.
        """
        key, raw = self._get_raw(key, default)
        if raw is None:
            return default
        if not (raw.startswith("[") and raw.endswith("]")):
            raise ValueError(f"Environment variable '{key}' must be in the format '[elem1{separator}elem2{separator}...]'. Got: '{raw}'")
        try:
            return [element_type(element.strip()) for element in raw[1:-1].split(separator) if element.strip()]
        except ValueError as e:
            raise ValueError(f"Environment variable '{key}' contains an element that is not {element_type.__name__}: {e}")

    def get_logger(self) -> logging.Logger:
        return self._logger
