from typing import Literal

from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    One configuration key a client reads on startup.

    env_key is given without the {TYPE}_{ENGINE}_ prefix. A default of None marks the key as required.
    """
    env_key: str
    val_type: Literal["string", "number", "bool", "list"] = "string"
    default: str | int | float | bool | list | None = None
