import os
import pathlib
from typing import Literal

from dotenv import dotenv_values
from pydantic import BaseModel, field_validator

_dotenv_env = os.environ.get("DOTENV_ENV", "dev")
_dotenv_values = dotenv_values(pathlib.Path(__file__).parent / f".{_dotenv_env}.env")


def env_or_dotenv_or(
    key_name: str, default: str | None = None, throw: bool = False
) -> str:
    """
    Retrieves a value from the environment.
    If not set, retrieve it from the dotenv file.
    If not set in the dotenv file, return the default value.

    If throw is True, and the value and default is falsy, raise a ValueError.
    """
    val = os.environ.get(key_name, _dotenv_values.get(key_name, default))
    if throw and not val:
        raise ValueError(f"{key_name} must be set")
    return val


class Env(BaseModel):
    pass


class ParseEnv(Env):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    gzip_compresslevel: int
    # seconds between progress log lines
    progress_interval: int

    @field_validator("gzip_compresslevel")
    @classmethod
    def _validate_gzip_compresslevel(cls, v, _info):
        if not 1 <= v <= 9:
            raise ValueError("GZIP_COMPRESSLEVEL must be between 1 and 9")
        return v

    @field_validator("progress_interval")
    @classmethod
    def _validate_progress_interval(cls, v, _info):
        if v < 0:
            raise ValueError("CLINVAR_VCV_PROGRESS_INTERVAL must not be negative")
        return v


def get_parse_env() -> ParseEnv:
    env = ParseEnv(
        log_level=env_or_dotenv_or("CLINVAR_VCV_LOG_LEVEL", default="INFO").upper(),
        gzip_compresslevel=env_or_dotenv_or("GZIP_COMPRESSLEVEL", default="9"),
        progress_interval=env_or_dotenv_or(
            "CLINVAR_VCV_PROGRESS_INTERVAL", default="60"
        ),
    )
    _set_env(env)
    return env


def _set_env(env: Env):
    if getattr(Env, "env", None) is None:
        Env.env = env
    return Env.env


def get_env() -> ParseEnv:
    env = getattr(Env, "env", None)
    if env is None:
        env = get_parse_env()
    return env
