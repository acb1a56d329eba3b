import pytest

from clinvar_vcv import config


@pytest.fixture(scope="session", autouse=True)
def env_config() -> config.Env:
    """
    Overrides clinvar_vcv.config values.

    Runs before any test builds the cached env, so settings from a developer's
    local .env file do not leak into the tests. A progress interval of 0 logs
    a progress line for every item.
    """
    config._dotenv_values = {
        "CLINVAR_VCV_LOG_LEVEL": "DEBUG",
        "GZIP_COMPRESSLEVEL": "1",
        "CLINVAR_VCV_PROGRESS_INTERVAL": "0",
    }

    return config.get_env()
