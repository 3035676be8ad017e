import pytest

from config.settings import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(export_dir=tmp_path, cost_of_capital_rate=None, log_level="INFO", log_file=None)
