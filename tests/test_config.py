"""Tests for environment-based configuration."""
import pytest
from pydantic import ValidationError

from neo4j_request.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in (
        "NEO4J_URI",
        "NEO4J_USERNAME",
        "NEO4J_DATABASE",
        "NEO4J_CONNECT_TRIALS",
        "NEO4J_CONNECT_RETRY_DELAY",
        "NEO4J_DRIVER_OPTIONS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)


def test_defaults(monkeypatch):
    monkeypatch.setenv("NEO4J_PASSWORD", "pw")

    config = Config()

    assert config.neo4j_username == "neo4j"
    assert config.neo4j_database == "neo4j"
    assert config.neo4j_connect_trials == 5
    assert config.neo4j_connect_retry_delay == 5.0
    assert config.log_level == "INFO"


def test_password_is_required(monkeypatch):
    monkeypatch.delenv("NEO4J_PASSWORD", raising=False)

    with pytest.raises(ValidationError):
        Config()


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("NEO4J_PASSWORD", "pw")
    monkeypatch.setenv("NEO4J_DATABASE", "movies")
    monkeypatch.setenv("NEO4J_CONNECT_TRIALS", "3")
    monkeypatch.setenv("NEO4J_DRIVER_OPTIONS", '{"encrypted": false, "max_connection_pool_size": 10}')

    config = Config()

    assert config.neo4j_database == "movies"
    assert config.neo4j_connect_trials == 3
    assert config.neo4j_driver_options == {"encrypted": False, "max_connection_pool_size": 10}


def test_driver_options_override_pool_settings():
    config = Config(
        NEO4J_PASSWORD="pw",
        NEO4J_MAX_CONNECTION_LIFETIME=60,
        NEO4J_DRIVER_OPTIONS={"max_connection_pool_size": 10, "encrypted": True},
    )

    assert config.driver_options() == {
        "max_connection_lifetime": 60,
        "max_connection_pool_size": 10,
        "encrypted": True,
    }


def test_trials_must_be_positive():
    with pytest.raises(ValidationError):
        Config(NEO4J_PASSWORD="pw", NEO4J_CONNECT_TRIALS=0)
