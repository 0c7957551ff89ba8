import json
import os
import tempfile

import pytest
import yaml

from sembleflow.exceptions import ConfigurationError
from sembleflow.settings.config_reader import ConfigReader, load_client_config


@pytest.fixture
def config_reader():
    return ConfigReader()


@pytest.fixture
def settings_data():
    return {"client": {"max_retries": 5, "base_delay": 0.5, "timeout": 60}}


def write_temp(suffix, content):
    with tempfile.NamedTemporaryFile(suffix=suffix, mode="w", delete=False) as f:
        f.write(content)
        return f.name


@pytest.fixture
def json_file(settings_data):
    path = write_temp(".json", json.dumps(settings_data))
    yield path
    os.unlink(path)


@pytest.fixture
def yaml_file(settings_data):
    path = write_temp(".yml", yaml.dump(settings_data))
    yield path
    os.unlink(path)


def test_read_json(config_reader, json_file, settings_data):
    """Test reading from a JSON file."""
    assert config_reader.read(json_file) == settings_data


def test_read_yaml(config_reader, yaml_file, settings_data):
    """Test reading from a YAML file."""
    assert config_reader.read(yaml_file) == settings_data


def test_read_invalid_extension(config_reader):
    """Test that reading a file with invalid extension raises an error."""
    with tempfile.NamedTemporaryFile(suffix=".txt") as f:
        with pytest.raises(ConfigurationError) as excinfo:
            config_reader.read(f.name)

    assert "Unsupported extension" in str(excinfo.value)


def test_read_empty_yaml(config_reader):
    path = write_temp(".yaml", "")
    try:
        assert config_reader.read(path) == {}
    finally:
        os.unlink(path)


def test_read_non_mapping_yaml(config_reader):
    path = write_temp(".yaml", "- just\n- a list\n")
    try:
        with pytest.raises(ConfigurationError):
            config_reader.read(path)
    finally:
        os.unlink(path)


def test_load_client_config(yaml_file):
    config = load_client_config(yaml_file)

    assert config.max_retries == 5
    assert config.base_delay == 0.5
    assert config.timeout == 60
    assert config.token_header == "x-token"


def test_load_client_config_without_section():
    path = write_temp(".json", json.dumps({"other": {}}))
    try:
        config = load_client_config(path)
    finally:
        os.unlink(path)

    assert config.max_retries == 3


def test_load_client_config_rejects_invalid_values():
    path = write_temp(".yaml", yaml.dump({"client": {"max_retries": -1}}))
    try:
        with pytest.raises(ConfigurationError):
            load_client_config(path)
    finally:
        os.unlink(path)
