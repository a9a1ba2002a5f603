"""Pytest configuration and fixtures."""

import pytest

from zookeeper_broker_instance.zookeeper_config import load_config
from zookeeper_broker_instance.zookeeper_driver import KafkaZookeeperDriver
from tests.machines import RecordingMachine


@pytest.fixture
def config():
    cfg = load_config()
    cfg["base_dir"] = "/opt/managed"
    cfg["install_dir"] = "/opt/managed/installs/kafka-zookeeper_0.8.0-beta1"
    cfg["run_dir"] = "/opt/managed/apps/kafka-zookeeper_zookeeper"
    return cfg


@pytest.fixture
def machine():
    return RecordingMachine()


@pytest.fixture
def driver(config, machine):
    return KafkaZookeeperDriver(config, machine)
