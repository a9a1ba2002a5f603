# Configuration for the Kafka Zookeeper driver, read from a json file

import copy
import json
import os

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

DEFAULTS = {
    "host": "localhost",
    "user": None,
    "ssh_port": 22,
    "private_key": None,
    "name": "zookeeper",
    "version": "0.8.0-beta1",
    "download_urls": [
        "https://archive.apache.org/dist/kafka/{version}/kafka-{version}-src.tgz",
        #"https://dlcdn.apache.org/kafka/{version}/kafka-{version}-src.tgz",
        "https://downloads.apache.org/kafka/{version}/kafka-{version}-src.tgz",
    ],
    "unpacked_dir_name": None,
    "base_dir": "~/kafka-zookeeper-managed",
    "install_dir": None,
    "run_dir": None,
    "zookeeper_port": 2181,
    "zookeeper_config_template": os.path.join(TEMPLATES_DIR, "zookeeper.properties"),
    "java_opts": [],
    "jmx_port": None,
}


def load_config(path=None):
    config = copy.deepcopy(DEFAULTS)
    if path is not None:
        with open(path, 'r') as config_file:
            overrides = json.load(config_file)
        if not isinstance(overrides, dict):
            raise ValueError(f"Configuration in {path} must be a json object")
        unknown = sorted(set(overrides) - set(DEFAULTS))
        if unknown:
            raise ValueError(f"Unknown configuration keys in {path}: {', '.join(unknown)}")
        config.update(overrides)

    # Derived directories follow the base dir unless set explicitly
    base_dir = config["base_dir"].rstrip("/")
    if not config["install_dir"]:
        config["install_dir"] = f"{base_dir}/installs/kafka-zookeeper_{config['version']}"
    if not config["run_dir"]:
        config["run_dir"] = f"{base_dir}/apps/kafka-zookeeper_{config['name']}"
    return config


def check_ports_valid(ports):
    for name, value in ports.items():
        if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 65535:
            raise ValueError(f"Invalid port value {name}: {value} (must be 1-65535)")
