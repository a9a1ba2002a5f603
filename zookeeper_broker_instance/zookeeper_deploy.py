# Python script to deploy, check and stop a Kafka Zookeeper server

import datetime
import sys

from zookeeper_broker_instance.machine import LocalMachine, machine_for
from zookeeper_broker_instance.script import ScriptFailedError
from zookeeper_broker_instance.zookeeper_config import load_config
from zookeeper_broker_instance.zookeeper_driver import KafkaZookeeperDriver

ACTIONS = ("start", "install", "launch", "check", "stop", "restart", "status")
USAGE = "Usage: python3 -m zookeeper_broker_instance.zookeeper_deploy <start, install, launch, check, stop, restart or status> [config.json]"


def print_status(driver):
    running = driver.is_running()
    print(f"Kafka Zookeeper on {driver.machine} running: {running}")
    if running and isinstance(driver.machine, LocalMachine):
        for key, value in driver.machine.process_metrics(driver.pid_file).items():
            print(f"\t{key}: {value}")
    return running


def run_action(action, driver):
    if action == "start":
        driver.start()
    elif action == "install":
        driver.install()
    elif action == "launch":
        driver.launch()
    elif action == "stop":
        driver.stop()
    elif action == "restart":
        driver.restart()
    elif action == "check":
        running = driver.is_running()
        print(f"Kafka Zookeeper on {driver.machine} running: {running}")
        return 0 if running else 1
    elif action == "status":
        print_status(driver)
    return 0


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) < 1 or argv[0].strip().lower() not in ACTIONS:
        print(USAGE)
        return 1
    action = argv[0].strip().lower()
    config_path = argv[1] if len(argv) > 1 else None

    start_time = datetime.datetime.now()
    try:
        config = load_config(config_path)
        driver = KafkaZookeeperDriver(config, machine_for(config))
        exit_code = run_action(action, driver)
    except (ScriptFailedError, ValueError, RuntimeError, OSError) as e:
        print(f"Kafka Zookeeper {action} failed: {e}")
        exit_code = 1

    delta = datetime.datetime.now() - start_time
    print('Duration of the zookeeper action[', action, ']', delta.total_seconds(), 'sec')
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
