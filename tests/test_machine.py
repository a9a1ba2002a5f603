import os
import subprocess

import pytest

from zookeeper_broker_instance.machine import LocalMachine, SshMachine, machine_for
from zookeeper_broker_instance.zookeeper_config import load_config


@pytest.fixture
def recorded_runs(monkeypatch):
    runs = []

    def fake_run(cmd, input=None, text=None):
        runs.append((cmd, input))
        return subprocess.CompletedProcess(cmd, 4)

    monkeypatch.setattr(subprocess, "run", fake_run)
    return runs


def test_ssh_machine_runs_script_on_stdin(recorded_runs):
    machine = SshMachine("172.16.9.148", "ubuntu", 2222, "/keys/id_rsa")
    assert machine.execute_script("echo hi\n") == 4
    cmd, script_input = recorded_runs[0]
    assert cmd == ["ssh", "-o", "BatchMode=yes", "-o", "StrictHostKeyChecking=no", "-p", "2222",
                   "-i", "/keys/id_rsa", "ubuntu@172.16.9.148", "bash -s"]
    assert script_input == "echo hi\n"


def test_ssh_machine_write_file(recorded_runs):
    machine = SshMachine("zk-host")
    machine.write_file("clientPort=2181\n", "/run/zookeeper.properties")
    cmd, content = recorded_runs[0]
    assert cmd[-2:] == ["zk-host", "cat > /run/zookeeper.properties"]
    assert "-i" not in cmd
    assert content == "clientPort=2181\n"


def test_local_machine_exit_code():
    assert LocalMachine().execute_script("exit 3\n") == 3
    assert LocalMachine().execute_script("true\n") == 0


def test_local_machine_write_file(tmp_path):
    path = tmp_path / "zookeeper.properties"
    assert LocalMachine().write_file("clientPort=2181\n", str(path)) == 0
    assert path.read_text() == "clientPort=2181\n"


def test_process_metrics_for_own_process(tmp_path):
    pid_file = tmp_path / "kafka.pid"
    pid_file.write_text(f"{os.getpid()}\n")
    metrics = LocalMachine().process_metrics(str(pid_file))
    assert metrics["pid"] == os.getpid()
    assert metrics["memory_rss"] > 0


def test_process_metrics_missing_pid_file(tmp_path):
    assert LocalMachine().process_metrics(str(tmp_path / "missing.pid")) == {}


def test_machine_for():
    config = load_config()
    assert isinstance(machine_for(config), LocalMachine)
    config.update(host="172.16.9.149", user="ubuntu")
    machine = machine_for(config)
    assert isinstance(machine, SshMachine)
    assert str(machine) == "ubuntu@172.16.9.149"
