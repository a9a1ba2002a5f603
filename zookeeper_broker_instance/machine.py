# Run shell scripts on the target machine, over ssh or on the local host

import os
import subprocess

import psutil

LOCAL_HOSTS = ("localhost", "127.0.0.1")


class SshMachine:

    def __init__(self, host, user=None, port=22, private_key=None):
        self.host = host
        self.user = user
        self.port = port
        self.private_key = private_key

    def __str__(self):
        return f"{self.user}@{self.host}" if self.user else self.host

    def ssh_command(self, remote_command):
        cmd = ["ssh", "-o", "BatchMode=yes", "-o", "StrictHostKeyChecking=no", "-p", str(self.port)]
        if self.private_key:
            cmd += ["-i", os.path.expanduser(self.private_key)]
        cmd += [str(self), remote_command]
        return cmd

    def execute_script(self, script_text):
        # The script is fed to a remote bash on stdin
        result = subprocess.run(self.ssh_command("bash -s"), input=script_text, text=True)
        return result.returncode

    def write_file(self, text, path):
        result = subprocess.run(self.ssh_command(f"cat > {path}"), input=text, text=True)
        return result.returncode


class LocalMachine:

    host = "localhost"

    def __str__(self):
        return self.host

    def execute_script(self, script_text):
        result = subprocess.run(["bash", "-s"], input=script_text, text=True)
        return result.returncode

    def write_file(self, text, path):
        with open(os.path.expanduser(path), 'w') as target:
            target.write(text)
        return 0

    def process_metrics(self, pid_file):
        try:
            with open(os.path.expanduser(pid_file), 'r') as pid_input:
                pid = int(pid_input.read().strip())
            process = psutil.Process(pid)
            with process.oneshot():
                memory = process.memory_info()
                metrics = {
                    "pid": pid,
                    "status": process.status(),
                    "cpu_percent": process.cpu_percent(interval=0.1),
                    "memory_rss": memory.rss,
                    "memory_vms": memory.vms,
                    "memory_percent": process.memory_percent(),
                    "num_threads": process.num_threads(),
                }
        except (OSError, ValueError, psutil.Error):
            return {}
        return metrics


def machine_for(config):
    if config["host"] in LOCAL_HOSTS:
        return LocalMachine()
    return SshMachine(config["host"], config["user"], config["ssh_port"], config["private_key"])
