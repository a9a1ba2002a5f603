# Driver to install, configure, launch and stop the Zookeeper server bundled with Kafka

import os

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from zookeeper_broker_instance.downloads import INSTALL_TAR, DownloadResolver, download_url_as
from zookeeper_broker_instance.script import (CHECK_RUNNING, CUSTOMIZING, INSTALLING, LAUNCHING,
                                              STOPPING, LifecycleScript)
from zookeeper_broker_instance.zookeeper_config import check_ports_valid

DEFAULT_HEAP_OPTS = ["-Xms128m", "-Xmx512m"]
QUORUM_PEER_PATTERN = "quorum\\.QuorumPeerMain"


class KafkaZookeeperDriver:

    def __init__(self, config, machine):
        self.config = config
        self.machine = machine
        self._expanded_install_dir = None

    @property
    def version(self):
        return self.config["version"]

    @property
    def install_dir(self):
        return self.config["install_dir"]

    @property
    def run_dir(self):
        return self.config["run_dir"]

    @property
    def log_file_location(self):
        return self.run_dir + "/console.out"

    @property
    def zookeeper_port(self):
        return self.config["zookeeper_port"]

    @property
    def pid_file(self):
        return self.run_dir + "/kafka.pid"

    @property
    def expanded_install_dir(self):
        if self._expanded_install_dir is None:
            raise RuntimeError("expanded_install_dir is None; most likely install was not called")
        return self._expanded_install_dir

    def java_opts(self):
        opts = DEFAULT_HEAP_OPTS + list(self.config["java_opts"])
        jmx_port = self.config["jmx_port"]
        if jmx_port is not None:
            check_ports_valid({"jmxPort": jmx_port})
            opts += [
                "-Dcom.sun.management.jmxremote",
                f"-Dcom.sun.management.jmxremote.port={jmx_port}",
                "-Dcom.sun.management.jmxremote.ssl=false",
                "-Dcom.sun.management.jmxremote.authenticate=false",
                f"-Djava.rmi.server.hostname={self.machine.host}",
            ]
        return opts

    def java_shell_environment(self):
        return {"JAVA_OPTS": " ".join(self.java_opts())}

    def shell_environment(self):
        # Kafka's start scripts read their JVM options from KAFKA_JMX_OPTS
        orig = self.java_shell_environment()
        return {"KAFKA_JMX_OPTS": orig.get("JAVA_OPTS", "")}

    def new_script(self, phase, pid_file=False):
        working_dir = self.install_dir if phase == INSTALLING else self.run_dir
        return LifecycleScript(self.machine, phase, self.shell_environment(), working_dir, pid_file)

    def install(self):
        resolver = DownloadResolver(self.config)
        urls = resolver.targets
        save_as = resolver.filename
        self._expanded_install_dir = self.install_dir + "/" + resolver.unpacked_directory_name(f"kafka-{self.version}-src")

        commands = []
        commands.extend(download_url_as(urls, save_as))
        commands.append(INSTALL_TAR)
        commands.append("tar xzfv " + save_as)
        commands.append("cd " + self.expanded_install_dir)
        commands.append("./sbt update")
        commands.append("./sbt package")

        print(f"Installing Kafka Zookeeper {self.version} on {self.machine}")
        self.new_script(INSTALLING).fail_on_non_zero_result_code().append(commands).execute()

    def customize(self):
        check_ports_valid({"zookeeperPort": self.zookeeper_port})
        self.new_script(CUSTOMIZING) \
            .fail_on_non_zero_result_code() \
            .append(f"cp -R {self.expanded_install_dir}/* {self.run_dir}") \
            .execute()

        server_config = self.config["zookeeper_config_template"]
        self.copy_template(server_config, "zookeeper.properties")

    def copy_template(self, template, target):
        template_dir, template_name = os.path.split(os.path.abspath(os.path.expanduser(template)))
        env = Environment(loader=FileSystemLoader(template_dir), undefined=StrictUndefined, keep_trailing_newline=True)
        rendered = env.get_template(template_name).render(driver=self, config=self.config)
        target_path = target if target.startswith(("/", "~")) else self.run_dir + "/" + target
        print(f"Copying {template_name} to {target_path} on {self.machine}")
        if self.machine.write_file(rendered, target_path) != 0:
            raise RuntimeError(f"Failed to write {target_path} on {self.machine}")
        return rendered

    def launch(self):
        print(f"Launching Kafka Zookeeper on {self.machine}, port {self.zookeeper_port}")
        self.new_script(LAUNCHING, pid_file=self.pid_file) \
            .fail_on_non_zero_result_code() \
            .append("nohup ./bin/zookeeper-server-start.sh ./zookeeper.properties > console.out 2>&1 &") \
            .execute()

    def is_running(self):
        return self.new_script(CHECK_RUNNING, pid_file=self.pid_file).execute() == 0

    def stop(self):
        print(f"Stopping Kafka Zookeeper on {self.machine}")
        # Graceful kill first, then force anything still matching
        self.new_script(STOPPING, pid_file=False) \
            .append(f"ps ax | grep {QUORUM_PEER_PATTERN} | awk '{{print $1}}' | xargs kill") \
            .append(f"ps ax | grep {QUORUM_PEER_PATTERN} | awk '{{print $1}}' | xargs kill -9") \
            .execute()

    def start(self):
        self.install()
        self.customize()
        self.launch()

    def restart(self):
        self.stop()
        self.launch()
