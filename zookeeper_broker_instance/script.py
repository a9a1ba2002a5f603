# Lifecycle scripts: a header, the driver's body commands and pid file handling

INSTALLING = "installing"
CUSTOMIZING = "customizing"
LAUNCHING = "launching"
CHECK_RUNNING = "check-running"
STOPPING = "stopping"


class ScriptFailedError(Exception):

    def __init__(self, phase, machine, exit_code):
        super().__init__(f"Execution failed, invalid result {exit_code} for {phase} on {machine}")
        self.phase = phase
        self.machine = machine
        self.exit_code = exit_code


class LifecycleScript:
    """Shell script for one lifecycle phase.

    Commands are appended to ``body`` by the driver. When ``pid_file`` is a
    path, the launch, check-running and stop phases get the usual pid file
    commands around the body; ``pid_file=False`` leaves the body untouched.
    """

    def __init__(self, machine, phase, environment=None, working_dir=None, pid_file=False):
        self.machine = machine
        self.phase = phase
        self.environment = environment or {}
        self.working_dir = working_dir
        self.pid_file = pid_file
        self.body = []
        self.fail_on_non_zero = False

    def fail_on_non_zero_result_code(self):
        self.fail_on_non_zero = True
        return self

    def append(self, *commands):
        for command in commands:
            if isinstance(command, (list, tuple)):
                self.body.extend(command)
            else:
                self.body.append(command)
        return self

    def header(self):
        lines = ["set -e"] if self.fail_on_non_zero else []
        for key, value in self.environment.items():
            lines.append(f"export {key}={shell_quote(value)}")
        if self.working_dir:
            lines.append(f"mkdir -p {self.working_dir}")
            lines.append(f"cd {self.working_dir} || exit 1")
        if self.pid_file and self.phase == LAUNCHING:
            # Refuse to start a second copy
            lines.append(f"test -f {self.pid_file} && ps -p $(cat {self.pid_file}) > /dev/null && exit 1")
        if self.pid_file and self.phase in (CHECK_RUNNING, STOPPING):
            lines.append(f"test -f {self.pid_file} || exit 1")
        return lines

    def footer(self):
        if not self.pid_file:
            return []
        if self.phase == LAUNCHING:
            return [f"echo $! > {self.pid_file}"]
        if self.phase == CHECK_RUNNING:
            return [f"ps -p $(cat {self.pid_file}) > /dev/null"]
        if self.phase == STOPPING:
            return [f"kill $(cat {self.pid_file})"]
        return []

    def lines(self):
        return self.header() + self.body + self.footer()

    def text(self):
        return "\n".join(self.lines()) + "\n"

    def execute(self):
        print(f"Running {self.phase} script on {self.machine}")
        exit_code = self.machine.execute_script(self.text())
        if exit_code != 0 and self.fail_on_non_zero:
            raise ScriptFailedError(self.phase, self.machine, exit_code)
        return exit_code


def shell_quote(value):
    return "'" + str(value).replace("'", "'\\''") + "'"
