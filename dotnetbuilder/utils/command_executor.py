import shlex
import subprocess
from ..cli_logger import logger


def format_command(command):
    """Render an argument list the way a user would type it in a shell."""
    return " ".join(shlex.quote(str(arg)) for arg in command)


def run_shell_command(command, env=None, cwd=None):
    """
    Runs a command to completion and captures its output.

    Args:
        command (list): The command to execute as a list of strings.
        env (dict, optional): Environment variables for the child process.
        cwd (str, optional): The working directory for the command.

    Returns:
        A tuple (stdout, stderr, return_code). A missing executable is reported
        as return code -1 with the error text on stderr.
    """
    try:
        result = subprocess.run(
            [str(arg) for arg in command],
            capture_output=True,
            text=True,
            env=env,
            check=False,
            cwd=cwd
        )
        return result.stdout, result.stderr, result.returncode
    except FileNotFoundError as e:
        return "", str(e), -1


def stream_shell_command(command, on_line, env=None, cwd=None):
    """
    Runs a command, handing every line of combined stdout/stderr to `on_line`.

    Returns:
        The process exit code, or -1 if the executable could not be found.
    """
    try:
        process = subprocess.Popen(
            [str(arg) for arg in command],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            bufsize=1,
            universal_newlines=True,
            env=env,
            cwd=cwd
        )
    except FileNotFoundError as e:
        logger.error(f"Command not found: {e.filename}")
        return -1

    for line in process.stdout:
        on_line(line.rstrip("\n"))
    return process.wait()
