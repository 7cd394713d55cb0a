import datetime
import os
import sys
import traceback
from colorama import Fore, Style, init

# Initialize Colorama
init(autoreset=True)

HOME_DIR = os.environ.get("DOTNETBUILDER_HOME", os.path.join(os.path.expanduser("~"), ".dotnetbuilder"))
LOG_DIR = os.path.join(HOME_DIR, "logs")
os.makedirs(LOG_DIR, exist_ok=True)

# level -> (colour, marker shown before the message, goes to stderr)
LEVEL_STYLES = {
    "INFO": (Fore.CYAN, "", False),
    "DEBUG": (Fore.WHITE + Style.DIM, "", False),
    "SUCCESS": (Fore.GREEN, "✓ ", False),
    "WARNING": (Fore.YELLOW, "⚠ ", True),
    "ERROR": (Fore.RED, "✖ ", True),
    "TRACEBACK": (Fore.RED, ">> ", True),
}


class Logger:
    """Console logger that mirrors every line into a per-run log file.

    Timestamped lines (info, success, ...) are used for CLI messages; the
    untimestamped ``heading``/``bullet``/``sub_bullet`` lines render the
    build output, e.g.::

        ## .NET build
        - SDK version detection
          - Detected .NET project: /workspace/App.csproj
    """

    def __init__(self, log_dir=LOG_DIR):
        started = datetime.datetime.now().strftime('%Y%m%d_%H%M%S')
        self.log_file = os.path.join(log_dir, f"dotnetbuilder_{started}.log")

    def _write(self, line):
        with open(self.log_file, "a") as f:
            f.write(line + "\n")

    def _log(self, level, message):
        color, marker, to_stderr = LEVEL_STYLES[level]
        # Looked up per call so redirected streams (CliRunner, pytest capture) are honoured.
        stream = sys.stderr if to_stderr else sys.stdout
        timestamp = datetime.datetime.now().strftime("%H:%M:%S")
        styled_marker = f"{Style.BRIGHT}{marker}{Style.RESET_ALL}{color}" if marker else ""
        print(f"{color}{Style.BRIGHT}[{timestamp}]{Style.RESET_ALL} {styled_marker}{message}{Style.RESET_ALL}",
              file=stream)
        self._write(f"[{timestamp}] [{level}] {marker}{message}")

    def _plain(self, message, color=Fore.CYAN, indent=0):
        prefix = " " * indent
        print(f"{color}{prefix}{message}{Style.RESET_ALL}", file=sys.stdout)
        self._write(f"{prefix}{message}")

    def info(self, message):
        self._log("INFO", message)

    def debug(self, message):
        self._log("DEBUG", message)

    def success(self, message):
        self._log("SUCCESS", message)

    def warning(self, message):
        self._log("WARNING", message)

    def error(self, message):
        self._log("ERROR", message)

    def step_info(self, message, indent=0):
        self._plain(message, indent=indent)

    def heading(self, message):
        self._plain(f"## {message}", color=Fore.MAGENTA)

    def bullet(self, message):
        self._plain(f"- {message}")

    def sub_bullet(self, message):
        self._plain(f"- {message}", indent=2)

    # -------- Exception logging --------
    def exception(self, exc_type, exc_value, exc_traceback):
        self.error(f"An unhandled exception occurred: {exc_value}")
        for chunk in traceback.format_exception(exc_type, exc_value, exc_traceback):
            for line in chunk.splitlines():
                if line.strip():
                    self._log("TRACEBACK", line)


# ---------------- Helper ----------------
logger = Logger()

def get_latest_log_file():
    """Return the path to the latest log file."""
    log_files = [os.path.join(LOG_DIR, f) for f in os.listdir(LOG_DIR) if f.endswith(".log")]
    if not log_files:
        return None
    return max(log_files, key=os.path.getctime)
