import os
import threading
import config

_COLORS = {
    "WARN": "\x1b[33m",
    "ERROR": "\x1b[31m",
    "DEBUG": "\x1b[36m",
}


def log(scope, msg, level="INFO"):
    if level == "DEBUG" and not getattr(config, "LOG_DEBUG", False):
        return
    if scope == "BUILD" and not getattr(config, "LOG_BUILDS", True):
        return
    thread = threading.current_thread().name
    text = f"[{level} thr{thread} {scope}] {msg}"
    use_color = getattr(config, "LOG_COLOR", True) and os.getenv("NO_COLOR") is None
    if use_color and level in _COLORS:
        text = f"{_COLORS[level]}{text}\x1b[0m"
    print(text)
