"""

Logging Core Module

========================================================================

Leveled logger that writes to the console and, optionally, to a file.
Lower levels are more severe: a message is logged to a stream if its
level is no greater than the verbosity of that stream.

"""

from collections import namedtuple
from datetime import datetime
from enum import IntEnum
from functools import cache, wraps
from pathlib import Path
from sys import stderr
from traceback import format_exception, format_exception_only
from typing import Callable, Optional, TextIO


class Level(IntEnum):
    """ Level of a logging message. """
    FATAL = -3
    ERROR = -2
    WARNING = -1
    STATUS = 0
    TASK = 1
    ACTION = 2
    ROUTINE = 3
    DETAIL = 4


DEFAULT_COLOR = True
DEFAULT_EXIT_ON_ERROR = False
DEFAULT_VERBOSITY = Level.STATUS
FILE_VERBOSITY = Level.DETAIL
EXC_INFO_VERBOSITY = Level.TASK


class Message(object):
    """ Message with a logging level. """
    __slots__ = ["level", "content"]

    def __init__(self, level: Level, content: object):
        self.level = level
        self.content = content

    def __str__(self):
        if isinstance(self.content, BaseException):
            formatter = format_exception if exc_info() else format_exception_only
            return "".join(formatter(self.content)).rstrip()
        return str(self.content)


@cache
def ansi_color(color: int):
    """ ANSI escape code to set the foreground to a 256-color code. """
    if not 0 <= color < 256:
        raise ValueError(f"Invalid ANSI 256-color code: {color}")
    return f"\033[38;5;{color}m"


ANSI_BOLD = "\033[1m"
ANSI_RESET = "\033[0m"

LEVEL_COLORS = {
    Level.FATAL: ansi_color(198) + ANSI_BOLD,
    Level.ERROR: ansi_color(160),
    Level.WARNING: ansi_color(214),
    Level.STATUS: ansi_color(28),
    Level.TASK: ansi_color(38),
    Level.ACTION: ansi_color(69),
    Level.ROUTINE: ansi_color(147),
    Level.DETAIL: ansi_color(247),
}


def format_console_plain(message: Message):
    """ Format a message to log on the console without color. """
    return f"{message.level.name: <8}{message}\n"


def format_console_color(message: Message):
    """ Format a message to log on the console with color. """
    color = LEVEL_COLORS.get(message.level, ANSI_RESET)
    return f"{color}{format_console_plain(message)}{ANSI_RESET}"


def format_logfile(message: Message):
    """ Format a message to write into the log file. """
    timestamp = datetime.now().strftime("on %Y-%m-%d at %H:%M:%S.%f")
    return f"LOGMSG> {message.level.name} {timestamp}\n{message}\n\n"


class Stream(object):
    """ Log messages up to a verbosity to a text stream. """
    __slots__ = ["verbosity", "formatter"]

    def __init__(self, verbosity: int, formatter: Callable[[Message], str]):
        self.verbosity = verbosity
        self.formatter = formatter

    @property
    def stream(self) -> TextIO:
        return stderr

    def log(self, message: Message):
        if message.level <= self.verbosity:
            self.stream.write(self.formatter(message))


class FileStream(Stream):
    """ Log to a file, which is opened when the first message arrives. """
    __slots__ = ["file_path", "_file"]

    def __init__(self, file_path: str | Path, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.file_path = Path(file_path)
        self._file = None

    @property
    def stream(self):
        if self._file is None:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.file_path, "a")
        return self._file

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None


class Logger(object):
    """ Log messages to the console and to a file. """
    __slots__ = ["console_stream", "file_stream", "exit_on_error"]

    def __init__(self,
                 console_stream: Stream | None = None,
                 file_stream: FileStream | None = None,
                 exit_on_error: bool = DEFAULT_EXIT_ON_ERROR):
        self.console_stream = console_stream
        self.file_stream = file_stream
        self.exit_on_error = exit_on_error

    def _log(self, level: Level, content: object):
        message = Message(level, content)
        if level <= Level.ERROR and self.exit_on_error:
            # Errors must propagate instead of merely being logged.
            if isinstance(content, BaseException):
                raise content
            raise RuntimeError(str(message))
        for stream in (self.console_stream, self.file_stream):
            if stream is not None:
                stream.log(message)

    def fatal(self, content: object):
        self._log(Level.FATAL, content)

    def error(self, content: object):
        self._log(Level.ERROR, content)

    def warning(self, content: object):
        self._log(Level.WARNING, content)

    def status(self, content: object):
        self._log(Level.STATUS, content)

    def task(self, content: object):
        self._log(Level.TASK, content)

    def action(self, content: object):
        self._log(Level.ACTION, content)

    def routine(self, content: object):
        self._log(Level.ROUTINE, content)

    def detail(self, content: object):
        self._log(Level.DETAIL, content)


logger = Logger()

LoggerConfig = namedtuple("LoggerConfig",
                          ["verbosity",
                           "log_file_path",
                           "log_color",
                           "exit_on_error"])


def erase_config():
    """ Erase the existing logger configuration. """
    if logger.file_stream is not None:
        logger.file_stream.close()
    logger.console_stream = None
    logger.file_stream = None
    logger.exit_on_error = DEFAULT_EXIT_ON_ERROR


def set_config(verbosity: int = DEFAULT_VERBOSITY,
               log_file_path: str | Path | None = None,
               log_color: bool = DEFAULT_COLOR,
               exit_on_error: bool = DEFAULT_EXIT_ON_ERROR):
    """ Configure the main logger with streams and verbosity. """
    erase_config()
    logger.console_stream = Stream(verbosity,
                                   format_console_color
                                   if log_color
                                   else format_console_plain)
    if log_file_path is not None:
        logger.file_stream = FileStream(log_file_path,
                                        FILE_VERBOSITY,
                                        format_logfile)
    logger.exit_on_error = exit_on_error


def get_config():
    """ Get the configuration parameters of the main logger. """
    if logger.console_stream is not None:
        verbosity = logger.console_stream.verbosity
        log_color = logger.console_stream.formatter is format_console_color
    else:
        verbosity = DEFAULT_VERBOSITY
        log_color = DEFAULT_COLOR
    if logger.file_stream is not None:
        log_file_path = logger.file_stream.file_path
    else:
        log_file_path = None
    return LoggerConfig(verbosity=verbosity,
                        log_file_path=log_file_path,
                        log_color=log_color,
                        exit_on_error=logger.exit_on_error)


def exc_info():
    """ Whether to log the traceback of exceptions. """
    return get_config().verbosity >= EXC_INFO_VERBOSITY


def log_exceptions(default: Optional[Callable]):
    """ If any exception occurs, log it and return the default. """

    def decorator(func: Callable):

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as error:
                logger.fatal(error)
                return default() if default is not None else None

        return wrapper

    return decorator


def restore_config(func: Callable):
    """ After the function exits, restore the logging configuration that
    was in place before the function ran. """

    @wraps(func)
    def wrapper(*args, **kwargs):
        config = get_config()
        try:
            return func(*args, **kwargs)
        finally:
            set_config(**config._asdict())

    return wrapper


# Log to the console by default when used through the API.
set_config()
