"""
Logger Utility
==============

Copies terminal output (stdout and stderr) into a log file for the duration
of a run.
"""
import sys

from contextlib import contextmanager
from pathlib    import Path
from typing     import Iterator, Optional, TextIO


class TeeStream:
  """
  A stream that writes to a terminal stream and to a shared log file.
  """
  def __init__(
    self,
    terminal : TextIO,
    log_file : TextIO,
  ):
    self.terminal = terminal
    self.log_file = log_file

  def write(self, message: str):
    self.terminal.write(message)
    self.log_file.write(message)
    self.log_file.flush()

  def flush(self):
    self.terminal.flush()
    self.log_file.flush()


class LoggerContext:
  """
  Context to hold logger state for cleanup.
  """
  def __init__(
    self,
    log_file        : TextIO,
    original_stdout : TextIO,
    original_stderr : TextIO,
  ):
    self.log_file        = log_file
    self.original_stdout = original_stdout
    self.original_stderr = original_stderr


def start_logging(
  log_filepath : Path,
) -> LoggerContext:
  """
  Start logging terminal output (stdout and stderr) to a file.

  Input:
  ------
    log_filepath : Path
      Path to the log file. Parent folders are created if needed.

  Output:
  -------
    context : LoggerContext
      Context object for cleanup.
  """
  log_filepath = Path(log_filepath)
  log_filepath.parent.mkdir(parents=True, exist_ok=True)

  # Both streams share one handle so their lines interleave in order
  log_file = open(log_filepath, 'w')
  context  = LoggerContext(log_file, sys.stdout, sys.stderr)

  sys.stdout = TeeStream(context.original_stdout, log_file)
  sys.stderr = TeeStream(context.original_stderr, log_file)

  return context


def stop_logging(
  context : Optional[LoggerContext],
) -> None:
  """
  Stop logging and restore original stdout/stderr.

  Input:
  ------
    context : LoggerContext | None
      Context object from start_logging. None is a no-op.
  """
  if context is None:
    return

  # Restore original streams
  sys.stdout = context.original_stdout
  sys.stderr = context.original_stderr

  context.log_file.close()


@contextmanager
def logging_to(
  log_filepath : Optional[Path],
) -> Iterator[Optional[LoggerContext]]:
  """
  Tee terminal output to log_filepath inside a with-block. No-op when None.
  """
  context = start_logging(log_filepath) if log_filepath is not None else None
  try:
    yield context
  finally:
    stop_logging(context)
