"""Handing control of the current process over to a compiler."""

import logging
import os
import subprocess
import sys


def exec_command(command_vector, cwd=None):
  """Runs command_vector in place of the current process. Does not return.

  The working directory is switched to cwd first when given. Where the
  platform cannot replace the process image the command is run as a child on
  the same standard streams and its exit status becomes ours.
  """
  logging.debug(f'Executing {command_vector} in {cwd or os.getcwd()}')
  if os.name != 'posix':
    _run_and_exit(command_vector, cwd)
  if cwd:
    os.chdir(cwd)
  sys.stdout.flush()
  sys.stderr.flush()
  os.execvp(command_vector[0], command_vector)


def _run_and_exit(command_vector, cwd):
  sys.exit(subprocess.run(command_vector, cwd=cwd).returncode)
