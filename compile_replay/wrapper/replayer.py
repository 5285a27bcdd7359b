"""Reconstructs a recorded compiler invocation for a single source file."""

import collections
import logging

from compile_replay.util import file
from compile_replay.util import shell_words
from compile_replay.util.errors import RecordNotFoundError


class ReplayCommand(collections.namedtuple('ReplayCommand',
                                           ['driver', 'args', 'workdir'])):

  @property
  def argv(self):
    return [self.driver] + list(self.args)

  @property
  def command_line(self):
    return shell_words.encode(self.argv)


def build_replay_command(store,
                         input_file,
                         cwd,
                         prefix=None,
                         alternative=None,
                         extra_args=(),
                         driver=None):
  """Builds the command that recompiles input_file the way it was recorded.

  driver replaces the recorded driver. prefix becomes the program that is run,
  with the (possibly replaced) driver demoted to its first argument. extra_args
  are appended after the recorded flags, followed by alternative if given or
  else the resolved input file. The command runs from the recorded working
  directory since recorded flags may hold paths relative to it.
  """
  resolved_file = file.resolve_path(input_file, cwd)
  record = store.get(resolved_file)
  if record is None:
    raise RecordNotFoundError(resolved_file)
  logging.debug(f'Found {record.driver} invocation for {resolved_file}')

  original_driver = driver or record.driver
  if prefix:
    effective_driver = prefix
    leading_args = [original_driver] + record.args
  else:
    effective_driver = original_driver
    leading_args = list(record.args)

  trailing_args = list(extra_args)
  if alternative:
    trailing_args.append(alternative)
  else:
    trailing_args.append(resolved_file)

  return ReplayCommand(
      driver=effective_driver,
      args=leading_args + trailing_args,
      workdir=record.workdir)
