"""Compiler wrapper that records and replays compiler invocations.

Record mode (default):
  compile-replay [--db FILE] [--driver NAME] [--dry_run] [--verbose]
      <driver> <compiler-args...>

Replay mode:
  compile-replay --replay [--db FILE] [--driver NAME] [--prefix PREFIX]
      [--alternative FILE] [--dry_run] [--verbose] <input-file> [extra-args...]

Export mode:
  compile-replay --export_compile_commands FILE [--db FILE]

Wrapper flags are spelled with two dashes and must come first. The first token
that is not a wrapper flag, or a `--`, ends them and everything from there on
is passed to the compiler untouched.
"""

import os
import sqlite3

from absl import app
from absl import flags
from absl import logging

from compile_replay.util import invocation_store
from compile_replay.util import process
from compile_replay.util import shell_words
from compile_replay.util.errors import CompileReplayError
from compile_replay.wrapper import argument_classifier
from compile_replay.wrapper import compile_database
from compile_replay.wrapper import recorder
from compile_replay.wrapper import replayer

FLAGS = flags.FLAGS

DB_ENVIRONMENT_VARIABLE = 'COMPILE_REPLAY_DB'
DEFAULT_DB_RELATIVE_PATH = os.path.join('.compile_replay', 'invocations.db')

flags.DEFINE_string(
    'db', None, 'The path to the invocation database. Defaults to '
    f'${DB_ENVIRONMENT_VARIABLE} or ~/{DEFAULT_DB_RELATIVE_PATH}.')
flags.DEFINE_float(
    'db_timeout', invocation_store.DEFAULT_TIMEOUT_SECONDS,
    'How many seconds to wait for another process holding the database lock.')
flags.DEFINE_string(
    'driver', None, 'The compiler driver. In record mode every positional '
    'argument is then a compiler argument. In replay mode it replaces the '
    'recorded driver.')
flags.DEFINE_bool('replay', False,
                  'Whether to replay the recorded invocation of a file.')
flags.DEFINE_string(
    'prefix', None, 'A program to run in front of the recorded driver when '
    'replaying.')
flags.DEFINE_string(
    'alternative', None, 'A file to compile instead of the input file when '
    'replaying.')
flags.DEFINE_bool('dry_run', False,
                  'Print the command instead of executing it.')
flags.DEFINE_bool('verbose', False,
                  'Print the command line before executing it.')
flags.DEFINE_multi_string(
    'value_flag', [], 'An additional compiler flag that takes its value as '
    'the following argument.')
flags.DEFINE_string(
    'export_compile_commands', None, 'Write every recorded invocation to this '
    'path as a compile_commands.json database and exit.')


def default_db_path(environment, home_dir):
  if environment.get(DB_ENVIRONMENT_VARIABLE):
    return environment[DB_ENVIRONMENT_VARIABLE]
  return os.path.join(home_dir, DEFAULT_DB_RELATIVE_PATH)


def split_wrapper_arguments(arguments):
  """Splits arguments into (wrapper_arguments, positional_arguments).

  Wrapper flags are the leading `--name` and `--name=value` tokens naming a
  defined flag, along with the following token for non-boolean flags given
  without `=`. The first other token ends them, so single-dash compiler flags
  are never parsed as wrapper flags. A `--` ends them explicitly and is
  dropped.
  """
  index = 0
  while index < len(arguments):
    argument = arguments[index]
    if argument == '--':
      return (arguments[:index], arguments[index + 1:])
    if not argument.startswith('--'):
      break
    name, has_value, _ = argument[2:].partition('=')
    if name in FLAGS:
      index += 1
      if not has_value and not FLAGS[name].boolean:
        index += 1
    elif (name.startswith('no') and name[2:] in FLAGS and
          FLAGS[name[2:]].boolean):
      index += 1
    else:
      break
  return (arguments[:index], arguments[index:])


def parse_flags(argv):
  wrapper_arguments, positional_arguments = split_wrapper_arguments(argv[1:])
  FLAGS([argv[0]] + wrapper_arguments)
  return [argv[0]] + positional_arguments


def record(store, arguments, cwd):
  """Records the invocation and returns the command vector of the compile."""
  if FLAGS.driver:
    driver = FLAGS.driver
    compiler_arguments = arguments
  elif arguments:
    driver = arguments[0]
    compiler_arguments = arguments[1:]
  else:
    raise app.UsageError('No compiler driver given.')

  value_flags = argument_classifier.make_value_flags(FLAGS.value_flag)
  flag_tokens, input_files = argument_classifier.classify_arguments(
      compiler_arguments, cwd, value_flags)
  recorder.record_invocation(store, driver, flag_tokens, input_files, cwd)
  return [driver] + compiler_arguments


def replay(store, arguments, cwd):
  if not arguments:
    raise app.UsageError('No input file given to replay.')
  return replayer.build_replay_command(
      store,
      arguments[0],
      cwd,
      prefix=FLAGS.prefix,
      alternative=FLAGS.alternative,
      extra_args=arguments[1:],
      driver=FLAGS.driver)


def main(argv):
  if FLAGS.verbose:
    logging.set_verbosity(logging.INFO)

  arguments = argv[1:]
  cwd = os.getcwd()
  db_path = FLAGS.db or default_db_path(os.environ, os.path.expanduser('~'))

  try:
    with invocation_store.InvocationStore(
        db_path, timeout=FLAGS.db_timeout) as store:
      if FLAGS.export_compile_commands:
        compile_database.write_compile_database(store,
                                                FLAGS.export_compile_commands)
        return 0
      elif FLAGS.replay:
        replay_command = replay(store, arguments, cwd)
        command_vector = replay_command.argv
        command_line = replay_command.command_line
        workdir = replay_command.workdir
      else:
        command_vector = record(store, arguments, cwd)
        command_line = shell_words.encode(command_vector)
        workdir = cwd
  except (CompileReplayError, sqlite3.Error, OSError) as error:
    logging.error(f'{error}')
    return 1

  if FLAGS.verbose or FLAGS.dry_run:
    print(command_line)
  if FLAGS.dry_run:
    return 0

  try:
    process.exec_command(command_vector, cwd=workdir)
  except OSError as error:
    logging.error(f'Failed to execute {command_vector[0]}: {error}')
  return 1


def run():
  app.run(main, flags_parser=parse_flags)


if __name__ == '__main__':
  run()
