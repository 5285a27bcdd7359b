"""Records the flags used to compile each input file of an invocation."""

import logging

from compile_replay.util import file


def record_invocation(store, driver, flag_tokens, input_files, workdir):
  """Stores one record per input file and returns their resolved paths.

  Every file is resolved before its record is written. The first file that
  cannot be resolved aborts the whole invocation with FileResolutionError,
  leaving the records already written in place.
  """
  recorded_files = []
  for input_file in input_files:
    resolved_file = file.resolve_path(input_file, workdir)
    store.put(resolved_file, driver, flag_tokens, workdir)
    logging.info(f'Recorded {driver} invocation for {resolved_file}')
    recorded_files.append(resolved_file)
  return recorded_files
