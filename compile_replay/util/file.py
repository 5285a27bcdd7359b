"""Utilities for resolving file paths."""

import os

from compile_replay.util.errors import FileResolutionError


def resolve_path(path, base_dir):
  """Returns the absolute, symlink-resolved form of path.

  Relative paths are interpreted relative to base_dir rather than the current
  directory of the process. Raises FileResolutionError if the path does not
  exist.
  """
  full_path = os.path.join(base_dir, path)
  if not os.path.exists(full_path):
    raise FileResolutionError(path)
  return os.path.realpath(full_path)


def is_source_file_candidate(path, base_dir):
  # Extensionless files are never treated as sources, including dotfiles.
  if os.path.splitext(path)[1] == '':
    return False
  return os.path.isfile(os.path.join(base_dir, path))
