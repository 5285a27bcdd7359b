"""Persistent mapping from source files to the compiler invocation that built
them.

The store is a single SQLite database with one table. Each row is keyed by the
absolute path of a source file and holds the driver, the flag tokens and the
working directory of the most recent invocation that compiled that file.
Multiple wrapper processes from a parallel build may write to the same
database concurrently. SQLite serializes the writers and the busy timeout
bounds how long a writer waits for the lock.
"""

import collections
import logging
import os
import sqlite3

from compile_replay.util import shell_words
from compile_replay.util.errors import StoreContentionTimeoutError

DEFAULT_TIMEOUT_SECONDS = 5.0

InvocationRecord = collections.namedtuple('InvocationRecord',
                                          ['file', 'driver', 'args', 'workdir'])

_CREATE_TABLE = ('CREATE TABLE IF NOT EXISTS invocations ('
                 'file TEXT PRIMARY KEY, '
                 'driver TEXT NOT NULL, '
                 'args TEXT NOT NULL, '
                 'workdir TEXT NOT NULL)')


def _is_contention_error(error):
  message = str(error).lower()
  return 'locked' in message or 'busy' in message


class InvocationStore:

  def __init__(self, db_path, timeout=DEFAULT_TIMEOUT_SECONDS):
    self.db_path = db_path
    self.timeout = timeout
    db_dir = os.path.dirname(os.path.abspath(db_path))
    os.makedirs(db_dir, exist_ok=True)
    self._connection = sqlite3.connect(db_path, timeout=timeout)
    self._run(self._create_table)

  def _create_table(self):
    with self._connection:
      self._connection.execute(_CREATE_TABLE)

  def _run(self, operation, *args):
    try:
      return operation(*args)
    except sqlite3.OperationalError as error:
      if _is_contention_error(error):
        raise StoreContentionTimeoutError(
            f'Timed out after {self.timeout}s waiting for {self.db_path}: '
            f'{error}') from error
      raise

  def _put(self, file, driver, flag_tokens, workdir):
    with self._connection:
      self._connection.execute(
          'INSERT OR REPLACE INTO invocations (file, driver, args, workdir) '
          'VALUES (?, ?, ?, ?)',
          (file, driver, shell_words.encode(flag_tokens), workdir))

  def put(self, file, driver, flag_tokens, workdir):
    self._run(self._put, file, driver, flag_tokens, workdir)
    logging.debug(f'Stored invocation for {file}')

  def _get(self, file):
    return self._connection.execute(
        'SELECT file, driver, args, workdir FROM invocations WHERE file = ?',
        (file,)).fetchone()

  def get(self, file):
    row = self._run(self._get, file)
    if row is None:
      return None
    return _record_from_row(row)

  def _all_rows(self):
    return self._connection.execute(
        'SELECT file, driver, args, workdir FROM invocations '
        'ORDER BY file').fetchall()

  def records(self):
    return [_record_from_row(row) for row in self._run(self._all_rows)]

  def close(self):
    self._connection.close()

  def __enter__(self):
    return self

  def __exit__(self, exc_type, exc_value, traceback):
    self.close()


def _record_from_row(row):
  file, driver, args, workdir = row
  return InvocationRecord(
      file=file, driver=driver, args=shell_words.decode(args), workdir=workdir)
