"""Errors raised while recording or replaying compiler invocations."""


class CompileReplayError(Exception):
  pass


class FileResolutionError(CompileReplayError):

  def __init__(self, path):
    super().__init__(f'File {path} does not exist')
    self.path = path


class RecordNotFoundError(CompileReplayError):

  def __init__(self, path):
    super().__init__(f'No recorded invocation for {path}')
    self.path = path


class StoreContentionTimeoutError(CompileReplayError):
  pass
