"""Splits a compiler command line into flag tokens and source file operands.

Only the shape of the flags is inspected. Flags that take a value are listed
in a table along with whether the value may be passed as a separate token, so
that a detached value such as the directory in `-I include` is kept with its
flag and never mistaken for a source file.
"""

from compile_replay.util import file

FLAG_PREFIX = '-'

# Spelling -> whether the value may be given as the following token.
DEFAULT_VALUE_FLAGS = {
    # Output
    '-o': True,
    '-MF': True,
    '-MT': True,
    '-MQ': True,
    '-aux-info': True,
    # Preprocessor
    '-D': True,
    '-U': True,
    '-A': True,
    '-I': True,
    '-include': True,
    '-imacros': True,
    '-idirafter': True,
    '-iprefix': True,
    '-iwithprefix': True,
    '-iwithprefixbefore': True,
    '-isystem': True,
    '-isysroot': True,
    '-iquote': True,
    '-imultilib': True,
    '--sysroot': True,
    # Language and target
    '-x': True,
    '-arch': True,
    '-target': True,
    '--target': True,
    '-std': False,
    '-march': False,
    '-mcpu': False,
    # Linker
    '-L': True,
    '-l': True,
    '-T': True,
    '-u': True,
    '-e': True,
    '-rpath': True,
    '-framework': True,
    # Passthrough to other tools
    '-Xclang': True,
    '-Xpreprocessor': True,
    '-Xassembler': True,
    '-Xlinker': True,
    '-mllvm': True,
    '-Wl,': False,
    '-Wa,': False,
    '-Wp,': False,
    # Parameters
    '--param': True,
}


def make_value_flags(extra_detached_flags=()):
  value_flags = dict(DEFAULT_VALUE_FLAGS)
  for spelling in extra_detached_flags:
    value_flags[spelling] = True
  return value_flags


def classify_arguments(arguments, workdir, value_flags=DEFAULT_VALUE_FLAGS):
  """Splits arguments into (flag_tokens, input_files).

  Both lists keep the relative order the tokens had in arguments. Bare tokens
  are only taken as input files when they name an existing regular file with
  an extension, resolved relative to workdir.
  """
  flag_tokens = []
  input_files = []

  index = 0
  while index < len(arguments):
    argument = arguments[index]
    index += 1
    if value_flags.get(argument, False):
      flag_tokens.append(argument)
      # A trailing value flag with nothing after it consumes nothing.
      if index < len(arguments):
        flag_tokens.append(arguments[index])
        index += 1
    elif argument.startswith(FLAG_PREFIX):
      # Covers value flags with the value attached, such as -Ifoo or -Wl,-z.
      flag_tokens.append(argument)
    elif file.is_source_file_candidate(argument, workdir):
      input_files.append(argument)
    else:
      flag_tokens.append(argument)

  return (flag_tokens, input_files)
