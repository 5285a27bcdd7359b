import pytest

from compile_replay.wrapper import argument_classifier
from compile_replay.wrapper.argument_classifier import classify_arguments


@pytest.fixture
def workdir(tmp_path):
  (tmp_path / 'main.c').write_text('int main(void) { return 0; }\n')
  (tmp_path / 'util.cc').write_text('\n')
  (tmp_path / 'Makefile').write_text('all:\n')
  (tmp_path / 'inc').mkdir()
  return str(tmp_path)


def test_concatenated_include_is_one_flag(workdir):
  assert classify_arguments(['-Ifoo'], workdir) == (['-Ifoo'], [])


def test_detached_include_consumes_value(workdir):
  assert classify_arguments(['-I', 'foo'], workdir) == (['-I', 'foo'], [])


def test_existing_source_file_is_input(workdir):
  assert classify_arguments(['main.c'], workdir) == ([], ['main.c'])


def test_macro_definition_consumes_nothing_extra(workdir):
  assert classify_arguments(['-DFOO', 'main.c'],
                            workdir) == (['-DFOO'], ['main.c'])


def test_extensionless_existing_file_is_not_input(workdir):
  assert classify_arguments(['Makefile'], workdir) == (['Makefile'], [])


def test_directory_with_extension_is_not_input(workdir, tmp_path):
  (tmp_path / 'objs.d').mkdir()
  assert classify_arguments(['objs.d'], workdir) == (['objs.d'], [])


def test_missing_file_is_not_input(workdir):
  assert classify_arguments(['missing.c'], workdir) == (['missing.c'], [])


def test_detached_value_is_never_an_input(workdir):
  # The value of -o names an existing source file but belongs to the flag.
  flag_tokens, input_files = classify_arguments(
      ['-o', 'main.c', 'util.cc'], workdir)
  assert flag_tokens == ['-o', 'main.c']
  assert input_files == ['util.cc']


def test_trailing_value_flag_consumes_nothing(workdir):
  assert classify_arguments(['main.c', '-o'], workdir) == (['-o'], ['main.c'])


def test_streams_keep_relative_order(workdir):
  arguments = [
      '-c', 'util.cc', '-O2', '-I', 'inc', 'main.c', '-DA=1', '-DB', '-Wl,-z',
      '--param', 'max-inline-insns=10'
  ]
  flag_tokens, input_files = classify_arguments(arguments, workdir)
  assert flag_tokens == [
      '-c', '-O2', '-I', 'inc', '-DA=1', '-DB', '-Wl,-z', '--param',
      'max-inline-insns=10'
  ]
  assert input_files == ['util.cc', 'main.c']


def test_bare_non_file_token_is_flag(workdir):
  assert classify_arguments(['-x', 'c', 'FOO'], workdir) == (['-x', 'c', 'FOO'],
                                                            [])


def test_absolute_input_path(workdir, tmp_path):
  source_path = str(tmp_path / 'main.c')
  assert classify_arguments(['-c', source_path],
                            '/') == (['-c'], [source_path])


def test_extra_value_flags(workdir):
  value_flags = argument_classifier.make_value_flags(['-fplugin-arg'])
  assert classify_arguments(['-fplugin-arg', 'main.c'], workdir,
                            value_flags) == (['-fplugin-arg', 'main.c'], [])
  # Without the extra spelling the value is taken as an input file.
  assert classify_arguments(['-fplugin-arg', 'main.c'],
                            workdir) == (['-fplugin-arg'], ['main.c'])


def test_make_value_flags_leaves_defaults_untouched():
  argument_classifier.make_value_flags(['--custom'])
  assert '--custom' not in argument_classifier.DEFAULT_VALUE_FLAGS
