"""Exports recorded invocations as a clang compilation database."""

import json
import logging


def build_entries(store):
  entries = []
  for record in store.records():
    entries.append({
        'directory': record.workdir,
        'file': record.file,
        'arguments': [record.driver] + record.args + [record.file]
    })
  return entries


def write_compile_database(store, output_path):
  entries = build_entries(store)
  with open(output_path, 'w') as output_file:
    json.dump(entries, output_file, indent=2)
  logging.info(f'Wrote {len(entries)} entries to {output_path}')
  return len(entries)
