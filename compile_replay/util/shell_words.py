"""Encoding of argument lists into a single shell-readable string."""

import shlex


def encode(tokens):
  return shlex.join(tokens)


def decode(text):
  if not text:
    return []
  return shlex.split(text)
