#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

import os
import sys

import colorama


progname = 'formatscan'

def dbg(message, depth=0):
  output = '[dbg] ' + ' ' * depth * 2 + message
  uniprint(output)

def err(message, color=False):
  output = progname + ': error: ' + message
  if color:
    output = colorama.Fore.RED + output + colorama.Style.RESET_ALL
  uniprint(output)

def uniprint(message, end=None):
  if end is None:
    end = os.linesep

  encoding = sys.stdout.encoding or 'ascii'
  try:
    sys.stdout.buffer.write(message.encode(encoding, errors='replace'))
    print('', end=end)
  except AttributeError:
    # Captured or replaced stdout without a binary buffer underneath.
    print(message, end=end)

def printable_char(ch):
  """Renders a single character for use in an error message."""
  if ch is None:
    return 'end of input'
  return repr(ch)
