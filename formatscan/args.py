#!/usr/bin/python
# -*- coding: utf-8 -*-

import argparse

from .common import progname
from .options import Method
from .scanners import Char

desc = '''
Scans values out of text using "{}" or scanf-style format strings and prints
them as JSON.
'''

type_names = {
    'int': int,
    'float': float,
    'str': str,
    'char': Char,
    'bool': bool,
}


class TargetSpec(object):
  __slots__ = 'name', 'type'

  def __init__(self, name, type):
    self.name = name
    self.type = type

  def __repr__(self):
    return 'target(%s, %s)' % (repr(self.name), self.type.__name__)


def target_spec(text):
  name, sep, type_name = text.rpartition('=')
  if sep and not name:
    raise argparse.ArgumentTypeError('empty argument name in "%s"' % text)
  if name.isdigit():
    raise argparse.ArgumentTypeError(
        'argument name "%s" would clash with a position' % name)
  if type_name not in type_names:
    raise argparse.ArgumentTypeError(
        'unknown type "%s" (choose from %s)' % (
            type_name, ', '.join(sorted(type_names))))
  return TargetSpec(name or None, type_names[type_name])


def delimiter(text):
  if len(text) != 1:
    raise argparse.ArgumentTypeError(
        'the delimiter must be a single character, not "%s"' % text)
  return text


parser = argparse.ArgumentParser(prog=progname, description=desc)

cmd_parser = parser.add_subparsers(title='supported operations', dest='cmd')

targets_parser = argparse.ArgumentParser(add_help=False)

targets_parser.add_argument('targets',
    nargs='+',
    type=target_spec,
    help='type of each value to scan, optionally bound to a name (NAME=TYPE)',
    metavar='TYPE',
)

format_parser = argparse.ArgumentParser(add_help=False)

format_parser.add_argument('format',
    help='format string describing the input',
    metavar='FORMAT',
)

scan_cmd_parser = cmd_parser.add_parser('scan',
    help='scan with a "{}" format string',
    parents=[format_parser, targets_parser],
)

scanf_cmd_parser = cmd_parser.add_parser('scanf',
    help='scan with a scanf-style "%%d" format string',
    parents=[format_parser, targets_parser],
)

default_cmd_parser = cmd_parser.add_parser('default',
    help='scan whitespace-separated values without a format string',
    parents=[targets_parser],
)

getline_cmd_parser = cmd_parser.add_parser('getline',
    help='read the first line of input',
)

getline_cmd_parser.add_argument('--until',
    default='\n',
    type=delimiter,
    help='character that ends the line (default: newline)',
    metavar='CHAR',
)


parser.add_argument('-i', '--input',
    default=None,
    help='file to read input from (default: standard input)',
    metavar='FILE',
)

parser.add_argument('--encoding',
    default=None,
    help='encoding of the input; detected automatically when not given',
)

parser.add_argument('--system-locale',
    action='store_true',
    dest='system_locale',
    help='use the system locale for whitespace, decimal point and grouping',
)
parser.set_defaults(system_locale=False)

parser.add_argument('--int-method',
    choices=[m.value for m in Method],
    default=Method.STRTO.value,
    dest='int_method',
    help='how integers are converted (default: strto)',
)

parser.add_argument('--explain',
    action='store_true',
    dest='explain',
    help='verbosely explain the scan as it is happening',
)
parser.set_defaults(explain=False)

parser.add_argument('--pretty',
    action='store_true',
    dest='pretty',
    help='indent the JSON output',
)
parser.set_defaults(pretty=False)

parser.add_argument('--no-color',
    action='store_false',
    dest='color',
    help="don't color error messages",
)
parser.set_defaults(color=True)
