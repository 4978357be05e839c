#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

import sys

import colorama
import simplejson

from . import scan as scanning
from .args import parser
from .arguments import Ref, arg
from .common import dbg, err, uniprint
from .localeref import LocaleRef
from .options import Method, Options
from .result import ScanError
from .stream import BytesStream


class ScanFailedException(Exception):
  def __init__(self, error, values=None):
    super(ScanFailedException, self).__init__(str(error))
    self.error = error
    self.values = values


class DefaultConfigurable(object):
  def __init__(self, args):
    self._args = args

  @property
  def args(self):
    return self._args

  def make_options(self):
    return Options(
        int_method=Method(self.args.int_method),
        locale=LocaleRef.from_system() if self.args.system_locale else None,
        explain=self.args.explain)

  def read_input(self):
    if self.args.input is None:
      data = sys.stdin.buffer.read()
    else:
      with open(self.args.input, 'rb') as f:
        data = f.read()
    stream = BytesStream(data, self.args.encoding)
    if self.args.explain:
      dbg('input decoded as %s' % stream.encoding)
    return stream


class ScanCommand(DefaultConfigurable):
  style = 'scan'

  def make_targets(self):
    refs, targets = [], []
    for spec in self.args.targets:
      ref = Ref(spec.type)
      refs.append((spec.name, ref))
      targets.append(ref if spec.name is None else arg(spec.name, ref))
    return refs, targets

  def collect(self, refs):
    if any(name is not None for name, _ in refs):
      return dict((name if name is not None else str(i), ref.value)
                  for i, (name, ref) in enumerate(refs))
    return [ref.value for _, ref in refs]

  def invoke(self, stream, targets, options):
    entry = getattr(scanning, self.style)
    return entry(stream, self.args.format, *targets, options=options)

  def run(self):
    refs, targets = self.make_targets()
    result = self.invoke(self.read_input(), targets, self.make_options())
    values = self.collect(refs)
    if not result:
      raise ScanFailedException(result.error, values)
    return values


class ScanfCommand(ScanCommand):
  style = 'scanf'


class DefaultCommand(ScanCommand):
  def invoke(self, stream, targets, options):
    return scanning.scan_default(stream, *targets, options=options)


class GetlineCommand(DefaultConfigurable):
  def run(self):
    line = Ref(str)
    result = scanning.getline(self.read_input(), line, self.args.until)
    if not result:
      raise ScanFailedException(result.error)
    return line.value


def provide_configured_command(args):
  if args.cmd == 'scan':
    return ScanCommand(args)
  elif args.cmd == 'scanf':
    return ScanfCommand(args)
  elif args.cmd == 'default':
    return DefaultCommand(args)
  elif args.cmd == 'getline':
    return GetlineCommand(args)
  else:
    parser.error('you must specify an operation (scan, scanf, default, getline)')

def dump(values, pretty):
  if pretty:
    return simplejson.dumps(values, ensure_ascii=False, indent=2)
  return simplejson.dumps(values, ensure_ascii=False)

def main(argv=None):
  args = parser.parse_args(argv)
  color = args.color and sys.stdout.isatty()
  if color:
    colorama.init()
  command = provide_configured_command(args)
  try:
    values = command.run()
  except ScanFailedException as e:
    if args.explain and e.values is not None:
      dbg('scanned before the error: ' + dump(e.values, False))
    err(str(e.error), color=color)
    return 1
  except ScanError as e:
    err(str(e.error), color=color)
    return 1
  except OSError as e:
    err('cannot read input: %s' % e, color=color)
    return 1
  uniprint(dump(values, args.pretty))
  return 0

if __name__ == '__main__':
  sys.exit(main())
