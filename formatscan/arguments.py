#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

"""Output locations and the handles the scanning engine uses to reach them.

A Ref is the caller's output cell: it declares the type to scan and receives
the value. An Arg is a non-owning handle on one Ref, carrying the type tag
used to pick a scanner. A NamedArg pairs a key with a snapshot of such a
handle, taken once when the name is bound.
"""

import builtins
import copy

from .result import ErrorCode, Result, expect
from . import scanners


class Ref(object):
  __slots__ = 'type', 'value'

  def __init__(self, type, value=None):
    if not isinstance(type, builtins.type):
      raise TypeError('Ref() needs a type to scan, got %s' % repr(type))
    self.type = type
    self.value = value

  def __repr__(self):
    return 'ref(%s, %s)' % (self.type.__name__, repr(self.value))


class Arg(object):
  """Type-erased handle on a Ref. Arg() is the empty handle."""
  __slots__ = '_ref', '_type'

  def __init__(self, ref=None):
    if ref is not None and not isinstance(ref, Ref):
      raise TypeError(
          'Scan targets must be Ref or NamedArg, not %s' % type(ref).__name__)
    self._ref = ref
    self._type = ref.type if ref is not None else None

  @property
  def type(self):
    return self._type

  @property
  def ref(self):
    expect(self._ref is not None, 'The empty argument has no target')
    return self._ref

  def scanner(self):
    expect(self._ref is not None, 'The empty argument has no scanner')
    return scanners.scanner_for(self._type)

  def __bool__(self):
    return self._ref is not None

  def __eq__(self, other):
    if not isinstance(other, Arg):
      return NotImplemented
    return self._ref is other._ref

  def __hash__(self):
    return id(self._ref)

  def __repr__(self):
    if self._ref is None:
      return 'arg(empty)'
    return 'arg(%s)' % self._type.__name__


class NamedArg(object):
  __slots__ = 'name', 'value', 'data'

  def __init__(self, name, value):
    self.name = name
    self.value = value
    # Snapshot of the handle, taken once. Later lookups hand out copies.
    self.data = Arg(value)

  @property
  def type(self):
    return self.data.type

  def deserialize(self, expected=None):
    """Rebuilds the handle, checking it against the type the caller expects.

    expected=None accepts whatever type was captured.
    """
    if expected is not None and expected is not self.data.type:
      return Result.fail(
          ErrorCode.INVALID_ARGUMENT,
          'Named argument "%s" holds %s, not %s' % (
              self.name, self.data.type.__name__, expected.__name__))
    return Result.ok(copy.copy(self.data))

  def __repr__(self):
    return 'named(%s, %s)' % (repr(self.name), repr(self.value))


def arg(name, ref):
  if isinstance(ref, NamedArg):
    raise TypeError(
        'Cannot bind the name "%s" to the named argument "%s"' % (
            name, ref.name))
  if not isinstance(ref, Ref):
    raise TypeError(
        'arg() binds a name to a Ref, not %s' % type(ref).__name__)
  return NamedArg(name, ref)


class Args(object):
  """The caller's argument list, as handles."""
  __slots__ = '_args', '_named'

  def __init__(self, args=(), named=()):
    self._args = tuple(args)
    self._named = tuple(named)

  def get(self, arg_id):
    if self.check_id(arg_id):
      return self._args[arg_id]
    return Arg()

  def check_id(self, arg_id):
    return 0 <= arg_id < len(self._args)

  @property
  def named(self):
    return self._named

  def __len__(self):
    return len(self._args)

  def __iter__(self):
    return iter(self._args)

  def __repr__(self):
    return 'args(%s)' % ', '.join(repr(a) for a in self._args)


def make_args(*targets):
  args, named = [], []
  for target in targets:
    if isinstance(target, NamedArg):
      args.append(target.deserialize().value)
      named.append(target)
    else:
      args.append(Arg(target))
  return Args(args, named)


class ArgMap(object):
  """Name lookup over the named arguments of an Args."""
  __slots__ = '_map',

  def __init__(self):
    self._map = {}

  @classmethod
  def build(cls, args):
    argmap = cls()
    for named in args.named:
      if named.name in argmap._map:
        return Result.fail(
            ErrorCode.INVALID_ARGUMENT,
            'Argument name "%s" bound more than once' % named.name)
      argmap._map[named.name] = named
    return Result.ok(argmap)

  def find(self, name, expected=None):
    named = self._map.get(name)
    if named is None:
      return Result.ok(Arg())
    return named.deserialize(expected)

  def __contains__(self, name):
    return name in self._map

  def __len__(self):
    return len(self._map)
