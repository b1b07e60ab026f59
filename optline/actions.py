r"""
Optline actions: what an option does when it is matched.

Overview
- SetConstant(target, value=True): assign a fixed value, consume nothing.
- ReadValue(target, type=str, choices=()): consume one value (inline or the
  next token), convert it and assign it.
- AppendValue(target, type=str, choices=()): like ReadValue but accumulate the
  converted values in a list.
- Invoke(callback): call callback(context); consume nothing unless the
  callback takes tokens itself through context.take().

Every action writes into the caller's store (a mutable mapping) under its
target key; the parser owns conversion and fault reporting, the action only
performs the final write through __apply__(context, value).

Introspection & representation
- ActionType metaclass provides stable __repr__/__rich_repr__ and exposes the
  fields listed in __introspectable__ as read-only properties.

Validation highlights
- target: non-empty string, trimmed.
- type: callable converter.
- choices: iterable; duplicates rejected unless a Set.
- callback: callable.
"""
import builtins
import functools
import operator
import re
from collections.abc import Iterable, MutableSequence, Set

from .utils import *


class ActionType(type):
    """
    Metaclass that gives actions a readable identity.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in configuration error messages.
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_{name}" field.
    - Provide __repr__/__rich_repr__ built from the introspectable fields.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_target(cls, metadata, /):
    """
    Internal: validate and normalize the 'target' key of a storing action.

    Raises
    - TypeError: when target is not a string.
    - ValueError: when target is empty after trimming.
    """
    if not isinstance(target := metadata["target"], str):
        raise TypeError(f"{cls.__typename__} 'target' must be a string")
    elif not (target := target.strip()):
        raise ValueError(f"{cls.__typename__} 'target' cannot be empty")
    metadata["target"] = target


def _sanitize_converter(cls, metadata, /):
    """
    Internal: validate 'type' and normalize 'choices' of a value-taking action.

    - type must be callable (str, int, pathlib.Path, a custom parser ...).
    - choices must be iterable; a non-Set iterable is checked for duplicates
      and frozen into a tuple to keep its display order.
    """
    if not callable(metadata["type"]):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")

    if not isinstance(choices := metadata["choices"], Iterable) or isinstance(choices, str):
        raise TypeError(f"{cls.__typename__} 'choices' must be iterable")
    if not isinstance(choices, Set):
        sanitized = []
        for choice in choices:
            if choice in sanitized:
                raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
            sanitized.append(choice)
        choices = tuple(sanitized)
    else:
        choices = frozenset(choices)
    metadata["choices"] = choices


class Action(metaclass=ActionType):
    """
    Base of the four action kinds; not meant to be instantiated directly.
    """
    takes_value = False

    def __apply__(self, context, value=Unset, /):
        raise NotImplementedError


class SetConstant(Action):
    """
    Assign a fixed value to store[target]; no token is consumed.

    Later occurrences of the same option (or of another option on the same
    target) override earlier ones.
    """

    __introspectable__ = (
        "target",
        "value",
    )

    def __init__(self, target, /, value=True):
        metadata = {"target": target}
        _sanitize_target(type(self), metadata)
        self._target = metadata["target"]
        self._value = value

    def __apply__(self, context, value=Unset, /):
        context.store[self._target] = self._value


class ReadValue(Action):
    """
    Consume one value, convert it with 'type' and assign it to store[target].

    The value is the inline part of the token when present (--name=value,
    -xvalue), otherwise the next token, whatever it looks like.
    """

    __introspectable__ = (
        "target",
        "type",
        "choices",
    )
    takes_value = True

    def __init__(self, target, /, type=str, choices=()):
        metadata = {"target": target, "type": type, "choices": choices}
        _sanitize_target(builtins.type(self), metadata)
        _sanitize_converter(builtins.type(self), metadata)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __apply__(self, context, value=Unset, /):
        context.store[self._target] = value


class AppendValue(ReadValue):
    """
    Like ReadValue, but accumulate every converted value in a list.

    A list already present in the store (a caller-supplied default) is
    extended in place; any other stored value is replaced by a new list.
    """

    def __apply__(self, context, value=Unset, /):
        values = context.store.get(self._target)
        if not isinstance(values, MutableSequence):
            values = context.store[self._target] = []
        values.append(value)


class Invoke(Action):
    """
    Run callback(context) when the option is matched.

    The callback may read further tokens with context.take(), render the usage
    with context.usage(), write into context.store, or end the process (a help
    callback exits with status 0).
    """

    __introspectable__ = (
        "callback",
    )

    def __init__(self, callback, /):
        if not callable(callback):
            raise TypeError(f"{type(self).__typename__} 'callback' must be callable")
        self._callback = callback

    def __apply__(self, context, value=Unset, /):
        self._callback(context)


__all__ = (
    "Action",
    "SetConstant",
    "ReadValue",
    "AppendValue",
    "Invoke",
)

# internal metaclass, not part of the public API
del ActionType
