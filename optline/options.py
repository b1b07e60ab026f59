r"""
Optline option descriptors and positional specifications.

Overview
- Option: one accepted option. Canonical name, ordered aliases, description
  and action (see optline.actions).
  • an alias of length 1 is a short form (-x), longer aliases are long
    forms (--xxx); aliases may be given bare ("v", "verbose") or dashed
    ("-v", "--verbose").
  • an empty description hides the option from the usage table; it is still
    matched by the parser.
- Slot: a named positional, required or optional, with an optional default
  and converter.
- Rest: a variadic collector for every positional beyond the named slots,
  with an optional minimum count.
- Positionals: the ordered slots plus the optional rest collector and the
  optional tail target (tokens after a literal '--').

Validation highlights
- Aliases must match r"[^\W_]" (short) or r"[^\W\d_](-?[^\W_]+)*" (long) and
  be unique within a descriptor. Underscores are rejected to keep CLI style
  conventional; unicode letters are accepted.
- A descriptor without alias or without action is a ConfigurationError.
- Required slots must precede optional ones; slot/rest/tail names must be
  unique. Both are ConfigurationError.
"""
import builtins
import functools
import operator
import re

from .actions import Action
from .faults import ConfigurationError
from .utils import *


class SpecType(type):
    """
    Metaclass shared by descriptors and positional specs.

    - __typename__ derived from the class name for consistent messages.
    - Read-only properties for every name in __introspectable__.
    - Stable __repr__/__rich_repr__ for diagnostics.
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


def _sanitize_name(cls, metadata, /):
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    metadata["name"] = name


def _sanitize_descr(cls, metadata, /):
    if not isinstance(descr := metadata["descr"], str):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    metadata["descr"] = descr.strip()


def _sanitize_aliases(cls, metadata, /):
    r"""
    Internal: validate and normalize the aliases of an option descriptor.

    - at least one alias (ConfigurationError otherwise).
    - leading dashes are stripped; a dashed alias must agree with its length
      ("-v" and "--verbose" are fine, "-verbose" and "--v" are not).
    - short: r"[^\W_]", long: r"[^\W\d_](-?[^\W_]+)*".
    - duplicates are rejected; order is preserved.
    """
    if not metadata["aliases"]:
        raise ConfigurationError(f"{cls.__typename__} must specify at least one alias", metadata)

    aliases = []
    for alias in metadata["aliases"]:
        if not isinstance(alias, str):
            raise TypeError(f"{cls.__typename__} aliases must be strings")
        elif not (alias := alias.strip()):
            raise ConfigurationError(f"{cls.__typename__} aliases cannot be empty-strings", metadata)

        if alias.startswith("--"):
            bare, dashes = alias[2:], 2
        elif alias.startswith("-"):
            bare, dashes = alias[1:], 1
        else:
            bare, dashes = alias, 0

        if dashes and dashes != 1 + (len(bare) > 1):
            raise ConfigurationError(
                f"{cls.__typename__} alias {alias!r} must use one dash for a single character, two otherwise",
                metadata
            )
        if not re.fullmatch(r"[^\W_]" if len(bare) == 1 else r"[^\W\d_](-?[^\W_]+)*", bare):
            raise ConfigurationError(
                f"{cls.__typename__} alias {alias!r} must be a valid shell-style option name",
                metadata
            )
        if bare in aliases:
            raise ConfigurationError(f"{cls.__typename__} aliases cannot contain duplicates", metadata)
        aliases.append(bare)

    metadata["aliases"] = tuple(aliases)


def switch(alias, /):
    """
    Return the invocation form of a bare alias ("v" -> "-v", "verbose" -> "--verbose").
    """
    return ("-" if len(alias) == 1 else "--") + alias


class Option(metaclass=SpecType):
    """
    One accepted option: canonical name, aliases, description and action.

    Parameters
    - aliases: one or more str, bare or dashed.
    - name: canonical identifier; defaults to the last alias. Unique within a
      registry (the registry enforces it).
    - descr: str; empty means hidden from the usage table.
    - action: SetConstant | ReadValue | AppendValue | Invoke (required).

    Properties
    - takes_value: derived from the action kind.
    - hidden: True when the description is empty.
    - switches: the dashed forms, in alias order.
    """

    __introspectable__ = (
        "name",
        "aliases",
        "descr",
        "action",
    )

    def __init__(self, *aliases, name=Unset, descr="", action=Unset):
        metadata = {
            "aliases": aliases,
            "name": name,
            "descr": descr,
            "action": action,
        }
        _sanitize_aliases(type(self), metadata)
        metadata["name"] = coalesce(metadata["name"], metadata["aliases"][-1])
        _sanitize_name(type(self), metadata)
        _sanitize_descr(type(self), metadata)

        if metadata["action"] is Unset:
            raise ConfigurationError(
                f"{type(self).__typename__} {metadata['name']!r} must specify an action",
                metadata
            )
        if not isinstance(metadata["action"], Action):
            raise TypeError(f"{type(self).__typename__} 'action' must be an action")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def takes_value(self):
        return self._action.takes_value

    @property
    def hidden(self):
        return not self._descr

    @property
    def switches(self):
        return tuple(map(switch, self._aliases))


class Slot(metaclass=SpecType):
    """
    A named positional argument bound by position.

    Parameters
    - name: store key of the slot.
    - required: bool; required slots must precede optional ones.
    - default: value written when an optional slot stays unfilled. When
      Unset, whatever the caller already stored is left untouched.
    - type: converter applied to the token.
    - descr: str; shown in the "arguments" table when not empty.
    """

    __introspectable__ = (
        "name",
        "required",
        "default",
        "type",
        "descr",
    )

    def __init__(self, name, /, required=True, default=Unset, type=str, descr=""):
        metadata = {
            "name": name,
            "required": bool(required),
            "default": default,
            "type": type,
            "descr": descr,
        }
        _sanitize_name(builtins.type(self), metadata)
        _sanitize_descr(builtins.type(self), metadata)
        if not callable(metadata["type"]):
            raise TypeError(f"{builtins.type(self).__typename__} 'type' must be callable")
        if metadata["required"] and metadata["default"] is not Unset:
            raise ConfigurationError(
                f"{builtins.type(self).__typename__} {metadata['name']!r} is required and cannot have a default",
                metadata
            )

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class Rest(metaclass=SpecType):
    """
    A variadic trailing collector for every positional beyond the named slots.

    Parameters
    - name: store key of the list.
    - minimum: non-negative int; fewer collected tokens is a parse error.
    - type: converter applied to each token.
    - descr: str; shown in the "arguments" table when not empty.
    """

    __introspectable__ = (
        "name",
        "minimum",
        "type",
        "descr",
    )

    def __init__(self, name, /, minimum=0, type=str, descr=""):
        metadata = {
            "name": name,
            "minimum": minimum,
            "type": type,
            "descr": descr,
        }
        _sanitize_name(builtins.type(self), metadata)
        _sanitize_descr(builtins.type(self), metadata)
        if not isinstance(minimum, int) or isinstance(minimum, bool):
            raise TypeError(f"{builtins.type(self).__typename__} 'minimum' must be an integer")
        if minimum < 0:
            raise ConfigurationError(f"{builtins.type(self).__typename__} 'minimum' cannot be negative", metadata)
        if not callable(metadata["type"]):
            raise TypeError(f"{builtins.type(self).__typename__} 'type' must be callable")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class Positionals(metaclass=SpecType):
    """
    Ordered positional slots, an optional rest collector and an optional tail.

    Parameters
    - slots: Slot instances (or bare names, which become required slots).
    - rest: Rest | str | Unset. A bare name becomes Rest(name).
    - tail: str | Unset. When given, the tokens after a literal '--' are stored
      under this name and are not offered to the slots or the rest.

    Raises
    - ConfigurationError: optional slot before a required one, or duplicate
      names among slots/rest/tail.
    - TypeError: values of the wrong kind.
    """

    __introspectable__ = (
        "slots",
        "rest",
        "tail",
    )

    def __init__(self, *slots, rest=Unset, tail=Unset):
        normalized = []
        optional = Unset
        for slot in slots:
            if isinstance(slot, str):
                slot = Slot(slot)
            if not isinstance(slot, Slot):
                raise TypeError(f"{type(self).__typename__} slots must be slots or names")
            if not slot.required:
                optional = coalesce(optional, slot)
            elif optional:
                raise ConfigurationError(
                    f"{type(self).__typename__} required slot {slot.name!r} cannot follow optional slot {optional.name!r}",
                    slot
                )
            normalized.append(slot)

        if isinstance(rest, str):
            rest = Rest(rest)
        if not isinstance(rest, Rest | Unset):
            raise TypeError(f"{type(self).__typename__} 'rest' must be a rest collector or a name")

        if not isinstance(tail, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'tail' must be a string")
        elif isinstance(tail, str) and not (tail := tail.strip()):
            raise ValueError(f"{type(self).__typename__} 'tail' cannot be empty")

        seen = set()
        for name in [slot.name for slot in normalized] + [getattr(rest, "name", Unset), tail]:
            if name is Unset:
                continue
            if name in seen:
                raise ConfigurationError(f"{type(self).__typename__} name {name!r} is already in use", name)
            seen.add(name)

        self._slots = tuple(normalized)
        self._rest = rest
        self._tail = tail

    @property
    def required(self):
        return tuple(slot for slot in self._slots if slot.required)

    @property
    def optional(self):
        return tuple(slot for slot in self._slots if not slot.required)

    def __bool__(self):
        return bool(self._slots or self._rest or self._tail)


__all__ = (
    "Option",
    "Slot",
    "Rest",
    "Positionals",
    "switch",
)

# internal metaclass, not part of the public API
del SpecType
