"""
Optline positional binder: assign leftover tokens to the declared slots.

Input
- the positional specification (optline.options.Positionals),
- the free tokens collected while scanning, as (token, index) pairs,
- the tokens found after a literal '--' (or Unset when there was none),
- the caller's store.

Order of binding
1. required slots, in declaration order, one token each;
2. optional slots while tokens remain (unfilled ones keep the caller's value,
   or take the slot default when one is declared);
3. everything else goes to the rest collector, or is an error without one.

Order of checks (at most one binding fault is reported)
- missing required slots, then the rest minimum, then unexpected tokens.
"""
import logging
from collections import deque

from .faults import *
from .utils import *

logger = logging.getLogger(__name__)


def _convert(converter, entry, subject, faults, /):
    """
    Convert one (token, index) entry; record an InvalidValueError on failure.
    """
    token, index = entry
    try:
        return converter(token)
    except (TypeError, ValueError) as exception:
        faults.append(InvalidValueError(
            "invalid value %r for %s at %s position" % (token, subject, ordinal(index)),
            title="invalid value",
            code=FaultCode.INVALID_VALUE,
            token=token,
            index=index,
            hint=str(exception) or "check the expected form of %s" % subject,
            exception=exception,
        ))
        return Unset


def bind(positionals, entries, tail, store, /):
    """
    Bind positional tokens into the store and return the list of faults.

    Parameters
    - positionals: Positionals
    - entries: list[tuple[str, int]] of free tokens (token, 1-based index)
    - tail: list[tuple[str, int]] after '--', or Unset when '--' was absent
    - store: MutableMapping receiving the bound values
    """
    faults = []
    entries = list(entries)

    if positionals.tail:
        store[positionals.tail] = [token for token, _ in coalesce(tail, ())]
        logger.debug("bound %d token(s) after '--' to %r", len(store[positionals.tail]), positionals.tail)
    elif tail is not Unset:
        entries.extend(tail)

    queue = deque(entries)
    required = positionals.required

    if len(queue) < len(required):
        shortfall = len(required) - len(queue)
        missing = required[len(queue)]
        faults.append(MissingPositionalError(
            "expects %d more %s, starting with %r" % (shortfall, pluralize("argument") if shortfall > 1 else "argument", missing.name),
            title="missing positional",
            code=FaultCode.MISSING_POSITIONALS,
            token=missing.name,
            expected=shortfall,
            hint="add the missing %s after the options" % ("values" if shortfall > 1 else "value"),
        ))
        if rest := positionals.rest:
            store[rest.name] = []
        return faults

    for slot in required:
        if (value := _convert(slot.type, queue.popleft(), "argument %r" % slot.name, faults)) is not Unset:
            store[slot.name] = value
            logger.debug("bound argument %r to %r", slot.name, value)

    for slot in positionals.optional:
        if queue:
            if (value := _convert(slot.type, queue.popleft(), "argument %r" % slot.name, faults)) is not Unset:
                store[slot.name] = value
                logger.debug("bound argument %r to %r", slot.name, value)
        elif slot.default is not Unset:
            store[slot.name] = slot.default
            logger.debug("using default value %r for argument %r", slot.default, slot.name)
        else:
            logger.debug("leaving argument %r unfilled", slot.name)

    if rest := positionals.rest:
        values = []
        for entry in queue:
            if (value := _convert(rest.type, entry, "argument %r" % rest.name, faults)) is not Unset:
                values.append(value)
        store[rest.name] = values
        logger.debug("bound %d token(s) to %r", len(values), rest.name)

        if len(queue) < rest.minimum:
            faults.append(NotEnoughPositionalsError(
                "expects at least %d %s for %r, got %d" % (
                    rest.minimum, pluralize("argument") if rest.minimum > 1 else "argument", rest.name, len(queue)
                ),
                title="not enough positionals",
                code=FaultCode.NOT_ENOUGH_POSITIONALS,
                token=rest.name,
                expected=rest.minimum,
                got=len(queue),
                hint="add %d more %s" % (
                    rest.minimum - len(queue), "values" if rest.minimum - len(queue) > 1 else "value"
                ),
            ))
    elif queue:
        token, index = queue[0]
        faults.append(UnexpectedPositionalError(
            "unexpected argument %r at %s position" % (token, ordinal(index)),
            title="unexpected positional",
            code=FaultCode.UNEXPECTED_POSITIONAL,
            token=token,
            index=index,
            leftover=[token for token, _ in queue],
            hint="remove this extra value; the program takes %d positional %s at most" % (
                len(positionals.slots), pluralize("argument") if len(positionals.slots) != 1 else "argument"
            ),
        ))

    return faults


__all__ = (
    "bind",
)
