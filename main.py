import logging
import re

from rich.pretty import pprint

from optline import Registry, Rest
from optline import logs

__prog__ = "list-functions"

logger = logging.getLogger(__prog__)

registry = Registry().reset("default", "v", "quiet", "trace")
registry.flag("d", "dump", descr="Print the parsed values")
registry.positional(rest=Rest("files", minimum=1, descr="Shell files to read"))


def functions(path):
    pattern = re.compile(r"^(?:function\s+)?([a-z]\w*)\s?\(\)")
    with open(path, encoding="utf-8") as file:
        for number, line in enumerate(file, 1):
            if match := pattern.match(line):
                yield match[1], number


if __name__ == '__main__':
    store = registry.run()
    logs.configure(store.get("verbosity", 0), store.get("quiet", False), store.get("colorful", False), name=__prog__)

    if store.get("dump"):
        pprint(store)

    for path in store["files"]:
        logger.info("Listing functions of %s", path)
        for name, number in sorted(functions(path)):
            print("    %s:%d" % (name, number))
    logger.debug("Finished.")
