import logging

from rich.logging import RichHandler
from rich.pretty import pprint

from dashdash import *

__prog__ = "userinfo"

registry = Registry()

registry.register() \
    .add_arg("output") \
    .add_flag("force", "f", False) \
    .add_flag("verbose", "v", False) \
    .add_flag("version", "V", "") \
    .add_flag("dir", default="/var/users")

registry.register("info") \
    .add_arg("category", ["manager", "student"]) \
    .add_arg("username") \
    .add_arg("subjects...") \
    .add_flag("verbose", "v", False) \
    .add_flag("version", "V", "1.0.1") \
    .add_flag("output", "o", "./") \
    .add_flag("no-clean", default=True)


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler()])
    pprint(invoke(registry, shell=True, fancy=True).namespace())
