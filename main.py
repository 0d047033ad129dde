import logging
import os

from rich.logging import RichHandler
from rich.pretty import pprint

from argosy import report


def configure(spec):
    spec.header(
        name="main.py",
        descr="argosy example script. Provide a NAME to receive a greeting.",
        args=["name"],
        version="0.1.0",
    )
    spec.define_option("verbose", "v", descr="Increase verbosity")
    spec.define_option("friend", "f", ["name"], descr="Inquire about a friend")


if __name__ == '__main__':
    if os.environ.get("ARGOSY_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler()])

    cli = report(configure=configure)
    verbosity = cli.count("verbose")
    name = cli.arg("name").capitalize()
    friend = cli["friend"]

    if verbosity == 0:
        greeting = "Hello, %s!" % name
        inquiry = "How's %s?" % friend
    else:
        greeting = "Greetings and salutations, %s - and what a fine day!" % name
        inquiry = "Say, how's %s doing?" % friend

    print("%s %s" % (greeting, inquiry) if friend else greeting)

    if verbosity > 1:
        pprint(cli)
