"""
Command Line Interface for Jett.
"""

import click
from .app import Jett
from .logs import setup_logging
from .storage import DEFAULT_DATA_FILE
from .version import VERSION


@click.command()
@click.version_option(version=VERSION, prog_name="jett")
@click.option('--data-file', type=click.Path(dir_okay=False), default=str(DEFAULT_DATA_FILE),
              envvar='JETT_DATA_FILE', show_default=True, help='File the task list is kept in')
def main(data_file):
    """
    Jett - a personal task tracker you talk to.

    Type commands such as 'todo read book' or 'list /date'; 'bye' to leave.
    """
    setup_logging()
    jett = Jett(data_file)
    click.echo(jett.get_greeting())

    stdin = click.get_text_stream('stdin')
    for line in stdin:
        line = line.rstrip("\n")
        click.echo(jett.get_response(line))
        if jett.is_exit(line):
            break


if __name__ == "__main__":
    main()
